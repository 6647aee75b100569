"""FastAPI HTTP API serving cached news, markets, datasets and AI analysis."""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from situation_monitor import __version__
from situation_monitor.config import FEED_CATEGORIES
from situation_monitor.data.datasets import DATASET_TYPES
from situation_monitor.monitor import SituationMonitor

logger = logging.getLogger(__name__)

MAX_ALL_ITEMS = 100


def _error(message: str, status_code: int = 400) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _is_truthy(value: str | None) -> bool:
    return value is not None and value.lower() == "true"


def _cache_age(age_ms: int | None) -> int:
    return age_ms if age_ms is not None else 0


def create_app(monitor: SituationMonitor, *, manage_lifecycle: bool = True) -> FastAPI:
    """Create the FastAPI application around a ``SituationMonitor``.

    Args:
        monitor: Owns the stores, scheduler and snapshot services.
        manage_lifecycle: Start background scraping on startup and close the
            monitor on shutdown.

    Returns:
        A FastAPI application instance.
    """

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        if manage_lifecycle:
            monitor.start()
        try:
            yield
        finally:
            if manage_lifecycle:
                await monitor.aclose()

    app = FastAPI(title="Situation Monitor", version=__version__, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.get("/api/health")
    def api_health() -> JSONResponse:
        return JSONResponse(
            {"status": "ok", "version": __version__, "scraping": monitor.scraper.is_running}
        )

    @app.get("/api/news")
    async def api_news(category: str | None = None, refresh: str | None = None) -> JSONResponse:
        if category is not None and category not in FEED_CATEGORIES:
            return _error(f"Unknown category: {category}")
        if _is_truthy(refresh):
            await monitor.refresh_news()

        store = monitor.store
        if category is not None:
            entry = store.get(category)
            return JSONResponse(
                {
                    "category": category,
                    "items": [item.model_dump(by_alias=True) for item in entry.items],
                    "lastUpdated": entry.last_updated,
                    "count": len(entry.items),
                }
            )

        all_items = store.get_all()
        return JSONResponse(
            {
                "items": [item.model_dump(by_alias=True) for item in all_items[:MAX_ALL_ITEMS]],
                "categories": store.summary(),
                "totalItems": len(all_items),
                "lastUpdated": store.last_updated(),
            }
        )

    @app.post("/api/news")
    async def api_news_refresh() -> JSONResponse:
        counts = await monitor.refresh_news()
        return JSONResponse({"success": True, "message": "News refresh triggered", "counts": counts})

    @app.get("/api/markets")
    async def api_markets(refresh: str | None = None) -> JSONResponse:
        snapshot = await monitor.markets.snapshot(force=_is_truthy(refresh))
        payload: dict[str, Any] = snapshot.model_dump(by_alias=True)
        payload["cacheAge"] = _cache_age(monitor.markets.cache_age_ms())
        return JSONResponse(payload)

    @app.post("/api/markets")
    async def api_markets_refresh() -> JSONResponse:
        await monitor.markets.refresh()
        return JSONResponse({"success": True, "message": "Markets refreshed"})

    @app.get("/api/data")
    async def api_data(type: str | None = None, refresh: str | None = None) -> JSONResponse:  # noqa: A002
        if type is not None and type not in DATASET_TYPES:
            return _error(f"Unknown data type: {type}")
        snapshot = await monitor.datasets.snapshot(force=_is_truthy(refresh))
        payload: dict[str, Any] = snapshot.model_dump(by_alias=True)
        if type is not None:
            return JSONResponse({type: payload[type], "lastUpdated": snapshot.last_updated})
        payload["cacheAge"] = _cache_age(monitor.datasets.cache_age_ms())
        return JSONResponse(payload)

    @app.post("/api/data")
    async def api_data_refresh() -> JSONResponse:
        await monitor.datasets.refresh()
        return JSONResponse({"success": True, "message": "Data refreshed"})

    @app.post("/api/ai")
    async def api_ai(request: Request) -> JSONResponse:
        try:
            body = await request.json()
        except ValueError:
            return _error("Request body must be JSON")
        headlines = body.get("headlines") if isinstance(body, dict) else None
        if not isinstance(headlines, list) or not headlines:
            return _error("Headlines array required")
        if not all(isinstance(h, str) and h.strip() for h in headlines):
            return _error("Headlines must be non-empty strings")

        started = time.monotonic()
        results = await monitor.significance.analyze(headlines)
        logger.debug("Analyzed %d headlines in %.2fs", len(headlines), time.monotonic() - started)
        return JSONResponse(
            {
                "success": True,
                "results": [result.to_dict() for result in results],
                "cached": all(result.cached for result in results),
            }
        )

    return app
