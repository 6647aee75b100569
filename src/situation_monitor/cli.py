"""CLI entry point for situation-monitor."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer

from situation_monitor import __version__
from situation_monitor.config import FEED_CATEGORIES, AppConfig, apply_env_overrides, load_config
from situation_monitor.monitor import SituationMonitor
from situation_monitor.monitoring.logging import setup_logging

logger = logging.getLogger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"situation-monitor {__version__}")
        raise typer.Exit()


app = typer.Typer(name="situation-monitor", help="Situation Monitor: geopolitical news aggregation backend")


@app.callback()
def main(
    version: Annotated[
        bool, typer.Option("--version", "-V", help="Show version and exit", callback=_version_callback, is_eager=True)
    ] = False,
) -> None:
    """Situation Monitor: geopolitical news aggregation backend."""


DEFAULT_CONFIG = Path("config.yaml")

ConfigOption = Annotated[Path, typer.Option("--config", "-c", help="Path to config.yaml")]


def _load_config(config_path: Path) -> AppConfig:
    """Load config from file, warning if the file does not exist."""
    if config_path.exists():
        return load_config(config_path)
    logger.warning("Config file %s not found, using defaults", config_path)
    return apply_env_overrides(AppConfig())


def _setup_logging(cfg: AppConfig) -> None:
    log_file = Path(cfg.monitoring.log_file) if cfg.monitoring.log_file else None
    setup_logging(structured=cfg.monitoring.structured_logging, log_file=log_file)


@app.command()
def serve(
    config: ConfigOption = DEFAULT_CONFIG,
    host: Annotated[str | None, typer.Option("--host", help="Bind address")] = None,
    port: Annotated[int | None, typer.Option("--port", help="Port")] = None,
) -> None:
    """Serve the HTTP API with background news scraping."""
    import uvicorn  # noqa: PLC0415

    from situation_monitor.server.api import create_app  # noqa: PLC0415

    cfg = _load_config(config)
    _setup_logging(cfg)

    # Fall back to config values when CLI flags are not provided
    resolved_host = host if host is not None else cfg.monitoring.server_host
    resolved_port = port if port is not None else cfg.monitoring.server_port

    fastapi_app = create_app(SituationMonitor(cfg))
    typer.echo(f"Situation monitor starting on http://{resolved_host}:{resolved_port}")
    uvicorn.run(fastapi_app, host=resolved_host, port=resolved_port, log_level="info")


async def _scrape(cfg: AppConfig, category: str | None) -> dict[str, int]:
    monitor = SituationMonitor(cfg)
    try:
        if category is not None:
            items = await monitor.aggregator.fetch_category(category)
            for item in items:
                flag = "!" if item.is_alert else " "
                typer.echo(f"{flag} [{item.relevance_score:3d}] {item.title} ({item.source})")
            return {category: len(items)}
        return await monitor.aggregator.run_cycle()
    finally:
        await monitor.aclose()


@app.command()
def scrape(
    config: ConfigOption = DEFAULT_CONFIG,
    category: Annotated[str | None, typer.Option("--category", help="Fetch one category only")] = None,
) -> None:
    """Run a single scrape cycle and print per-category counts."""
    cfg = _load_config(config)
    _setup_logging(cfg)
    if category is not None and category not in FEED_CATEGORIES:
        typer.echo(f"Unknown category {category!r}; expected one of: {', '.join(FEED_CATEGORIES)}")
        raise typer.Exit(code=1)

    counts = asyncio.run(_scrape(cfg, category))
    for name, count in counts.items():
        typer.echo(f"{name}: {count}")


async def _analyze(cfg: AppConfig, headlines: list[str]) -> list[tuple[str, int, str]]:
    monitor = SituationMonitor(cfg)
    try:
        results = await monitor.significance.analyze(headlines)
    finally:
        await monitor.aclose()
    return [(headline, r.significance, r.summary) for headline, r in zip(headlines, results)]


@app.command()
def analyze(
    headlines: Annotated[list[str], typer.Argument(help="Headlines to score")],
    config: ConfigOption = DEFAULT_CONFIG,
) -> None:
    """Score headlines for geopolitical significance (1-10)."""
    cfg = _load_config(config)
    _setup_logging(cfg)
    for headline, significance, summary in asyncio.run(_analyze(cfg, headlines)):
        typer.echo(f"[{significance:2d}] {headline}")
        if summary:
            typer.echo(f"     {summary}")
