"""Tests for SituationMonitor wiring."""

from unittest.mock import AsyncMock

import httpx
import pytest

from situation_monitor.analysis.significance import Significance
from situation_monitor.config import AppConfig, NewsConfig
from situation_monitor.monitor import SituationMonitor, build_sources
from situation_monitor.news.gdelt import GdeltFeed
from situation_monitor.news.google_rss import GoogleNewsFeed
from situation_monitor.news.rss import RSSFeed


class StubAnalyzer:
    def __init__(self, enabled: bool = True, score: int = 9) -> None:
        self.enabled = enabled
        self.analyze_batch = AsyncMock(
            side_effect=lambda headlines: [Significance(significance=score, summary="big") for _ in headlines]
        )


def _config(**news: object) -> AppConfig:
    config = AppConfig()
    config.news = NewsConfig(**news)
    return config


def test_build_sources_defaults() -> None:
    sources = build_sources(NewsConfig())
    rss = [s for s in sources if isinstance(s, RSSFeed)]
    google = [s for s in sources if isinstance(s, GoogleNewsFeed)]
    gdelt = [s for s in sources if isinstance(s, GdeltFeed)]

    assert len(rss) == len(NewsConfig().feeds)
    assert {s.category for s in google} == set(NewsConfig().google_queries)
    assert "realtime" not in {s.category for s in gdelt}
    assert len(gdelt) == len(google) - 1


def test_build_sources_without_gdelt() -> None:
    sources = build_sources(NewsConfig(gdelt_enabled=False))
    assert not any(isinstance(s, GdeltFeed) for s in sources)


@pytest.mark.asyncio
async def test_scrape_cycle_notifies_when_analyzer_enabled(make_item, static_source) -> None:  # noqa: ANN001
    analyzer = StubAnalyzer()
    async with httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(500))) as client:
        monitor = SituationMonitor(
            _config(background_scraping=False),
            client=client,
            sources=[static_source("politics", [make_item("Troops mass at border", item_id="p1")])],
            analyzer=analyzer,  # type: ignore[arg-type]
        )
        counts = await monitor.refresh_news()
        await monitor.aclose()

    assert counts == {"politics": 1}
    analyzer.analyze_batch.assert_awaited_once_with(["Troops mass at border"])
    assert monitor.notifier.has_seen("p1")


@pytest.mark.asyncio
async def test_scrape_cycle_skips_notifier_when_disabled(make_item, static_source) -> None:  # noqa: ANN001
    analyzer = StubAnalyzer(enabled=False)
    async with httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(500))) as client:
        monitor = SituationMonitor(
            _config(background_scraping=False),
            client=client,
            sources=[static_source("tech", [make_item("GPU news", category="tech")])],
            analyzer=analyzer,  # type: ignore[arg-type]
        )
        await monitor.refresh_news()

    analyzer.analyze_batch.assert_not_awaited()
    assert len(monitor.store.get("tech").items) == 1


@pytest.mark.asyncio
async def test_start_and_stop_background_scraping(static_source) -> None:  # noqa: ANN001
    async with httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(500))) as client:
        monitor = SituationMonitor(
            _config(),
            client=client,
            sources=[static_source("ai", [])],
            analyzer=StubAnalyzer(enabled=False),  # type: ignore[arg-type]
        )
        monitor.start()
        assert monitor.scraper.is_running
        await monitor.aclose()
        assert not monitor.scraper.is_running
        # A borrowed client is left open for its owner
        assert not client.is_closed


def test_webhook_sinks_registered() -> None:
    config = AppConfig()
    config.monitoring.alert_webhooks = ["https://hooks.example.com/a", "https://hooks.example.com/b"]
    monitor = SituationMonitor(config, client=httpx.AsyncClient(), analyzer=StubAnalyzer())  # type: ignore[arg-type]
    assert monitor.alerts.sink_count == 3
