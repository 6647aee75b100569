"""SituationMonitor: owns every long-lived component and its lifecycle."""

import logging

import httpx

from situation_monitor.analysis.cache import SignificanceCache
from situation_monitor.analysis.notifications import HeadlineNotifier
from situation_monitor.analysis.significance import SignificanceAnalyzer
from situation_monitor.config import AppConfig, NewsConfig
from situation_monitor.data.datasets import DatasetsService
from situation_monitor.data.markets import MarketsService
from situation_monitor.monitoring.alerts import AlertManager, ConsoleAlertSink, WebhookAlertSink
from situation_monitor.news.aggregator import NewsAggregator
from situation_monitor.news.gdelt import GdeltFeed
from situation_monitor.news.google_rss import GoogleNewsFeed
from situation_monitor.news.provider import FeedSource
from situation_monitor.news.rss import RSSFeed
from situation_monitor.news.scheduler import BackgroundScraper
from situation_monitor.news.store import NewsStore

logger = logging.getLogger(__name__)


def build_sources(config: NewsConfig) -> list[FeedSource]:
    """Instantiate every feed the news config describes."""
    common = {"timeout": config.request_timeout, "user_agent": config.user_agent}
    sources: list[FeedSource] = [RSSFeed(feed.url, feed.category, **common) for feed in config.feeds]
    for category, query in config.google_queries.items():
        sources.append(GoogleNewsFeed(query, category, **common))
        if config.gdelt_enabled and category != "realtime":
            sources.append(GdeltFeed(query, category, max_records=config.gdelt_max_records, **common))
    return sources


class SituationMonitor:
    """Wire the news pipeline, AI cache and snapshot services together.

    Create one per process (or per test), call :meth:`start` once the event
    loop is running and :meth:`aclose` on shutdown.
    """

    def __init__(
        self,
        config: AppConfig,
        *,
        client: httpx.AsyncClient | None = None,
        sources: list[FeedSource] | None = None,
        analyzer: SignificanceAnalyzer | None = None,
    ) -> None:
        self._config = config
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient()

        self.store = NewsStore()
        self.aggregator = NewsAggregator(
            sources if sources is not None else build_sources(config.news),
            self.store,
            self._client,
            max_items=config.news.max_items_per_category,
            client_max_items=config.news.client_max_items,
            dedup_prefix=config.news.dedup_prefix,
        )
        self.scraper = BackgroundScraper(
            self._scrape_cycle,
            interval=config.news.refresh_interval,
            enabled=config.news.background_scraping,
        )

        self.analyzer = analyzer if analyzer is not None else self._build_analyzer(config)
        self.significance = SignificanceCache(
            self.analyzer,
            ttl=config.ai.cache_ttl,
            prune_after=config.ai.prune_after,
            max_entries=config.ai.max_entries,
        )
        self.alerts = self._build_alert_manager(config)
        self.notifier = HeadlineNotifier(
            self.significance,
            self.alerts,
            threshold=config.monitoring.notify_threshold,
        )

        self.markets = MarketsService(
            self._client,
            crypto_ids=config.markets.crypto_ids,
            cache_ttl=config.markets.cache_ttl,
            timeout=config.markets.timeout,
        )
        self.datasets = DatasetsService(
            self._client,
            cache_ttl=config.datasets.cache_ttl,
            timeout=config.datasets.timeout,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start background scraping (no-op if disabled or already running)."""
        self.scraper.start()

    async def stop(self) -> None:
        await self.scraper.stop()

    async def aclose(self) -> None:
        await self.stop()
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def refresh_news(self) -> dict[str, int]:
        """Scrape now, outside the periodic schedule."""
        counts: dict[str, int] = await self.scraper.refresh_now()
        return counts

    async def _scrape_cycle(self) -> dict[str, int]:
        counts = await self.aggregator.run_cycle()
        if self.analyzer.enabled:
            await self.notifier.process(self.store.get_all())
        return counts

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    @staticmethod
    def _build_analyzer(config: AppConfig) -> SignificanceAnalyzer:
        return SignificanceAnalyzer(
            provider=config.ai.provider,
            model=config.ai.model,
            base_url=config.ai.base_url,
            api_key_env=config.ai.api_key_env,
            timeout=config.ai.timeout,
        )

    def _build_alert_manager(self, config: AppConfig) -> AlertManager:
        manager = AlertManager()
        manager.register(ConsoleAlertSink())
        for url in config.monitoring.alert_webhooks:
            manager.register(WebhookAlertSink(url, self._client))
        return manager
