"""News aggregation: fan-out, deduplication, ranking and truncation."""

import asyncio
import logging
from collections.abc import Awaitable, Iterable, Sequence
from typing import TypeVar

import httpx

from situation_monitor.news.models import NewsItem
from situation_monitor.news.provider import FeedSource
from situation_monitor.news.store import NewsStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEDUP_PREFIX = 50
MAX_CACHED_ITEMS = 50
MAX_CLIENT_ITEMS = 15


def dedupe_key(item: NewsItem, prefix: int = DEDUP_PREFIX) -> str:
    return item.title.lower()[:prefix]


def dedupe_items(items: Iterable[NewsItem], *, prefix: int = DEDUP_PREFIX) -> list[NewsItem]:
    """Drop items whose lowercased title prefix was already seen; first one wins.

    Structural only: near-duplicates that differ in their leading text survive.
    """
    seen: set[str] = set()
    result: list[NewsItem] = []
    for item in items:
        key = dedupe_key(item, prefix)
        if key in seen:
            continue
        seen.add(key)
        result.append(item)
    return result


def rank_items(items: Iterable[NewsItem]) -> list[NewsItem]:
    """Sort by relevance, most relevant first; ties go to the newer item."""
    return sorted(items, key=lambda item: (item.relevance_score, item.timestamp), reverse=True)


def aggregate_items(
    items: Iterable[NewsItem],
    *,
    limit: int = MAX_CACHED_ITEMS,
    prefix: int = DEDUP_PREFIX,
) -> list[NewsItem]:
    """Deduplicate, rank and truncate one category's raw items."""
    return rank_items(dedupe_items(items, prefix=prefix))[:limit]


async def gather_settled(aws: Sequence[Awaitable[T]]) -> list[T | BaseException]:
    """Wait for every awaitable; failures come back as exception objects."""
    return await asyncio.gather(*aws, return_exceptions=True)


class NewsAggregator:
    """Run scrape cycles over a fixed set of feed sources.

    Each cycle fetches every source concurrently, groups results by the
    source's target category and replaces that category in the store.
    """

    def __init__(
        self,
        sources: Sequence[FeedSource],
        store: NewsStore,
        client: httpx.AsyncClient,
        *,
        max_items: int = MAX_CACHED_ITEMS,
        client_max_items: int = MAX_CLIENT_ITEMS,
        dedup_prefix: int = DEDUP_PREFIX,
    ) -> None:
        self._sources = list(sources)
        self._store = store
        self._client = client
        self._max_items = max_items
        self._client_max_items = client_max_items
        self._dedup_prefix = dedup_prefix

    async def collect(self, sources: Sequence[FeedSource]) -> dict[str, list[NewsItem]]:
        """Fetch *sources* concurrently and group the surviving items by target category."""
        grouped: dict[str, list[NewsItem]] = {source.category: [] for source in sources}
        results = await gather_settled([source.fetch(self._client) for source in sources])
        for source, result in zip(sources, results):
            if isinstance(result, BaseException):
                logger.warning("Source %r failed: %s", source, result)
                continue
            grouped[source.category].extend(result)
        return grouped

    async def run_cycle(self) -> dict[str, int]:
        """Scrape every source once and write each category to the store.

        Returns the number of items stored per category. A category that
        comes back empty keeps its previous non-empty snapshot.
        """
        logger.info("Starting scrape of %d sources", len(self._sources))
        grouped = await self.collect(self._sources)

        counts: dict[str, int] = {}
        for category, raw_items in grouped.items():
            items = aggregate_items(raw_items, limit=self._max_items, prefix=self._dedup_prefix)
            if not items and self._store.get(category).items:
                logger.warning("No items for %s this cycle; keeping previous snapshot", category)
                counts[category] = len(self._store.get(category).items)
                continue
            self._store.set(category, items)
            counts[category] = len(items)

        logger.info("Scrape complete: %s", counts, extra={"extra_data": counts})
        return counts

    async def fetch_category(self, category: str, *, limit: int | None = None) -> list[NewsItem]:
        """Fetch one category's sources directly, bypassing the store."""
        sources = [source for source in self._sources if source.category == category]
        if not sources:
            return []
        grouped = await self.collect(sources)
        return aggregate_items(
            grouped.get(category, []),
            limit=limit if limit is not None else self._client_max_items,
            prefix=self._dedup_prefix,
        )
