"""In-memory, category-keyed news cache."""

import time
from collections.abc import Callable, Iterable

from situation_monitor.config import FEED_CATEGORIES
from situation_monitor.news.models import CacheEntry, NewsItem

_EMPTY = CacheEntry()


class NewsStore:
    """Hold the latest scraped snapshot for each category.

    Entries are immutable and replaced wholesale, so a reader always sees
    either the previous or the next snapshot of a category, never a mix.
    Reads never trigger a fetch.
    """

    def __init__(
        self,
        categories: Iterable[str] = FEED_CATEGORIES,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {category: _EMPTY for category in categories}

    def get(self, category: str) -> CacheEntry:
        return self._entries.get(category, _EMPTY)

    def set(self, category: str, items: list[NewsItem]) -> CacheEntry:
        entry = CacheEntry(items=list(items), last_updated=int(self._clock() * 1000))
        self._entries[category] = entry
        return entry

    def get_all(self) -> list[NewsItem]:
        """Every cached item across categories, newest first."""
        items = [item for entry in list(self._entries.values()) for item in entry.items]
        return sorted(items, key=lambda item: item.timestamp, reverse=True)

    def last_updated(self) -> int:
        return max((entry.last_updated for entry in self._entries.values()), default=0)

    def summary(self) -> dict[str, dict[str, int]]:
        return {
            category: {"count": len(entry.items), "lastUpdated": entry.last_updated}
            for category, entry in self._entries.items()
        }
