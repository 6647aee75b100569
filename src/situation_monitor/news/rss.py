"""Direct RSS/Atom feed adapter."""

import calendar
import logging
import time
from typing import Any

import feedparser
import httpx

from situation_monitor.config import FeedCategory
from situation_monitor.news.models import NewsItem
from situation_monitor.news.normalize import build_news_item, source_from_url
from situation_monitor.news.provider import FeedSource

logger = logging.getLogger(__name__)


def _entry_published_ms(entry: Any) -> int | None:
    parsed = entry.get("published_parsed") or entry.get("updated_parsed")
    if not parsed:
        return None
    return calendar.timegm(parsed) * 1000


def _entry_source(entry: Any) -> str:
    source = entry.get("source")
    if source:
        return str(source.get("title", "") or "")
    return ""


def parse_rss(
    payload: str | bytes,
    category: FeedCategory,
    *,
    source_url: str = "",
    prefix: str = "rss",
    default_source: str | None = None,
    now_ms: int | None = None,
) -> list[NewsItem]:
    """Parse an RSS document into ``NewsItem`` objects.

    Entries without a title or link are skipped; the positional index in the
    id only counts kept entries.
    """
    feed = feedparser.parse(payload)
    if not feed.entries:
        if feed.bozo:
            logger.warning("Unparseable feed payload from %s: %s", source_url or "<inline>", feed.get("bozo_exception"))
        return []

    if now_ms is None:
        now_ms = int(time.time() * 1000)
    fallback_source = default_source or source_from_url(source_url)

    items: list[NewsItem] = []
    for entry in feed.entries:
        pub_date = entry.get("published") or entry.get("updated")
        item = build_news_item(
            prefix=prefix,
            index=len(items),
            category=category,
            title=entry.get("title", ""),
            link=entry.get("link", ""),
            source=_entry_source(entry) or fallback_source,
            pub_date=pub_date,
            published_ms=_entry_published_ms(entry),
            description=entry.get("summary") or entry.get("description"),
            now_ms=now_ms,
        )
        if item is not None:
            items.append(item)
    return items


class RSSFeed(FeedSource):
    """An outlet's own RSS feed."""

    name = "rss"
    accept = "application/rss+xml, application/xml, text/xml"

    def __init__(self, url: str, category: FeedCategory, **kwargs: Any) -> None:
        super().__init__(category, **kwargs)
        self.url = url

    async def fetch(self, client: httpx.AsyncClient) -> list[NewsItem]:
        response = await self._get(client, self.url)
        if response is None:
            return []
        items = parse_rss(response.content, self.category, source_url=self.url)
        logger.debug("Fetched %d items from %s", len(items), self.url)
        return items

    def __repr__(self) -> str:
        return f"RSSFeed(url={self.url!r}, category={self.category!r})"
