"""Google News search RSS adapter: free, no API key required."""

import logging
from typing import Any
from urllib.parse import quote_plus

import httpx

from situation_monitor.config import FeedCategory
from situation_monitor.news.models import NewsItem
from situation_monitor.news.provider import FeedSource
from situation_monitor.news.rss import parse_rss

logger = logging.getLogger(__name__)

_GOOGLE_NEWS_RSS_URL = "https://news.google.com/rss/search?q={query}&hl=en-US&gl=US&ceid=US:en"


class GoogleNewsFeed(FeedSource):
    """Keyword search against Google News, one query per category."""

    name = "google_news"
    accept = "application/xml, text/xml, */*"

    def __init__(self, query: str, category: FeedCategory, **kwargs: Any) -> None:
        super().__init__(category, **kwargs)
        self.query = query

    @property
    def url(self) -> str:
        return _GOOGLE_NEWS_RSS_URL.format(query=quote_plus(self.query))

    async def fetch(self, client: httpx.AsyncClient) -> list[NewsItem]:
        response = await self._get(client, self.url)
        if response is None:
            return []
        items = parse_rss(
            response.content,
            self.category,
            source_url=self.url,
            prefix="gnews",
            default_source="Google News",
        )
        logger.debug("Google News returned %d %s items", len(items), self.category)
        return items

    def __repr__(self) -> str:
        return f"GoogleNewsFeed(query={self.query!r}, category={self.category!r})"
