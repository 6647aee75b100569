"""GDELT DOC 2.0 article search adapter."""

import logging
import time
from typing import Any
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel, ValidationError

from situation_monitor.config import FeedCategory
from situation_monitor.news.models import NewsItem
from situation_monitor.news.normalize import build_news_item, parse_timestamp
from situation_monitor.news.provider import FeedSource

logger = logging.getLogger(__name__)

_GDELT_DOC_URL = "https://api.gdeltproject.org/api/v2/doc/doc"

DEFAULT_SOURCES: dict[str, str] = {
    "politics": "GDELT World",
    "tech": "GDELT Tech",
    "finance": "GDELT Markets",
    "gov": "GDELT Government",
    "ai": "GDELT AI",
    "intel": "GDELT Intel",
    "realtime": "GDELT Breaking",
}


class GdeltArticle(BaseModel):
    """One entry of the ``artlist`` response."""

    url: str = ""
    title: str = ""
    seendate: str = ""
    domain: str = ""
    language: str = ""
    sourcecountry: str = ""


class GdeltResponse(BaseModel):
    articles: list[GdeltArticle] = []


def parse_gdelt_payload(payload: Any) -> GdeltResponse | None:
    """Validate a decoded GDELT payload; ``None`` if it has the wrong shape."""
    try:
        return GdeltResponse.model_validate(payload)
    except ValidationError as exc:
        logger.warning("GDELT payload failed validation: %s", exc.errors()[:3])
        return None


class GdeltFeed(FeedSource):
    """Keyword query against the GDELT document API."""

    name = "gdelt"
    accept = "application/json"

    def __init__(self, query: str, category: FeedCategory, *, max_records: int = 20, **kwargs: Any) -> None:
        super().__init__(category, **kwargs)
        self.query = query
        self.max_records = max_records

    @property
    def url(self) -> str:
        params = {
            "query": f"({self.query}) sourcelang:english",
            "mode": "artlist",
            "maxrecords": str(self.max_records),
            "format": "json",
            "sort": "datedesc",
        }
        return f"{_GDELT_DOC_URL}?{urlencode(params)}"

    async def fetch(self, client: httpx.AsyncClient) -> list[NewsItem]:
        response = await self._get(client, self.url)
        if response is None:
            return []
        try:
            payload = response.json()
        except ValueError:
            # GDELT answers query errors with a plain-text 200
            logger.warning("GDELT returned non-JSON for %s: %s", self.category, response.text[:120])
            return []
        parsed = parse_gdelt_payload(payload)
        if parsed is None:
            return []
        return self._to_items(parsed)

    def _to_items(self, parsed: GdeltResponse) -> list[NewsItem]:
        now_ms = int(time.time() * 1000)
        default_source = DEFAULT_SOURCES.get(self.category, "GDELT")
        items: list[NewsItem] = []
        for article in parsed.articles:
            item = build_news_item(
                prefix="gdelt",
                index=len(items),
                category=self.category,
                title=article.title,
                link=article.url,
                source=article.domain or default_source,
                pub_date=article.seendate or None,
                published_ms=parse_timestamp(article.seendate),
                now_ms=now_ms,
            )
            if item is not None:
                items.append(item)
        return items

    def __repr__(self) -> str:
        return f"GdeltFeed(query={self.query!r}, category={self.category!r})"
