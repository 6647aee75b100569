"""Shared fixtures: news item and static feed source factories."""

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from situation_monitor.news.models import NewsItem
from situation_monitor.news.provider import FeedSource

NOW_MS = 1_760_000_000_000


class StaticSource(FeedSource):
    """Feed source returning a canned result, or raising it if it is an exception."""

    name = "static"

    def __init__(self, category: Any, result: list[NewsItem] | BaseException) -> None:
        super().__init__(category)
        self.result = result
        self.calls = 0

    async def fetch(self, client: httpx.AsyncClient) -> list[NewsItem]:
        self.calls += 1
        if isinstance(self.result, BaseException):
            raise self.result
        return list(self.result)


def _make_item(
    title: str,
    *,
    item_id: str | None = None,
    category: str = "politics",
    score: int = 50,
    timestamp: int = NOW_MS,
    source: str = "Reuters",
    link: str | None = None,
) -> NewsItem:
    return NewsItem(
        id=item_id or f"test-{category}-{abs(hash(title)) % 10_000}",
        title=title,
        link=link or f"https://example.com/{title.lower().replace(' ', '-')}",
        timestamp=timestamp,
        source=source,
        category=category,
        relevance_score=score,
    )


@pytest.fixture()
def make_item() -> Callable[..., NewsItem]:
    return _make_item


@pytest.fixture()
def static_source() -> type[StaticSource]:
    return StaticSource
