"""Data models for news items and cache entries."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from situation_monitor.config import Category


class NewsItem(BaseModel):
    """A normalized article, serialized in camelCase for API clients."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    id: str
    title: str
    link: str
    description: str | None = None
    pub_date: str | None = None
    timestamp: int
    source: str
    category: Category
    is_alert: bool = False
    alert_keyword: str | None = None
    region: str | None = None
    topics: list[str] = Field(default_factory=list)
    relevance_score: int = Field(default=50, ge=0, le=100)


class CacheEntry(BaseModel):
    """Snapshot of one category: items plus the epoch-ms time they were stored."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    items: list[NewsItem] = Field(default_factory=list)
    last_updated: int = 0
