"""News fetching, scoring, aggregation and caching."""

from situation_monitor.news.models import CacheEntry, NewsItem
from situation_monitor.news.provider import FeedSource

__all__ = ["CacheEntry", "FeedSource", "NewsItem"]
