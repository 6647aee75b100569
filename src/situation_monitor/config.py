"""Configuration loading and validation."""

import logging
import os
from pathlib import Path
from typing import Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

Category = Literal["politics", "tech", "finance", "gov", "ai", "intel"]
FeedCategory = Literal["politics", "tech", "finance", "gov", "ai", "intel", "realtime"]

CATEGORIES: tuple[Category, ...] = ("politics", "tech", "finance", "gov", "ai", "intel")
FEED_CATEGORIES: tuple[FeedCategory, ...] = (*CATEGORIES, "realtime")


class FeedConfig(BaseModel):
    """A direct RSS feed and the category it feeds."""

    url: str
    category: FeedCategory


def _default_feeds() -> list[FeedConfig]:
    feeds: list[tuple[str, FeedCategory]] = [
        ("https://feeds.bbci.co.uk/news/world/rss.xml", "politics"),
        ("https://rss.nytimes.com/services/xml/rss/nyt/World.xml", "politics"),
        ("https://feeds.reuters.com/reuters/topNews", "realtime"),
        ("https://feeds.reuters.com/reuters/worldNews", "politics"),
        ("https://www.aljazeera.com/xml/rss/all.xml", "politics"),
        ("https://rss.nytimes.com/services/xml/rss/nyt/Technology.xml", "tech"),
        ("https://feeds.arstechnica.com/arstechnica/index", "tech"),
        ("https://www.theguardian.com/world/rss", "politics"),
        ("https://www.theguardian.com/technology/rss", "tech"),
        ("https://rss.nytimes.com/services/xml/rss/nyt/Business.xml", "finance"),
        ("https://feeds.bloomberg.com/markets/news.rss", "finance"),
        ("https://feeds.bbci.co.uk/news/rss.xml", "realtime"),
    ]
    return [FeedConfig(url=url, category=category) for url, category in feeds]


def _default_google_queries() -> dict[str, str]:
    return {
        "politics": 'geopolitics OR diplomacy OR "foreign policy" OR sanctions OR "international relations"',
        "tech": 'cybersecurity OR "chip war" OR semiconductor OR "tech regulation" OR "critical infrastructure"',
        "finance": 'sanctions OR "trade war" OR BRICS OR "central bank" OR inflation OR "currency crisis"',
        "gov": 'pentagon OR NATO OR "national security" OR "defense budget" OR "state department"',
        "ai": '"artificial intelligence" OR "AI regulation" OR "AI military" OR "autonomous weapons"',
        "intel": 'espionage OR intelligence OR "cyber attack" OR surveillance OR counterintelligence',
        "realtime": "breaking news",
    }


class NewsConfig(BaseModel):
    """News scraping configuration."""

    refresh_interval: float = 300.0
    background_scraping: bool = True
    max_items_per_category: int = 50
    client_max_items: int = 15
    dedup_prefix: int = 50
    request_timeout: float = Field(default=10.0, ge=10.0, le=15.0)
    user_agent: str = "SituationMonitor/2.0 (News Aggregator)"
    feeds: list[FeedConfig] = Field(default_factory=_default_feeds)
    google_queries: dict[FeedCategory, str] = Field(default_factory=_default_google_queries)
    gdelt_enabled: bool = True
    gdelt_max_records: int = 20


class AIConfig(BaseModel):
    """Headline significance analysis configuration."""

    provider: Literal["openai", "anthropic"] = "openai"
    model: str = "mistralai/ministral-8b"
    base_url: str | None = "https://openrouter.ai/api/v1"
    api_key_env: str = "OPENROUTER_API_KEY"
    timeout: float = 30.0
    cache_ttl: float = 1800.0
    prune_after: float = 3600.0
    max_entries: int = 1000


class MarketsConfig(BaseModel):
    """Market snapshot configuration."""

    cache_ttl: float = 60.0
    timeout: float = 10.0
    crypto_ids: list[str] = Field(
        default_factory=lambda: ["bitcoin", "ethereum", "solana", "cardano", "polkadot", "chainlink", "avalanche-2"]
    )


class DatasetsConfig(BaseModel):
    """Public dataset snapshot configuration."""

    cache_ttl: float = 300.0
    timeout: float = 15.0


class MonitoringConfig(BaseModel):
    """Logging, alerting and server configuration."""

    structured_logging: bool = False
    log_file: str | None = None
    alert_webhooks: list[str] = Field(default_factory=list)
    notify_threshold: int = 8
    server_host: str = "0.0.0.0"
    server_port: int = 8080


class AppConfig(BaseModel):
    """Top-level application configuration."""

    news: NewsConfig = Field(default_factory=NewsConfig)
    ai: AIConfig = Field(default_factory=AIConfig)
    markets: MarketsConfig = Field(default_factory=MarketsConfig)
    datasets: DatasetsConfig = Field(default_factory=DatasetsConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def apply_env_overrides(config: AppConfig) -> AppConfig:
    """Apply ``NEWS_REFRESH_INTERVAL`` and ``ENABLE_BACKGROUND_SCRAPING`` from the environment.

    ``NEWS_REFRESH_INTERVAL`` is given in milliseconds.
    """
    raw_interval = os.environ.get("NEWS_REFRESH_INTERVAL")
    if raw_interval:
        try:
            interval_ms = int(raw_interval)
        except ValueError:
            interval_ms = 0
        if interval_ms > 0:
            config.news.refresh_interval = interval_ms / 1000.0
        else:
            logger.warning("Ignoring invalid NEWS_REFRESH_INTERVAL=%r", raw_interval)
    raw_enabled = os.environ.get("ENABLE_BACKGROUND_SCRAPING")
    if raw_enabled:
        config.news.background_scraping = _parse_bool(raw_enabled)
    return config


def load_config(path: Path) -> AppConfig:
    """Load config from a YAML file, then apply environment overrides."""
    load_dotenv(path.parent / ".env", override=False)
    raw = yaml.safe_load(path.read_text()) or {}
    return apply_env_overrides(AppConfig(**raw))
