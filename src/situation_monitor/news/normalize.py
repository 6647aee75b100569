"""Helpers shared by the feed adapters to turn raw entries into ``NewsItem`` objects."""

import html
import re
import time
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from urllib.parse import urlparse

from situation_monitor.config import FeedCategory
from situation_monitor.news.keywords import contains_alert_keyword, detect_region, detect_topics
from situation_monitor.news.models import NewsItem
from situation_monitor.news.scoring import calculate_relevance_score

MAX_DESCRIPTION_LEN = 200

_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"
_GDELT_DATE_FORMAT = "%Y%m%dT%H%M%SZ"


def hash_code(text: str) -> str:
    """Return a base-36 rolling 32-bit hash of *text*.

    Only used to keep item ids unique within one fetch.
    """
    value = 0
    for ch in text:
        value = (value * 31 + ord(ch)) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return to_base36(abs(value))


def to_base36(number: int) -> str:
    if number < 0:
        raise ValueError("number must be non-negative")
    if number == 0:
        return "0"
    digits: list[str] = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def clean_text(text: str) -> str:
    """Unwrap entities, drop markup and collapse whitespace."""
    unescaped = html.unescape(text)
    stripped = _TAG_RE.sub("", unescaped)
    return _WS_RE.sub(" ", stripped).strip()


def parse_timestamp(value: str | None) -> int | None:
    """Parse an RFC 822, ISO 8601 or GDELT date into epoch milliseconds."""
    if not value:
        return None
    value = value.strip()
    parsed: datetime | None = None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        parsed = None
    if parsed is None:
        try:
            parsed = datetime.strptime(value, _GDELT_DATE_FORMAT).replace(tzinfo=timezone.utc)
        except ValueError:
            try:
                parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
            except ValueError:
                return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() * 1000)


def source_from_url(url: str) -> str:
    """Derive a rough outlet name from a feed URL's hostname."""
    hostname = urlparse(url).hostname
    if not hostname:
        return "Unknown"
    return hostname.replace("www.", "").replace(".com", "").replace(".org", "")


def storage_category(category: FeedCategory) -> str:
    """Breaking-news items are stored as politics."""
    return "politics" if category == "realtime" else category


def build_news_item(
    *,
    prefix: str,
    index: int,
    category: FeedCategory,
    title: str,
    link: str,
    source: str,
    pub_date: str | None = None,
    published_ms: int | None = None,
    description: str | None = None,
    now_ms: int | None = None,
) -> NewsItem | None:
    """Normalize one raw entry; return ``None`` when title or link is missing."""
    title = clean_text(title or "")
    link = (link or "").strip()
    if not title or not link:
        return None
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    if published_ms is None:
        published_ms = parse_timestamp(pub_date)

    cleaned_description = clean_text(description)[:MAX_DESCRIPTION_LEN] if description else None
    source = clean_text(source) or "Unknown"
    alert = contains_alert_keyword(title)
    return NewsItem(
        id=f"{prefix}-{category}-{hash_code(link)}-{index}",
        title=title,
        link=link,
        description=cleaned_description or None,
        pub_date=pub_date or None,
        timestamp=published_ms if published_ms is not None else now_ms,
        source=source,
        category=storage_category(category),
        is_alert=alert is not None,
        alert_keyword=alert.keyword if alert else None,
        region=detect_region(title),
        topics=detect_topics(title),
        relevance_score=calculate_relevance_score(title, source, published_ms, now_ms=now_ms),
    )
