"""Relevance scoring for normalized headlines."""

import time

from situation_monitor.news.keywords import (
    contains_alert_keyword,
    detect_region,
    detect_topics,
    is_clickbait,
    is_priority_source,
)

BASE_SCORE = 50
PRIORITY_SOURCE_BONUS = 20
ALERT_BONUS = 15
REGION_BONUS = 10
TOPIC_BONUS = 5
MAX_TOPIC_BONUS = 15
CLICKBAIT_PENALTY = 20

# (max age in hours, bonus), checked in order
RECENCY_TIERS: tuple[tuple[float, int], ...] = ((6.0, 15), (24.0, 10), (48.0, 5))

_MS_PER_HOUR = 3_600_000


def recency_bonus(published_ms: int | None, now_ms: int) -> int:
    """Bonus for fresh articles; undated articles get nothing."""
    if published_ms is None:
        return 0
    hours_old = (now_ms - published_ms) / _MS_PER_HOUR
    for max_hours, bonus in RECENCY_TIERS:
        if hours_old < max_hours:
            return bonus
    return 0


def calculate_relevance_score(
    title: str,
    source: str,
    published_ms: int | None,
    *,
    now_ms: int | None = None,
) -> int:
    """Score a headline from 0 to 100.

    Each signal contributes independently; only the final clamp couples them.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)

    score = BASE_SCORE
    if is_priority_source(source):
        score += PRIORITY_SOURCE_BONUS
    if contains_alert_keyword(title) is not None:
        score += ALERT_BONUS
    score += recency_bonus(published_ms, now_ms)
    if detect_region(title) is not None:
        score += REGION_BONUS
    score += min(TOPIC_BONUS * len(detect_topics(title)), MAX_TOPIC_BONUS)
    if is_clickbait(title):
        score -= CLICKBAIT_PENALTY
    return max(0, min(100, score))
