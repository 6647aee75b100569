"""Tests for headline relevance scoring."""

from situation_monitor.news.scoring import BASE_SCORE, calculate_relevance_score, recency_bonus

NOW_MS = 1_760_000_000_000
HOUR_MS = 3_600_000


def _score(title: str, source: str = "Some Blog", hours_old: float | None = None) -> int:
    published = None if hours_old is None else int(NOW_MS - hours_old * HOUR_MS)
    return calculate_relevance_score(title, source, published, now_ms=NOW_MS)


def test_plain_headline_gets_base_score() -> None:
    assert _score("Local bakery opens second shop") == BASE_SCORE


def test_priority_source_bonus() -> None:
    assert _score("Local bakery opens second shop", source="Reuters") == BASE_SCORE + 20


def test_alert_bonus() -> None:
    assert _score("Explosion reported downtown") == BASE_SCORE + 15


def test_region_bonus() -> None:
    assert _score("Farmers rally in Brazil") == BASE_SCORE + 10


def test_topic_bonus_is_capped() -> None:
    # economy, energy, diplomacy, elections: four topics, capped at 15
    title = "Oil tariff talks before election"
    assert _score(title) == BASE_SCORE + 15


def test_clickbait_penalty() -> None:
    assert _score("You won't believe this recipe") == BASE_SCORE - 20


def test_recency_tiers() -> None:
    assert recency_bonus(NOW_MS - 1 * HOUR_MS, NOW_MS) == 15
    assert recency_bonus(NOW_MS - 12 * HOUR_MS, NOW_MS) == 10
    assert recency_bonus(NOW_MS - 30 * HOUR_MS, NOW_MS) == 5
    assert recency_bonus(NOW_MS - 72 * HOUR_MS, NOW_MS) == 0


def test_undated_item_gets_no_recency_bonus() -> None:
    assert recency_bonus(None, NOW_MS) == 0


def test_score_clamped_to_100() -> None:
    title = "Breaking: missile strike in Israel raises nuclear and cyber fears"
    assert _score(title, source="Reuters", hours_old=1) == 100


def test_score_never_negative() -> None:
    assert 0 <= _score("Shocking: you won't believe it") <= 100
