"""Tests for keyword tables and headline classifiers."""

import pytest

from situation_monitor.news.keywords import (
    ALERT_KEYWORDS,
    contains_alert_keyword,
    detect_region,
    detect_topics,
    is_clickbait,
    is_priority_source,
)

# ---------------------------------------------------------------------------
# Alert keywords
# ---------------------------------------------------------------------------


def test_alert_keyword_detected() -> None:
    match = contains_alert_keyword("Missile launched near border")
    assert match is not None
    assert match.keyword == "missile"
    assert match.is_alert is True


def test_alert_keyword_case_insensitive() -> None:
    match = contains_alert_keyword("BREAKING: markets tumble")
    assert match is not None
    assert match.keyword == "breaking"


def test_alert_keyword_matches_word_start() -> None:
    match = contains_alert_keyword("Terrorist cell dismantled")
    assert match is not None
    assert match.keyword == "terror"


def test_alert_keyword_ignores_inner_substring() -> None:
    assert contains_alert_keyword("Software update released") is None
    assert contains_alert_keyword("Award ceremony postponed") is None


@pytest.mark.parametrize(
    "title",
    ["Warsaw hosts trade fair", "Warren Buffett buys shares", "Weather warning issued", "Warner Bros earnings"],
)
def test_alert_keyword_ignores_longer_words(title: str) -> None:
    assert contains_alert_keyword(title) is None


def test_alert_keyword_allows_plural() -> None:
    match = contains_alert_keyword("Trade wars deepen")
    assert match is not None
    assert match.keyword == "war"
    missiles = contains_alert_keyword("New missiles tested")
    assert missiles is not None and missiles.keyword == "missile"


def test_no_alert_keyword_returns_none() -> None:
    assert contains_alert_keyword("Local bakery wins award") is None


def test_alert_keywords_are_not_substrings_of_each_other() -> None:
    for keyword in ALERT_KEYWORDS:
        others = [other for other in ALERT_KEYWORDS if other != keyword]
        assert not any(keyword in other for other in others), keyword


@pytest.mark.parametrize("keyword", ALERT_KEYWORDS)
def test_every_alert_keyword_reports_itself(keyword: str) -> None:
    match = contains_alert_keyword(f"Reports of {keyword} overnight")
    assert match is not None
    assert match.keyword == keyword


# ---------------------------------------------------------------------------
# Regions and topics
# ---------------------------------------------------------------------------


def test_detect_region() -> None:
    assert detect_region("Talks resume in Kyiv") == "Eastern Europe"
    assert detect_region("Protests in Tehran") == "Middle East"
    assert detect_region("Taiwan strait tensions") == "East Asia"


def test_detect_region_whole_words_only() -> None:
    # "eu" must not fire on "Europe" or "neutral"
    assert detect_region("Neutral observers arrive") is None


def test_detect_region_none() -> None:
    assert detect_region("Quarterly earnings beat estimates") is None


def test_detect_topics_multiple() -> None:
    topics = detect_topics("Oil prices rise after tariff talks")
    assert topics == ["economy", "energy", "diplomacy"]


def test_detect_topics_empty() -> None:
    assert detect_topics("Celebrity wedding photos") == []


# ---------------------------------------------------------------------------
# Sources and clickbait
# ---------------------------------------------------------------------------


def test_priority_source_substring_match() -> None:
    assert is_priority_source("BBC News")
    assert is_priority_source("Reuters via Yahoo")
    assert not is_priority_source("Some Blog")


def test_clickbait() -> None:
    assert is_clickbait("You won't believe what happened next")
    assert is_clickbait("SHOCKING footage emerges")
    assert not is_clickbait("Parliament passes budget")
