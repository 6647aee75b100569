"""Static keyword tables and headline classifiers.

All matching is case-insensitive. Alert keywords match as whole words with
an optional plural, so ``war`` catches "wars" but not "Warsaw" or "warning".
Keywords in ``ALERT_PREFIXES`` match at a word start instead (``terror``
catches "terrorist"). Region and topic aliases must match as whole words.
"""

import re
from dataclasses import dataclass

# No entry is a substring of another, so a title carrying one keyword
# always reports that keyword.
ALERT_KEYWORDS: tuple[str, ...] = (
    "breaking",
    "urgent",
    "emergency",
    "attack",
    "explosion",
    "war",
    "invasion",
    "missile",
    "nuclear",
    "sanctions",
    "crisis",
    "outbreak",
    "collapse",
    "coup",
    "assassination",
    "drone strike",
    "hostage",
    "terror",
)

# Stems matched at a word start rather than as whole words.
ALERT_PREFIXES: frozenset[str] = frozenset({"terror"})

REGION_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Middle East": (
        "israel", "gaza", "west bank", "iran", "tehran", "syria", "lebanon", "hezbollah",
        "yemen", "houthi", "saudi", "iraq", "jordan", "qatar", "hamas",
    ),
    "Eastern Europe": ("ukraine", "kyiv", "russia", "moscow", "kremlin", "belarus", "moldova", "crimea"),
    "Europe": ("european union", "eu", "brussels", "germany", "france", "britain", "uk", "poland", "nato"),
    "East Asia": ("china", "beijing", "taiwan", "japan", "north korea", "south korea", "pyongyang", "hong kong"),
    "South Asia": ("india", "pakistan", "afghanistan", "bangladesh", "kashmir"),
    "Africa": ("sudan", "ethiopia", "nigeria", "somalia", "congo", "sahel", "mali", "libya", "niger"),
    "Latin America": ("venezuela", "mexico", "brazil", "colombia", "cuba", "argentina", "haiti"),
    "North America": ("united states", "washington", "white house", "pentagon", "canada"),
}

TOPIC_KEYWORDS: dict[str, tuple[str, ...]] = {
    "military": ("military", "troops", "army", "navy", "airstrike", "warship", "defense", "missile"),
    "nuclear": ("nuclear", "uranium", "enrichment", "warhead", "iaea"),
    "cyber": ("cyber", "hack", "hackers", "ransomware", "malware", "breach"),
    "economy": ("economy", "inflation", "tariff", "tariffs", "recession", "central bank", "gdp", "trade war"),
    "energy": ("oil", "gas", "opec", "pipeline", "lng", "energy"),
    "diplomacy": ("summit", "talks", "treaty", "ceasefire", "diplomat", "diplomatic", "envoy", "negotiations"),
    "elections": ("election", "elections", "vote", "ballot", "referendum", "polls"),
    "ai": ("ai", "artificial intelligence", "chatgpt", "openai", "machine learning"),
    "intelligence": ("espionage", "spy", "intelligence", "cia", "mi6", "surveillance"),
}

PRIORITY_SOURCES: frozenset[str] = frozenset(
    {
        "reuters",
        "associated press",
        "ap news",
        "bbc",
        "the guardian",
        "new york times",
        "washington post",
        "foreign policy",
        "foreign affairs",
        "the economist",
        "financial times",
        "wall street journal",
        "politico",
        "al jazeera",
        "dw",
        "france24",
    }
)

CLICKBAIT_PHRASES: tuple[str, ...] = ("you won't believe", "you wont believe", "shocking")


@dataclass(frozen=True)
class AlertMatch:
    """Result of a positive alert-keyword check."""

    keyword: str
    is_alert: bool = True


def _word_pattern(phrases: tuple[str, ...], *, plural: bool = False) -> re.Pattern[str]:
    tail = r"(?:s|es)?\b" if plural else r"\b"
    return re.compile("|".join(rf"\b{re.escape(p)}{tail}" for p in phrases), re.IGNORECASE)


def _alert_pattern(keyword: str) -> re.Pattern[str]:
    if keyword in ALERT_PREFIXES:
        return re.compile(rf"\b{re.escape(keyword)}", re.IGNORECASE)
    return _word_pattern((keyword,), plural=True)


_ALERT_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (kw, _alert_pattern(kw)) for kw in ALERT_KEYWORDS
)
_REGION_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (region, _word_pattern(aliases)) for region, aliases in REGION_KEYWORDS.items()
)
_TOPIC_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (topic, _word_pattern(aliases)) for topic, aliases in TOPIC_KEYWORDS.items()
)


def contains_alert_keyword(text: str) -> AlertMatch | None:
    """Return the first alert keyword found in *text*, or ``None``."""
    for keyword, pattern in _ALERT_PATTERNS:
        if pattern.search(text):
            return AlertMatch(keyword=keyword)
    return None


def detect_region(text: str) -> str | None:
    """Return the first region whose aliases appear in *text*."""
    for region, pattern in _REGION_PATTERNS:
        if pattern.search(text):
            return region
    return None


def detect_topics(text: str) -> list[str]:
    """Return every topic tag with at least one keyword in *text*."""
    return [topic for topic, pattern in _TOPIC_PATTERNS if pattern.search(text)]


def is_priority_source(source: str) -> bool:
    source_lower = source.lower()
    return any(name in source_lower for name in PRIORITY_SOURCES)


def is_clickbait(text: str) -> bool:
    text_lower = text.lower()
    return any(phrase in text_lower for phrase in CLICKBAIT_PHRASES)
