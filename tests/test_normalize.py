"""Tests for entry normalization helpers."""

from situation_monitor.news.normalize import (
    build_news_item,
    clean_text,
    hash_code,
    parse_timestamp,
    source_from_url,
    storage_category,
    to_base36,
)

NOW_MS = 1_760_000_000_000


def test_hash_code_known_values() -> None:
    assert hash_code("") == "0"
    assert hash_code("a") == "2p"
    assert hash_code("abc") == "22ci"


def test_hash_code_is_stable_and_distinguishes_links() -> None:
    assert hash_code("https://a.example/1") == hash_code("https://a.example/1")
    assert hash_code("https://a.example/1") != hash_code("https://a.example/2")


def test_hash_code_handles_overflow() -> None:
    digest = hash_code("https://www.example.com/" + "x" * 500)
    assert digest
    assert all(ch in "0123456789abcdefghijklmnopqrstuvwxyz" for ch in digest)


def test_to_base36() -> None:
    assert to_base36(0) == "0"
    assert to_base36(35) == "z"
    assert to_base36(36) == "10"


def test_clean_text_strips_markup_and_entities() -> None:
    assert clean_text("<p>Test &amp; <b>Title</b></p>") == "Test & Title"
    assert clean_text("  many \n\t spaces  ") == "many spaces"


def test_parse_timestamp_formats() -> None:
    rfc = parse_timestamp("Mon, 01 Jan 2024 12:00:00 GMT")
    iso = parse_timestamp("2024-01-01T12:00:00Z")
    gdelt = parse_timestamp("20240101T120000Z")
    assert rfc == iso == gdelt == 1_704_110_400_000


def test_parse_timestamp_invalid() -> None:
    assert parse_timestamp(None) is None
    assert parse_timestamp("") is None
    assert parse_timestamp("not a date") is None


def test_source_from_url() -> None:
    assert source_from_url("https://www.theguardian.com/world/rss") == "theguardian"
    assert source_from_url("not a url") == "Unknown"


def test_storage_category_maps_realtime() -> None:
    assert storage_category("realtime") == "politics"
    assert storage_category("tech") == "tech"


# ---------------------------------------------------------------------------
# build_news_item
# ---------------------------------------------------------------------------


def test_build_news_item_fields() -> None:
    item = build_news_item(
        prefix="rss",
        index=2,
        category="politics",
        title="Breaking: talks in Kyiv",
        link="https://example.com/a",
        source="Reuters",
        pub_date="Mon, 01 Jan 2024 12:00:00 GMT",
        description="<p>" + "d" * 300 + "</p>",
        now_ms=NOW_MS,
    )
    assert item is not None
    assert item.id == f"rss-politics-{hash_code('https://example.com/a')}-2"
    assert item.timestamp == 1_704_110_400_000
    assert item.is_alert is True
    assert item.alert_keyword == "breaking"
    assert item.region == "Eastern Europe"
    assert item.topics == ["diplomacy"]
    assert item.description is not None and len(item.description) == 200


def test_build_news_item_requires_title_and_link() -> None:
    common = {"prefix": "rss", "index": 0, "category": "tech", "source": "x", "now_ms": NOW_MS}
    assert build_news_item(title="", link="https://example.com", **common) is None
    assert build_news_item(title="<b></b>", link="https://example.com", **common) is None
    assert build_news_item(title="Title", link="  ", **common) is None


def test_build_news_item_undated_uses_now() -> None:
    item = build_news_item(
        prefix="rss", index=0, category="tech", title="Chip fab opens", link="https://x.test/1", source="X",
        now_ms=NOW_MS,
    )
    assert item is not None
    assert item.timestamp == NOW_MS
    assert item.pub_date is None


def test_build_news_item_realtime_stored_as_politics() -> None:
    item = build_news_item(
        prefix="gnews", index=0, category="realtime", title="Update", link="https://x.test/2", source="X",
        now_ms=NOW_MS,
    )
    assert item is not None
    assert item.category == "politics"
    assert item.id.startswith("gnews-realtime-")


def test_news_item_serializes_camel_case() -> None:
    item = build_news_item(
        prefix="rss", index=0, category="ai", title="Model release", link="https://x.test/3", source="X",
        now_ms=NOW_MS,
    )
    assert item is not None
    data = item.model_dump(by_alias=True)
    assert {"isAlert", "alertKeyword", "relevanceScore", "pubDate"} <= set(data)
