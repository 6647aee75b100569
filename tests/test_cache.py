"""Tests for TTL cache."""

from situation_monitor.data.cache import TTLCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_cache_stores_and_retrieves() -> None:
    cache = TTLCache(default_ttl=60)
    cache.set("key1", {"data": "value"})
    assert cache.get("key1") == {"data": "value"}


def test_cache_returns_none_for_missing_key() -> None:
    cache = TTLCache(default_ttl=60)
    assert cache.get("missing") is None


def test_cache_expires_after_ttl() -> None:
    clock = FakeClock()
    cache = TTLCache(default_ttl=10, clock=clock)
    cache.set("key1", "value")
    clock.now = 9.9
    assert cache.get("key1") == "value"
    clock.now = 10.0
    assert cache.get("key1") is None
    # Expired entries stay until pruned
    assert len(cache) == 1
    assert cache.age("key1") == 10.0


def test_cache_custom_ttl_per_key() -> None:
    clock = FakeClock()
    cache = TTLCache(default_ttl=60, clock=clock)
    cache.set("short", "value", ttl=1)
    cache.set("long", "value", ttl=60)
    clock.now = 5
    assert cache.get("short") is None
    assert cache.get("long") == "value"


def test_cache_prune_by_age() -> None:
    clock = FakeClock()
    cache = TTLCache(default_ttl=60, clock=clock)
    cache.set("old", 1)
    clock.now = 100
    cache.set("new", 2)
    clock.now = 150
    assert cache.prune(max_age=120) == 1
    assert cache.age("old") is None
    assert cache.get("new") == 2


def test_cache_age_missing() -> None:
    assert TTLCache().age("nope") is None
