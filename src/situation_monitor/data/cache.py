"""Timestamped in-memory cache with TTL reads and age-based pruning."""

import time
from collections.abc import Callable
from typing import Any


class TTLCache:
    """In-memory cache keyed by string, remembering when each value was stored.

    Entries older than their TTL read as missing. ``prune`` drops entries
    past a separate, usually longer, age limit.
    """

    def __init__(self, default_ttl: float = 60.0, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._default_ttl = default_ttl
        self._clock = clock
        self._store: dict[str, tuple[Any, float, float]] = {}

    def get(self, key: str) -> Any | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        value, stored_at, ttl = entry
        if self._clock() - stored_at >= ttl:
            return None
        return value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        self._store[key] = (value, self._clock(), ttl if ttl is not None else self._default_ttl)

    def age(self, key: str) -> float | None:
        """Seconds since *key* was stored, expired or not."""
        entry = self._store.get(key)
        if entry is None:
            return None
        return self._clock() - entry[1]

    def prune(self, max_age: float) -> int:
        """Remove entries stored more than *max_age* seconds ago; return how many."""
        cutoff = self._clock() - max_age
        stale = [key for key, (_, stored_at, _) in self._store.items() if stored_at < cutoff]
        for key in stale:
            del self._store[key]
        return len(stale)

    def __len__(self) -> int:
        return len(self._store)
