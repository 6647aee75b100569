"""Headline-keyed cache in front of the significance analyzer."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from situation_monitor.analysis.significance import Significance, SignificanceAnalyzer
from situation_monitor.data.cache import TTLCache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    significance: int
    summary: str
    cached: bool

    def to_dict(self) -> dict[str, object]:
        return {"significance": self.significance, "summary": self.summary, "cached": self.cached}


class SignificanceCache:
    """Memoize per-headline significance for ``ttl`` seconds (default 30 min).

    Misses from one request go to the analyzer as a single batch. When the
    cache grows past ``max_entries``, entries older than ``prune_after``
    (default 1 hour) are dropped.
    """

    def __init__(
        self,
        analyzer: SignificanceAnalyzer,
        *,
        ttl: float = 1800.0,
        prune_after: float = 3600.0,
        max_entries: int = 1000,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._analyzer = analyzer
        self._cache = TTLCache(default_ttl=ttl, clock=clock)
        self._prune_after = prune_after
        self._max_entries = max_entries

    def __len__(self) -> int:
        return len(self._cache)

    def lookup(self, headline: str) -> Significance | None:
        cached: Significance | None = self._cache.get(headline)
        return cached

    def store(self, headline: str, assessment: Significance) -> None:
        self._cache.set(headline, assessment)
        if len(self._cache) > self._max_entries:
            removed = self._cache.prune(self._prune_after)
            logger.debug("Pruned %d stale analysis entries", removed)

    async def analyze(self, headlines: list[str]) -> list[AnalysisResult]:
        """Return one result per headline, preserving input order."""
        results: list[AnalysisResult | None] = [None] * len(headlines)
        misses: list[tuple[int, str]] = []
        for index, headline in enumerate(headlines):
            hit = self.lookup(headline)
            if hit is not None:
                results[index] = AnalysisResult(hit.significance, hit.summary, cached=True)
            else:
                misses.append((index, headline))

        if misses:
            logger.info("Analyzing %d uncached headlines (%d cached)", len(misses), len(headlines) - len(misses))
            assessments = await self._analyzer.analyze_batch([headline for _, headline in misses])
            for (index, headline), assessment in zip(misses, assessments):
                self.store(headline, assessment)
                results[index] = AnalysisResult(assessment.significance, assessment.summary, cached=False)

        return [result for result in results if result is not None]
