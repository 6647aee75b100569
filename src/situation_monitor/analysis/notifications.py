"""Alert on newly seen headlines that the analyzer rates as significant."""

import logging
from collections import OrderedDict
from collections.abc import Iterable

from situation_monitor.analysis.cache import SignificanceCache
from situation_monitor.monitoring.alerts import AlertManager, HeadlineAlert
from situation_monitor.news.models import NewsItem

logger = logging.getLogger(__name__)

ALERT_THRESHOLD = 8
URGENT_THRESHOLD = 9
MAX_SEEN = 500
MAX_BATCH = 10


class HeadlineNotifier:
    """Submit unseen headlines for analysis and alert on high scores.

    Ids are marked seen before the analysis is awaited, so a second batch
    arriving mid-flight never resubmits them. Only the most recent
    ``max_seen`` ids are remembered.
    """

    def __init__(
        self,
        cache: SignificanceCache,
        alerts: AlertManager,
        *,
        threshold: int = ALERT_THRESHOLD,
        max_seen: int = MAX_SEEN,
        max_batch: int = MAX_BATCH,
    ) -> None:
        self._cache = cache
        self._alerts = alerts
        self._threshold = threshold
        self._max_seen = max_seen
        self._max_batch = max_batch
        self._seen: OrderedDict[str, None] = OrderedDict()

    def has_seen(self, item_id: str) -> bool:
        return item_id in self._seen

    def _mark_seen(self, item_ids: Iterable[str]) -> None:
        for item_id in item_ids:
            self._seen[item_id] = None
            self._seen.move_to_end(item_id)
        while len(self._seen) > self._max_seen:
            self._seen.popitem(last=False)

    async def process(self, items: list[NewsItem]) -> list[HeadlineAlert]:
        """Analyze the unseen part of *items* and return the alerts emitted."""
        fresh = [item for item in items if item.id not in self._seen]
        if not fresh:
            return []
        self._mark_seen(item.id for item in fresh)

        to_analyze = fresh[: self._max_batch]
        results = await self._cache.analyze([item.title for item in to_analyze])

        emitted: list[HeadlineAlert] = []
        for item, result in zip(to_analyze, results):
            if result.significance < self._threshold:
                continue
            alert = HeadlineAlert(
                level="URGENT" if result.significance >= URGENT_THRESHOLD else "ALERT",
                source=item.source,
                title=item.title,
                link=item.link,
                significance=result.significance,
                summary=result.summary,
            )
            await self._alerts.alert(alert)
            emitted.append(alert)
        if emitted:
            logger.info("Emitted %d headline alert(s) from %d new items", len(emitted), len(fresh))
        return emitted
