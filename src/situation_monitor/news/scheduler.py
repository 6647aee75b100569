"""Background scraping loop, independent of inbound requests."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

logger = logging.getLogger(__name__)

ScrapeCycle = Callable[[], Awaitable[Any]]


class BackgroundScraper:
    """Run a scrape cycle now and then every ``interval`` seconds.

    Two states: idle (no task) and running (task scheduled). ``start`` is
    idempotent and ``refresh_now`` runs an extra cycle without touching the
    periodic schedule. A failing cycle is logged and the loop carries on.
    """

    def __init__(self, cycle: ScrapeCycle, *, interval: float = 300.0, enabled: bool = True) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._cycle = cycle
        self._interval = interval
        self._enabled = enabled
        self._task: asyncio.Task[None] | None = None
        self._cycles_run = 0

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def cycles_run(self) -> int:
        return self._cycles_run

    def start(self) -> bool:
        """Schedule the loop on the running event loop.

        Returns ``True`` if this call started it.
        """
        if self.is_running:
            logger.info("Background scraping already active")
            return False
        if not self._enabled:
            logger.info("Background scraping disabled")
            return False
        logger.info("Starting background scraping every %.0fs", self._interval)
        self._task = asyncio.create_task(self._loop(), name="background-scraper")
        return True

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Background scraping stopped")

    async def refresh_now(self) -> Any:
        """Run one out-of-band cycle and return its result."""
        logger.info("Manual refresh requested")
        return await self._run_cycle()

    async def _loop(self) -> None:
        while True:
            await self._run_safely()
            await asyncio.sleep(self._interval)

    async def _run_cycle(self) -> Any:
        self._cycles_run += 1
        return await self._cycle()

    async def _run_safely(self) -> None:
        try:
            await self._run_cycle()
        except Exception:
            logger.exception("Scrape cycle failed; retrying in %.0fs", self._interval)
