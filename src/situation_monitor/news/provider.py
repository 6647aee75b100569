"""FeedSource base class: one external source bound to one target category."""

import logging
from abc import ABC, abstractmethod

import httpx

from situation_monitor.config import FeedCategory
from situation_monitor.news.models import NewsItem

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "SituationMonitor/2.0 (News Aggregator)"


class FeedSource(ABC):
    """Adapter from one external source to ``NewsItem`` objects.

    ``fetch`` never raises for transport or payload problems; it logs and
    returns an empty list so one bad source cannot sink a scrape cycle.
    """

    name: str
    accept: str = "*/*"

    def __init__(
        self,
        category: FeedCategory,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.category: FeedCategory = category
        self._timeout = timeout
        self._user_agent = user_agent

    @abstractmethod
    async def fetch(self, client: httpx.AsyncClient) -> list[NewsItem]:
        """Fetch and normalize this source's current items."""

    async def _get(self, client: httpx.AsyncClient, url: str) -> httpx.Response | None:
        """GET *url*; return ``None`` on timeout, transport error or non-2xx status."""
        try:
            response = await client.get(
                url,
                headers={"User-Agent": self._user_agent, "Accept": self.accept},
                timeout=self._timeout,
                follow_redirects=True,
            )
        except httpx.TimeoutException:
            logger.warning("%s timed out after %.0fs: %s", self.name, self._timeout, url)
            return None
        except httpx.HTTPError as exc:
            logger.warning("%s request failed for %s: %s", self.name, url, exc)
            return None
        if not response.is_success:
            logger.warning("%s got HTTP %d for %s", self.name, response.status_code, url)
            return None
        return response

    def __repr__(self) -> str:
        return f"{type(self).__name__}(category={self.category!r})"
