"""Alert sinks for significant headlines."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeadlineAlert:
    """A headline the analyzer rated as significant."""

    level: str
    source: str
    title: str
    link: str
    significance: int
    summary: str = ""

    @property
    def message(self) -> str:
        return f"{self.level}: {self.source}: {self.title} ({self.significance}/10) {self.link}"


class AlertSink(ABC):
    """Base class for alert destinations."""

    @abstractmethod
    async def send(self, alert: HeadlineAlert) -> None:
        """Deliver one alert."""


class ConsoleAlertSink(AlertSink):
    """Write alerts to stderr via the logging module."""

    async def send(self, alert: HeadlineAlert) -> None:
        logger.warning("[ALERT] %s", alert.message)


class WebhookAlertSink(AlertSink):
    """POST alerts to a webhook URL as JSON."""

    def __init__(self, url: str, client: httpx.AsyncClient, *, timeout: float = 10.0) -> None:
        self._url = url
        self._client = client
        self._timeout = timeout

    async def send(self, alert: HeadlineAlert) -> None:
        payload = {
            "text": alert.message,
            "level": alert.level,
            "title": alert.title,
            "source": alert.source,
            "link": alert.link,
            "significance": alert.significance,
            "summary": alert.summary,
        }
        try:
            response = await self._client.post(self._url, json=payload, timeout=self._timeout)
            response.raise_for_status()
        except httpx.HTTPError:
            logger.exception("Failed to send webhook alert to %s", self._url)


class AlertManager:
    """Dispatch alerts to registered sinks."""

    def __init__(self) -> None:
        self._sinks: list[AlertSink] = []

    def register(self, sink: AlertSink) -> None:
        self._sinks.append(sink)

    async def alert(self, alert: HeadlineAlert) -> None:
        """Send an alert to every sink; one failing sink does not stop the rest."""
        for sink in self._sinks:
            try:
                await sink.send(alert)
            except Exception:
                logger.exception("Alert sink %s failed", type(sink).__name__)

    @property
    def sink_count(self) -> int:
        return len(self._sinks)
