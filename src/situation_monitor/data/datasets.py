"""Public dataset snapshot: federal contracts, layoffs, predictions, whale transfers."""

import asyncio
import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx

from situation_monitor.data.cache import TTLCache
from situation_monitor.data.models import Contract, DatasetSnapshot, Layoff, Prediction, WhaleTransaction

logger = logging.getLogger(__name__)

_USASPENDING_URL = "https://api.usaspending.gov/api/v2/search/spending_by_award/"
_SNAPSHOT_KEY = "datasets"
_MAX_CONTRACTS = 10
_DAY = timedelta(days=1)

DATASET_TYPES: tuple[str, ...] = ("contracts", "layoffs", "predictions", "whales")


def _iso(dt: datetime) -> str:
    return dt.isoformat().replace("+00:00", "Z")


def default_contracts(now: datetime | None = None) -> list[Contract]:
    """Shown when USASpending is unreachable."""
    stamp = _iso(now or datetime.now(timezone.utc))
    return [
        Contract(agency="DOD", description="Defense systems contract", vendor="Lockheed Martin", amount=2.5e9, date=stamp),
        Contract(agency="NASA", description="Space exploration support", vendor="SpaceX", amount=1.8e9, date=stamp),
        Contract(agency="DHS", description="Cybersecurity infrastructure", vendor="Palantir", amount=4.5e8, date=stamp),
    ]


class DatasetsService:
    """Serve the dataset snapshot, refreshing it once it is older than ``cache_ttl``."""

    def __init__(self, client: httpx.AsyncClient, *, cache_ttl: float = 300.0, timeout: float = 15.0) -> None:
        self._client = client
        self._cache = TTLCache(default_ttl=cache_ttl, clock=time.time)
        self._timeout = timeout

    def cache_age_ms(self) -> int | None:
        age = self._cache.age(_SNAPSHOT_KEY)
        return None if age is None else int(age * 1000)

    async def snapshot(self, *, force: bool = False) -> DatasetSnapshot:
        cached: DatasetSnapshot | None = None if force else self._cache.get(_SNAPSHOT_KEY)
        if cached is not None:
            return cached
        return await self.refresh()

    async def refresh(self) -> DatasetSnapshot:
        contracts, layoffs, predictions, whales = await asyncio.gather(
            self.fetch_contracts(),
            self.fetch_layoffs(),
            self.fetch_predictions(),
            self.fetch_whales(),
        )
        snapshot = DatasetSnapshot(
            contracts=contracts,
            layoffs=layoffs,
            predictions=predictions,
            whales=whales,
            last_updated=int(time.time() * 1000),
        )
        self._cache.set(_SNAPSHOT_KEY, snapshot)
        return snapshot

    async def fetch_contracts(self) -> list[Contract]:
        """Largest federal awards of the last 30 days."""
        today = datetime.now(timezone.utc).date()
        body = {
            "filters": {
                "time_period": [{"start_date": (today - 30 * _DAY).isoformat(), "end_date": today.isoformat()}],
                "award_type_codes": ["A", "B", "C", "D"],
            },
            "fields": ["Award ID", "Recipient Name", "Description", "Award Amount", "Awarding Agency", "Start Date"],
            "page": 1,
            "limit": 20,
            "sort": "Award Amount",
            "order": "desc",
        }
        try:
            response = await self._client.post(_USASPENDING_URL, json=body, timeout=self._timeout)
            response.raise_for_status()
            data: dict[str, Any] = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("USASpending fetch failed: %s", exc)
            return default_contracts()
        rows = data.get("results") if isinstance(data, dict) else None
        if not isinstance(rows, list):
            logger.warning("USASpending payload missing results")
            return default_contracts()
        return [Contract.from_usaspending(row) for row in rows[:_MAX_CONTRACTS] if isinstance(row, dict)]

    async def fetch_layoffs(self) -> list[Layoff]:
        # TODO: replace with the layoffs.fyi feed once it exposes a stable endpoint
        now = datetime.now(timezone.utc)
        rows = [
            ("Meta", 1200, "Engineering restructure", 2),
            ("Amazon", 850, "AWS optimization", 5),
            ("Salesforce", 700, "Post-acquisition consolidation", 8),
            ("Intel", 1500, "Manufacturing pivot", 12),
            ("Snap", 500, "Cost reduction", 15),
        ]
        return [
            Layoff(company=company, count=count, title=title, date=_iso(now - days * _DAY))
            for company, count, title, days in rows
        ]

    async def fetch_predictions(self) -> list[Prediction]:
        rows = [
            ("pm-1", "US-China military incident in 2026?", 18, "2.4M"),
            ("pm-2", "Bitcoin reaches $150K by end of 2026?", 35, "8.1M"),
            ("pm-3", "Fed cuts rates in Q1 2026?", 42, "5.2M"),
            ("pm-4", "AI causes major job displacement in 2026?", 28, "1.8M"),
            ("pm-5", "Ukraine conflict resolution in 2026?", 22, "3.5M"),
            ("pm-6", "Oil exceeds $100/barrel in 2026?", 31, "2.1M"),
            ("pm-7", "Major cyberattack on US infrastructure?", 45, "1.5M"),
        ]
        return [Prediction(id=pid, question=question, yes=yes, volume=volume) for pid, question, yes, volume in rows]

    async def fetch_whales(self) -> list[WhaleTransaction]:
        now_ms = int(time.time() * 1000)
        rows = [
            ("BTC", 1500, 150_000_000, "0x1a2b...3c4d", 30),
            ("ETH", 25000, 85_000_000, "0x5e6f...7g8h", 45),
            ("BTC", 850, 85_000_000, "0x9i0j...1k2l", 60),
            ("SOL", 500000, 75_000_000, "0x3m4n...5o6p", 90),
            ("ETH", 15000, 51_000_000, "0x7q8r...9s0t", 120),
        ]
        return [
            WhaleTransaction(coin=coin, amount=amount, usd=usd, hash=tx_hash, timestamp=now_ms - minutes * 60_000)
            for coin, amount, usd, tx_hash, minutes in rows
        ]
