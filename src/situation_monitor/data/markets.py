"""Market snapshot: CoinGecko crypto prices plus index/commodity placeholders."""

import asyncio
import logging
import time
from typing import Any

import httpx

from situation_monitor.data.cache import TTLCache
from situation_monitor.data.models import CryptoItem, MarketItem, MarketSnapshot

logger = logging.getLogger(__name__)

_COINGECKO_URL = "https://api.coingecko.com/api/v3/simple/price"
_SNAPSHOT_KEY = "markets"

DEFAULT_CRYPTO_IDS: tuple[str, ...] = (
    "bitcoin",
    "ethereum",
    "solana",
    "cardano",
    "polkadot",
    "chainlink",
    "avalanche-2",
)

# Quotes need a paid feed; the shape is served so clients can render the panel.
INDICES: tuple[tuple[str, str], ...] = (
    ("^GSPC", "S&P 500"),
    ("^DJI", "Dow Jones"),
    ("^IXIC", "NASDAQ"),
    ("^VIX", "VIX"),
)
COMMODITIES: tuple[tuple[str, str], ...] = (
    ("GC=F", "Gold"),
    ("SI=F", "Silver"),
    ("CL=F", "Crude Oil"),
    ("NG=F", "Natural Gas"),
    ("HG=F", "Copper"),
)


class MarketsService:
    """Serve a market snapshot, refreshing it once it is older than ``cache_ttl``."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        crypto_ids: list[str] | None = None,
        cache_ttl: float = 60.0,
        timeout: float = 10.0,
    ) -> None:
        self._client = client
        self._crypto_ids = list(crypto_ids) if crypto_ids else list(DEFAULT_CRYPTO_IDS)
        self._cache = TTLCache(default_ttl=cache_ttl, clock=time.time)
        self._timeout = timeout

    def cache_age_ms(self) -> int | None:
        age = self._cache.age(_SNAPSHOT_KEY)
        return None if age is None else int(age * 1000)

    async def snapshot(self, *, force: bool = False) -> MarketSnapshot:
        cached: MarketSnapshot | None = None if force else self._cache.get(_SNAPSHOT_KEY)
        if cached is not None:
            return cached
        return await self.refresh()

    async def refresh(self) -> MarketSnapshot:
        crypto, indices, commodities = await asyncio.gather(
            self.fetch_crypto(),
            self.fetch_indices(),
            self.fetch_commodities(),
        )
        snapshot = MarketSnapshot(
            crypto=crypto,
            indices=indices,
            commodities=commodities,
            sectors=[],
            last_updated=int(time.time() * 1000),
        )
        self._cache.set(_SNAPSHOT_KEY, snapshot)
        return snapshot

    async def fetch_crypto(self) -> list[CryptoItem]:
        params = {
            "ids": ",".join(self._crypto_ids),
            "vs_currencies": "usd",
            "include_24hr_change": "true",
        }
        try:
            response = await self._client.get(
                _COINGECKO_URL,
                params=params,
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
            response.raise_for_status()
            data: dict[str, Any] = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("CoinGecko fetch failed: %s", exc)
            return []
        if not isinstance(data, dict):
            logger.warning("Unexpected CoinGecko payload type %s", type(data).__name__)
            return []
        items: list[CryptoItem] = []
        for coin_id in self._crypto_ids:
            entry = data.get(coin_id)
            items.append(CryptoItem.from_coingecko(coin_id, entry if isinstance(entry, dict) else {}))
        return items

    async def fetch_indices(self) -> list[MarketItem]:
        return [MarketItem(symbol=symbol, name=name) for symbol, name in INDICES]

    async def fetch_commodities(self) -> list[MarketItem]:
        return [MarketItem(symbol=symbol, name=name) for symbol, name in COMMODITIES]
