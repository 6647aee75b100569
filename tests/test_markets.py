"""Tests for the market and dataset snapshot services."""

import json

import httpx
import pytest

from situation_monitor.data.datasets import DatasetsService, default_contracts
from situation_monitor.data.markets import COMMODITIES, INDICES, MarketsService

COINGECKO_PAYLOAD = {
    "bitcoin": {"usd": 65000.5, "usd_24h_change": -1.25},
    "ethereum": {"usd": 3200, "usd_24h_change": 2.5},
}

USASPENDING_PAYLOAD = {
    "results": [
        {
            "Award ID": f"A{i}",
            "Recipient Name": f"Vendor {i}",
            "Description": "Satellite services " * 10,
            "Award Amount": 1_000_000 * (20 - i),
            "Awarding Agency": "Department of Defense",
            "Start Date": "2026-09-01",
        }
        for i in range(12)
    ]
}


class Recorder:
    """MockTransport handler that counts hits per host."""

    def __init__(self, status: int = 200) -> None:
        self.status = status
        self.hits: dict[str, int] = {}
        self.bodies: list[bytes] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        host = request.url.host
        self.hits[host] = self.hits.get(host, 0) + 1
        self.bodies.append(request.content)
        if self.status != 200:
            return httpx.Response(self.status)
        if host == "api.coingecko.com":
            return httpx.Response(200, json=COINGECKO_PAYLOAD)
        if host == "api.usaspending.gov":
            return httpx.Response(200, json=USASPENDING_PAYLOAD)
        return httpx.Response(404)


def _client(recorder: Recorder) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(recorder))


# ---------------------------------------------------------------------------
# MarketsService
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_markets_snapshot_parses_crypto() -> None:
    recorder = Recorder()
    async with _client(recorder) as client:
        service = MarketsService(client, crypto_ids=["bitcoin", "ethereum", "solana"])
        snapshot = await service.snapshot()

    assert [coin.id for coin in snapshot.crypto] == ["bitcoin", "ethereum", "solana"]
    assert snapshot.crypto[0].current_price == 65000.5
    assert snapshot.crypto[0].price_change_percentage_24h == -1.25
    assert snapshot.crypto[0].symbol == "BIT"
    assert snapshot.crypto[2].current_price == 0.0
    assert len(snapshot.indices) == len(INDICES)
    assert len(snapshot.commodities) == len(COMMODITIES)
    assert snapshot.last_updated > 0


@pytest.mark.asyncio
async def test_markets_snapshot_is_cached() -> None:
    recorder = Recorder()
    async with _client(recorder) as client:
        service = MarketsService(client, crypto_ids=["bitcoin"])
        first = await service.snapshot()
        second = await service.snapshot()
        assert service.cache_age_ms() is not None
        await service.snapshot(force=True)

    assert first is second
    assert recorder.hits["api.coingecko.com"] == 2


@pytest.mark.asyncio
async def test_markets_upstream_failure_keeps_placeholders() -> None:
    async with _client(Recorder(status=429)) as client:
        snapshot = await MarketsService(client).snapshot()

    assert snapshot.crypto == []
    assert len(snapshot.indices) == len(INDICES)


@pytest.mark.asyncio
async def test_markets_snapshot_camel_case() -> None:
    async with _client(Recorder()) as client:
        snapshot = await MarketsService(client, crypto_ids=["bitcoin"]).snapshot()

    data = snapshot.model_dump(by_alias=True)
    assert "lastUpdated" in data
    assert "changePercent" in data["indices"][0]
    assert "current_price" in data["crypto"][0]


def test_markets_cache_age_before_first_fetch() -> None:
    service = MarketsService(httpx.AsyncClient())
    assert service.cache_age_ms() is None


# ---------------------------------------------------------------------------
# DatasetsService
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_datasets_snapshot() -> None:
    recorder = Recorder()
    async with _client(recorder) as client:
        snapshot = await DatasetsService(client).snapshot()

    assert len(snapshot.contracts) == 10
    assert snapshot.contracts[0].vendor == "Vendor 0"
    assert snapshot.contracts[0].amount == 20_000_000
    assert len(snapshot.contracts[0].description) == 100
    assert snapshot.layoffs and snapshot.predictions and snapshot.whales
    body = json.loads(recorder.bodies[0])
    assert body["sort"] == "Award Amount"
    assert body["filters"]["award_type_codes"] == ["A", "B", "C", "D"]


@pytest.mark.asyncio
async def test_datasets_contracts_fallback_on_error() -> None:
    async with _client(Recorder(status=500)) as client:
        snapshot = await DatasetsService(client).snapshot()

    assert [c.agency for c in snapshot.contracts] == [c.agency for c in default_contracts()]


@pytest.mark.asyncio
async def test_datasets_snapshot_is_cached() -> None:
    recorder = Recorder()
    async with _client(recorder) as client:
        service = DatasetsService(client)
        await service.snapshot()
        await service.snapshot()

    assert recorder.hits["api.usaspending.gov"] == 1


@pytest.mark.asyncio
async def test_whale_timestamps_are_recent_first() -> None:
    async with _client(Recorder()) as client:
        whales = await DatasetsService(client).fetch_whales()

    timestamps = [w.timestamp for w in whales]
    assert timestamps == sorted(timestamps, reverse=True)
