"""Pydantic models for market and public dataset snapshots."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _float_field(data: dict[str, Any], key: str) -> float:
    """Extract an optional numeric field, defaulting to 0.0."""
    try:
        return float(data.get(key) or 0)
    except (TypeError, ValueError):
        return 0.0


def _str_field(data: dict[str, Any], key: str, default: str = "") -> str:
    return str(data.get(key) or default)


class CryptoItem(BaseModel):
    """Spot price for one coin, in CoinGecko's field names."""

    id: str
    symbol: str
    name: str
    current_price: float = 0.0
    price_change_percentage_24h: float = 0.0

    @classmethod
    def from_coingecko(cls, coin_id: str, data: dict[str, Any]) -> "CryptoItem":
        """Build from one entry of the ``simple/price`` response (may be empty)."""
        return cls(
            id=coin_id,
            symbol=coin_id.upper()[:3],
            name=coin_id[:1].upper() + coin_id[1:],
            current_price=_float_field(data, "usd"),
            price_change_percentage_24h=_float_field(data, "usd_24h_change"),
        )


class MarketItem(BaseModel):
    """An index or commodity quote."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    symbol: str
    name: str
    price: float = 0.0
    change: float = 0.0
    change_percent: float = 0.0


class SectorItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    symbol: str
    name: str
    change_percent: float = 0.0


class MarketSnapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    crypto: list[CryptoItem] = Field(default_factory=list)
    indices: list[MarketItem] = Field(default_factory=list)
    commodities: list[MarketItem] = Field(default_factory=list)
    sectors: list[SectorItem] = Field(default_factory=list)
    last_updated: int = 0


class Contract(BaseModel):
    """A federal contract award."""

    agency: str
    description: str
    vendor: str
    amount: float
    date: str

    @classmethod
    def from_usaspending(cls, data: dict[str, Any]) -> "Contract":
        """Parse one row of the ``spending_by_award`` search results."""
        return cls(
            agency=_str_field(data, "Awarding Agency", "Unknown"),
            description=_str_field(data, "Description", "Government contract")[:100],
            vendor=_str_field(data, "Recipient Name", "Unknown"),
            amount=_float_field(data, "Award Amount"),
            date=_str_field(data, "Start Date"),
        )


class Layoff(BaseModel):
    company: str
    count: int
    title: str
    date: str


class Prediction(BaseModel):
    id: str
    question: str
    yes: int
    volume: str


class WhaleTransaction(BaseModel):
    coin: str
    amount: float
    usd: float
    hash: str
    timestamp: int


class DatasetSnapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    contracts: list[Contract] = Field(default_factory=list)
    layoffs: list[Layoff] = Field(default_factory=list)
    predictions: list[Prediction] = Field(default_factory=list)
    whales: list[WhaleTransaction] = Field(default_factory=list)
    last_updated: int = 0
