"""Market data models."""

from dataclasses import dataclass, field
from typing import Any

from .amount import Amount


@dataclass
class Market:
    """A trading pair (e.g., "BTC-CLP")."""

    market_id: str
    name: str
    base_currency: str
    quote_currency: str
    minimum_order_amount: Amount | None = None

    @classmethod
    def from_api(cls, data: dict) -> "Market":
        """Create Market from API response."""
        return cls(
            market_id=data["id"],
            name=data.get("name", ""),
            base_currency=data["base_currency"],
            quote_currency=data["quote_currency"],
            minimum_order_amount=Amount.from_api(data.get("minimum_order_amount")),
        )


@dataclass
class Volume:
    """Traded volume of a market over the last 24 hours and 7 days."""

    market_id: str
    ask_volume_24h: Amount | None
    ask_volume_7d: Amount | None
    bid_volume_24h: Amount | None
    bid_volume_7d: Amount | None

    @classmethod
    def from_api(cls, data: dict) -> "Volume":
        """Create Volume from API response."""
        return cls(
            market_id=data["market_id"],
            ask_volume_24h=Amount.from_api(data.get("ask_volume_24h")),
            ask_volume_7d=Amount.from_api(data.get("ask_volume_7d")),
            bid_volume_24h=Amount.from_api(data.get("bid_volume_24h")),
            bid_volume_7d=Amount.from_api(data.get("bid_volume_7d")),
        )


@dataclass
class Ticker:
    """Market ticker."""

    last_price: Amount | None
    max_bid: Amount | None
    min_ask: Amount | None
    volume: Amount | None
    price_variation_24h: str | None = None
    price_variation_7d: str | None = None
    market_id: str | None = None

    @classmethod
    def from_api(cls, data: dict) -> "Ticker":
        """Create Ticker from API response."""
        return cls(
            last_price=Amount.from_api(data.get("last_price")),
            max_bid=Amount.from_api(data.get("max_bid")),
            min_ask=Amount.from_api(data.get("min_ask")),
            volume=Amount.from_api(data.get("volume")),
            price_variation_24h=data.get("price_variation_24h"),
            price_variation_7d=data.get("price_variation_7d"),
            market_id=data.get("market_id"),
        )


@dataclass
class OrderBook:
    """Order book snapshot as [price, amount] string pairs, best level first."""

    asks: list[tuple[str, str]] = field(default_factory=list)
    bids: list[tuple[str, str]] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict) -> "OrderBook":
        """Create OrderBook from API response."""
        return cls(
            asks=[(str(price), str(amount)) for price, amount in data.get("asks", [])],
            bids=[(str(price), str(amount)) for price, amount in data.get("bids", [])],
        )


@dataclass
class Trades:
    """A batch of recent trades.

    Each entry is [timestamp_ms, amount, price, direction, id] as sent by
    the API; ``last_timestamp`` is the cursor for requesting older trades.
    """

    market_id: str
    timestamp: str | None
    last_timestamp: str | None
    entries: list[list[Any]] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict) -> "Trades":
        """Create Trades from API response."""
        return cls(
            market_id=data["market_id"],
            timestamp=_optional_str(data.get("timestamp")),
            last_timestamp=_optional_str(data.get("last_timestamp")),
            entries=list(data.get("entries", [])),
        )


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)
