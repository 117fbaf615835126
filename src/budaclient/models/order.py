"""Order model."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from ..utils.timing import parse_iso_timestamp
from .amount import Amount

OrderType = Literal["Bid", "Ask"]
OrderState = Literal[
    "received", "pending", "traded", "canceling", "canceled", "unprepared"
]


@dataclass
class Order:
    """Represents an order as reported by the exchange."""

    order_id: int
    market_id: str
    order_type: OrderType
    state: OrderState
    price_type: str  # "limit" or "market"
    created_at: datetime | None = None
    account_id: int | None = None
    fee_currency: str | None = None
    limit: Amount | None = None
    amount: Amount | None = None
    original_amount: Amount | None = None
    traded_amount: Amount | None = None
    total_exchanged: Amount | None = None
    paid_fee: Amount | None = None

    @classmethod
    def from_api(cls, data: dict) -> "Order":
        """Create Order from API response."""
        return cls(
            order_id=int(data["id"]),
            market_id=data["market_id"],
            order_type=data["type"],
            state=data["state"],
            price_type=data.get("price_type", ""),
            created_at=parse_iso_timestamp(data.get("created_at")),
            account_id=data.get("account_id"),
            fee_currency=data.get("fee_currency"),
            limit=Amount.from_api(data.get("limit")),
            amount=Amount.from_api(data.get("amount")),
            original_amount=Amount.from_api(data.get("original_amount")),
            traded_amount=Amount.from_api(data.get("traded_amount")),
            total_exchanged=Amount.from_api(data.get("total_exchanged")),
            paid_fee=Amount.from_api(data.get("paid_fee")),
        )

    @property
    def is_open(self) -> bool:
        return self.state in ("received", "pending")
