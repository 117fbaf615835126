"""Account models."""

from dataclasses import dataclass

from .amount import Amount


@dataclass
class Balance:
    """Balance of one currency in the account."""

    currency: str
    amount: Amount | None
    available_amount: Amount | None
    frozen_amount: Amount | None
    pending_withdraw_amount: Amount | None
    account_id: int | None = None

    @classmethod
    def from_api(cls, data: dict) -> "Balance":
        """Create Balance from API response."""
        return cls(
            currency=data["id"],
            amount=Amount.from_api(data.get("amount")),
            available_amount=Amount.from_api(data.get("available_amount")),
            frozen_amount=Amount.from_api(data.get("frozen_amount")),
            pending_withdraw_amount=Amount.from_api(data.get("pending_withdraw_amount")),
            account_id=data.get("account_id"),
        )


@dataclass
class Fee:
    """Deposit or withdrawal fee of a currency."""

    name: str
    percent: float
    base: Amount | None

    @classmethod
    def from_api(cls, data: dict) -> "Fee":
        """Create Fee from API response."""
        return cls(
            name=data.get("name", ""),
            percent=float(data.get("percent") or 0),
            base=Amount.from_api(data.get("base")),
        )


@dataclass
class ReceiveAddress:
    """A crypto deposit address."""

    address_id: int
    address: str
    used: bool = False
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_api(cls, data: dict) -> "ReceiveAddress":
        """Create ReceiveAddress from API response."""
        return cls(
            address_id=int(data["id"]),
            address=data.get("address", ""),
            used=bool(data.get("used", False)),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )
