"""Deposit and withdrawal models."""

from dataclasses import dataclass

from .amount import Amount


@dataclass
class Deposit:
    """A deposit into the account."""

    deposit_id: int
    currency: str
    state: str
    amount: Amount | None
    created_at: str | None = None
    updated_at: str | None = None
    # deposit_data: type, address, tx_hash
    data_type: str | None = None
    address: str | None = None
    tx_hash: str | None = None

    @classmethod
    def from_api(cls, data: dict) -> "Deposit":
        """Create Deposit from API response."""
        details = data.get("deposit_data") or {}
        return cls(
            deposit_id=int(data["id"]),
            currency=data["currency"],
            state=data["state"],
            amount=Amount.from_api(data.get("amount")),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            data_type=details.get("type"),
            address=details.get("address"),
            tx_hash=details.get("tx_hash"),
        )


@dataclass
class Withdrawal:
    """A withdrawal from the account."""

    withdrawal_id: int
    currency: str
    state: str
    amount: Amount | None
    fee: Amount | None = None
    created_at: str | None = None
    updated_at: str | None = None
    # withdrawal_data: type, target_address, tx_hash
    data_type: str | None = None
    target_address: str | None = None
    tx_hash: str | None = None

    @classmethod
    def from_api(cls, data: dict) -> "Withdrawal":
        """Create Withdrawal from API response."""
        details = data.get("withdrawal_data") or {}
        return cls(
            withdrawal_id=int(data["id"]),
            currency=data["currency"],
            state=data["state"],
            amount=Amount.from_api(data.get("amount")),
            fee=Amount.from_api(data.get("fee")),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            data_type=details.get("type"),
            target_address=details.get("target_address"),
            tx_hash=details.get("tx_hash"),
        )
