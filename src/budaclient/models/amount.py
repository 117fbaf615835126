"""Amount model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Amount:
    """A monetary value as sent by the API: ["0.5", "BTC"]."""

    value: str  # Decimal string, kept as sent
    currency: str

    @classmethod
    def from_api(cls, data: list | tuple | None) -> "Amount | None":
        """Create Amount from an API [value, currency] pair."""
        if data is None:
            return None
        value, currency = data
        return cls(value=str(value), currency=str(currency))

    def __str__(self) -> str:
        return f"{self.value} {self.currency}"
