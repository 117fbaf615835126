"""Response envelopes and pagination metadata."""

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from ..errors import DecodeError

T = TypeVar("T")


@dataclass
class PageMeta:
    """Pagination metadata sent with every paginated response."""

    current_page: int
    total_pages: int
    total_count: int

    @classmethod
    def from_api(cls, data: dict) -> "PageMeta":
        """Create PageMeta from API response."""
        return cls(
            current_page=int(data["current_page"]),
            total_pages=int(data["total_pages"]),
            total_count=int(data.get("total_count", 0)),
        )


@dataclass
class Envelope(Generic[T]):
    """Items of one response plus optional page metadata."""

    items: list[T] = field(default_factory=list)
    meta: PageMeta | None = None

    @property
    def total_pages(self) -> int:
        return self.meta.total_pages if self.meta else 1


def _load(raw: bytes) -> dict[str, Any]:
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"Response is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def decode_envelope(
    raw: bytes, key: str, item_factory: Callable[[dict], T]
) -> Envelope[T]:
    """
    Decode a collection response.

    Args:
        raw: Response body
        key: Top-level key holding the item list (e.g. "orders")
        item_factory: Builds one item from its JSON object

    Returns:
        Envelope with decoded items and page metadata (None when absent)

    Raises:
        DecodeError: On malformed JSON or a schema mismatch
    """
    data = _load(raw)
    if key not in data:
        raise DecodeError(f"Response has no '{key}' key")
    entries = data[key]
    if not isinstance(entries, list):
        raise DecodeError(f"Expected a list under '{key}', got {type(entries).__name__}")

    try:
        items = [item_factory(entry) for entry in entries]
        meta = PageMeta.from_api(data["meta"]) if data.get("meta") else None
    except (KeyError, TypeError, ValueError) as e:
        raise DecodeError(f"Failed to decode '{key}': {e!r}") from e

    return Envelope(items=items, meta=meta)


def decode_single(raw: bytes, key: str, item_factory: Callable[[dict], T]) -> T:
    """Decode a response wrapping one object under ``key``."""
    data = _load(raw)
    entry = data.get(key)
    if not isinstance(entry, dict):
        raise DecodeError(f"Response has no '{key}' object")
    try:
        return item_factory(entry)
    except (KeyError, TypeError, ValueError) as e:
        raise DecodeError(f"Failed to decode '{key}': {e!r}") from e
