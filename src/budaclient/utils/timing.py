"""Timestamp utilities."""

import time
from datetime import datetime, timezone


def get_timestamp_us() -> int:
    """Get current timestamp in microseconds (used for request nonces)."""
    return time.time_ns() // 1_000


def parse_iso_timestamp(value: str | None) -> datetime | None:
    """Parse an API timestamp like '2017-03-21T18:36:35.548Z' into an aware datetime."""
    if not value:
        return None
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt
