"""Timestamp conversion utilities.

Timestamps are persisted as integer Unix epoch milliseconds and exposed as
timezone-aware UTC datetimes with millisecond precision.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_MILLISECOND = timedelta(milliseconds=1)


def normalize(dt: datetime) -> datetime:
    """
    Normalize a datetime to what the store can represent.

    Naive datetimes are assumed to be UTC; aware ones are converted to UTC.
    Precision is truncated to milliseconds.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.replace(microsecond=(dt.microsecond // 1000) * 1000)


def utc_now() -> datetime:
    """Current time in UTC, truncated to millisecond precision."""
    return normalize(datetime.now(timezone.utc))


def advance_past(previous: datetime) -> datetime:
    """Current time, bumped past `previous` so update stamps strictly increase."""
    now = utc_now()
    if now <= previous:
        return previous + ONE_MILLISECOND
    return now


def to_millis(dt: datetime) -> int:
    """
    Convert a datetime to Unix epoch milliseconds.

    Args:
        dt: datetime to convert (naive values are treated as UTC)

    Returns:
        Milliseconds since the epoch
    """
    return (normalize(dt) - EPOCH) // ONE_MILLISECOND


def from_millis(value: Optional[int]) -> Optional[datetime]:
    """Convert epoch milliseconds back to a UTC datetime (None passes through)."""
    if value is None:
        return None
    return EPOCH + timedelta(milliseconds=int(value))
