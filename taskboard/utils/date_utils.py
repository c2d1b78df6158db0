"""
Centralized date/time utilities
All date/time operations should use functions from this module
"""

from datetime import datetime, timedelta, timezone
from typing import Optional


def get_current_datetime() -> datetime:
    """
    Get current datetime in UTC

    Returns:
        Current timezone-aware datetime
    """
    return datetime.now(timezone.utc)


def get_current_date_str(now: Optional[datetime] = None) -> str:
    """
    Get current date string (YYYY-MM-DD)

    Dates are compared lexicographically elsewhere, so the format must stay
    fixed-width.
    """
    return (now or get_current_datetime()).strftime("%Y-%m-%d")


def to_iso_timestamp(dt: datetime) -> str:
    """Format datetime as ISO 8601 with millisecond precision and 'Z' suffix"""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def parse_iso_timestamp(value: str) -> datetime:
    """
    Parse ISO 8601 timestamp (accepts trailing 'Z')

    Naive values are treated as UTC.
    """
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def whole_minutes_between(started_at: str, now: datetime) -> int:
    """
    Whole minutes elapsed between an ISO timestamp and now

    Returns floor((now - started_at) / 1 minute), never negative.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    elapsed = now - parse_iso_timestamp(started_at)
    return max(0, elapsed // timedelta(minutes=1))
