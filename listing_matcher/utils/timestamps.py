"""Timestamp utilities for UTC handling."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Example:
        >>> utc_now().tzinfo == timezone.utc
        True
    """
    return datetime.now(timezone.utc)


def format_timestamp_for_log(dt: datetime) -> str:
    """Format a datetime as ISO-8601 UTC with a 'Z' suffix and millisecond precision.

    Naive datetimes are treated as UTC.

    Example:
        >>> format_timestamp_for_log(datetime(2025, 11, 4, 10, 30, tzinfo=timezone.utc))
        '2025-11-04T10:30:00.000Z'
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
