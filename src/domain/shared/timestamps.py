"""
Domain Timestamps

Every timestamp held by the domain is timezone-aware UTC, so orders placed
with and without an explicit date can be compared and sorted together.

Naive datetimes (no tzinfo) are taken to be UTC already.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to aware UTC.

    Examples:
        >>> to_utc(datetime(2026, 1, 15, 10, 30)).isoformat()
        '2026-01-15T10:30:00+00:00'
        >>> to_utc(datetime.fromisoformat("2026-01-15T12:30:00+02:00")).isoformat()
        '2026-01-15T10:30:00+00:00'
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
