"""Time utilities for consistent timestamp handling."""

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Return current UTC timestamp (timezone-aware)."""
    return datetime.now(timezone.utc)


def utc_today() -> date:
    """Return today's calendar date in UTC."""
    return utc_now().date()
