"""Vacancy computation.

Open dates are the window minus every booked night and minus each
booking's checkout day. Removing the checkout day means a departure date
is never offered as a new arrival date, even though storage treats it as
free. Existing clients rely on this, so it is kept as is.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable

from islandbook.domain.calendar import add_months, date_sequence
from islandbook.domain.models import StayRange


def default_window(today: date) -> tuple[date, date]:
    """Return (today, today + 1 month), both ends inclusive."""
    return today, add_months(today, 1)


def _blocked_dates(booked: Iterable[StayRange]) -> set[date]:
    blocked: set[date] = set()
    for stay in booked:
        blocked.update(stay.nights())
        blocked.add(stay.end)
    return blocked


def open_dates(
    window_start: date,
    window_end: date,
    booked: Iterable[StayRange],
) -> list[date]:
    """List dates in [window_start, window_end] still open for arrival.

    Args:
        window_start: First date of the window (inclusive).
        window_end: Last date of the window (inclusive).
        booked: Stored ranges intersecting the window.

    Returns:
        Open dates in ascending order.
    """
    blocked = _blocked_dates(booked)
    return [d for d in date_sequence(window_start, window_end) if d not in blocked]


def occupied_dates(
    window_start: date,
    window_end: date,
    booked: Iterable[StayRange],
) -> list[date]:
    """List dates in [window_start, window_end] not offered by open_dates()."""
    blocked = _blocked_dates(booked)
    return [d for d in date_sequence(window_start, window_end) if d in blocked]
