"""Booking data model.

A stay is stored as a half-open range: start_date is the first occupied
day, end_date is the checkout day (first free day).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator


@dataclass(frozen=True)
class StayRange:
    """Half-open date range [start, end)."""

    start: date
    end: date

    def overlaps(self, other: StayRange) -> bool:
        # Strict inequality: checkout day == next check-in day is not an overlap.
        return self.start < other.end and other.start < self.end

    def nights(self) -> Iterator[date]:
        """Yield every occupied date, start inclusive, end exclusive."""
        current = self.start
        while current < self.end:
            yield current
            current += timedelta(days=1)


@dataclass(frozen=True)
class ConfirmedReservation:
    """Read view joining a reservation with its guest."""

    id: str
    email: str
    full_name: str
    start_date: date
    end_date: date

    @property
    def stay(self) -> StayRange:
        return StayRange(self.start_date, self.end_date)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "fullName": self.full_name,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
        }
