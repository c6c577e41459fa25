"""Booking policy rules.

Three thresholds govern whether a stay can be booked or moved:

- min_days_ahead: advance notice required before arrival.
- max_consecutive_days: longest stay accepted in a single reservation.
- max_days_ahead: booking horizon.

Rules are evaluated in a fixed order and the first failure wins, so the
guest always sees the same message for the same input.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from islandbook.domain.calendar import inclusive_day_count
from islandbook.domain.models import StayRange


class PolicyViolation(Exception):
    """Raised when a stay breaks a booking rule."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


@dataclass(frozen=True)
class BookingPolicy:
    min_days_ahead: int
    max_consecutive_days: int
    max_days_ahead: int

    def __post_init__(self) -> None:
        for name in ("min_days_ahead", "max_consecutive_days", "max_days_ahead"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")


def validate_stay(stay: StayRange, today: date, policy: BookingPolicy) -> None:
    """Check a stay against the booking policy.

    Args:
        stay: Candidate range [start, end).
        today: Current UTC calendar date.
        policy: Thresholds to apply.

    Raises:
        PolicyViolation: On the first rule the stay breaks.
    """
    if stay.end <= stay.start:
        raise PolicyViolation("End date has to be after start date")

    if stay.start < today or inclusive_day_count(today, stay.start) < policy.min_days_ahead:
        raise PolicyViolation(
            f"Start date has to be at least {policy.min_days_ahead} day(s) ahead of arrival"
        )

    if inclusive_day_count(stay.start, stay.end) > policy.max_consecutive_days:
        raise PolicyViolation(
            f"You can't book more than {policy.max_consecutive_days} day(s) at a time"
        )

    if inclusive_day_count(stay.start, today) > policy.max_days_ahead:
        raise PolicyViolation(
            f"Start date has to be no more than {policy.max_days_ahead} day(s) ahead of arrival"
        )
