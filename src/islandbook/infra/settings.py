"""Booking policy settings.

Thresholds are read from the environment once, at startup, and held in an
immutable BookingPolicy for the process lifetime.

Environment variables:
    ISLAND_MIN_DAYS_AHEAD        advance notice in days (default 1)
    ISLAND_MAX_CONSECUTIVE_DAYS  longest stay in days (default 3)
    ISLAND_MAX_DAYS_AHEAD        booking horizon in days (default 30)
"""

from __future__ import annotations

import os
from typing import Mapping

from islandbook.domain.policy import BookingPolicy

DEFAULT_MIN_DAYS_AHEAD = 1
DEFAULT_MAX_CONSECUTIVE_DAYS = 3
DEFAULT_MAX_DAYS_AHEAD = 30


def _read_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise RuntimeError(f"{name} must be non-negative, got {value}")
    return value


def load_booking_policy(env: Mapping[str, str] | None = None) -> BookingPolicy:
    """Build the booking policy from environment variables.

    Args:
        env: Mapping to read from. Defaults to os.environ.

    Raises:
        RuntimeError: If a variable is set but is not a non-negative integer.
    """
    if env is None:
        env = os.environ
    return BookingPolicy(
        min_days_ahead=_read_int(env, "ISLAND_MIN_DAYS_AHEAD", DEFAULT_MIN_DAYS_AHEAD),
        max_consecutive_days=_read_int(
            env, "ISLAND_MAX_CONSECUTIVE_DAYS", DEFAULT_MAX_CONSECUTIVE_DAYS
        ),
        max_days_ahead=_read_int(env, "ISLAND_MAX_DAYS_AHEAD", DEFAULT_MAX_DAYS_AHEAD),
    )
