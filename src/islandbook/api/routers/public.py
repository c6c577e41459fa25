"""Liveness route.

Reports the booking thresholds the running service enforces, so a deploy
with a mistyped ISLAND_* variable is visible without reading the logs.
"""

from fastapi import APIRouter, Depends

from islandbook.api.deps import get_booking_service
from islandbook.domain.booking import BookingService

router = APIRouter()


@router.get("/health")
def health(service: BookingService = Depends(get_booking_service)) -> dict:
    policy = service.policy
    return {
        "status": "ok",
        "policy": {
            "minDaysAhead": policy.min_days_ahead,
            "maxConsecutiveDays": policy.max_consecutive_days,
            "maxDaysAhead": policy.max_days_ahead,
        },
    }
