"""Vacancy endpoint.

GET /vacancy?startDate=...&endDate=... → open arrival dates, ascending.

Both bounds are optional and inclusive; the default window is today
through one month ahead.
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query

from islandbook.api.deps import get_booking_service
from islandbook.api.errors import error_response
from islandbook.domain.booking import BookingService

router = APIRouter(prefix="/vacancy", tags=["vacancy"])


@router.get("")
def get_vacancy(
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    service: BookingService = Depends(get_booking_service),
):
    outcome = service.get_vacancy(start_date, end_date)
    if not outcome.ok:
        return error_response(outcome.error)
    return [d.isoformat() for d in outcome.value]
