"""Reservations endpoints.

GET    /reservations?email=...   → list a guest's upcoming reservations
POST   /reservations             → create (201)
GET    /reservations/{id}        → read (404 if absent)
PATCH  /reservations/{id}        → change dates (204)
DELETE /reservations/{id}        → cancel (204)

Fields use the camelCase names of the public API (fullName, startDate, endDate).
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Path, Query, Response
from pydantic import BaseModel, ConfigDict, Field

from islandbook.api.deps import get_booking_service
from islandbook.api.errors import error_response
from islandbook.domain.booking import BookingService

router = APIRouter(prefix="/reservations", tags=["reservations"])


# ── Schemas ───────────────────────────────────────────────────────────────────
# Fields are optional so a missing one yields the "Field '...' is undefined"
# message instead of a generic 422.


class ReservationDatesRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    start_date: date | None = Field(default=None, alias="startDate")
    end_date: date | None = Field(default=None, alias="endDate")


class CreateReservationRequest(ReservationDatesRequest):
    email: str | None = None
    full_name: str | None = Field(default=None, alias="fullName")


# ── GET /reservations ─────────────────────────────────────────────────────────


@router.get("")
def list_reservations(
    email: str | None = Query(default=None),
    service: BookingService = Depends(get_booking_service),
):
    outcome = service.list_reservations(email)
    if not outcome.ok:
        return error_response(outcome.error)
    return [reservation.to_dict() for reservation in outcome.value]


# ── POST /reservations ────────────────────────────────────────────────────────


@router.post("", status_code=201)
def create_reservation(
    body: CreateReservationRequest,
    service: BookingService = Depends(get_booking_service),
):
    outcome = service.create_reservation(
        body.email,
        body.full_name,
        body.start_date,
        body.end_date,
    )
    if not outcome.ok:
        return error_response(outcome.error)
    return outcome.value.to_dict()


# ── GET /reservations/{reservation_id} ────────────────────────────────────────


@router.get("/{reservation_id}")
def get_reservation(
    reservation_id: str = Path(..., description="Reservation ID"),
    service: BookingService = Depends(get_booking_service),
):
    outcome = service.get_reservation(reservation_id)
    if not outcome.ok:
        return error_response(outcome.error)
    if outcome.value is None:
        return Response(status_code=404)
    return outcome.value.to_dict()


# ── PATCH /reservations/{reservation_id} ──────────────────────────────────────


@router.patch("/{reservation_id}", status_code=204)
def update_reservation(
    body: ReservationDatesRequest,
    reservation_id: str = Path(..., description="Reservation ID"),
    service: BookingService = Depends(get_booking_service),
) -> Response:
    outcome = service.update_reservation_by_id(reservation_id, body.start_date, body.end_date)
    if not outcome.ok:
        return error_response(outcome.error)
    return Response(status_code=204)


# ── DELETE /reservations/{reservation_id} ─────────────────────────────────────


@router.delete("/{reservation_id}", status_code=204)
def delete_reservation(
    reservation_id: str = Path(..., description="Reservation ID"),
    service: BookingService = Depends(get_booking_service),
) -> Response:
    outcome = service.delete_reservation_by_id(reservation_id)
    if not outcome.ok:
        return error_response(outcome.error)
    return Response(status_code=204)
