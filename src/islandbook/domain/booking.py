"""Booking service - the use cases of the island booking engine.

Composes the policy rules, the ledger and the vacancy calculator:

- list_reservations: a guest's reservations over the default window
- create_reservation: validate, resolve guest, insert (one transaction)
- get_reservation: lookup by id
- update_reservation / delete_reservation: mutate an existing reservation
- update_reservation_by_id / delete_reservation_by_id: same, with the
  existence guard in front
- get_vacancy: open arrival dates in a window

Validation always runs before any ledger mutation. Every method returns an
Outcome; storage failures become storage_unavailable and are never retried.
"""

from __future__ import annotations

import uuid
from datetime import date
from typing import Callable, ContextManager

import psycopg2
from psycopg2.extensions import cursor as PgCursor

from islandbook.domain.calendar import add_months
from islandbook.domain.models import ConfirmedReservation, StayRange
from islandbook.domain.outcomes import Outcome
from islandbook.domain.policy import BookingPolicy, PolicyViolation, validate_stay
from islandbook.domain.vacancy import default_window, open_dates
from islandbook.infra.db import txn
from islandbook.infra.repositories.persons_repository import resolve_person
from islandbook.infra.repositories.reservations_repository import (
    RangeConflict,
    ReservationNotFound,
    delete_reservation,
    find_ranges_intersecting,
    find_reservation_by_id,
    find_reservations_by_email_intersecting,
    insert_reservation,
    update_reservation_range,
)
from islandbook.infra.time import utc_today
from islandbook.observability.logging import get_logger
from islandbook.observability.redaction import email_ref

logger = get_logger(__name__)

CREATE_OVERLAP_MESSAGE = "Unable to create reservation, dates overlap with existing reservation"
UPDATE_OVERLAP_MESSAGE = (
    "Unable to update reservationDates, dates overlap with existing reservationDates"
)

# Upper bound on an explicit vacancy window.
MAX_VACANCY_DAYS = 366

# Errors raised by the storage layer that map to storage_unavailable.
# RuntimeError covers a missing DATABASE_URL.
_STORAGE_ERRORS = (psycopg2.Error, RuntimeError)


def _new_reservation_id() -> str:
    return str(uuid.uuid4())


def _missing_field(**fields: object) -> str | None:
    for name, value in fields.items():
        if value is None or (isinstance(value, str) and not value.strip()):
            return f"Field '{name}' is undefined"
    return None


class BookingService:
    """Booking use cases over a single shared unit.

    Args:
        policy: Booking thresholds, fixed for the service lifetime.
        today: Returns the current UTC date. Injected for tests.
        id_factory: Generates reservation ids.
        txn_factory: Opens a transaction and yields a cursor.
    """

    def __init__(
        self,
        policy: BookingPolicy,
        *,
        today: Callable[[], date] = utc_today,
        id_factory: Callable[[], str] = _new_reservation_id,
        txn_factory: Callable[[], ContextManager[PgCursor]] = txn,
    ) -> None:
        self.policy = policy
        self._today = today
        self._id_factory = id_factory
        self._txn = txn_factory

    def _storage_failure(self, operation: str, **fields: object) -> Outcome:
        logger.exception(
            "storage failure",
            extra={"extra_fields": {"operation": operation, **fields}},
        )
        return Outcome.failure("storage_unavailable")

    # ── reads ─────────────────────────────────────────────────────────────

    def list_reservations(self, email: str | None) -> Outcome:
        """List a guest's reservations touching [today, today + 1 month]."""
        missing = _missing_field(email=email)
        if missing:
            return Outcome.failure("validation_error", missing)

        window_start, window_end = default_window(self._today())
        try:
            with self._txn() as cur:
                reservations = find_reservations_by_email_intersecting(
                    cur,
                    email=email,
                    window_start=window_start,
                    window_end=window_end,
                )
        except _STORAGE_ERRORS:
            return self._storage_failure("list_reservations", email_ref=email_ref(email))
        return Outcome.success(reservations)

    def get_reservation(self, reservation_id: str) -> Outcome:
        """Look up a reservation. The outcome value is None when absent."""
        try:
            with self._txn() as cur:
                reservation = find_reservation_by_id(cur, reservation_id=reservation_id)
        except _STORAGE_ERRORS:
            return self._storage_failure("get_reservation", reservation_id=reservation_id)
        return Outcome.success(reservation)

    def get_vacancy(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Outcome:
        """List open arrival dates in [start_date, end_date].

        start_date defaults to today and end_date to one month after
        start_date, both inclusive.
        """
        if start_date is None and end_date is None:
            window_start, window_end = default_window(self._today())
        else:
            window_start = start_date if start_date is not None else self._today()
            window_end = end_date if end_date is not None else add_months(window_start, 1)

        if window_end < window_start:
            return Outcome.failure("validation_error", "End date has to be after start date")
        if (window_end - window_start).days + 1 > MAX_VACANCY_DAYS:
            return Outcome.failure(
                "validation_error",
                f"Vacancy window can't exceed {MAX_VACANCY_DAYS} day(s)",
            )

        try:
            with self._txn() as cur:
                booked = find_ranges_intersecting(
                    cur, window_start=window_start, window_end=window_end
                )
        except _STORAGE_ERRORS:
            return self._storage_failure(
                "get_vacancy",
                window_start=window_start.isoformat(),
                window_end=window_end.isoformat(),
            )
        return Outcome.success(open_dates(window_start, window_end, booked))

    # ── writes ────────────────────────────────────────────────────────────

    def _check_stay(self, start_date: date | None, end_date: date | None) -> Outcome | None:
        missing = _missing_field(startDate=start_date, endDate=end_date)
        if missing:
            return Outcome.failure("validation_error", missing)
        try:
            validate_stay(StayRange(start_date, end_date), self._today(), self.policy)
        except PolicyViolation as exc:
            logger.info(
                "stay rejected by policy",
                extra={
                    "extra_fields": {
                        "start_date": start_date.isoformat(),
                        "end_date": end_date.isoformat(),
                        "reason": exc.reason,
                    }
                },
            )
            return Outcome.failure("validation_error", exc.reason)
        return None

    def create_reservation(
        self,
        email: str | None,
        full_name: str | None,
        start_date: date | None,
        end_date: date | None,
    ) -> Outcome:
        """Book [start_date, end_date) for the guest identified by (email, full_name).

        Guest resolution and the insert run in the same transaction, so a
        rejected insert leaves no new person row behind.
        """
        missing = _missing_field(
            startDate=start_date, endDate=end_date, email=email, fullName=full_name
        )
        if missing:
            return Outcome.failure("validation_error", missing)
        rejected = self._check_stay(start_date, end_date)
        if rejected is not None:
            return rejected

        stay = StayRange(start_date, end_date)
        reservation_id = self._id_factory()
        try:
            with self._txn() as cur:
                person_id = resolve_person(cur, email=email, full_name=full_name)
                insert_reservation(
                    cur,
                    reservation_id=reservation_id,
                    person_id=person_id,
                    stay=stay,
                )
        except RangeConflict:
            logger.info(
                "reservation rejected: dates overlap",
                extra={
                    "extra_fields": {
                        "start_date": start_date.isoformat(),
                        "end_date": end_date.isoformat(),
                    }
                },
            )
            return Outcome.failure("duplicate_range", CREATE_OVERLAP_MESSAGE)
        except _STORAGE_ERRORS:
            return self._storage_failure("create_reservation", email_ref=email_ref(email))

        logger.info(
            "reservation created",
            extra={
                "extra_fields": {
                    "reservation_id": reservation_id,
                    "email_ref": email_ref(email),
                    "start_date": start_date.isoformat(),
                    "end_date": end_date.isoformat(),
                }
            },
        )
        return Outcome.success(
            ConfirmedReservation(
                id=reservation_id,
                email=email,
                full_name=full_name,
                start_date=start_date,
                end_date=end_date,
            )
        )

    def update_reservation(
        self,
        existing: ConfirmedReservation,
        start_date: date | None,
        end_date: date | None,
    ) -> Outcome:
        """Move an existing reservation to [start_date, end_date).

        The caller must have resolved existing; use update_reservation_by_id
        to include the existence check.
        """
        rejected = self._check_stay(start_date, end_date)
        if rejected is not None:
            return rejected

        stay = StayRange(start_date, end_date)
        try:
            with self._txn() as cur:
                update_reservation_range(cur, reservation_id=existing.id, stay=stay)
        except RangeConflict:
            logger.info(
                "reservation update rejected: dates overlap",
                extra={"extra_fields": {"reservation_id": existing.id}},
            )
            return Outcome.failure("duplicate_range", UPDATE_OVERLAP_MESSAGE)
        except ReservationNotFound:
            logger.info(
                "reservation update rejected: reservation no longer exists",
                extra={"extra_fields": {"reservation_id": existing.id}},
            )
            return Outcome.failure("not_found")
        except _STORAGE_ERRORS:
            return self._storage_failure("update_reservation", reservation_id=existing.id)

        logger.info(
            "reservation updated",
            extra={
                "extra_fields": {
                    "reservation_id": existing.id,
                    "previous_start_date": existing.start_date.isoformat(),
                    "previous_end_date": existing.end_date.isoformat(),
                    "start_date": start_date.isoformat(),
                    "end_date": end_date.isoformat(),
                }
            },
        )
        return Outcome.success()

    def delete_reservation(self, existing: ConfirmedReservation) -> Outcome:
        """Delete an existing reservation."""
        try:
            with self._txn() as cur:
                delete_reservation(cur, reservation_id=existing.id)
        except _STORAGE_ERRORS:
            return self._storage_failure("delete_reservation", reservation_id=existing.id)

        logger.info(
            "reservation deleted",
            extra={"extra_fields": {"reservation_id": existing.id}},
        )
        return Outcome.success()

    def update_reservation_by_id(
        self,
        reservation_id: str,
        start_date: date | None,
        end_date: date | None,
    ) -> Outcome:
        missing = _missing_field(startDate=start_date, endDate=end_date)
        if missing:
            return Outcome.failure("validation_error", missing)

        found = self.get_reservation(reservation_id)
        if not found.ok:
            return found
        if found.value is None:
            return Outcome.failure("not_found")
        return self.update_reservation(found.value, start_date, end_date)

    def delete_reservation_by_id(self, reservation_id: str) -> Outcome:
        found = self.get_reservation(reservation_id)
        if not found.ok:
            return found
        if found.value is None:
            return Outcome.failure("not_found")
        return self.delete_reservation(found.value)

