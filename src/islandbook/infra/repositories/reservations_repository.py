"""Reservations repository - the booking ledger.

Uses raw SQL with psycopg2 (no ORM).

Stays are stored in a daterange column with '[)' bounds. The table carries
an EXCLUDE USING gist (duration WITH &&) constraint, so the overlap check
and the write are one atomic statement: of two concurrent overlapping
writes, exactly one commits and the other fails with ExclusionViolation.
No read-then-write overlap check is done here.
"""

from __future__ import annotations

from datetime import date

from psycopg2 import errors as pg_errors
from psycopg2.extensions import cursor as PgCursor

from islandbook.domain.models import ConfirmedReservation, StayRange
from islandbook.infra.db import fetchall, fetchone

_CONFIRMED_COLUMNS = """
    r.id, p.email, p.full_name, lower(r.duration), upper(r.duration)
"""


class RangeConflict(Exception):
    """Raised when a stay overlaps a committed reservation."""

    def __init__(self, reservation_id: str, stay: StayRange) -> None:
        self.reservation_id = reservation_id
        self.stay = stay
        super().__init__(
            f"Reservation {reservation_id} overlaps an existing reservation "
            f"({stay.start} to {stay.end})"
        )


class ReservationNotFound(Exception):
    """Raised when a reservation to update no longer exists."""

    def __init__(self, reservation_id: str) -> None:
        self.reservation_id = reservation_id
        super().__init__(f"Reservation {reservation_id} not found")


def _row_to_confirmed(row: tuple) -> ConfirmedReservation:
    return ConfirmedReservation(
        id=str(row[0]),
        email=row[1],
        full_name=row[2],
        start_date=row[3],
        end_date=row[4],
    )


def insert_reservation(
    cur: PgCursor,
    *,
    reservation_id: str,
    person_id: str,
    stay: StayRange,
) -> None:
    """Insert a reservation for a person.

    Raises:
        RangeConflict: If the stay overlaps any committed reservation.
    """
    try:
        cur.execute(
            """
            INSERT INTO reservation (id, person_id, duration)
            VALUES (%s, %s, daterange(%s, %s, '[)'))
            """,
            (reservation_id, person_id, stay.start, stay.end),
        )
    except pg_errors.ExclusionViolation as exc:
        raise RangeConflict(reservation_id, stay) from exc


def update_reservation_range(
    cur: PgCursor,
    *,
    reservation_id: str,
    stay: StayRange,
) -> None:
    """Replace the stay of an existing reservation.

    The exclusion constraint compares the new range with other rows only,
    so moving a reservation within its own dates is never a conflict.

    Raises:
        RangeConflict: If the new stay overlaps another reservation.
        ReservationNotFound: If no row has this id, e.g. it was deleted
            after the caller looked it up.
    """
    try:
        cur.execute(
            "UPDATE reservation SET duration = daterange(%s, %s, '[)') WHERE id = %s",
            (stay.start, stay.end, reservation_id),
        )
    except pg_errors.ExclusionViolation as exc:
        raise RangeConflict(reservation_id, stay) from exc
    if cur.rowcount == 0:
        raise ReservationNotFound(reservation_id)


def delete_reservation(cur: PgCursor, *, reservation_id: str) -> None:
    """Delete a reservation. Deleting a missing id is a no-op."""
    cur.execute("DELETE FROM reservation WHERE id = %s", (reservation_id,))


def find_reservation_by_id(
    cur: PgCursor,
    *,
    reservation_id: str,
) -> ConfirmedReservation | None:
    row = fetchone(
        cur,
        f"""
        SELECT {_CONFIRMED_COLUMNS}
        FROM reservation r
        JOIN person p ON p.id = r.person_id
        WHERE r.id = %s
        """,
        (reservation_id,),
    )
    return _row_to_confirmed(row) if row else None


def find_reservations_by_email_intersecting(
    cur: PgCursor,
    *,
    email: str,
    window_start: date,
    window_end: date,
) -> list[ConfirmedReservation]:
    """List a guest's reservations touching [window_start, window_end].

    Matches on email only, so every person row sharing the email is
    included regardless of full_name.
    """
    rows = fetchall(
        cur,
        f"""
        SELECT {_CONFIRMED_COLUMNS}
        FROM reservation r
        JOIN person p ON p.id = r.person_id
        WHERE p.email = %s
          AND r.duration && daterange(%s, %s, '[]')
        ORDER BY lower(r.duration)
        """,
        (email, window_start, window_end),
    )
    return [_row_to_confirmed(row) for row in rows]


def find_ranges_intersecting(
    cur: PgCursor,
    *,
    window_start: date,
    window_end: date,
) -> list[StayRange]:
    """List stored stays touching [window_start, window_end]."""
    rows = fetchall(
        cur,
        """
        SELECT lower(duration), upper(duration)
        FROM reservation
        WHERE duration && daterange(%s, %s, '[]')
        ORDER BY lower(duration)
        """,
        (window_start, window_end),
    )
    return [StayRange(row[0], row[1]) for row in rows]
