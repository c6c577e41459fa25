"""Shared test helpers for the island booking tests.

InMemoryLedger stands in for the PostgreSQL ledger: it exposes the same
repository functions (cursor first, keyword arguments after) and enforces
the non-overlap rule under a lock, the way the exclusion constraint does.
These are NOT fixtures - see conftest.py.
"""

from __future__ import annotations

import itertools
import threading
from contextlib import contextmanager
from datetime import date, timedelta
from unittest.mock import MagicMock, patch

from islandbook.domain.models import ConfirmedReservation, StayRange
from islandbook.infra.repositories.reservations_repository import (
    RangeConflict,
    ReservationNotFound,
)

TODAY = date(2026, 3, 10)


def day(offset: int) -> date:
    """TODAY shifted by offset days."""
    return TODAY + timedelta(days=offset)


def _touches(stay: StayRange, window_start: date, window_end: date) -> bool:
    # stay is [start, end), window is [window_start, window_end]
    return stay.start <= window_end and stay.end > window_start


class InMemoryLedger:
    def __init__(self) -> None:
        self.persons: dict[str, tuple[str, str]] = {}
        self.reservations: dict[str, tuple[str, StayRange]] = {}
        self._lock = threading.Lock()
        self._person_ids = itertools.count(1)

    @contextmanager
    def txn(self):
        yield MagicMock(name="cursor")

    def _confirmed(self, reservation_id: str) -> ConfirmedReservation:
        person_id, stay = self.reservations[reservation_id]
        email, full_name = self.persons[person_id]
        return ConfirmedReservation(
            id=reservation_id,
            email=email,
            full_name=full_name,
            start_date=stay.start,
            end_date=stay.end,
        )

    # ── repository functions ──────────────────────────────────────────────

    def resolve_person(self, cur, *, email: str, full_name: str) -> str:
        with self._lock:
            for person_id, identity in self.persons.items():
                if identity == (email, full_name):
                    return person_id
            person_id = str(next(self._person_ids))
            self.persons[person_id] = (email, full_name)
            return person_id

    def insert_reservation(self, cur, *, reservation_id: str, person_id: str, stay: StayRange) -> None:
        with self._lock:
            if any(other.overlaps(stay) for _, other in self.reservations.values()):
                raise RangeConflict(reservation_id, stay)
            self.reservations[reservation_id] = (person_id, stay)

    def update_reservation_range(self, cur, *, reservation_id: str, stay: StayRange) -> None:
        with self._lock:
            if reservation_id not in self.reservations:
                raise ReservationNotFound(reservation_id)
            for other_id, (_, other) in self.reservations.items():
                if other_id != reservation_id and other.overlaps(stay):
                    raise RangeConflict(reservation_id, stay)
            person_id, _ = self.reservations[reservation_id]
            self.reservations[reservation_id] = (person_id, stay)

    def delete_reservation(self, cur, *, reservation_id: str) -> None:
        with self._lock:
            self.reservations.pop(reservation_id, None)

    def find_reservation_by_id(self, cur, *, reservation_id: str):
        if reservation_id not in self.reservations:
            return None
        return self._confirmed(reservation_id)

    def find_reservations_by_email_intersecting(self, cur, *, email, window_start, window_end):
        found = [
            self._confirmed(reservation_id)
            for reservation_id, (person_id, stay) in self.reservations.items()
            if self.persons[person_id][0] == email and _touches(stay, window_start, window_end)
        ]
        return sorted(found, key=lambda r: r.start_date)

    def find_ranges_intersecting(self, cur, *, window_start, window_end):
        return sorted(
            (stay for _, stay in self.reservations.values() if _touches(stay, window_start, window_end)),
            key=lambda s: s.start,
        )

    @contextmanager
    def installed(self):
        """Patch the booking service's repository functions with this ledger."""
        with patch.multiple(
            "islandbook.domain.booking",
            resolve_person=self.resolve_person,
            insert_reservation=self.insert_reservation,
            update_reservation_range=self.update_reservation_range,
            delete_reservation=self.delete_reservation,
            find_reservation_by_id=self.find_reservation_by_id,
            find_reservations_by_email_intersecting=self.find_reservations_by_email_intersecting,
            find_ranges_intersecting=self.find_ranges_intersecting,
        ):
            yield self
