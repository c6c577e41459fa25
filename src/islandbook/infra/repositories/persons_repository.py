"""Persons repository - guest identity resolution.

Uses raw SQL with psycopg2 (no ORM).

A guest is identified by the (email, full_name) pair, not by email alone:
two bookings with the same email but different names create two person
rows. The pair is unique in storage, so concurrent first bookings for the
same guest converge on one row.

The caller is responsible for running these inside a transaction
(with txn() as cur:).
"""

from psycopg2.extensions import cursor as PgCursor

from islandbook.infra.db import fetchone


def find_person_id(cur: PgCursor, *, email: str, full_name: str) -> str | None:
    """Return the id of the person matching both email and full_name."""
    row = fetchone(
        cur,
        "SELECT id FROM person WHERE email = %s AND full_name = %s",
        (email, full_name),
    )
    return str(row[0]) if row else None


def create_person(cur: PgCursor, *, email: str, full_name: str) -> str:
    """Insert a person and return its id.

    If a concurrent transaction inserted the same (email, full_name) first,
    the existing row's id is returned instead.
    """
    row = fetchone(
        cur,
        """
        INSERT INTO person (email, full_name)
        VALUES (%s, %s)
        ON CONFLICT (email, full_name) DO NOTHING
        RETURNING id
        """,
        (email, full_name),
    )
    if row:
        return str(row[0])

    person_id = find_person_id(cur, email=email, full_name=full_name)
    if person_id is None:
        raise RuntimeError("person insert conflicted but no matching row was found")
    return person_id


def resolve_person(cur: PgCursor, *, email: str, full_name: str) -> str:
    """Return the id of the matching person, creating it on first booking."""
    person_id = find_person_id(cur, email=email, full_name=full_name)
    if person_id is not None:
        return person_id
    return create_person(cur, email=email, full_name=full_name)
