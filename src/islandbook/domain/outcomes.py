"""Outcomes returned by the booking service.

Every use case returns an Outcome instead of raising, so callers can
branch on the error kind.

Kinds:
- validation_error: input breaks a policy rule or misses a field (message shown to guest)
- duplicate_range: dates overlap an existing reservation (message shown to guest)
- not_found: reservation id does not exist
- storage_unavailable: database failed; no detail is exposed
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

ErrorKind = Literal[
    "validation_error",
    "duplicate_range",
    "not_found",
    "storage_unavailable",
]


@dataclass(frozen=True)
class BookingError:
    kind: ErrorKind
    message: str | None = None


@dataclass(frozen=True)
class Outcome:
    value: Any = None
    error: BookingError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any = None) -> Outcome:
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str | None = None) -> Outcome:
        return cls(error=BookingError(kind=kind, message=message))
