"""Calendar arithmetic for booking policy and vacancy windows."""

import calendar
from datetime import date, timedelta
from typing import Iterator


def inclusive_day_count(a: date, b: date) -> int:
    """Count days spanned by a and b, both endpoints included.

    Same date counts as 0, not 1. Only used for policy thresholds;
    stored ranges stay half-open.
    """
    if a == b:
        return 0
    return abs((b - a).days) + 1


def date_sequence(start: date, end_inclusive: date) -> Iterator[date]:
    """Yield every date from start to end_inclusive, ascending."""
    current = start
    while current <= end_inclusive:
        yield current
        current += timedelta(days=1)


def add_months(d: date, months: int) -> date:
    """Shift d by whole calendar months, clamping to the month's last day."""
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    _, last_day = calendar.monthrange(year, month)
    return date(year, month, min(d.day, last_day))
