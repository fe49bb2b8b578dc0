"""Calendar arithmetic for date keys and month grids.

Months are 1-indexed throughout (January is 1) and weekdays count from
Sunday = 0, which is how the month grid lays out its seven columns.
"""

from __future__ import annotations

import calendar
import re
from datetime import date
from typing import List, Optional, Tuple

from ..domain.errors import ValidationError

_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise ValidationError(f"month must be between 1 and 12, got {month}")


def days_in_month(year: int, month: int) -> int:
    _check_month(month)
    return calendar.monthrange(year, month)[1]


def first_weekday_of_month(year: int, month: int) -> int:
    """Weekday of the 1st with Sunday = 0, i.e. the number of leading blanks."""

    _check_month(month)
    # calendar counts Monday = 0
    return (calendar.monthrange(year, month)[0] + 1) % 7


def to_date_key(year: int, month: int, day: int) -> str:
    try:
        date(year, month, day)
    except ValueError as exc:
        raise ValidationError(f"Invalid calendar date {year}-{month}-{day}") from exc
    return f"{year:04d}-{month:02d}-{day:02d}"


def key_for(value: date) -> str:
    return to_date_key(value.year, value.month, value.day)


def today() -> str:
    return key_for(date.today())


def parse_date_key(key: str) -> date:
    if not isinstance(key, str) or not _KEY_PATTERN.match(key):
        raise ValidationError(f"Date key must be formatted YYYY-MM-DD, got {key!r}")
    try:
        return date.fromisoformat(key)
    except ValueError as exc:
        raise ValidationError(f"Date key {key!r} is not a real calendar date") from exc


def is_date_key(value: object) -> bool:
    try:
        parse_date_key(value)  # type: ignore[arg-type]
    except ValidationError:
        return False
    return True


def month_prefix(year: int, month: int) -> str:
    _check_month(month)
    return f"{year:04d}-{month:02d}"


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move ``delta`` months forward (or back when negative)."""

    _check_month(month)
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_grid(year: int, month: int) -> List[List[Optional[int]]]:
    """Weeks of the month as rows of seven cells, Sunday first.

    Cells before the 1st and after the last day are ``None``.
    """

    leading = first_weekday_of_month(year, month)
    cells: List[Optional[int]] = [None] * leading
    cells.extend(range(1, days_in_month(year, month) + 1))
    while len(cells) % 7:
        cells.append(None)
    return [cells[index : index + 7] for index in range(0, len(cells), 7)]


__all__ = [
    "WEEKDAY_LABELS",
    "days_in_month",
    "first_weekday_of_month",
    "is_date_key",
    "key_for",
    "month_grid",
    "month_prefix",
    "parse_date_key",
    "shift_month",
    "to_date_key",
    "today",
]
