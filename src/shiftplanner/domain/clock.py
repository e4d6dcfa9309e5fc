"""Clock and calendar arithmetic.

Shift times are carried as ``"HH:MM"`` strings. Everything in this module is
a pure function over those strings, minute offsets from midnight, and
``datetime.date`` values. Shifts never cross midnight, so wrapping is only
used by :func:`add_minutes` and :func:`clock_from_minutes`.
"""

import re
from datetime import date, timedelta
from typing import Union

from shiftplanner.errors import InvalidDateError, InvalidShiftError, InvalidTimeError

MINUTES_PER_DAY = 24 * 60
LAST_MINUTE_OF_DAY = MINUTES_PER_DAY - 1
DAYS_PER_WEEK = 7

_CLOCK_PATTERN = re.compile(r"^(\d{2}):(\d{2})$")


def minutes_since_midnight(clock: str) -> int:
    """Convert an ``HH:MM`` clock string to minutes since midnight.

    Raises:
        InvalidTimeError: If the value is not a zero-padded 24-hour time.
    """
    if not isinstance(clock, str):
        raise InvalidTimeError(f"Clock value must be a string, got {clock!r}")

    match = _CLOCK_PATTERN.match(clock)
    if match is None:
        raise InvalidTimeError(f"Clock value must look like HH:MM, got {clock!r}")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeError(f"Clock value out of range: {clock!r}")

    return hours * 60 + minutes


def clock_from_minutes(minutes: int) -> str:
    """Convert minutes since midnight to ``HH:MM``, wrapping at 24 hours."""
    hours, mins = divmod(minutes % MINUTES_PER_DAY, 60)
    return f"{hours:02d}:{mins:02d}"


def add_minutes(clock: str, delta: int) -> str:
    """Shift a clock value by ``delta`` minutes (negative allowed), wrapping."""
    return clock_from_minutes(minutes_since_midnight(clock) + delta)


def add_hours(clock: str, hours: float) -> str:
    """Shift a clock value by a possibly fractional number of hours."""
    return add_minutes(clock, round(hours * 60))


def hours_between(start: str, end: str) -> float:
    """Hours from ``start`` to ``end`` on the same day.

    The result is negative when ``end`` is before ``start``. That is a
    data-integrity problem for the caller to surface; see :func:`shift_hours`.
    """
    return (minutes_since_midnight(end) - minutes_since_midnight(start)) / 60


def shift_hours(start: str, end: str) -> float:
    """Duration of a shift in hours.

    Raises:
        InvalidShiftError: If ``end`` is not after ``start``.
    """
    hours = hours_between(start, end)
    if hours <= 0:
        raise InvalidShiftError(
            f"Shift must end after it starts ({start}-{end}); overnight shifts are not supported"
        )
    return hours


def intervals_overlap(start1: int, end1: int, start2: int, end2: int) -> bool:
    """Open-interval overlap test on minute offsets. Touching ranges do not overlap."""
    return start1 < end2 and start2 < end1


def parse_date(value: Union[date, str]) -> date:
    """Accept a ``date`` or an ISO ``YYYY-MM-DD`` string.

    Raises:
        InvalidDateError: For anything else.
    """
    # datetime is a date subclass; keep only the calendar part.
    if isinstance(value, date):
        return date(value.year, value.month, value.day)
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as exc:
            raise InvalidDateError(f"Invalid date {value!r}: expected YYYY-MM-DD") from exc
    raise InvalidDateError(f"Invalid date {value!r}: expected a date or YYYY-MM-DD string")


def week_start_for(value: Union[date, str]) -> date:
    """Monday of the week containing ``value``."""
    day = parse_date(value)
    return day - timedelta(days=day.weekday())


def week_dates(week_start: date) -> list[date]:
    """The seven consecutive dates starting at ``week_start``."""
    return [week_start + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]


def previous_day(day: date) -> date:
    return day - timedelta(days=1)


def next_day(day: date) -> date:
    return day + timedelta(days=1)
