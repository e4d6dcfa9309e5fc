"""Store opening hours."""

from typing import Iterable, Optional

from shiftplanner.domain.models import StoreHours, Weekday

# Monday-Friday 09:30-20:00, Saturday 09:00-21:00, Sunday 09:30-21:00.
DEFAULT_STORE_HOURS: tuple[StoreHours, ...] = (
    StoreHours(Weekday.MONDAY, "09:30", "20:00"),
    StoreHours(Weekday.TUESDAY, "09:30", "20:00"),
    StoreHours(Weekday.WEDNESDAY, "09:30", "20:00"),
    StoreHours(Weekday.THURSDAY, "09:30", "20:00"),
    StoreHours(Weekday.FRIDAY, "09:30", "20:00"),
    StoreHours(Weekday.SATURDAY, "09:00", "21:00"),
    StoreHours(Weekday.SUNDAY, "09:30", "21:00"),
)


def hours_for(
    weekday: Weekday,
    table: Iterable[StoreHours] = DEFAULT_STORE_HOURS,
) -> Optional[StoreHours]:
    """Look up the entry for a weekday; None when the table has no entry."""
    for entry in table:
        if entry.weekday == weekday:
            return entry
    return None


def is_open_on(weekday: Weekday, table: Iterable[StoreHours] = DEFAULT_STORE_HOURS) -> bool:
    """A weekday missing from the table counts as closed."""
    entry = hours_for(weekday, table)
    return entry is not None and entry.is_open
