"""Exception types raised at the scheduling boundary.

Only malformed input raises. Staffing shortfalls are never exceptions; they
show up as unassigned shifts or as issues from a generation check.
"""


class SchedulingError(Exception):
    """Base class for all shift planner errors."""


class InvalidTimeError(SchedulingError, ValueError):
    """A clock value is not a valid HH:MM time of day."""


class InvalidDateError(SchedulingError, ValueError):
    """A calendar date is missing or malformed."""


class InvalidShiftError(SchedulingError, ValueError):
    """A shift record breaks a data-integrity rule.

    Raised for shifts whose end is not after their start, and for shifts
    whose date falls outside the week of the schedule they belong to.
    """


class InvalidWorkerError(SchedulingError, ValueError):
    """A worker record has an out-of-range or unrecognised value."""


class InvalidDataError(SchedulingError, ValueError):
    """Stored data is unreadable or a record is missing a field."""
