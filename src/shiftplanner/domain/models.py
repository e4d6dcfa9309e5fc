"""Domain models for the shift planner.

This module contains the core data structures: workers, store hours, shift
templates, shift records, weekly schedules, and the derived views produced
by the statistics and consolidation passes.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Optional

from shiftplanner.domain.clock import (
    DAYS_PER_WEEK,
    minutes_since_midnight,
    parse_date,
    shift_hours,
    week_dates,
)
from shiftplanner.errors import InvalidShiftError, InvalidWorkerError


class Weekday(Enum):
    """Days of the operating week, Monday first."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @property
    def index(self) -> int:
        """Zero-based position, matching ``date.weekday()``."""
        return list(Weekday).index(self)

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_date(cls, day: date) -> "Weekday":
        """Weekday of a calendar date."""
        return list(cls)[day.weekday()]


def weekday_of(day: date) -> Weekday:
    """Weekday of a calendar date."""
    return Weekday.from_date(day)


class ShiftCategory(Enum):
    """Kind of shift, used for scoring and display."""

    OPENING = "opening"
    CLOSING = "closing"
    REGULAR = "regular"

    @property
    def label(self) -> str:
        """Human-readable label shown in consolidated views."""
        return {
            ShiftCategory.OPENING: "Opening",
            ShiftCategory.CLOSING: "Closing",
            ShiftCategory.REGULAR: "Service",
        }[self]


class ShiftPriority(Enum):
    """Business priority of a staffing window."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class HoursStatus(Enum):
    """Scheduled hours relative to a worker's weekly target."""

    UNDER = "under"
    TARGET = "target"
    OVER = "over"


@dataclass
class Worker:
    """A person who can be scheduled.

    Attributes:
        id: Unique identifier.
        name: Display name.
        work_percentage: Share of a full-time week (0-100) the worker is
            contracted for.
        available_days: Weekdays the worker can work.
        holidays: Dates the worker must never be scheduled.
        is_active: Inactive workers are never candidates.
        phone: Contact phone (not used by scheduling).
        email: Contact email (not used by scheduling).
        created_at: When the worker record was created.
    """

    id: str
    name: str
    work_percentage: float = 100.0
    available_days: set[Weekday] = field(default_factory=lambda: set(Weekday))
    holidays: set[date] = field(default_factory=set)
    is_active: bool = True
    phone: str = ""
    email: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if not 0 <= self.work_percentage <= 100:
            raise InvalidWorkerError(
                f"Worker {self.id}: work percentage must be between 0 and 100, "
                f"got {self.work_percentage}"
            )
        self.holidays = {parse_date(d) for d in self.holidays}

    def works_on(self, weekday: Weekday) -> bool:
        """Check the weekly availability pattern."""
        return weekday in self.available_days

    def is_on_holiday(self, day: date) -> bool:
        """Check the holiday blackout set."""
        return day in self.holidays

    def target_hours(self, full_time_hours: float) -> float:
        """Weekly hour target for this worker."""
        return (self.work_percentage / 100) * full_time_hours


@dataclass(frozen=True)
class StoreHours:
    """Opening hours for one weekday.

    Attributes:
        weekday: Day these hours apply to.
        open_time: Opening time as ``HH:MM``.
        close_time: Closing time as ``HH:MM``.
        is_open: False marks the store closed for the whole day.
    """

    weekday: Weekday
    open_time: str
    close_time: str
    is_open: bool = True

    def __post_init__(self):
        if self.is_open and minutes_since_midnight(self.close_time) <= minutes_since_midnight(
            self.open_time
        ):
            raise InvalidShiftError(
                f"{self.weekday.label}: store must close after it opens "
                f"({self.open_time}-{self.close_time})"
            )

    @property
    def open_minutes(self) -> int:
        return minutes_since_midnight(self.open_time)

    @property
    def close_minutes(self) -> int:
        return minutes_since_midnight(self.close_time)


@dataclass(frozen=True)
class ShiftTemplate:
    """A staffing window derived from store hours.

    Templates are rebuilt on every generation run and never mutated.

    Attributes:
        weekday: Day the template applies to.
        start_time: Window start as ``HH:MM``.
        end_time: Window end as ``HH:MM``.
        category: Opening, closing or regular.
        min_workers: Slots that must exist (assigned or not).
        max_workers: Upper bound of concurrent workers.
        priority: Assignment aggressiveness signal.
    """

    weekday: Weekday
    start_time: str
    end_time: str
    category: ShiftCategory
    min_workers: int
    max_workers: int
    priority: ShiftPriority = ShiftPriority.MEDIUM

    @property
    def start_minutes(self) -> int:
        return minutes_since_midnight(self.start_time)

    @property
    def end_minutes(self) -> int:
        return minutes_since_midnight(self.end_time)

    @property
    def duration_hours(self) -> float:
        return shift_hours(self.start_time, self.end_time)


@dataclass
class Shift:
    """A single staffed (or unstaffed) slot on a specific date.

    Attributes:
        id: Unique identifier.
        shift_date: Calendar date of the shift.
        start_time: Start as ``HH:MM``.
        end_time: End as ``HH:MM``; must be after ``start_time``.
        category: Opening, closing or regular.
        is_required: True when the slot fills minimum coverage.
        worker_id: Assigned worker, or None for an open slot.
    """

    id: str
    shift_date: date
    start_time: str
    end_time: str
    category: ShiftCategory = ShiftCategory.REGULAR
    is_required: bool = True
    worker_id: Optional[str] = None

    def __post_init__(self):
        self.shift_date = parse_date(self.shift_date)
        # Validates both clocks and rejects end <= start.
        shift_hours(self.start_time, self.end_time)

    @property
    def is_assigned(self) -> bool:
        return self.worker_id is not None

    @property
    def start_minutes(self) -> int:
        return minutes_since_midnight(self.start_time)

    @property
    def end_minutes(self) -> int:
        return minutes_since_midnight(self.end_time)

    @property
    def duration_hours(self) -> float:
        return shift_hours(self.start_time, self.end_time)

    def overlaps(self, other: "Shift") -> bool:
        """Same date and overlapping time ranges. Touching shifts do not overlap."""
        return (
            self.shift_date == other.shift_date
            and self.start_minutes < other.end_minutes
            and other.start_minutes < self.end_minutes
        )

    def __repr__(self) -> str:
        who = self.worker_id or "unassigned"
        return f"Shift({self.shift_date} {self.start_time}-{self.end_time} {self.category.value} {who})"


@dataclass
class Schedule:
    """A week of shift records anchored on a Monday.

    Attributes:
        id: Unique identifier.
        week_start: Monday the week starts on.
        shifts: Shift records; every date lies within the week.
        is_generated: True when produced by the assignment engine.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.
        notes: Free-form notes.
    """

    id: str
    week_start: date
    shifts: list[Shift] = field(default_factory=list)
    is_generated: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    notes: str = ""

    def __post_init__(self):
        self.week_start = parse_date(self.week_start)
        for shift in self.shifts:
            self._check_in_week(shift)

    @property
    def week_end(self) -> date:
        """Last day (Sunday) of the week."""
        return self.week_start + timedelta(days=DAYS_PER_WEEK - 1)

    @property
    def dates(self) -> list[date]:
        return week_dates(self.week_start)

    def contains_date(self, day: date) -> bool:
        return self.week_start <= day <= self.week_end

    def add_shift(self, shift: Shift) -> None:
        """Append a shift, rejecting dates outside the week."""
        self._check_in_week(shift)
        self.shifts.append(shift)

    def shifts_on(self, day: date) -> list[Shift]:
        """Shifts on a given date, in stored order."""
        return [s for s in self.shifts if s.shift_date == day]

    def shifts_for_worker(self, worker_id: str) -> list[Shift]:
        """Shifts assigned to a worker, in stored order."""
        return [s for s in self.shifts if s.worker_id == worker_id]

    def _check_in_week(self, shift: Shift) -> None:
        if not self.contains_date(shift.shift_date):
            raise InvalidShiftError(
                f"Shift {shift.id} on {shift.shift_date} is outside the week "
                f"{self.week_start} - {self.week_end}"
            )


@dataclass
class GenerationOptions:
    """Options for one generation run.

    Attributes:
        week_start: Any date in the target week; normalized to its Monday.
        prioritize_work_balance: Include the load-balance scoring rule.
        consider_weather: Accepted for compatibility; no weather data is
            consulted by the engine.
    """

    week_start: date
    prioritize_work_balance: bool = True
    consider_weather: bool = False

    def __post_init__(self):
        self.week_start = parse_date(self.week_start)


@dataclass
class GenerationCheck:
    """Outcome of a pre-generation feasibility check."""

    can_generate: bool
    issues: list[str] = field(default_factory=list)


@dataclass
class WeeklyHoursEntry:
    """Scheduled versus target hours for one worker."""

    worker_id: str
    scheduled: float
    target: float
    status: HoursStatus = HoursStatus.TARGET

    @property
    def difference(self) -> float:
        return self.scheduled - self.target


@dataclass
class ScheduleStats:
    """Schedule-wide totals."""

    total_shifts: int = 0
    assigned_shifts: int = 0
    unassigned_shifts: int = 0
    total_hours: float = 0.0
    worker_count: int = 0
    avg_hours_per_worker: float = 0.0


@dataclass(frozen=True)
class TimeGap:
    """A break between two consecutive shifts of one worker."""

    start_time: str
    end_time: str
    duration_hours: float


@dataclass
class ConsolidatedWorkerShift:
    """One worker's merged presence on one date.

    Attributes:
        worker_id: Worker the block belongs to.
        worker_name: Display name (falls back to the id).
        shift_date: Date of the block.
        start_time: Earliest start among the underlying shifts.
        end_time: Latest end among the underlying shifts.
        total_hours: Span of the block, not the sum of its parts.
        shift_types: Distinct category labels in chronological order.
        original_shifts: Underlying shift records, sorted by start.
        gaps: Breaks of at least the configured minimum length.
    """

    worker_id: str
    worker_name: str
    shift_date: date
    start_time: str
    end_time: str
    total_hours: float
    shift_types: list[str] = field(default_factory=list)
    original_shifts: list[Shift] = field(default_factory=list)
    gaps: list[TimeGap] = field(default_factory=list)

    @property
    def break_hours(self) -> float:
        return sum(gap.duration_hours for gap in self.gaps)


@dataclass
class DaySummary:
    """Worker-centric view of one day."""

    day_date: date
    weekday: str
    worker_shifts: list[ConsolidatedWorkerShift] = field(default_factory=list)
    unassigned_shifts: list[Shift] = field(default_factory=list)
    coverage_gaps: list[str] = field(default_factory=list)


@dataclass
class WorkerWeekSummary:
    """Per-worker totals across a consolidated week."""

    worker_id: str
    total_hours: float = 0.0
    days_worked: int = 0
    longest_shift: float = 0.0
    shift_types: list[str] = field(default_factory=list)

    @property
    def average_hours_per_day(self) -> float:
        if self.days_worked == 0:
            return 0.0
        return self.total_hours / self.days_worked
