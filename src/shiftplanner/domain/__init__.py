"""Domain models and business rules for shift planning."""

from shiftplanner.domain.models import (
    ConsolidatedWorkerShift,
    DaySummary,
    GenerationCheck,
    GenerationOptions,
    HoursStatus,
    Schedule,
    ScheduleStats,
    Shift,
    ShiftCategory,
    ShiftPriority,
    ShiftTemplate,
    StoreHours,
    TimeGap,
    WeeklyHoursEntry,
    Weekday,
    Worker,
    WorkerWeekSummary,
    weekday_of,
)
from shiftplanner.domain.policies import (
    AssignmentPolicy,
    CoveragePolicy,
    FeasibilityPolicy,
    HoursPolicy,
    ScoringPolicy,
    StaffingPolicy,
)
from shiftplanner.domain.store_hours import DEFAULT_STORE_HOURS

__all__ = [
    # Models
    "ConsolidatedWorkerShift",
    "DaySummary",
    "GenerationCheck",
    "GenerationOptions",
    "HoursStatus",
    "Schedule",
    "ScheduleStats",
    "Shift",
    "ShiftCategory",
    "ShiftPriority",
    "ShiftTemplate",
    "StoreHours",
    "TimeGap",
    "WeeklyHoursEntry",
    "Weekday",
    "Worker",
    "WorkerWeekSummary",
    "weekday_of",
    # Policies
    "AssignmentPolicy",
    "CoveragePolicy",
    "FeasibilityPolicy",
    "HoursPolicy",
    "ScoringPolicy",
    "StaffingPolicy",
    # Store hours
    "DEFAULT_STORE_HOURS",
]
