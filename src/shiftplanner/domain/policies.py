"""Policy definitions for scheduling rules.

This module contains configurable policies that define the business rules
for staffing windows, worker scoring, weekly hour targets, and coverage
analysis. Policies are kept separate from the scheduling engine to allow
independent testing and easy modification. Defaults reproduce the store's
established behaviour.
"""

from dataclasses import dataclass

from shiftplanner.domain.models import Weekday

WEEKEND_DAYS = frozenset({Weekday.SATURDAY, Weekday.SUNDAY})
LONG_DAYS = frozenset({Weekday.THURSDAY, Weekday.FRIDAY, Weekday.SATURDAY, Weekday.SUNDAY})


@dataclass
class StaffingPolicy:
    """Offsets and head counts used to derive shift templates.

    All offsets are minutes relative to the store's opening or closing time.

    Windows per open day:
    - Opening: open - 30m to open + 1.5h, exactly one worker
    - Lunch peak: open + 1.5h to open + 5.5h (more staff on weekends)
    - Afternoon: open + 5.5h to open + 7.5h
    - Evening peak: open + 7.5h to open + 10h, long days only
    - Closing: pre-close point to close + 30m, two workers plus one optional
    """

    opening_lead_minutes: int = 30
    opening_end_offset: int = 90
    lunch_end_offset: int = 330
    afternoon_end_offset: int = 450
    evening_end_offset: int = 600
    closing_tail_minutes: int = 30

    weekend_days: frozenset = WEEKEND_DAYS
    long_days: frozenset = LONG_DAYS

    opening_workers: int = 1

    lunch_min_weekday: int = 3
    lunch_max_weekday: int = 4
    lunch_min_weekend: int = 4
    lunch_max_weekend: int = 5

    afternoon_min_weekday: int = 2
    afternoon_max_weekday: int = 3
    afternoon_min_weekend: int = 3
    afternoon_max_weekend: int = 4

    evening_min_weekday: int = 3
    evening_max_weekday: int = 4
    evening_min_weekend: int = 4
    evening_max_weekend: int = 5

    closing_min: int = 2
    closing_max: int = 3

    def is_weekend(self, weekday: Weekday) -> bool:
        return weekday in self.weekend_days

    def is_long_day(self, weekday: Weekday) -> bool:
        return weekday in self.long_days


@dataclass
class ScoringPolicy:
    """Weights for the worker scoring rules.

    Target-hours headroom bands:
    - Remaining hours cover the whole shift: +100
    - Some hours remaining: +50
    - Lands at most 2h over target: +20
    - Lands at most 5h over target: 0
    - Beyond that: -10 per hour of overage
    """

    base_score: float = 100.0

    full_headroom_bonus: float = 100.0
    partial_headroom_bonus: float = 50.0
    slight_overage_hours: float = 2.0
    slight_overage_bonus: float = 20.0
    moderate_overage_hours: float = 5.0
    overage_penalty_per_hour: float = 10.0

    balance_weight: float = 50.0
    role_priority_weight: float = 0.3
    consecutive_day_penalty: float = 15.0
    fresh_worker_bonus: float = 25.0

    min_score: float = 0.0


@dataclass
class AssignmentPolicy:
    """Weekly hour baseline and the hard overage ceiling.

    Attributes:
        full_time_hours: Weekly hours that correspond to 100% work percentage.
        max_overage_hours: A worker whose weekly hours would exceed their
            target by more than this is skipped once minimum coverage for
            the template is met.
    """

    full_time_hours: float = 42.0
    max_overage_hours: float = 12.0


@dataclass
class HoursPolicy:
    """Tolerance band for the under / target / over status.

    A worker is on target while scheduled hours stay within
    ``tolerance * target`` of the target.
    """

    tolerance: float = 0.10


@dataclass
class CoveragePolicy:
    """Thresholds for consolidation and coverage-gap analysis."""

    min_gap_minutes: int = 15
    peak_start: str = "11:00"
    peak_end: str = "15:00"
    sample_minutes: int = 30
    min_peak_coverage: int = 2
    long_shift_hours: float = 8.0


@dataclass
class FeasibilityPolicy:
    """Thresholds for the pre-generation check."""

    recommended_active_workers: int = 3
    recommended_daily_workers: int = 2
