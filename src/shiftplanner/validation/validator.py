"""Validation module for verifying schedule and worker data.

Generated schedules are correct by construction; this module re-checks
schedules that were edited or loaded from storage, and validates worker
records before they are saved.
"""

import re
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable, Optional

from shiftplanner.domain.models import Schedule, Shift, ShiftCategory, Weekday, Worker
from shiftplanner.domain.policies import StaffingPolicy

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class ValidationErrorType(Enum):
    """Types of validation errors."""

    SHIFT_OUTSIDE_WEEK = "shift_outside_week"
    UNKNOWN_WORKER = "unknown_worker"
    WORKER_INACTIVE = "worker_inactive"
    WORKER_ON_HOLIDAY = "worker_on_holiday"
    WORKER_DAY_OFF = "worker_day_off"
    OVERLAPPING_SHIFTS = "overlapping_shifts"


@dataclass
class ValidationError:
    """A single validation error."""

    error_type: ValidationErrorType
    message: str
    worker_id: Optional[str] = None
    shift_id: Optional[str] = None
    shift_date: Optional[date] = None

    def __str__(self) -> str:
        parts = [f"[{self.error_type.value}]"]
        if self.worker_id:
            parts.append(f"Worker {self.worker_id}:")
        parts.append(self.message)
        if self.shift_date is not None:
            parts.append(f"({self.shift_date.isoformat()})")
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of validating a schedule."""

    is_valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, error: ValidationError) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(warning)


@dataclass
class FieldError:
    """A problem with one field of a worker record."""

    field: str
    message: str


class ScheduleValidator:
    """Validates schedules against worker availability and coverage rules.

    Errors make a schedule invalid: shifts outside the week, unknown or
    unavailable workers, and overlapping shifts for one worker. Thin
    coverage (no opener, too few closers, open slots) is only a warning.

    Example:
        >>> validator = ScheduleValidator()
        >>> result = validator.validate(schedule, workers_map)
        >>> if not result.is_valid:
        ...     for error in result.errors:
        ...         print(error)
    """

    def __init__(self, staffing_policy: Optional[StaffingPolicy] = None):
        self.staffing_policy = staffing_policy or StaffingPolicy()

    def validate(self, schedule: Schedule, workers_map: dict[str, Worker]) -> ValidationResult:
        """Validate a complete schedule.

        Args:
            schedule: The schedule to validate.
            workers_map: Dict mapping worker IDs to Worker objects.

        Returns:
            ValidationResult with is_valid flag, errors and warnings.
        """
        result = ValidationResult(is_valid=True)

        for shift in schedule.shifts:
            if not schedule.contains_date(shift.shift_date):
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.SHIFT_OUTSIDE_WEEK,
                        message=f"Shift {shift.id} is outside the week of {schedule.week_start}",
                        worker_id=shift.worker_id,
                        shift_id=shift.id,
                        shift_date=shift.shift_date,
                    )
                )
            if shift.is_assigned:
                self._validate_assignment(shift, workers_map, result)

        self._validate_overlaps(schedule.shifts, result)

        for day in schedule.dates:
            self._check_day_coverage(day, schedule.shifts_on(day), result)

        return result

    def _validate_assignment(
        self,
        shift: Shift,
        workers_map: dict[str, Worker],
        result: ValidationResult,
    ) -> None:
        worker = workers_map.get(shift.worker_id)
        if worker is None:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.UNKNOWN_WORKER,
                    message=f"Unknown worker ID: {shift.worker_id}",
                    worker_id=shift.worker_id,
                    shift_id=shift.id,
                    shift_date=shift.shift_date,
                )
            )
            return

        if not worker.is_active:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.WORKER_INACTIVE,
                    message=f"{worker.name} is inactive",
                    worker_id=worker.id,
                    shift_id=shift.id,
                    shift_date=shift.shift_date,
                )
            )
        if worker.is_on_holiday(shift.shift_date):
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.WORKER_ON_HOLIDAY,
                    message=f"{worker.name} is on holiday",
                    worker_id=worker.id,
                    shift_id=shift.id,
                    shift_date=shift.shift_date,
                )
            )
        weekday = Weekday.from_date(shift.shift_date)
        if not worker.works_on(weekday):
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.WORKER_DAY_OFF,
                    message=f"{worker.name} does not work on {weekday.label}",
                    worker_id=worker.id,
                    shift_id=shift.id,
                    shift_date=shift.shift_date,
                )
            )

    def _validate_overlaps(self, shifts: list[Shift], result: ValidationResult) -> None:
        """Report each pair of overlapping shifts held by the same worker."""
        by_worker_day: dict[tuple[str, date], list[Shift]] = defaultdict(list)
        for shift in shifts:
            if shift.is_assigned:
                by_worker_day[(shift.worker_id, shift.shift_date)].append(shift)

        for (worker_id, day), day_shifts in by_worker_day.items():
            ordered = sorted(day_shifts, key=lambda s: s.start_minutes)
            for i, first in enumerate(ordered):
                for second in ordered[i + 1:]:
                    if second.start_minutes >= first.end_minutes:
                        break
                    result.add_error(
                        ValidationError(
                            error_type=ValidationErrorType.OVERLAPPING_SHIFTS,
                            message=(
                                f"{first.start_time}-{first.end_time} overlaps "
                                f"{second.start_time}-{second.end_time}"
                            ),
                            worker_id=worker_id,
                            shift_id=second.id,
                            shift_date=day,
                        )
                    )

    def _check_day_coverage(
        self,
        day: date,
        day_shifts: list[Shift],
        result: ValidationResult,
    ) -> None:
        if not day_shifts:
            return
        label = f"{Weekday.from_date(day).label} ({day.isoformat()})"

        openers = [
            s for s in day_shifts if s.category == ShiftCategory.OPENING and s.is_assigned
        ]
        if not openers:
            result.add_warning(f"{label}: no opening shift assigned")

        closers = {
            s.worker_id
            for s in day_shifts
            if s.category == ShiftCategory.CLOSING and s.is_assigned
        }
        if len(closers) < self.staffing_policy.closing_min:
            result.add_warning(
                f"{label}: only {len(closers)} closing worker(s), "
                f"{self.staffing_policy.closing_min} needed"
            )

        unassigned = sum(1 for s in day_shifts if not s.is_assigned)
        if unassigned:
            result.add_warning(f"{label}: {unassigned} unassigned shift(s)")


def validate_worker(
    worker: Worker,
    existing: Iterable[Worker] = (),
    min_percentage: float = 10.0,
) -> list[FieldError]:
    """Field-level checks for a worker record before it is saved.

    Args:
        worker: Record to check.
        existing: Other stored workers; a case-insensitive name clash with
            a different id is an error.
        min_percentage: Lowest accepted work percentage.

    Returns:
        Errors found, empty when the record is valid.
    """
    errors = []

    name = worker.name.strip()
    if len(name) < 2:
        errors.append(FieldError("name", "Name must be at least 2 characters long"))
    elif any(w.id != worker.id and w.name.strip().lower() == name.lower() for w in existing):
        errors.append(FieldError("name", f"A worker named {name} already exists"))

    if worker.email and not EMAIL_PATTERN.match(worker.email.strip()):
        errors.append(FieldError("email", "Please enter a valid email address"))

    if not min_percentage <= worker.work_percentage <= 100:
        errors.append(
            FieldError(
                "work_percentage",
                f"Work percentage must be between {min_percentage:g}% and 100%",
            )
        )

    if not worker.available_days:
        errors.append(FieldError("available_days", "Select at least one available day"))

    return errors
