"""Availability and conflict checks for worker assignment."""

from datetime import date
from typing import Iterable, Optional

from shiftplanner.domain.clock import intervals_overlap
from shiftplanner.domain.models import Shift, Weekday, Worker


class AvailabilityValidator:
    """Decides whether a worker may take a shift.

    A worker may take a shift when they are active, the date is not one of
    their holidays, the weekday is in their availability pattern, and none
    of their other shifts on that date overlaps the new one.

    Example:
        >>> validator = AvailabilityValidator()
        >>> validator.can_assign(worker, shift, schedule.shifts)
        True
    """

    def is_available(self, worker: Worker, day: date) -> bool:
        """Check activity, holidays, and the weekly pattern for a date."""
        if not worker.is_active:
            return False
        if worker.is_on_holiday(day):
            return False
        return worker.works_on(Weekday.from_date(day))

    def has_conflict(self, worker: Worker, shift: Shift, shifts: Iterable[Shift]) -> bool:
        """Check for an overlapping shift already held by the worker that day.

        The shift's own record (same id) is ignored so an existing
        assignment can be re-checked in place.
        """
        return self._overlaps_existing(
            worker,
            shift.shift_date,
            shift.start_minutes,
            shift.end_minutes,
            shifts,
            ignore_id=shift.id,
        )

    def can_assign(self, worker: Worker, shift: Shift, shifts: Iterable[Shift]) -> bool:
        """Available on the shift's date and free of conflicts."""
        return self.is_available(worker, shift.shift_date) and not self.has_conflict(
            worker, shift, shifts
        )

    def can_assign_window(
        self,
        worker: Worker,
        day: date,
        start_minutes: int,
        end_minutes: int,
        shifts: Iterable[Shift],
    ) -> bool:
        """Same test as :meth:`can_assign` for a window with no shift record yet."""
        if not self.is_available(worker, day):
            return False
        return not self._overlaps_existing(worker, day, start_minutes, end_minutes, shifts)

    def _overlaps_existing(
        self,
        worker: Worker,
        day: date,
        start_minutes: int,
        end_minutes: int,
        shifts: Iterable[Shift],
        ignore_id: Optional[str] = None,
    ) -> bool:
        for existing in shifts:
            if existing.worker_id != worker.id or existing.shift_date != day:
                continue
            if ignore_id is not None and existing.id == ignore_id:
                continue
            if intervals_overlap(
                start_minutes, end_minutes, existing.start_minutes, existing.end_minutes
            ):
                return True
        return False
