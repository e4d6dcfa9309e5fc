"""Tests for availability and conflict checks."""

from datetime import date

import pytest

from shiftplanner.domain.models import Shift, Weekday, Worker
from shiftplanner.scheduling.availability import AvailabilityValidator

MONDAY = date(2024, 1, 15)


@pytest.fixture
def validator():
    return AvailabilityValidator()


@pytest.fixture
def worker():
    return Worker(id="w1", name="Alice", available_days={Weekday.MONDAY, Weekday.TUESDAY})


def make_shift(id: str, start: str, end: str, worker_id=None, day: date = MONDAY) -> Shift:
    """Helper to create test shifts."""
    return Shift(id=id, shift_date=day, start_time=start, end_time=end, worker_id=worker_id)


class TestIsAvailable:
    """Tests for is_available."""

    def test_available_on_listed_day(self, validator, worker):
        assert validator.is_available(worker, MONDAY)

    def test_unavailable_on_unlisted_day(self, validator, worker):
        assert not validator.is_available(worker, date(2024, 1, 17))  # Wednesday

    def test_holiday_blocks_listed_day(self, validator):
        worker = Worker(
            id="w1",
            name="Alice",
            available_days={Weekday.MONDAY},
            holidays={MONDAY},
        )
        assert not validator.is_available(worker, MONDAY)
        assert validator.is_available(worker, date(2024, 1, 22))

    def test_inactive_worker_never_available(self, validator, worker):
        worker.is_active = False
        assert not validator.is_available(worker, MONDAY)


class TestConflicts:
    """Tests for has_conflict and can_assign."""

    def test_overlap_is_conflict(self, validator, worker):
        existing = [make_shift("a", "09:00", "15:00", "w1")]
        candidate = make_shift("b", "14:00", "17:00")
        assert validator.has_conflict(worker, candidate, existing)
        assert not validator.can_assign(worker, candidate, existing)

    def test_touching_is_not_conflict(self, validator, worker):
        existing = [make_shift("a", "09:00", "11:00", "w1")]
        candidate = make_shift("b", "11:00", "15:00")
        assert not validator.has_conflict(worker, candidate, existing)
        assert validator.can_assign(worker, candidate, existing)

    def test_other_workers_shifts_ignored(self, validator, worker):
        existing = [make_shift("a", "09:00", "15:00", "w2")]
        assert not validator.has_conflict(worker, make_shift("b", "10:00", "12:00"), existing)

    def test_other_dates_ignored(self, validator, worker):
        existing = [make_shift("a", "09:00", "15:00", "w1", day=date(2024, 1, 16))]
        assert not validator.has_conflict(worker, make_shift("b", "10:00", "12:00"), existing)

    def test_own_record_ignored(self, validator, worker):
        """An assigned shift can be re-checked without conflicting with itself."""
        shift = make_shift("a", "09:00", "15:00", "w1")
        assert not validator.has_conflict(worker, shift, [shift])

    def test_window_check(self, validator, worker):
        existing = [make_shift("a", "09:00", "11:00", "w1")]
        assert validator.can_assign_window(worker, MONDAY, 660, 900, existing)
        assert not validator.can_assign_window(worker, MONDAY, 600, 900, existing)
        assert not validator.can_assign_window(worker, date(2024, 1, 17), 660, 900, [])
