"""Tests for schedule statistics and weekly hours."""

from datetime import date

import pytest

from shiftplanner.analysis.statistics import (
    hours_status,
    hours_warnings,
    schedule_stats,
    weekly_hours,
)
from shiftplanner.domain.models import HoursStatus, Schedule, Shift, Worker
from shiftplanner.domain.policies import AssignmentPolicy, HoursPolicy

MONDAY = date(2024, 1, 15)


def make_shift(id, start, end, worker_id=None, day=MONDAY, is_required=True) -> Shift:
    return Shift(
        id=id,
        shift_date=day,
        start_time=start,
        end_time=end,
        worker_id=worker_id,
        is_required=is_required,
    )


@pytest.fixture
def schedule():
    return Schedule(
        id="sch",
        week_start=MONDAY,
        shifts=[
            make_shift("s1", "09:00", "11:00", "A"),
            make_shift("s2", "11:00", "15:00", "A"),
            make_shift("s3", "15:00", "17:00", "B"),
            make_shift("s4", "17:00", "20:30"),
        ],
    )


class TestHoursStatus:
    """Tests for the under / target / over classification."""

    def test_within_tolerance_is_target(self):
        assert hours_status(42, 42) == HoursStatus.TARGET
        assert hours_status(45, 42) == HoursStatus.TARGET
        assert hours_status(39, 42) == HoursStatus.TARGET

    def test_outside_tolerance(self):
        assert hours_status(47, 42) == HoursStatus.OVER
        assert hours_status(37, 42) == HoursStatus.UNDER

    def test_zero_target(self):
        assert hours_status(0, 0) == HoursStatus.TARGET
        assert hours_status(2, 0) == HoursStatus.OVER

    def test_custom_tolerance(self):
        assert hours_status(45, 42, tolerance=0.0) == HoursStatus.OVER


class TestScheduleStats:
    """Tests for schedule_stats."""

    def test_counts_and_hours(self, schedule):
        stats = schedule_stats(schedule)
        assert stats.total_shifts == 4
        assert stats.assigned_shifts == 3
        assert stats.unassigned_shifts == 1
        assert stats.total_hours == pytest.approx(11.5)
        assert stats.worker_count == 2
        # 8 assigned hours over two workers
        assert stats.avg_hours_per_worker == pytest.approx(4.0)

    def test_empty_schedule(self):
        stats = schedule_stats(Schedule(id="empty", week_start=MONDAY))
        assert stats.total_shifts == 0
        assert stats.worker_count == 0
        assert stats.avg_hours_per_worker == 0


class TestWeeklyHours:
    """Tests for weekly_hours and hours_warnings."""

    def test_entries_for_active_workers_only(self, schedule):
        workers = [
            Worker(id="A", name="Alice", work_percentage=50),
            Worker(id="B", name="Bob"),
            Worker(id="C", name="Carol", is_active=False),
        ]
        entries = weekly_hours(schedule, workers)
        assert set(entries) == {"A", "B"}
        assert entries["A"].scheduled == pytest.approx(6)
        assert entries["A"].target == pytest.approx(21)
        assert entries["A"].status == HoursStatus.UNDER
        assert entries["B"].scheduled == pytest.approx(2)

    def test_unknown_worker_shifts_ignored(self):
        schedule = Schedule(
            id="sch",
            week_start=MONDAY,
            shifts=[make_shift("s1", "09:00", "11:00", "ghost")],
        )
        entries = weekly_hours(schedule, [Worker(id="A", name="Alice")])
        assert entries["A"].scheduled == 0

    def test_policies_change_targets(self, schedule):
        workers = [Worker(id="A", name="Alice")]
        entries = weekly_hours(
            schedule,
            workers,
            AssignmentPolicy(full_time_hours=6.0),
            HoursPolicy(tolerance=0.0),
        )
        assert entries["A"].target == 6
        assert entries["A"].status == HoursStatus.TARGET

    def test_warnings_sorted_by_difference(self, schedule):
        workers = [
            Worker(id="A", name="Alice", work_percentage=20),  # 6h of 8.4h target
            Worker(id="B", name="Bob"),  # 2h of 42h
        ]
        entries = weekly_hours(schedule, workers)
        warnings = hours_warnings(entries)
        assert [e.worker_id for e in warnings] == ["B", "A"]
        assert warnings[0].difference == pytest.approx(-40)
