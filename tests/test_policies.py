"""Tests for scheduling policies."""

from shiftplanner.domain.models import Weekday, Worker
from shiftplanner.domain.policies import (
    AssignmentPolicy,
    CoveragePolicy,
    HoursPolicy,
    ScoringPolicy,
    StaffingPolicy,
)
from shiftplanner.scheduling.template_generator import ShiftTemplateGenerator


class TestStaffingPolicy:
    """Tests for StaffingPolicy."""

    def test_weekend_days(self):
        policy = StaffingPolicy()
        assert policy.is_weekend(Weekday.SATURDAY)
        assert policy.is_weekend(Weekday.SUNDAY)
        assert not policy.is_weekend(Weekday.FRIDAY)

    def test_long_days(self):
        policy = StaffingPolicy()
        assert [d for d in Weekday if policy.is_long_day(d)] == [
            Weekday.THURSDAY,
            Weekday.FRIDAY,
            Weekday.SATURDAY,
            Weekday.SUNDAY,
        ]

    def test_custom_long_days_drop_evening_window(self):
        """Without long days no template gets the evening peak."""
        policy = StaffingPolicy(long_days=frozenset())
        templates = ShiftTemplateGenerator(policy=policy).templates_for_day(
            Weekday.FRIDAY
        )
        assert len(templates) == 4
        assert templates[-1].max_workers == policy.closing_max

    def test_closing_allows_third_worker_every_day(self):
        generator = ShiftTemplateGenerator()
        for weekday in Weekday:
            closing = generator.templates_for_day(weekday)[-1]
            assert (closing.min_workers, closing.max_workers) == (2, 3)

    def test_custom_closing_max(self):
        policy = StaffingPolicy(closing_max=2)
        closing = ShiftTemplateGenerator(policy=policy).templates_for_day(Weekday.THURSDAY)[-1]
        assert closing.max_workers == 2

    def test_custom_opening_workers(self):
        policy = StaffingPolicy(opening_workers=2)
        opening = ShiftTemplateGenerator(policy=policy).templates_for_day(
            Weekday.MONDAY
        )[0]
        assert (opening.min_workers, opening.max_workers) == (2, 2)


class TestScoringPolicy:
    """Tests for ScoringPolicy defaults."""

    def test_headroom_bands(self):
        policy = ScoringPolicy()
        assert policy.full_headroom_bonus == 100
        assert policy.partial_headroom_bonus == 50
        assert policy.slight_overage_bonus == 20
        assert policy.overage_penalty_per_hour == 10

    def test_score_floor(self):
        assert ScoringPolicy().min_score == 0


class TestHourPolicies:
    """Tests for weekly hour targets and tolerance."""

    def test_full_time_baseline(self):
        policy = AssignmentPolicy()
        assert Worker(id="A", name="Alice").target_hours(policy.full_time_hours) == 42
        assert Worker(id="B", name="Bob", work_percentage=50).target_hours(
            policy.full_time_hours
        ) == 21

    def test_defaults(self):
        assert AssignmentPolicy().max_overage_hours == 12
        assert HoursPolicy().tolerance == 0.10


class TestCoveragePolicy:
    """Tests for CoveragePolicy defaults."""

    def test_peak_window(self):
        policy = CoveragePolicy()
        assert (policy.peak_start, policy.peak_end) == ("11:00", "15:00")
        assert policy.min_peak_coverage == 2
        assert policy.min_gap_minutes == 15
