"""Tests for the worker scoring rules."""

from datetime import date

import pytest

from shiftplanner.domain.models import ShiftCategory, ShiftTemplate, Weekday, Worker
from shiftplanner.scheduling.context import AssignmentContext
from shiftplanner.scheduling.scoring import (
    DEFAULT_RULES,
    consecutive_day_rule,
    fresh_worker_rule,
    load_balance_rule,
    rank_candidates,
    role_priority_rule,
    rules_for,
    score_worker,
    target_headroom_rule,
)

MONDAY = date(2024, 1, 15)


@pytest.fixture
def context():
    ctx = AssignmentContext()
    ctx.begin_day(MONDAY)
    return ctx


def make_template(start="11:00", end="15:00", category=ShiftCategory.REGULAR) -> ShiftTemplate:
    """Helper to create a Monday template."""
    return ShiftTemplate(
        weekday=Weekday.MONDAY,
        start_time=start,
        end_time=end,
        category=category,
        min_workers=1,
        max_workers=2,
    )


class TestTargetHeadroomRule:
    """Bands of the target-hours rule (target 21h for a 50% worker)."""

    @pytest.fixture
    def worker(self):
        return Worker(id="w", name="Half", work_percentage=50)

    def test_full_headroom(self, worker, context):
        context.hours_by_worker["w"] = 19.0
        assert target_headroom_rule(worker, make_template("09:00", "11:00"), context) == 100

    def test_partial_headroom(self, worker, context):
        context.hours_by_worker["w"] = 20.0
        assert target_headroom_rule(worker, make_template(), context) == 50

    def test_slight_overage(self, worker, context):
        context.hours_by_worker["w"] = 21.0
        assert target_headroom_rule(worker, make_template("09:00", "11:00"), context) == 20

    def test_moderate_overage(self, worker, context):
        context.hours_by_worker["w"] = 22.0
        assert target_headroom_rule(worker, make_template(), context) == 0

    def test_penalty_beyond_moderate(self, worker, context):
        context.hours_by_worker["w"] = 30.0
        # 34h against a 21h target: 13h over.
        assert target_headroom_rule(worker, make_template(), context) == pytest.approx(-130)


class TestOtherRules:
    """Tests for the remaining rules."""

    def test_load_balance_fresh_worker(self, context):
        worker = Worker(id="w", name="Full")
        assert load_balance_rule(worker, make_template(), context) == 50

    def test_load_balance_half_loaded(self, context):
        worker = Worker(id="w", name="Full")
        context.hours_by_worker["w"] = 21.0
        assert load_balance_rule(worker, make_template(), context) == pytest.approx(25)

    def test_load_balance_zero_target(self, context):
        """A zero target divides by one instead."""
        worker = Worker(id="w", name="Zero", work_percentage=0)
        context.hours_by_worker["w"] = 2.0
        assert load_balance_rule(worker, make_template(), context) == pytest.approx(-50)

    def test_role_priority_only_for_opening_and_closing(self, context):
        worker = Worker(id="w", name="Full", work_percentage=80)
        assert role_priority_rule(worker, make_template(), context) == 0
        opening = make_template("09:00", "11:00", ShiftCategory.OPENING)
        closing = make_template("17:00", "20:30", ShiftCategory.CLOSING)
        assert role_priority_rule(worker, opening, context) == pytest.approx(24)
        assert role_priority_rule(worker, closing, context) == pytest.approx(24)

    def test_consecutive_day_penalty(self, context):
        worker = Worker(id="w", name="Full")
        assert consecutive_day_rule(worker, make_template(), context) == 0
        context.dates_by_worker["w"].add(date(2024, 1, 14))
        assert consecutive_day_rule(worker, make_template(), context) == -15

    def test_consecutive_day_ignores_same_day(self, context):
        worker = Worker(id="w", name="Full")
        context.dates_by_worker["w"].add(MONDAY)
        assert consecutive_day_rule(worker, make_template(), context) == 0

    def test_fresh_worker_bonus(self, context):
        worker = Worker(id="w", name="Full")
        assert fresh_worker_rule(worker, make_template(), context) == 25
        context.hours_by_worker["w"] = 2.0
        assert fresh_worker_rule(worker, make_template(), context) == 0


class TestScoreWorker:
    """Tests for the summed score."""

    def test_fresh_full_time_worker_on_regular_window(self, context):
        worker = Worker(id="w", name="Full")
        # 100 base + 100 headroom + 50 balance + 25 fresh
        assert score_worker(worker, make_template(), context) == pytest.approx(275)

    def test_fresh_full_time_worker_on_opening(self, context):
        worker = Worker(id="w", name="Full")
        opening = make_template("09:00", "11:00", ShiftCategory.OPENING)
        assert score_worker(worker, opening, context) == pytest.approx(305)

    def test_score_floored_at_zero(self, context):
        worker = Worker(id="w", name="Half", work_percentage=50)
        context.hours_by_worker["w"] = 60.0
        assert score_worker(worker, make_template(), context) == 0

    def test_rules_for_without_balance(self):
        assert rules_for(True) == DEFAULT_RULES
        reduced = rules_for(False)
        assert load_balance_rule not in reduced
        assert len(reduced) == len(DEFAULT_RULES) - 1

    def test_custom_rule_chain(self, context):
        worker = Worker(id="w", name="Full")
        assert score_worker(worker, make_template(), context, rules=[fresh_worker_rule]) == 125


class TestRankCandidates:
    """Tests for candidate ordering."""

    def test_higher_score_first(self, context):
        busy = Worker(id="busy", name="Busy")
        idle = Worker(id="idle", name="Idle")
        context.hours_by_worker["busy"] = 30.0
        ranked = rank_candidates([busy, idle], make_template(), context)
        assert [w.id for w, _ in ranked] == ["idle", "busy"]

    def test_ties_keep_candidate_order(self, context):
        a = Worker(id="a", name="A")
        b = Worker(id="b", name="B")
        assert [w.id for w, _ in rank_candidates([a, b], make_template(), context)] == ["a", "b"]
        assert [w.id for w, _ in rank_candidates([b, a], make_template(), context)] == ["b", "a"]
