"""Greedy assignment of workers to shift templates.

The engine walks the week day by day and each day's templates in order.
For every template it:
1. Filters eligible workers (active, available, no overlapping shift)
2. Scores them with the rule chain and sorts best first
3. Assigns the top candidates up to the template's capacity
4. Backfills unassigned placeholders so minimum coverage always exists
"""

import logging
from datetime import date
from typing import Callable, Optional, Sequence

from shiftplanner.domain.clock import week_dates
from shiftplanner.domain.models import (
    Shift,
    ShiftPriority,
    ShiftTemplate,
    Weekday,
    Worker,
)
from shiftplanner.domain.policies import AssignmentPolicy, ScoringPolicy
from shiftplanner.scheduling.availability import AvailabilityValidator
from shiftplanner.scheduling.context import AssignmentContext
from shiftplanner.scheduling.scoring import DEFAULT_RULES, ScoringRule, rank_candidates

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]


class AssignmentEngine:
    """Deterministic greedy engine that turns templates into shift records.

    Identical workers and templates always give the same assignment
    pattern; only the ids produced by ``id_factory`` can differ between
    runs.

    Example:
        >>> engine = AssignmentEngine(id_factory=lambda: "shift")
        >>> shifts = engine.assign_week(date(2024, 1, 1), templates, workers)
    """

    def __init__(
        self,
        id_factory: IdFactory,
        validator: Optional[AvailabilityValidator] = None,
        assignment_policy: Optional[AssignmentPolicy] = None,
        scoring_policy: Optional[ScoringPolicy] = None,
        rules: Sequence[ScoringRule] = DEFAULT_RULES,
    ):
        self.id_factory = id_factory
        self.validator = validator or AvailabilityValidator()
        self.assignment_policy = assignment_policy or AssignmentPolicy()
        self.scoring_policy = scoring_policy or ScoringPolicy()
        self.rules = tuple(rules)

    def new_context(self) -> AssignmentContext:
        """Fresh accumulator for one generation pass."""
        return AssignmentContext(
            assignment_policy=self.assignment_policy,
            scoring_policy=self.scoring_policy,
        )

    def assign_week(
        self,
        week_start: date,
        templates: Sequence[ShiftTemplate],
        workers: Sequence[Worker],
    ) -> list[Shift]:
        """Fill every template of the week starting at ``week_start``.

        Args:
            week_start: Monday of the week.
            templates: Templates for the whole week (any order across days,
                in fill order within a day).
            workers: Candidate pool in priority order; not mutated.

        Returns:
            All shift records, day by day and template by template.
        """
        context = self.new_context()

        for day in week_dates(week_start):
            weekday = Weekday.from_date(day)
            day_templates = [t for t in templates if t.weekday == weekday]
            if not day_templates:
                continue

            context.begin_day(day)
            for template in day_templates:
                self.assign_template(template, day, workers, context)

        logger.info(
            "Assigned week of %s: %d shifts, %d unassigned",
            week_start,
            len(context.shifts),
            sum(1 for s in context.shifts if not s.is_assigned),
        )
        return list(context.shifts)

    def assign_template(
        self,
        template: ShiftTemplate,
        day: date,
        workers: Sequence[Worker],
        context: AssignmentContext,
    ) -> list[Shift]:
        """Fill one template on one date and record the result in ``context``.

        Returns:
            The shift records emitted for this template; never fewer than
            ``template.min_workers``.
        """
        context.begin_day(day)
        assigned_ids: set[str] = set()
        emitted: list[Shift] = []

        candidates = self._eligible_workers(template, day, workers, context, assigned_ids)

        if not candidates:
            logger.warning(
                "No eligible workers for %s %s-%s on %s",
                template.category.value,
                template.start_time,
                template.end_time,
                day,
            )
            for _ in range(template.min_workers):
                emitted.append(self._emit(template, day, None, True, context))
            return emitted

        ranked = rank_candidates(candidates, template, context, self.rules)
        workers_to_assign = self._workers_to_assign(template, len(candidates))
        shift_hours = template.duration_hours
        max_overage = self.assignment_policy.max_overage_hours

        assigned_count = 0
        for worker, score in ranked[:workers_to_assign]:
            new_total = context.current_hours(worker.id) + shift_hours
            overage = new_total - context.target_hours(worker)
            if overage > max_overage and assigned_count >= template.min_workers:
                logger.debug(
                    "Skipping %s for %s on %s: %.1fh over target",
                    worker.id,
                    template.start_time,
                    day,
                    overage,
                )
                continue

            is_required = assigned_count < template.min_workers
            emitted.append(self._emit(template, day, worker.id, is_required, context))
            assigned_ids.add(worker.id)
            assigned_count += 1
            logger.debug(
                "Assigned %s to %s %s-%s on %s (score %.1f)",
                worker.id,
                template.category.value,
                template.start_time,
                template.end_time,
                day,
                score,
            )

        shortfall = template.min_workers - assigned_count
        if shortfall > 0:
            logger.warning(
                "%s %s-%s on %s is short %d worker(s)",
                template.category.value,
                template.start_time,
                template.end_time,
                day,
                shortfall,
            )
        for _ in range(shortfall):
            emitted.append(self._emit(template, day, None, True, context))

        return emitted

    def _eligible_workers(
        self,
        template: ShiftTemplate,
        day: date,
        workers: Sequence[Worker],
        context: AssignmentContext,
        assigned_ids: set[str],
    ) -> list[Worker]:
        """Active workers with a positive percentage who can take the window."""
        return [
            worker
            for worker in workers
            if worker.id not in assigned_ids
            and worker.is_active
            and worker.work_percentage > 0
            and self.validator.can_assign_window(
                worker,
                day,
                template.start_minutes,
                template.end_minutes,
                context.shifts,
            )
        ]

    @staticmethod
    def _workers_to_assign(template: ShiftTemplate, candidate_count: int) -> int:
        """How many ranked candidates to walk for a template.

        High-priority windows fill as many slots as there are candidates,
        up to the maximum.
        """
        if template.priority == ShiftPriority.HIGH:
            return min(template.max_workers, candidate_count)
        return min(template.max_workers, max(template.min_workers, candidate_count))

    def _emit(
        self,
        template: ShiftTemplate,
        day: date,
        worker_id: Optional[str],
        is_required: bool,
        context: AssignmentContext,
    ) -> Shift:
        shift = Shift(
            id=self.id_factory(),
            shift_date=day,
            start_time=template.start_time,
            end_time=template.end_time,
            category=template.category,
            is_required=is_required,
            worker_id=worker_id,
        )
        context.record(shift)
        return shift
