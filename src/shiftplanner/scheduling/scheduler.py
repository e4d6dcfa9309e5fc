"""Main scheduler interface.

This module provides the high-level Scheduler class that ties together
template generation, worker assignment, statistics and consolidation on
top of the worker and schedule repositories.
"""

import logging
import time
import uuid
from datetime import date, datetime
from typing import Callable, Iterable, Optional, Union

from shiftplanner.analysis.consolidation import consolidate_schedule
from shiftplanner.analysis.statistics import schedule_stats, weekly_hours
from shiftplanner.domain.clock import week_dates, week_start_for
from shiftplanner.domain.models import (
    DaySummary,
    GenerationCheck,
    GenerationOptions,
    Schedule,
    ScheduleStats,
    StoreHours,
    Weekday,
    WeeklyHoursEntry,
    Worker,
)
from shiftplanner.domain.policies import (
    AssignmentPolicy,
    CoveragePolicy,
    FeasibilityPolicy,
    HoursPolicy,
    ScoringPolicy,
    StaffingPolicy,
)
from shiftplanner.domain.store_hours import DEFAULT_STORE_HOURS, is_open_on
from shiftplanner.scheduling.assignment_engine import AssignmentEngine
from shiftplanner.scheduling.availability import AvailabilityValidator
from shiftplanner.scheduling.scoring import rules_for
from shiftplanner.scheduling.template_generator import ShiftTemplateGenerator
from shiftplanner.storage.repositories import (
    InMemoryScheduleRepository,
    ScheduleRepository,
    WorkerRepository,
)

logger = logging.getLogger(__name__)

WeekStart = Union[date, str, GenerationOptions]


def make_id(prefix: str) -> str:
    """Timestamped random id, e.g. ``shift_1704067200000_3f2a9c1be``."""
    return f"{prefix}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


class Scheduler:
    """High-level scheduler for generating weekly schedules.

    The Scheduler reads workers from a repository, derives the week's
    shift templates from the store hours, and runs the greedy assignment
    engine. Ids and timestamps come from injectable factories so runs can
    be made fully reproducible.

    Example:
        >>> scheduler = Scheduler(InMemoryWorkerRepository(workers))
        >>> check = scheduler.can_generate_schedule(date(2024, 1, 1))
        >>> schedule = scheduler.generate_schedule(date(2024, 1, 1))
        >>> stats = scheduler.get_schedule_stats(schedule)
    """

    def __init__(
        self,
        worker_repository: WorkerRepository,
        schedule_repository: Optional[ScheduleRepository] = None,
        store_hours: Iterable[StoreHours] = DEFAULT_STORE_HOURS,
        staffing_policy: Optional[StaffingPolicy] = None,
        scoring_policy: Optional[ScoringPolicy] = None,
        assignment_policy: Optional[AssignmentPolicy] = None,
        hours_policy: Optional[HoursPolicy] = None,
        coverage_policy: Optional[CoveragePolicy] = None,
        feasibility_policy: Optional[FeasibilityPolicy] = None,
        id_factory: Optional[Callable[[], str]] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize scheduler with collaborators and policies.

        Args:
            worker_repository: Source of workers.
            schedule_repository: Where schedules are saved; in-memory when
                omitted.
            store_hours: Opening hours per weekday.
            staffing_policy: Template offsets and staffing counts.
            scoring_policy: Scoring weights.
            assignment_policy: Full-time hours and overage ceiling.
            hours_policy: Tolerance for the weekly hours status.
            coverage_policy: Thresholds for consolidation and gap analysis.
            feasibility_policy: Thresholds for the pre-generation check.
            id_factory: Produces shift ids; timestamped random ids when
                omitted.
            clock: Produces ``created_at`` / ``updated_at`` timestamps.
        """
        self.worker_repository = worker_repository
        self.schedule_repository = schedule_repository or InMemoryScheduleRepository()
        self.store_hours = tuple(store_hours)
        self.staffing_policy = staffing_policy or StaffingPolicy()
        self.scoring_policy = scoring_policy or ScoringPolicy()
        self.assignment_policy = assignment_policy or AssignmentPolicy()
        self.hours_policy = hours_policy or HoursPolicy()
        self.coverage_policy = coverage_policy or CoveragePolicy()
        self.feasibility_policy = feasibility_policy or FeasibilityPolicy()
        self.id_factory = id_factory or (lambda: make_id("shift"))
        self.clock = clock

        self.template_generator = ShiftTemplateGenerator(
            store_hours=self.store_hours,
            policy=self.staffing_policy,
        )
        self.validator = AvailabilityValidator()

    def generate_schedule(
        self,
        week_start: WeekStart,
        options: Optional[GenerationOptions] = None,
    ) -> Schedule:
        """Generate a complete schedule for one week.

        Args:
            week_start: Any date in the target week (or a GenerationOptions
                carrying it). Normalized to the week's Monday.
            options: Generation options; defaults apply when omitted.

        Returns:
            An unsaved Schedule with ``is_generated`` set. Understaffed
            windows show up as unassigned required shifts.
        """
        if isinstance(week_start, GenerationOptions):
            options = week_start
            week_start = options.week_start
        monday = week_start_for(week_start)
        options = options or GenerationOptions(week_start=monday)

        if options.consider_weather:
            logger.debug("Weather data requested for week of %s; none is consulted", monday)

        workers = self.worker_repository.list_active_workers()
        templates = self.template_generator.generate()

        engine = AssignmentEngine(
            id_factory=self.id_factory,
            validator=self.validator,
            assignment_policy=self.assignment_policy,
            scoring_policy=self.scoring_policy,
            rules=rules_for(options.prioritize_work_balance),
        )
        shifts = engine.assign_week(monday, templates, workers)

        now = self.clock()
        unassigned = sum(1 for s in shifts if not s.is_assigned)
        schedule = Schedule(
            id=make_id("schedule"),
            week_start=monday,
            shifts=shifts,
            is_generated=True,
            created_at=now,
            updated_at=now,
            notes=(
                f"Generated {len(shifts)} shifts for {len(workers)} active workers"
                f" ({unassigned} unassigned)"
            ),
        )
        logger.info("Generated schedule %s for week of %s", schedule.id, monday)
        return schedule

    def can_generate_schedule(self, week_start: Union[date, str]) -> GenerationCheck:
        """Check whether the week can be staffed before generating.

        Only the absence of active workers blocks generation; every other
        issue is advisory.
        """
        monday = week_start_for(week_start)
        active = self.worker_repository.list_active_workers()

        if not active:
            return GenerationCheck(can_generate=False, issues=["No active workers available"])

        policy = self.feasibility_policy
        issues = []
        if len(active) < policy.recommended_active_workers:
            issues.append(
                f"At least {policy.recommended_active_workers} active workers are "
                "recommended for proper coverage"
            )

        for day in week_dates(monday):
            weekday = Weekday.from_date(day)
            if not is_open_on(weekday, self.store_hours):
                continue
            available = self.worker_repository.list_available_workers(day)
            if not available:
                issues.append(f"No workers available on {weekday.label} ({day.isoformat()})")
            elif len(available) < policy.recommended_daily_workers:
                issues.append(
                    f"Only {len(available)} worker available on {weekday.label} "
                    f"({day.isoformat()}) - may not cover all shifts"
                )

        return GenerationCheck(can_generate=True, issues=issues)

    def calculate_weekly_hours(self, schedule: Schedule) -> dict[str, WeeklyHoursEntry]:
        """Scheduled versus target hours for every active worker."""
        return weekly_hours(
            schedule,
            self.worker_repository.list_active_workers(),
            self.assignment_policy,
            self.hours_policy,
        )

    def get_schedule_stats(self, schedule: Schedule) -> ScheduleStats:
        return schedule_stats(schedule)

    def consolidate_for_display(
        self,
        schedule: Schedule,
        workers: Optional[Iterable[Worker]] = None,
    ) -> list[DaySummary]:
        """Worker-centric daily view of a schedule.

        Names come from ``workers`` when given, otherwise from every worker
        in the repository (inactive ones included, so old schedules still
        show names).
        """
        if workers is None:
            workers = self.worker_repository.list_workers()
        return consolidate_schedule(schedule, workers, self.coverage_policy)

    def save_schedule(self, schedule: Schedule) -> bool:
        """Persist a schedule, refreshing its ``updated_at``."""
        schedule.updated_at = self.clock()
        saved = self.schedule_repository.save(schedule)
        if not saved:
            logger.error("Failed to save schedule %s", schedule.id)
        return saved

    def get_schedule_for_week(self, week_start: Union[date, str]) -> Optional[Schedule]:
        return self.schedule_repository.find_by_week(week_start_for(week_start))

    def delete_schedule(self, schedule_id: str) -> bool:
        return self.schedule_repository.delete(schedule_id)
