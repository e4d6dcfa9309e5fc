"""Running state for a single schedule generation pass."""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from shiftplanner.domain.clock import next_day, previous_day
from shiftplanner.domain.models import Shift, Worker
from shiftplanner.domain.policies import AssignmentPolicy, ScoringPolicy


@dataclass
class AssignmentContext:
    """Accumulator threaded through the day/template iteration.

    A context belongs to exactly one ``generate`` call. It starts empty,
    collects every shift record as it is emitted, and keeps the running
    weekly hours of each worker so the scoring rules can read them.

    Attributes:
        assignment_policy: Full-time baseline and overage ceiling.
        scoring_policy: Weights read by the scoring rules.
        current_date: Date whose templates are being filled.
        shifts: Shift records emitted so far, in emission order.
        hours_by_worker: Assigned hours per worker so far this week.
        dates_by_worker: Dates each worker already has a shift on.
    """

    assignment_policy: AssignmentPolicy = field(default_factory=AssignmentPolicy)
    scoring_policy: ScoringPolicy = field(default_factory=ScoringPolicy)
    current_date: Optional[date] = None
    shifts: list[Shift] = field(default_factory=list)
    hours_by_worker: dict[str, float] = field(default_factory=lambda: defaultdict(float))
    dates_by_worker: dict[str, set[date]] = field(default_factory=lambda: defaultdict(set))

    def begin_day(self, day: date) -> None:
        """Move on to filling the templates of ``day``."""
        self.current_date = day

    def current_hours(self, worker_id: str) -> float:
        """Hours assigned to the worker so far this week."""
        return self.hours_by_worker.get(worker_id, 0.0)

    def target_hours(self, worker: Worker) -> float:
        return worker.target_hours(self.assignment_policy.full_time_hours)

    def works_adjacent_day(self, worker_id: str, day: date) -> bool:
        """True if the worker already has a shift the day before or after."""
        worked = self.dates_by_worker.get(worker_id, set())
        return previous_day(day) in worked or next_day(day) in worked

    def record(self, shift: Shift) -> None:
        """Add an emitted shift and update the running totals."""
        self.shifts.append(shift)
        if shift.worker_id is not None:
            self.hours_by_worker[shift.worker_id] += shift.duration_hours
            self.dates_by_worker[shift.worker_id].add(shift.shift_date)
