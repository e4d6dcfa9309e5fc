"""Schedule statistics and weekly hour totals."""

from typing import Iterable, Optional

from shiftplanner.domain.models import (
    HoursStatus,
    Schedule,
    ScheduleStats,
    WeeklyHoursEntry,
    Worker,
)
from shiftplanner.domain.policies import AssignmentPolicy, HoursPolicy


def hours_status(scheduled: float, target: float, tolerance: float = 0.10) -> HoursStatus:
    """Classify scheduled hours against a target.

    Within ``tolerance * target`` of the target counts as on target.
    """
    difference = scheduled - target
    if abs(difference) <= target * tolerance:
        return HoursStatus.TARGET
    return HoursStatus.OVER if difference > 0 else HoursStatus.UNDER


def schedule_stats(schedule: Schedule) -> ScheduleStats:
    """Shift counts and hour totals for a schedule.

    ``total_hours`` covers every shift, assigned or not; the per-worker
    average only counts assigned hours.
    """
    assigned = [s for s in schedule.shifts if s.is_assigned]
    total_hours = sum(s.duration_hours for s in schedule.shifts)
    assigned_hours = sum(s.duration_hours for s in assigned)
    worker_count = len({s.worker_id for s in assigned})

    return ScheduleStats(
        total_shifts=len(schedule.shifts),
        assigned_shifts=len(assigned),
        unassigned_shifts=len(schedule.shifts) - len(assigned),
        total_hours=total_hours,
        worker_count=worker_count,
        avg_hours_per_worker=assigned_hours / worker_count if worker_count else 0.0,
    )


def weekly_hours(
    schedule: Schedule,
    workers: Iterable[Worker],
    assignment_policy: Optional[AssignmentPolicy] = None,
    hours_policy: Optional[HoursPolicy] = None,
) -> dict[str, WeeklyHoursEntry]:
    """Scheduled versus target hours for every active worker.

    Workers without shifts get an entry with zero scheduled hours. Shifts
    assigned to workers outside the active set are ignored.
    """
    assignment_policy = assignment_policy or AssignmentPolicy()
    hours_policy = hours_policy or HoursPolicy()

    entries: dict[str, WeeklyHoursEntry] = {}
    for worker in workers:
        if not worker.is_active:
            continue
        entries[worker.id] = WeeklyHoursEntry(
            worker_id=worker.id,
            scheduled=0.0,
            target=worker.target_hours(assignment_policy.full_time_hours),
        )

    for shift in schedule.shifts:
        entry = entries.get(shift.worker_id) if shift.worker_id else None
        if entry is not None:
            entry.scheduled += shift.duration_hours

    for entry in entries.values():
        entry.status = hours_status(entry.scheduled, entry.target, hours_policy.tolerance)

    return entries


def hours_warnings(entries: dict[str, WeeklyHoursEntry]) -> list[WeeklyHoursEntry]:
    """Entries off target, largest absolute difference first."""
    off_target = [e for e in entries.values() if e.status != HoursStatus.TARGET]
    return sorted(off_target, key=lambda e: abs(e.difference), reverse=True)
