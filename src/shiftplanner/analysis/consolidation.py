"""Worker-centric consolidation and coverage-gap analysis.

The assignment engine emits one record per staffing window, so a worker
who covers opening and the lunch peak holds two back-to-back records.
This module merges such records into one block per worker and day,
reports the breaks between them, and flags days whose coverage is thin.
"""

from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from shiftplanner.domain.clock import clock_from_minutes, minutes_since_midnight
from shiftplanner.domain.models import (
    ConsolidatedWorkerShift,
    DaySummary,
    Schedule,
    Shift,
    TimeGap,
    Weekday,
    Worker,
    WorkerWeekSummary,
)
from shiftplanner.domain.policies import CoveragePolicy


def consolidate_worker_day(
    worker_id: str,
    worker_name: str,
    shift_date: date,
    shifts: Iterable[Shift],
    policy: Optional[CoveragePolicy] = None,
) -> Optional[ConsolidatedWorkerShift]:
    """Merge one worker's shifts on one date into a single block.

    The block spans from the earliest start to the latest end. Its hours
    are the span, so overlapping or adjacent records are counted once.

    Returns:
        The consolidated block, or None when there are no shifts.
    """
    policy = policy or CoveragePolicy()
    ordered = sorted(shifts, key=lambda s: (s.start_minutes, s.end_minutes))
    if not ordered:
        return None

    start_minutes = ordered[0].start_minutes
    end_minutes = max(s.end_minutes for s in ordered)

    shift_types = []
    for shift in ordered:
        label = shift.category.label
        if label not in shift_types:
            shift_types.append(label)

    gaps = []
    for current, following in zip(ordered, ordered[1:]):
        if following.start_minutes > current.end_minutes:
            gap_minutes = following.start_minutes - current.end_minutes
            if gap_minutes >= policy.min_gap_minutes:
                gaps.append(
                    TimeGap(
                        start_time=current.end_time,
                        end_time=following.start_time,
                        duration_hours=gap_minutes / 60,
                    )
                )

    return ConsolidatedWorkerShift(
        worker_id=worker_id,
        worker_name=worker_name,
        shift_date=shift_date,
        start_time=clock_from_minutes(start_minutes),
        end_time=clock_from_minutes(end_minutes),
        total_hours=(end_minutes - start_minutes) / 60,
        shift_types=shift_types,
        original_shifts=ordered,
        gaps=gaps,
    )


def analyze_coverage_gaps(
    day_shifts: Iterable[Shift],
    policy: Optional[CoveragePolicy] = None,
) -> list[str]:
    """Warnings about one day's coverage.

    Reports unassigned required shifts, and at most one low-coverage
    warning for the peak window.
    """
    policy = policy or CoveragePolicy()
    day_shifts = list(day_shifts)
    warnings = []

    unassigned_required = [s for s in day_shifts if not s.is_assigned and s.is_required]
    if unassigned_required:
        warnings.append(f"{len(unassigned_required)} required shifts unassigned")

    assigned = [s for s in day_shifts if s.is_assigned]
    peak_start = minutes_since_midnight(policy.peak_start)
    peak_end = minutes_since_midnight(policy.peak_end)

    for instant in range(peak_start, peak_end, policy.sample_minutes):
        present = {s.worker_id for s in assigned if s.start_minutes <= instant < s.end_minutes}
        if len(present) < policy.min_peak_coverage:
            warnings.append(f"Low coverage during lunch rush ({clock_from_minutes(instant)})")
            break

    return warnings


def consolidate_schedule(
    schedule: Schedule,
    workers: Iterable[Worker],
    policy: Optional[CoveragePolicy] = None,
) -> list[DaySummary]:
    """Worker-centric view of every date that has shifts, in date order."""
    policy = policy or CoveragePolicy()
    names = {w.id: w.name for w in workers}

    shifts_by_date: dict[date, list[Shift]] = defaultdict(list)
    for shift in schedule.shifts:
        shifts_by_date[shift.shift_date].append(shift)

    days = []
    for day in sorted(shifts_by_date):
        day_shifts = shifts_by_date[day]

        by_worker: dict[str, list[Shift]] = defaultdict(list)
        unassigned = []
        for shift in day_shifts:
            if shift.is_assigned:
                by_worker[shift.worker_id].append(shift)
            else:
                unassigned.append(shift)

        blocks = []
        for worker_id, worker_shifts in by_worker.items():
            block = consolidate_worker_day(
                worker_id, names.get(worker_id, worker_id), day, worker_shifts, policy
            )
            if block is not None:
                blocks.append(block)
        blocks.sort(key=lambda b: (minutes_since_midnight(b.start_time), b.worker_id))

        days.append(
            DaySummary(
                day_date=day,
                weekday=Weekday.from_date(day).label,
                worker_shifts=blocks,
                unassigned_shifts=unassigned,
                coverage_gaps=analyze_coverage_gaps(day_shifts, policy),
            )
        )

    return days


def worker_weekly_summary(worker_id: str, days: Iterable[DaySummary]) -> WorkerWeekSummary:
    """Totals for one worker across a consolidated week."""
    summary = WorkerWeekSummary(worker_id=worker_id)
    for day in days:
        for block in day.worker_shifts:
            if block.worker_id != worker_id:
                continue
            summary.total_hours += block.total_hours
            summary.days_worked += 1
            summary.longest_shift = max(summary.longest_shift, block.total_hours)
            for label in block.shift_types:
                if label not in summary.shift_types:
                    summary.shift_types.append(label)
    return summary


def block_badge(block: ConsolidatedWorkerShift, policy: Optional[CoveragePolicy] = None) -> str:
    """Short label describing what kind of day a block is."""
    policy = policy or CoveragePolicy()
    has_opening = "Opening" in block.shift_types
    has_closing = "Closing" in block.shift_types

    if has_opening and has_closing:
        return "Full Day"
    if has_opening:
        return "Opening"
    if has_closing:
        return "Closing"
    if block.total_hours >= policy.long_shift_hours:
        return "Long Shift"
    return "Regular"


def format_block(block: ConsolidatedWorkerShift) -> str:
    """One-line rendering, e.g. ``09:00 - 15:00 (6h) - Opening -> Service``."""
    time_range = f"{block.start_time} - {block.end_time}"
    hours = f"{block.total_hours:g}h"
    types = " -> ".join(block.shift_types)

    if block.gaps:
        breaks = ", ".join(f"{gap.duration_hours:g}h break" for gap in block.gaps)
        return f"{time_range} ({hours} + {breaks}) - {types}"
    return f"{time_range} ({hours}) - {types}"
