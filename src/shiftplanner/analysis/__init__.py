"""Read-only passes over generated schedules."""

from shiftplanner.analysis.consolidation import (
    analyze_coverage_gaps,
    block_badge,
    consolidate_schedule,
    consolidate_worker_day,
    format_block,
    worker_weekly_summary,
)
from shiftplanner.analysis.statistics import (
    hours_status,
    hours_warnings,
    schedule_stats,
    weekly_hours,
)

__all__ = [
    # Consolidation
    "analyze_coverage_gaps",
    "block_badge",
    "consolidate_schedule",
    "consolidate_worker_day",
    "format_block",
    "worker_weekly_summary",
    # Statistics
    "hours_status",
    "hours_warnings",
    "schedule_stats",
    "weekly_hours",
]
