"""Plain-text weekly report.

This module renders a schedule as text showing:
- Schedule totals
- Each day's consolidated worker blocks, open slots and coverage warnings
- Weekly hours per worker, with off-target workers flagged
"""

from pathlib import Path
from typing import Optional, Union

from shiftplanner.analysis.consolidation import (
    block_badge,
    consolidate_schedule,
    format_block,
    worker_weekly_summary,
)
from shiftplanner.analysis.statistics import hours_warnings, schedule_stats
from shiftplanner.domain.models import HoursStatus, Schedule, WeeklyHoursEntry, Worker


class TextReportGenerator:
    """Generates a human-readable weekly report.

    Example:
        >>> report = TextReportGenerator().generate_to_string(schedule, workers)
        >>> print(report)
    """

    def generate(
        self,
        schedule: Schedule,
        workers: list[Worker],
        output_path: Union[str, Path],
        weekly_hours: Optional[dict[str, WeeklyHoursEntry]] = None,
    ) -> str:
        """Render the report and save it to ``output_path``.

        Returns:
            The generated text content.
        """
        content = self.generate_to_string(schedule, workers, weekly_hours)
        Path(output_path).write_text(content, encoding="utf-8")
        return content

    def generate_to_string(
        self,
        schedule: Schedule,
        workers: list[Worker],
        weekly_hours: Optional[dict[str, WeeklyHoursEntry]] = None,
    ) -> str:
        names = {w.id: w.name for w in workers}
        days = consolidate_schedule(schedule, workers)
        stats = schedule_stats(schedule)
        lines = []

        lines.append("=" * 80)
        lines.append(f"WEEKLY SCHEDULE - {schedule.week_start} to {schedule.week_end}")
        lines.append("=" * 80)
        lines.append("")
        lines.append(f"Total Shifts: {stats.total_shifts}")
        lines.append(f"Assigned: {stats.assigned_shifts}   Unassigned: {stats.unassigned_shifts}")
        lines.append(f"Total Hours: {stats.total_hours:.1f}")
        lines.append(
            f"Workers: {stats.worker_count}   "
            f"Avg Hours/Worker: {stats.avg_hours_per_worker:.1f}"
        )
        if schedule.notes:
            lines.append(f"Notes: {schedule.notes}")
        lines.append("")

        for day in days:
            lines.append("-" * 80)
            lines.append(f"{day.weekday.upper()} {day.day_date.isoformat()}")
            lines.append("-" * 80)
            for block in day.worker_shifts:
                lines.append(
                    f"  {block.worker_name[:20]:<20} {format_block(block)} [{block_badge(block)}]"
                )
            for shift in day.unassigned_shifts:
                marker = "required" if shift.is_required else "optional"
                lines.append(
                    f"  {'(open)':<20} {shift.start_time} - {shift.end_time} "
                    f"{shift.category.label} ({marker})"
                )
            for warning in day.coverage_gaps:
                lines.append(f"  ! {warning}")
            lines.append("")

        if weekly_hours is not None:
            lines.append("-" * 80)
            lines.append("WEEKLY HOURS")
            lines.append("-" * 80)
            lines.append(
                f"{'Worker':<20} {'Scheduled':>10} {'Target':>8} {'Days':>5} "
                f"{'Longest':>8} {'Status':>8}"
            )
            ordered = sorted(weekly_hours.values(), key=lambda e: names.get(e.worker_id, e.worker_id))
            for entry in ordered:
                summary = worker_weekly_summary(entry.worker_id, days)
                lines.append(
                    f"{names.get(entry.worker_id, entry.worker_id)[:20]:<20} "
                    f"{entry.scheduled:>9.1f}h {entry.target:>7.1f}h {summary.days_worked:>5} "
                    f"{summary.longest_shift:>7.1f}h {entry.status.value:>8}"
                )

            off_target = hours_warnings(weekly_hours)
            if off_target:
                lines.append("")
                lines.append("Off target:")
                for entry in off_target:
                    direction = "over" if entry.status == HoursStatus.OVER else "under"
                    lines.append(
                        f"  {names.get(entry.worker_id, entry.worker_id)}: "
                        f"{abs(entry.difference):.1f}h {direction}"
                    )
            lines.append("")

        return "\n".join(lines)
