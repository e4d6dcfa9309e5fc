"""PDF generation for weekly schedule output.

This module creates printable PDF schedules showing:
- One page per day with each worker's consolidated block on a timeline
- Open (unassigned) slots and coverage warnings for the day
- A weekly hours summary page
"""

from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from shiftplanner.analysis.consolidation import block_badge, consolidate_schedule
from shiftplanner.analysis.statistics import schedule_stats
from shiftplanner.domain.clock import minutes_since_midnight
from shiftplanner.domain.models import (
    ConsolidatedWorkerShift,
    DaySummary,
    HoursStatus,
    Schedule,
    ShiftCategory,
    WeeklyHoursEntry,
    Worker,
)

# Color definitions (RGB tuples, 0-1 scale)
COLORS = {
    ShiftCategory.OPENING: (0.95, 0.75, 0.35),  # Amber
    ShiftCategory.REGULAR: (0.45, 0.65, 0.85),  # Blue
    ShiftCategory.CLOSING: (0.6, 0.45, 0.75),  # Purple
    "unassigned": (0.95, 0.55, 0.55),  # Red
    "timeline": (0.95, 0.95, 0.95),  # Light gray
}

STATUS_COLORS = {
    HoursStatus.UNDER: (0.8, 0.5, 0.1),
    HoursStatus.TARGET: (0.2, 0.6, 0.2),
    HoursStatus.OVER: (0.8, 0.2, 0.2),
}

# Timeline bounds in minutes since midnight.
TIMELINE_START = 8 * 60
TIMELINE_END = 22 * 60


def _require_reportlab():
    try:
        from reportlab.lib.pagesizes import landscape, letter
        from reportlab.pdfgen import canvas
    except ImportError:
        raise ImportError(
            "reportlab is required for PDF generation. "
            "Install with: pip install reportlab"
        )
    return canvas, landscape(letter)


class PDFGenerator:
    """Generates printable weekly schedule PDFs.

    Example:
        >>> generator = PDFGenerator()
        >>> generator.generate(schedule, workers, "week.pdf", weekly_hours=hours)
    """

    def __init__(
        self,
        page_width: float = 792,  # Letter landscape width (11")
        page_height: float = 612,  # Letter landscape height (8.5")
        margin: float = 36,  # 0.5 inch margins
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin

    def generate(
        self,
        schedule: Schedule,
        workers: list[Worker],
        output_path: Union[str, Path],
        weekly_hours: Optional[dict[str, WeeklyHoursEntry]] = None,
    ) -> None:
        """Generate PDF schedule and save to file.

        Args:
            schedule: The week to render.
            workers: Workers used for display names.
            output_path: Path to save the PDF.
            weekly_hours: When given, a summary page with per-worker hours
                is appended.
        """
        canvas, pagesize = _require_reportlab()
        c = canvas.Canvas(str(output_path), pagesize=pagesize)
        self._draw(c, schedule, workers, weekly_hours)
        c.save()

    def generate_to_buffer(
        self,
        schedule: Schedule,
        workers: list[Worker],
        weekly_hours: Optional[dict[str, WeeklyHoursEntry]] = None,
    ) -> BytesIO:
        """Generate PDF and return as bytes buffer."""
        canvas, pagesize = _require_reportlab()
        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=pagesize)
        self._draw(c, schedule, workers, weekly_hours)
        c.save()
        buffer.seek(0)
        return buffer

    def _draw(
        self,
        c,
        schedule: Schedule,
        workers: list[Worker],
        weekly_hours: Optional[dict[str, WeeklyHoursEntry]],
    ) -> None:
        days = consolidate_schedule(schedule, workers)
        if not days:
            self._draw_empty_page(c, schedule)
        for day in days:
            self._draw_day_page(c, schedule, day)
        if weekly_hours is not None:
            names = {w.id: w.name for w in workers}
            self._draw_summary_page(c, schedule, weekly_hours, names)

    def _draw_header(self, c, title: str, subtitle: str) -> None:
        c.setFont("Helvetica-Bold", 16)
        c.drawString(self.margin, self.page_height - self.margin - 20, title)
        c.setFont("Helvetica", 10)
        c.drawString(self.margin, self.page_height - self.margin - 35, subtitle)

    def _draw_empty_page(self, c, schedule: Schedule) -> None:
        self._draw_header(
            c,
            f"Weekly Schedule - {schedule.week_start.strftime('%B %d, %Y')}",
            "No shifts scheduled",
        )
        c.showPage()

    def _draw_day_page(self, c, schedule: Schedule, day: DaySummary) -> None:
        """Draw one day: a row per worker block, then open slots and warnings."""
        header_height = 60
        row_height = 24

        self._draw_header(
            c,
            f"{day.weekday}, {day.day_date.strftime('%B %d, %Y')}",
            f"Week of {schedule.week_start.strftime('%B %d, %Y')} - "
            f"{len(day.worker_shifts)} workers, {len(day.unassigned_shifts)} open slots",
        )

        timeline_left = self.margin + 140  # Space for names
        timeline_width = self.page_width - self.margin - 20 - timeline_left
        y = self.page_height - self.margin - header_height - 20
        self._draw_time_axis(c, timeline_left, y, timeline_width)

        y -= 10
        for block in day.worker_shifts:
            y -= row_height
            if y < self.margin + 60:
                break
            self._draw_block_row(c, block, timeline_left, timeline_width, y, row_height - 4)

        for shift in day.unassigned_shifts:
            y -= row_height
            if y < self.margin + 60:
                break
            c.setFillColorRGB(0, 0, 0)
            c.setFont("Helvetica-Oblique", 9)
            label = "Open (required)" if shift.is_required else "Open"
            c.drawString(self.margin, y + 7, label)
            self._draw_span(
                c,
                shift.start_minutes,
                shift.end_minutes,
                COLORS["unassigned"],
                timeline_left,
                timeline_width,
                y,
                row_height - 4,
            )

        c.setFillColorRGB(0.7, 0.1, 0.1)
        c.setFont("Helvetica", 9)
        warning_y = self.margin + 30
        for warning in day.coverage_gaps:
            c.drawString(self.margin, warning_y, f"! {warning}")
            warning_y -= 12

        self._draw_legend(c, self.margin, self.margin + 45)
        c.showPage()

    def _draw_time_axis(self, c, x: float, y: float, width: float) -> None:
        """Draw time axis with hour markers."""
        c.setFont("Helvetica", 8)
        c.setStrokeColorRGB(0.7, 0.7, 0.7)
        c.setFillColorRGB(0, 0, 0)
        span = TIMELINE_END - TIMELINE_START
        for minute in range(TIMELINE_START, TIMELINE_END + 1, 60):
            tick_x = x + (minute - TIMELINE_START) / span * width
            c.line(tick_x, y, tick_x, y - 5)
            c.drawCentredString(tick_x, y + 5, f"{minute // 60:02d}")

    def _draw_span(
        self,
        c,
        start: int,
        end: int,
        color: tuple,
        timeline_x: float,
        timeline_width: float,
        y: float,
        height: float,
    ) -> None:
        span = TIMELINE_END - TIMELINE_START
        start = min(max(start, TIMELINE_START), TIMELINE_END)
        end = min(max(end, TIMELINE_START), TIMELINE_END)
        bx = timeline_x + (start - TIMELINE_START) / span * timeline_width
        bw = (end - start) / span * timeline_width
        c.setFillColorRGB(*color)
        c.rect(bx, y, bw, height, fill=1, stroke=0)

    def _draw_block_row(
        self,
        c,
        block: ConsolidatedWorkerShift,
        timeline_x: float,
        timeline_width: float,
        y: float,
        height: float,
    ) -> None:
        """Draw a single worker's block with each underlying shift colored."""
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica", 9)
        c.drawString(self.margin, y + height / 2 - 1, block.worker_name[:22])
        c.setFont("Helvetica", 7)
        c.drawString(
            self.margin,
            y + height / 2 - 9,
            f"{block.start_time}-{block.end_time} {block.total_hours:g}h {block_badge(block)}",
        )

        c.setFillColorRGB(*COLORS["timeline"])
        c.rect(timeline_x, y, timeline_width, height, fill=1, stroke=0)

        for shift in block.original_shifts:
            self._draw_span(
                c,
                shift.start_minutes,
                shift.end_minutes,
                COLORS[shift.category],
                timeline_x,
                timeline_width,
                y,
                height,
            )

        # Outline the whole block so breaks read as gaps inside it.
        span = TIMELINE_END - TIMELINE_START
        start = minutes_since_midnight(block.start_time)
        end = minutes_since_midnight(block.end_time)
        c.setStrokeColorRGB(0.3, 0.3, 0.3)
        c.setLineWidth(0.5)
        c.rect(
            timeline_x + (start - TIMELINE_START) / span * timeline_width,
            y,
            (end - start) / span * timeline_width,
            height,
            fill=0,
            stroke=1,
        )

    def _draw_legend(self, c, x: float, y: float) -> None:
        """Draw legend for colors."""
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 8)
        c.drawString(x, y, "Legend:")

        items = [
            (ShiftCategory.OPENING, ShiftCategory.OPENING.label),
            (ShiftCategory.REGULAR, ShiftCategory.REGULAR.label),
            (ShiftCategory.CLOSING, ShiftCategory.CLOSING.label),
            ("unassigned", "Open slot"),
        ]

        c.setFont("Helvetica", 7)
        current_x = x + 45
        for key, label in items:
            c.setFillColorRGB(*COLORS[key])
            c.rect(current_x, y - 2, 12, 10, fill=1, stroke=1)
            c.setFillColorRGB(0, 0, 0)
            c.drawString(current_x + 15, y, label)
            current_x += 70

    def _draw_summary_page(
        self,
        c,
        schedule: Schedule,
        weekly_hours: dict[str, WeeklyHoursEntry],
        names: dict[str, str],
    ) -> None:
        """Draw summary page with schedule totals and per-worker hours."""
        self._draw_header(
            c,
            f"Weekly Summary - {schedule.week_start.strftime('%B %d, %Y')}",
            f"{schedule.week_start.isoformat()} to {schedule.week_end.isoformat()}",
        )

        stats = schedule_stats(schedule)
        y = self.page_height - self.margin - 70
        c.setFont("Helvetica-Bold", 12)
        c.drawString(self.margin, y, "Overview")
        y -= 20

        c.setFont("Helvetica", 10)
        for line in (
            f"Total Shifts: {stats.total_shifts}",
            f"Assigned: {stats.assigned_shifts}   Unassigned: {stats.unassigned_shifts}",
            f"Total Hours: {stats.total_hours:.1f}",
            f"Workers: {stats.worker_count}   Avg Hours/Worker: {stats.avg_hours_per_worker:.1f}",
        ):
            c.drawString(self.margin + 20, y, line)
            y -= 15

        y -= 20
        c.setFont("Helvetica-Bold", 12)
        c.drawString(self.margin, y, "Hours by Worker")
        y -= 18

        c.setFont("Helvetica-Bold", 9)
        columns = (self.margin + 20, self.margin + 200, self.margin + 280, self.margin + 360)
        for col, title in zip(columns, ("Worker", "Scheduled", "Target", "Status")):
            c.drawString(col, y, title)
        y -= 14

        c.setFont("Helvetica", 9)
        ordered = sorted(weekly_hours.values(), key=lambda e: names.get(e.worker_id, e.worker_id))
        for entry in ordered:
            if y < self.margin:
                break
            c.setFillColorRGB(0, 0, 0)
            c.drawString(columns[0], y, names.get(entry.worker_id, entry.worker_id)[:30])
            c.drawString(columns[1], y, f"{entry.scheduled:.1f}h")
            c.drawString(columns[2], y, f"{entry.target:.1f}h")
            c.setFillColorRGB(*STATUS_COLORS[entry.status])
            c.drawString(columns[3], y, entry.status.value)
            y -= 13

        c.showPage()
