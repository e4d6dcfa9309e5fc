"""Shift template generation from store hours.

This module derives the staffing windows for each open weekday. Every
window boundary is a fixed offset from the day's opening or closing time,
clamped so no template starts before ``open - lead`` or ends after
``close + tail``.
"""

from typing import Iterable, Optional

from shiftplanner.domain.clock import LAST_MINUTE_OF_DAY, clock_from_minutes
from shiftplanner.domain.models import (
    ShiftCategory,
    ShiftPriority,
    ShiftTemplate,
    StoreHours,
    Weekday,
)
from shiftplanner.domain.policies import StaffingPolicy
from shiftplanner.domain.store_hours import DEFAULT_STORE_HOURS, hours_for


class ShiftTemplateGenerator:
    """Builds ordered shift templates for the operating week.

    Example:
        >>> generator = ShiftTemplateGenerator()
        >>> templates = generator.generate()
        >>> [t.category.value for t in generator.templates_for_day(Weekday.MONDAY)]
        ['opening', 'regular', 'regular', 'closing']
    """

    def __init__(
        self,
        store_hours: Optional[Iterable[StoreHours]] = None,
        policy: Optional[StaffingPolicy] = None,
    ):
        self.store_hours = tuple(store_hours) if store_hours is not None else DEFAULT_STORE_HOURS
        self.policy = policy or StaffingPolicy()

    def generate(self) -> list[ShiftTemplate]:
        """Templates for every open day, Monday first."""
        templates = []
        for weekday in Weekday:
            templates.extend(self.templates_for_day(weekday))
        return templates

    def templates_for_day(self, weekday: Weekday) -> list[ShiftTemplate]:
        """Ordered templates for one weekday; empty when the store is closed."""
        hours = hours_for(weekday, self.store_hours)
        if hours is None or not hours.is_open:
            return []

        policy = self.policy
        is_weekend = policy.is_weekend(weekday)
        is_long_day = policy.is_long_day(weekday)

        open_minutes = hours.open_minutes
        earliest = max(0, open_minutes - policy.opening_lead_minutes)
        latest = min(LAST_MINUTE_OF_DAY, hours.close_minutes + policy.closing_tail_minutes)

        def clamp(minutes: int) -> int:
            return max(earliest, min(latest, minutes))

        opening_end = clamp(open_minutes + policy.opening_end_offset)
        lunch_end = clamp(open_minutes + policy.lunch_end_offset)
        afternoon_end = clamp(open_minutes + policy.afternoon_end_offset)
        evening_end = clamp(open_minutes + policy.evening_end_offset)
        closing_start = evening_end if is_long_day else afternoon_end

        windows = [
            (
                earliest,
                opening_end,
                ShiftCategory.OPENING,
                policy.opening_workers,
                policy.opening_workers,
                ShiftPriority.MEDIUM,
            ),
            (
                opening_end,
                lunch_end,
                ShiftCategory.REGULAR,
                policy.lunch_min_weekend if is_weekend else policy.lunch_min_weekday,
                policy.lunch_max_weekend if is_weekend else policy.lunch_max_weekday,
                ShiftPriority.HIGH,
            ),
            (
                lunch_end,
                afternoon_end,
                ShiftCategory.REGULAR,
                policy.afternoon_min_weekend if is_weekend else policy.afternoon_min_weekday,
                policy.afternoon_max_weekend if is_weekend else policy.afternoon_max_weekday,
                ShiftPriority.MEDIUM,
            ),
        ]

        if is_long_day:
            windows.append(
                (
                    afternoon_end,
                    evening_end,
                    ShiftCategory.REGULAR,
                    policy.evening_min_weekend if is_weekend else policy.evening_min_weekday,
                    policy.evening_max_weekend if is_weekend else policy.evening_max_weekday,
                    ShiftPriority.HIGH,
                )
            )

        windows.append(
            (
                closing_start,
                latest,
                ShiftCategory.CLOSING,
                policy.closing_min,
                policy.closing_max,
                ShiftPriority.HIGH,
            )
        )

        templates = []
        for start, end, category, min_workers, max_workers, priority in windows:
            # Short trading days can collapse a window to nothing after clamping.
            if end <= start:
                continue
            templates.append(
                ShiftTemplate(
                    weekday=weekday,
                    start_time=clock_from_minutes(start),
                    end_time=clock_from_minutes(end),
                    category=category,
                    min_workers=min_workers,
                    max_workers=max(min_workers, max_workers),
                    priority=priority,
                )
            )
        return templates
