"""Template generation and worker assignment."""

from shiftplanner.scheduling.assignment_engine import AssignmentEngine
from shiftplanner.scheduling.availability import AvailabilityValidator
from shiftplanner.scheduling.context import AssignmentContext
from shiftplanner.scheduling.scheduler import Scheduler
from shiftplanner.scheduling.scoring import (
    DEFAULT_RULES,
    ScoringRule,
    rank_candidates,
    rules_for,
    score_worker,
)
from shiftplanner.scheduling.template_generator import ShiftTemplateGenerator

__all__ = [
    "AssignmentContext",
    "AssignmentEngine",
    "AvailabilityValidator",
    "DEFAULT_RULES",
    "Scheduler",
    "ScoringRule",
    "ShiftTemplateGenerator",
    "rank_candidates",
    "rules_for",
    "score_worker",
]
