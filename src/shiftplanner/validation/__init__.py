"""Validation of schedules and worker records."""

from shiftplanner.validation.validator import (
    FieldError,
    ScheduleValidator,
    ValidationError,
    ValidationErrorType,
    ValidationResult,
    validate_worker,
)

__all__ = [
    "FieldError",
    "ScheduleValidator",
    "ValidationError",
    "ValidationErrorType",
    "ValidationResult",
    "validate_worker",
]
