"""Plain-dict conversion of workers, store hours and schedules.

Dates are ISO ``YYYY-MM-DD`` strings, timestamps ISO 8601, enums their
values. Loading goes through the model constructors, so malformed clocks,
dates and out-of-week shifts raise the usual domain errors. Missing fields
raise ``InvalidDataError``; bad worker values raise ``InvalidWorkerError``.
"""

from datetime import datetime
from typing import Any, Optional

from shiftplanner.domain.models import (
    Schedule,
    Shift,
    ShiftCategory,
    StoreHours,
    Weekday,
    Worker,
)
from shiftplanner.errors import (
    InvalidDataError,
    InvalidDateError,
    InvalidShiftError,
    InvalidWorkerError,
)


def _timestamp_to_str(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _timestamp_from_str(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError) as exc:
        raise InvalidDateError(f"Invalid timestamp {value!r}") from exc


def _field(data: dict[str, Any], key: str, kind: str) -> Any:
    if not isinstance(data, dict):
        raise InvalidDataError(f"{kind} record must be an object, got {data!r}")
    try:
        return data[key]
    except KeyError:
        raise InvalidDataError(f"{kind} record is missing {key!r}") from None


def _weekday(value: Any, error: type[Exception]) -> Weekday:
    try:
        return Weekday(str(value).lower())
    except ValueError:
        raise error(f"Unknown weekday {value!r}") from None


def worker_to_dict(worker: Worker) -> dict[str, Any]:
    return {
        "id": worker.id,
        "name": worker.name,
        "work_percentage": worker.work_percentage,
        # Week order keeps files stable between saves.
        "available_days": [d.value for d in Weekday if d in worker.available_days],
        "holidays": sorted(d.isoformat() for d in worker.holidays),
        "is_active": worker.is_active,
        "phone": worker.phone,
        "email": worker.email,
        "created_at": _timestamp_to_str(worker.created_at),
    }


def worker_from_dict(data: dict[str, Any]) -> Worker:
    """Build a worker; missing optional fields take the model defaults.

    Raises:
        InvalidDataError: If ``id`` or ``name`` is missing.
        InvalidWorkerError: For a non-numeric percentage or an unknown weekday.
    """
    worker_id = str(_field(data, "id", "Worker"))
    name = _field(data, "name", "Worker")
    try:
        percentage = float(data.get("work_percentage", 100.0))
    except (TypeError, ValueError):
        raise InvalidWorkerError(
            f"Worker {worker_id}: work percentage must be a number, "
            f"got {data.get('work_percentage')!r}"
        ) from None
    available = data.get("available_days")
    return Worker(
        id=worker_id,
        name=name,
        work_percentage=percentage,
        available_days=(
            {_weekday(d, InvalidWorkerError) for d in available}
            if available is not None
            else set(Weekday)
        ),
        holidays=set(data.get("holidays", [])),
        is_active=data.get("is_active", True),
        phone=data.get("phone", ""),
        email=data.get("email"),
        created_at=_timestamp_from_str(data.get("created_at")),
    )


def store_hours_to_dict(hours: StoreHours) -> dict[str, Any]:
    return {
        "weekday": hours.weekday.value,
        "open_time": hours.open_time,
        "close_time": hours.close_time,
        "is_open": hours.is_open,
    }


def store_hours_from_dict(data: dict[str, Any]) -> StoreHours:
    return StoreHours(
        weekday=_weekday(_field(data, "weekday", "Store hours"), InvalidDataError),
        open_time=_field(data, "open_time", "Store hours"),
        close_time=_field(data, "close_time", "Store hours"),
        is_open=data.get("is_open", True),
    )


def shift_to_dict(shift: Shift) -> dict[str, Any]:
    return {
        "id": shift.id,
        "date": shift.shift_date.isoformat(),
        "start_time": shift.start_time,
        "end_time": shift.end_time,
        "category": shift.category.value,
        "is_required": shift.is_required,
        "worker_id": shift.worker_id,
    }


def shift_from_dict(data: dict[str, Any]) -> Shift:
    shift_id = str(_field(data, "id", "Shift"))
    category = data.get("category", ShiftCategory.REGULAR.value)
    try:
        category = ShiftCategory(category)
    except ValueError:
        raise InvalidShiftError(f"Shift {shift_id}: unknown category {category!r}") from None
    return Shift(
        id=shift_id,
        shift_date=_field(data, "date", "Shift"),
        start_time=_field(data, "start_time", "Shift"),
        end_time=_field(data, "end_time", "Shift"),
        category=category,
        is_required=data.get("is_required", True),
        worker_id=data.get("worker_id"),
    )


def schedule_to_dict(schedule: Schedule) -> dict[str, Any]:
    return {
        "id": schedule.id,
        "week_start": schedule.week_start.isoformat(),
        "shifts": [shift_to_dict(s) for s in schedule.shifts],
        "is_generated": schedule.is_generated,
        "created_at": _timestamp_to_str(schedule.created_at),
        "updated_at": _timestamp_to_str(schedule.updated_at),
        "notes": schedule.notes,
    }


def schedule_from_dict(data: dict[str, Any]) -> Schedule:
    return Schedule(
        id=str(_field(data, "id", "Schedule")),
        week_start=_field(data, "week_start", "Schedule"),
        shifts=[shift_from_dict(s) for s in data.get("shifts", [])],
        is_generated=data.get("is_generated", False),
        created_at=_timestamp_from_str(data.get("created_at")),
        updated_at=_timestamp_from_str(data.get("updated_at")),
        notes=data.get("notes", ""),
    )
