"""JSON file persistence for workers and schedules.

One file holds both collections, plus optional store hours::

    {"workers": [...], "schedules": [...], "store_hours": [...]}

Writes go to a temporary sibling file that then replaces the original, so
a failed write leaves the previous contents intact.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from shiftplanner.domain.clock import parse_date
from shiftplanner.domain.models import Schedule, StoreHours, Worker
from shiftplanner.errors import InvalidDataError
from shiftplanner.storage.repositories import ScheduleRepository, WorkerRepository
from shiftplanner.storage.serialization import (
    schedule_from_dict,
    schedule_to_dict,
    store_hours_from_dict,
    store_hours_to_dict,
    worker_from_dict,
    worker_to_dict,
)

logger = logging.getLogger(__name__)


class JsonFileStore(WorkerRepository, ScheduleRepository):
    """Worker and schedule repository stored in a single JSON file.

    The file is read on every call, so edits made by other tools show up
    without reloading. A missing file behaves like an empty store.
    Malformed contents raise ``SchedulingError`` subclasses; they are never
    silently discarded.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    # Workers

    def list_workers(self) -> list[Worker]:
        return [worker_from_dict(item) for item in self._load().get("workers", [])]

    def get_worker(self, worker_id: str) -> Optional[Worker]:
        for worker in self.list_workers():
            if worker.id == worker_id:
                return worker
        return None

    def save_worker(self, worker: Worker) -> bool:
        """Insert or replace a worker by id."""
        data = self._load()
        workers = data.setdefault("workers", [])
        _upsert(workers, worker_to_dict(worker))
        return self._write(data)

    def list_store_hours(self) -> Optional[list[StoreHours]]:
        """Store hours saved in the file, or None when it has none."""
        entries = self._load().get("store_hours")
        if entries is None:
            return None
        return [store_hours_from_dict(item) for item in entries]

    def save_store_hours(self, hours: Iterable[StoreHours]) -> bool:
        """Replace the stored store-hours table."""
        data = self._load()
        data["store_hours"] = [store_hours_to_dict(h) for h in hours]
        return self._write(data)

    # Schedules

    def find_by_week(self, week_start: date) -> Optional[Schedule]:
        week_start = parse_date(week_start)
        for schedule in self.list_schedules():
            if schedule.week_start == week_start:
                return schedule
        return None

    def save(self, schedule: Schedule) -> bool:
        data = self._load()
        schedules = data.setdefault("schedules", [])
        _upsert(schedules, schedule_to_dict(schedule))
        saved = self._write(data)
        if saved:
            logger.info("Saved schedule %s for week %s", schedule.id, schedule.week_start)
        return saved

    def delete(self, schedule_id: str) -> bool:
        data = self._load()
        schedules = data.get("schedules", [])
        remaining = [s for s in schedules if str(s.get("id")) != schedule_id]
        if len(remaining) == len(schedules):
            return False
        data["schedules"] = remaining
        return self._write(data)

    def list_schedules(self) -> list[Schedule]:
        schedules = [schedule_from_dict(item) for item in self._load().get("schedules", [])]
        return sorted(schedules, key=lambda s: s.week_start)

    # File access

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        raw = self.path.read_text(encoding="utf-8").strip()
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise InvalidDataError(f"{self.path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise InvalidDataError(f"{self.path} must hold a JSON object")
        return data

    def _write(self, data: dict[str, Any]) -> bool:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
            tmp.replace(self.path)
        except OSError:
            logger.exception("Could not write %s", self.path)
            return False
        return True


def _upsert(items: list[dict[str, Any]], record: dict[str, Any]) -> None:
    for i, existing in enumerate(items):
        if str(existing.get("id")) == record["id"]:
            items[i] = record
            return
    items.append(record)
