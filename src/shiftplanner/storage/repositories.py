"""Repository interfaces and in-memory implementations.

The scheduler only talks to these interfaces. Workers and schedules are
handed out by value: callers get copies and never alias stored records.
"""

import copy
from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, Optional

from shiftplanner.domain.clock import parse_date
from shiftplanner.domain.models import Schedule, Weekday, Worker


class WorkerRepository(ABC):
    """Abstract base class for worker lookups."""

    @abstractmethod
    def list_workers(self) -> list[Worker]:
        """All workers, active or not, in stored order."""
        pass

    @abstractmethod
    def get_worker(self, worker_id: str) -> Optional[Worker]:
        """Worker by id, or None when unknown."""
        pass

    def list_active_workers(self) -> list[Worker]:
        """Active workers in stored order."""
        return [w for w in self.list_workers() if w.is_active]

    def list_available_workers(self, day: date) -> list[Worker]:
        """Active workers who work that weekday and are not on holiday."""
        weekday = Weekday.from_date(day)
        return [
            w
            for w in self.list_active_workers()
            if w.works_on(weekday) and not w.is_on_holiday(day)
        ]


class ScheduleRepository(ABC):
    """Abstract base class for schedule persistence."""

    @abstractmethod
    def find_by_week(self, week_start: date) -> Optional[Schedule]:
        """Schedule for the week starting on ``week_start``, if any."""
        pass

    @abstractmethod
    def save(self, schedule: Schedule) -> bool:
        """Insert or replace a schedule by id. Returns success."""
        pass

    @abstractmethod
    def delete(self, schedule_id: str) -> bool:
        """Remove a schedule. Returns False for unknown ids."""
        pass

    @abstractmethod
    def list_schedules(self) -> list[Schedule]:
        """All stored schedules ordered by week start."""
        pass


class InMemoryWorkerRepository(WorkerRepository):
    """Worker repository backed by a list."""

    def __init__(self, workers: Iterable[Worker] = ()):
        self._workers: list[Worker] = [copy.deepcopy(w) for w in workers]

    def add(self, worker: Worker) -> None:
        """Insert or replace a worker by id, keeping its original position."""
        stored = copy.deepcopy(worker)
        for i, existing in enumerate(self._workers):
            if existing.id == worker.id:
                self._workers[i] = stored
                return
        self._workers.append(stored)

    def remove(self, worker_id: str) -> bool:
        before = len(self._workers)
        self._workers = [w for w in self._workers if w.id != worker_id]
        return len(self._workers) < before

    def list_workers(self) -> list[Worker]:
        return [copy.deepcopy(w) for w in self._workers]

    def get_worker(self, worker_id: str) -> Optional[Worker]:
        for worker in self._workers:
            if worker.id == worker_id:
                return copy.deepcopy(worker)
        return None


class InMemoryScheduleRepository(ScheduleRepository):
    """Schedule repository backed by a dict keyed by schedule id."""

    def __init__(self, schedules: Iterable[Schedule] = ()):
        self._schedules: dict[str, Schedule] = {}
        for schedule in schedules:
            self.save(schedule)

    def find_by_week(self, week_start: date) -> Optional[Schedule]:
        week_start = parse_date(week_start)
        for schedule in self._schedules.values():
            if schedule.week_start == week_start:
                return copy.deepcopy(schedule)
        return None

    def save(self, schedule: Schedule) -> bool:
        self._schedules[schedule.id] = copy.deepcopy(schedule)
        return True

    def delete(self, schedule_id: str) -> bool:
        return self._schedules.pop(schedule_id, None) is not None

    def list_schedules(self) -> list[Schedule]:
        ordered = sorted(self._schedules.values(), key=lambda s: s.week_start)
        return [copy.deepcopy(s) for s in ordered]
