"""Worker and schedule persistence."""

from shiftplanner.storage.json_store import JsonFileStore
from shiftplanner.storage.repositories import (
    InMemoryScheduleRepository,
    InMemoryWorkerRepository,
    ScheduleRepository,
    WorkerRepository,
)

__all__ = [
    "InMemoryScheduleRepository",
    "InMemoryWorkerRepository",
    "JsonFileStore",
    "ScheduleRepository",
    "WorkerRepository",
]
