"""Tests for repositories, serialization and the JSON store."""

import json
import logging
from datetime import date, datetime

import pytest

from shiftplanner.domain.models import Schedule, Shift, ShiftCategory, StoreHours, Weekday, Worker
from shiftplanner.domain.store_hours import DEFAULT_STORE_HOURS
from shiftplanner.errors import (
    InvalidDataError,
    InvalidShiftError,
    InvalidTimeError,
    InvalidWorkerError,
    SchedulingError,
)
from shiftplanner.storage.json_store import JsonFileStore
from shiftplanner.storage.repositories import (
    InMemoryScheduleRepository,
    InMemoryWorkerRepository,
)
from shiftplanner.storage.serialization import schedule_from_dict, worker_from_dict

MONDAY = date(2024, 1, 15)


def make_schedule(id="sch1", week_start=MONDAY) -> Schedule:
    return Schedule(
        id=id,
        week_start=week_start,
        shifts=[
            Shift(
                id=f"{id}-s1",
                shift_date=week_start,
                start_time="09:00",
                end_time="11:00",
                category=ShiftCategory.OPENING,
                worker_id="A",
            ),
            Shift(id=f"{id}-s2", shift_date=week_start, start_time="17:00", end_time="20:30"),
        ],
        is_generated=True,
        created_at=datetime(2024, 1, 10, 12, 0),
        notes="test",
    )


class TestInMemoryWorkerRepository:
    """Tests for InMemoryWorkerRepository."""

    @pytest.fixture
    def repository(self):
        return InMemoryWorkerRepository(
            [
                Worker(id="A", name="Alice"),
                Worker(id="B", name="Bob", is_active=False),
                Worker(id="C", name="Carol", available_days={Weekday.TUESDAY}),
                Worker(id="D", name="Dan", holidays={MONDAY}),
            ]
        )

    def test_active_workers(self, repository):
        assert [w.id for w in repository.list_active_workers()] == ["A", "C", "D"]

    def test_available_workers(self, repository):
        assert [w.id for w in repository.list_available_workers(MONDAY)] == ["A"]
        # Dan's holiday is Monday only.
        assert [w.id for w in repository.list_available_workers(date(2024, 1, 16))] == [
            "A",
            "C",
            "D",
        ]

    def test_returns_copies(self, repository):
        worker = repository.get_worker("A")
        worker.name = "Changed"
        assert repository.get_worker("A").name == "Alice"

    def test_add_replaces_by_id(self, repository):
        repository.add(Worker(id="A", name="Alicia"))
        assert [w.name for w in repository.list_workers()][0] == "Alicia"
        assert len(repository.list_workers()) == 4

    def test_remove(self, repository):
        assert repository.remove("A")
        assert not repository.remove("A")
        assert repository.get_worker("A") is None


class TestInMemoryScheduleRepository:
    """Tests for InMemoryScheduleRepository."""

    def test_save_is_upsert(self):
        repository = InMemoryScheduleRepository()
        schedule = make_schedule()
        assert repository.save(schedule)
        schedule.notes = "edited"
        assert repository.save(schedule)
        assert len(repository.list_schedules()) == 1
        assert repository.find_by_week(MONDAY).notes == "edited"

    def test_delete_unknown(self):
        assert not InMemoryScheduleRepository().delete("missing")

    def test_list_ordered_by_week(self):
        repository = InMemoryScheduleRepository(
            [make_schedule("late", date(2024, 1, 22)), make_schedule("early")]
        )
        assert [s.id for s in repository.list_schedules()] == ["early", "late"]


class TestSerialization:
    """Tests for dict conversion."""

    def test_worker_defaults(self):
        worker = worker_from_dict({"id": 7, "name": "Alice"})
        assert worker.id == "7"
        assert worker.work_percentage == 100
        assert worker.available_days == set(Weekday)

    def test_worker_fields(self):
        worker = worker_from_dict(
            {
                "id": "A",
                "name": "Alice",
                "work_percentage": 60,
                "available_days": ["Monday", "friday"],
                "holidays": ["2024-01-15"],
                "is_active": False,
                "created_at": "2024-01-01T08:00:00",
            }
        )
        assert worker.available_days == {Weekday.MONDAY, Weekday.FRIDAY}
        assert worker.holidays == {MONDAY}
        assert not worker.is_active
        assert worker.created_at == datetime(2024, 1, 1, 8, 0)

    def test_bad_shift_rejected(self):
        data = {
            "id": "s",
            "week_start": "2024-01-15",
            "shifts": [{"id": "x", "date": "2024-01-15", "start_time": "9", "end_time": "11:00"}],
        }
        with pytest.raises(InvalidTimeError):
            schedule_from_dict(data)

    def test_shift_outside_week_rejected(self):
        data = {
            "id": "s",
            "week_start": "2024-01-15",
            "shifts": [
                {"id": "x", "date": "2024-01-29", "start_time": "09:00", "end_time": "11:00"}
            ],
        }
        with pytest.raises(InvalidShiftError):
            schedule_from_dict(data)

    @pytest.mark.parametrize("missing", ["id", "name"])
    def test_worker_missing_field(self, missing):
        data = {"id": "A", "name": "Alice"}
        del data[missing]
        with pytest.raises(InvalidDataError, match=missing):
            worker_from_dict(data)

    def test_worker_unknown_weekday(self):
        with pytest.raises(InvalidWorkerError, match="funday"):
            worker_from_dict({"id": "A", "name": "Alice", "available_days": ["funday"]})

    def test_worker_non_numeric_percentage(self):
        with pytest.raises(InvalidWorkerError):
            worker_from_dict({"id": "A", "name": "Alice", "work_percentage": "lots"})

    def test_worker_percentage_out_of_range(self):
        with pytest.raises(InvalidWorkerError):
            worker_from_dict({"id": "A", "name": "Alice", "work_percentage": 150})

    def test_unknown_shift_category(self):
        data = {
            "id": "s",
            "week_start": "2024-01-15",
            "shifts": [
                {
                    "id": "x",
                    "date": "2024-01-15",
                    "start_time": "09:00",
                    "end_time": "11:00",
                    "category": "lunch",
                }
            ],
        }
        with pytest.raises(InvalidShiftError):
            schedule_from_dict(data)

    def test_errors_share_base_class(self):
        with pytest.raises(SchedulingError):
            schedule_from_dict({"week_start": "2024-01-15"})


class TestJsonFileStore:
    """Tests for JsonFileStore."""

    @pytest.fixture
    def store(self, tmp_path):
        return JsonFileStore(tmp_path / "store.json")

    def test_missing_file_is_empty(self, store):
        assert store.list_workers() == []
        assert store.list_schedules() == []
        assert store.list_store_hours() is None
        assert store.find_by_week(MONDAY) is None

    def test_schedule_round_trip(self, store):
        original = make_schedule()
        assert store.save(original)

        loaded = store.find_by_week("2024-01-15")
        assert loaded.id == original.id
        assert loaded.is_generated
        assert loaded.created_at == original.created_at
        assert [(s.id, s.category, s.worker_id) for s in loaded.shifts] == [
            (s.id, s.category, s.worker_id) for s in original.shifts
        ]

    def test_save_is_upsert_and_delete(self, store):
        schedule = make_schedule()
        store.save(schedule)
        schedule.notes = "edited"
        store.save(schedule)
        assert [s.notes for s in store.list_schedules()] == ["edited"]

        assert store.delete(schedule.id)
        assert not store.delete(schedule.id)
        assert store.list_schedules() == []

    def test_workers_and_store_hours_from_file(self, tmp_path):
        path = tmp_path / "staff.json"
        path.write_text(
            json.dumps(
                {
                    "workers": [{"id": "A", "name": "Alice", "work_percentage": 80}],
                    "store_hours": [
                        {"weekday": "monday", "open_time": "10:00", "close_time": "18:00"}
                    ],
                }
            )
        )
        store = JsonFileStore(path)
        assert store.get_worker("A").work_percentage == 80
        assert store.get_worker("missing") is None
        hours = store.list_store_hours()
        assert [(h.weekday, h.open_time) for h in hours] == [(Weekday.MONDAY, "10:00")]

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text('{"workers": [')
        with pytest.raises(InvalidDataError):
            JsonFileStore(path).list_workers()

    def test_top_level_must_be_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]")
        with pytest.raises(InvalidDataError):
            JsonFileStore(path).list_schedules()

    def test_save_store_hours(self, store):
        closed_sunday = [h for h in DEFAULT_STORE_HOURS if h.weekday != Weekday.SUNDAY]
        closed_sunday.append(StoreHours(Weekday.SUNDAY, "00:00", "00:00", is_open=False))
        assert store.save_store_hours(closed_sunday)
        assert store.list_store_hours() == closed_sunday

    def test_save_worker_keeps_schedules(self, store):
        store.save(make_schedule())
        assert store.save_worker(Worker(id="A", name="Alice"))
        assert len(store.list_schedules()) == 1
        assert [w.id for w in store.list_workers()] == ["A"]

    def test_write_failure_returns_false(self, tmp_path, caplog):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = JsonFileStore(blocker / "store.json")
        with caplog.at_level(logging.ERROR):
            assert store.save(make_schedule()) is False
        assert "Could not write" in caplog.text
