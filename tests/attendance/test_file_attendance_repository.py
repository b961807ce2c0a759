import json
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import datetime

import pytest

from src.intern_tracker.intern_tracker.attendance.file_attendance_repository import FileAttendanceRepository
from src.intern_tracker.intern_tracker.attendance.model import AttendanceFilter, Break
from src.intern_tracker.intern_tracker.core.enums import AttendanceStatus
from src.intern_tracker.intern_tracker.core.exceptions import ConflictError, NotFoundError
from src.intern_tracker.intern_tracker.database.file_store import JsonFileStore


@pytest.fixture
def store(tmp_path):
    return JsonFileStore(tmp_path / "store.json")


@pytest.fixture
def repo(store):
    return FileAttendanceRepository(store)


def _create(repo, user_id="u1", work_date="2025-03-10", status=AttendanceStatus.PRESENT):
    return repo.create(
        user_id=user_id,
        work_date=work_date,
        clock_in_time="09:00",
        status=status,
        now=datetime(2025, 3, 10, 9, 0),
    )


def test_create_then_find(repo):
    rec = _create(repo)

    assert repo.find_by_id(rec.attendance_id) == rec
    assert repo.find_by_user_and_date("u1", "2025-03-10") == rec
    assert repo.find_by_user_and_date("u1", "2025-03-11") is None


def test_create_duplicate_user_date_conflicts_and_keeps_first(repo):
    first = _create(repo)

    with pytest.raises(ConflictError):
        _create(repo)

    assert len(repo.find_all()) == 1
    assert repo.find_by_user_and_date("u1", "2025-03-10").attendance_id == first.attendance_id


def test_update_persists_breaks_to_disk(repo, store):
    rec = _create(repo)
    updated = replace(
        rec,
        breaks=(Break(break_id="b1", break_start_time="12:00", break_end_time="12:30", break_duration=30),),
        total_break_minutes=30,
    )
    repo.update(updated)

    reloaded = FileAttendanceRepository(JsonFileStore(store.path))
    assert reloaded.find_by_id(rec.attendance_id).breaks == updated.breaks

    with store.path.open(encoding="utf-8") as fh:
        doc = json.load(fh)["attendance"][rec.attendance_id]
    assert doc["breaks"] == [{"id": "b1", "breakStartTime": "12:00", "breakEndTime": "12:30", "breakDuration": 30}]
    assert doc["totalBreakMinutes"] == 30


def test_update_missing_record_is_not_found(repo):
    rec = _create(repo)
    with pytest.raises(NotFoundError):
        repo.update(replace(rec, attendance_id="nope"))


def test_failed_transaction_leaves_data_untouched(store):
    with pytest.raises(RuntimeError):
        with store.transaction() as data:
            data.setdefault("attendance", {})["x"] = {"id": "x"}
            raise RuntimeError("boom")

    assert store.get("attendance", "x") is None
    assert not store.path.exists()


def test_find_all_filters(repo):
    _create(repo, "u1", "2025-03-10")
    _create(repo, "u1", "2025-03-11", AttendanceStatus.LATE)
    _create(repo, "u2", "2025-03-11")

    assert [r.work_date for r in repo.find_by_user_id("u1")] == ["2025-03-11", "2025-03-10"]
    assert len(repo.find_by_user_id("u1", limit=1)) == 1
    late = repo.find_all(AttendanceFilter(status=AttendanceStatus.LATE))
    assert [(r.user_id, r.work_date) for r in late] == [("u1", "2025-03-11")]
    assert len(repo.find_all(AttendanceFilter(work_date="2025-03-11"))) == 2


def test_concurrent_clock_ins_store_exactly_one(repo):
    def attempt(_):
        try:
            _create(repo)
            return True
        except ConflictError:
            return False

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(attempt, range(16)))

    assert results.count(True) == 1
    assert len(repo.find_all()) == 1
