from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError, NotFoundError
from ..database.file_store import JsonFileStore
from .model import AttendanceFilter, AttendanceRecord
from .repository import AttendanceRepository

COLLECTION = "attendance"


class FileAttendanceRepository(AttendanceRepository):
    def __init__(self, store: JsonFileStore):
        self._store = store

    def create(
        self,
        *,
        user_id: str,
        work_date: str,
        clock_in_time: str,
        status: AttendanceStatus,
        now: datetime,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        with self._store.transaction() as data:
            docs = data.setdefault(COLLECTION, {})
            if any(d["userId"] == user_id and d["date"] == work_date for d in docs.values()):
                raise ConflictError("Attendance already recorded for this date")

            record = AttendanceRecord(
                attendance_id=uuid.uuid4().hex,
                user_id=user_id,
                work_date=work_date,
                clock_in_time=clock_in_time,
                status=status,
                created_at=now,
                updated_at=now,
                notes=notes,
            )
            docs[record.attendance_id] = record.to_dict()
            return record

    def find_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        doc = self._store.get(COLLECTION, str(attendance_id))
        return AttendanceRecord.from_dict(doc) if doc else None

    def find_by_user_and_date(self, user_id: str, work_date: str) -> Optional[AttendanceRecord]:
        doc = self._store.find_one(COLLECTION, userId=user_id, date=work_date)
        return AttendanceRecord.from_dict(doc) if doc else None

    def update(self, record: AttendanceRecord) -> AttendanceRecord:
        with self._store.transaction() as data:
            docs = data.setdefault(COLLECTION, {})
            if record.attendance_id not in docs:
                raise NotFoundError("Attendance record not found")
            docs[record.attendance_id] = record.to_dict()
        return record

    def find_by_user_id(self, user_id: str, limit: Optional[int] = None) -> Sequence[AttendanceRecord]:
        records = self.find_all(AttendanceFilter(user_id=user_id))
        return records[:limit] if limit else records

    def find_all(self, criteria: Optional[AttendanceFilter] = None) -> Sequence[AttendanceRecord]:
        criteria = criteria or AttendanceFilter()
        records = [AttendanceRecord.from_dict(d) for d in self._store.all(COLLECTION)]
        records = [r for r in records if criteria.matches(r)]
        records.sort(key=lambda r: (r.work_date, r.created_at), reverse=True)
        return records
