from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceFilter, AttendanceRecord


class AttendanceRepository(Protocol):
    """Record store contract the attendance service depends on.

    `create` must be an atomic insert-if-absent on (user_id, work_date):
    when a record already exists it raises ConflictError and stores nothing.
    `update` replaces the whole record (breaks included) in one commit.
    """

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
        raise NotImplementedError

    def find_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def find_by_user_and_date(self, user_id: str, work_date: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def update(self, record: AttendanceRecord) -> AttendanceRecord:
        raise NotImplementedError

    def find_by_user_id(self, user_id: str, limit: Optional[int] = None) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def find_all(self, criteria: Optional[AttendanceFilter] = None) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
