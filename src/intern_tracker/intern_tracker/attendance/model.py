from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..common.validators import require_date, require_hhmm
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class Break:
    """One break interval inside an attendance record."""

    break_id: str
    break_start_time: str
    break_end_time: Optional[str] = None
    break_duration: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.break_end_time is None

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"id": self.break_id, "breakStartTime": self.break_start_time}
        if self.break_end_time is not None:
            data["breakEndTime"] = self.break_end_time
        if self.break_duration is not None:
            data["breakDuration"] = self.break_duration
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Break":
        end = data.get("breakEndTime")
        duration = data.get("breakDuration")
        return cls(
            break_id=str(data["id"]),
            break_start_time=require_hhmm(data["breakStartTime"], "breakStartTime"),
            break_end_time=require_hhmm(end, "breakEndTime") if end is not None else None,
            break_duration=int(duration) if duration is not None else None,
        )


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance record per user per calendar date.

    Records are immutable values; every transition builds a new one with
    dataclasses.replace so a half-applied change is never visible.
    """

    attendance_id: str
    user_id: str
    work_date: str
    clock_in_time: str
    status: AttendanceStatus
    created_at: datetime
    updated_at: datetime
    clock_out_time: Optional[str] = None
    breaks: tuple[Break, ...] = field(default_factory=tuple)
    total_break_minutes: int = 0
    total_hours: Optional[float] = None
    notes: Optional[str] = None

    @property
    def has_clocked_out(self) -> bool:
        return self.clock_out_time is not None

    @property
    def current_break(self) -> Optional[Break]:
        return next((b for b in self.breaks if b.is_open), None)

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "id": self.attendance_id,
            "userId": self.user_id,
            "date": self.work_date,
            "clockInTime": self.clock_in_time,
            "status": self.status.value,
            "breaks": [b.to_dict() for b in self.breaks],
            "totalBreakMinutes": self.total_break_minutes,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }
        if self.clock_out_time is not None:
            data["clockOutTime"] = self.clock_out_time
        if self.total_hours is not None:
            data["totalHours"] = self.total_hours
        if self.notes:
            data["notes"] = self.notes
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "AttendanceRecord":
        """Rebuild a record from its stored document, validating every field."""

        clock_out = data.get("clockOutTime")
        total_hours = data.get("totalHours")
        return cls(
            attendance_id=str(data["id"]),
            user_id=str(data["userId"]),
            work_date=require_date(data["date"]),
            clock_in_time=require_hhmm(data["clockInTime"], "clockInTime"),
            status=AttendanceStatus(data["status"]),
            created_at=datetime.fromisoformat(data["createdAt"]),
            updated_at=datetime.fromisoformat(data["updatedAt"]),
            clock_out_time=require_hhmm(clock_out, "clockOutTime") if clock_out is not None else None,
            breaks=tuple(Break.from_dict(b) for b in data.get("breaks") or []),
            total_break_minutes=int(data.get("totalBreakMinutes") or 0),
            total_hours=float(total_hours) if total_hours is not None else None,
            notes=data.get("notes"),
        )


@dataclass(frozen=True)
class AttendanceFilter:
    user_id: Optional[str] = None
    work_date: Optional[str] = None
    status: Optional[AttendanceStatus] = None

    def matches(self, record: AttendanceRecord) -> bool:
        if self.user_id is not None and record.user_id != self.user_id:
            return False
        if self.work_date is not None and record.work_date != self.work_date:
            return False
        if self.status is not None and record.status != self.status:
            return False
        return True


@dataclass(frozen=True)
class BreakStatus:
    """Read-model answering "am I on break right now?"."""

    has_clocked_in: bool
    has_clocked_out: bool = False
    current_break: Optional[Break] = None
    total_break_minutes: int = 0
    breaks: tuple[Break, ...] = ()

    @property
    def on_break(self) -> bool:
        return self.current_break is not None

    def to_dict(self) -> dict:
        if not self.has_clocked_in:
            return {
                "onBreak": False,
                "hasClockedIn": False,
                "message": "No attendance record found for today",
            }
        return {
            "onBreak": self.on_break,
            "hasClockedIn": True,
            "hasClockedOut": self.has_clocked_out,
            "currentBreak": self.current_break.to_dict() if self.current_break else None,
            "totalBreakMinutes": self.total_break_minutes,
            "breaks": [b.to_dict() for b in self.breaks],
        }
