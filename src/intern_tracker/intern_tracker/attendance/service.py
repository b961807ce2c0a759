from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import elapsed_hours, format_hhmm, format_iso_date, now_local, parse_hhmm
from ..common.locks import KeyedLock
from ..common.validators import require_date, require_hhmm
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_LATE_GRACE_MINUTES, DEFAULT_SHIFT_START
from ..core.exceptions import ConflictError, NotFoundError
from .breaks import BreakTracker
from .factory import AttendanceStrategyFactory
from .model import AttendanceFilter, AttendanceRecord, Break, BreakStatus
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EndBreakResult:
    attendance: AttendanceRecord
    break_duration: int


def with_total_hours(record: AttendanceRecord) -> AttendanceRecord:
    """Recompute total_hours from clock times and break total.

    Worked time never goes below zero, even if breaks exceed the span.
    """
    if record.clock_out_time is None:
        return replace(record, total_hours=None)
    hours = elapsed_hours(record.clock_in_time, record.clock_out_time, record.total_break_minutes)
    return replace(record, total_hours=max(hours, 0.0))


class AttendanceService:
    """Attendance state machine.

    NotClockedIn -> ClockedIn -> (OnBreak -> ClockedIn)* -> ClockedOut.
    "Today" and "now" come from the injected clock; every operation loads the
    record, validates the transition, then persists one complete new record.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        break_tracker: BreakTracker | None = None,
        shift_start: str = DEFAULT_SHIFT_START,
        grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
        clock=now_local,
    ):
        self._attendance = attendance
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._breaks = break_tracker or BreakTracker()
        self._shift_start = require_hhmm(shift_start, "Shift start")
        self._grace_minutes = int(grace_minutes)
        self._clock = clock
        self._user_locks = KeyedLock()

    def _now(self, now: datetime | None) -> datetime:
        return now or self._clock()

    def _require_today(self, user_id: str, now: datetime) -> AttendanceRecord:
        record = self._attendance.find_by_user_and_date(user_id, format_iso_date(now.date()))
        if not record:
            raise NotFoundError("No attendance record found for today")
        return record

    def clock_in(self, user_id: str, work_date: str, clock_in_time: str, *, now: datetime | None = None) -> AttendanceRecord:
        now = self._now(now)
        work_date = require_date(work_date)
        clock_in_time = require_hhmm(clock_in_time, "Clock-in time")

        strategy = self._factory.for_clock_in(
            clock_in_time=clock_in_time,
            shift_start=self._shift_start,
            grace_minutes=self._grace_minutes,
        )
        decision = strategy.decide_clock_in(
            clock_in_minutes=parse_hhmm(clock_in_time),
            shift_start_minutes=parse_hhmm(self._shift_start),
            grace_minutes=self._grace_minutes,
        )

        try:
            record = self._attendance.create(
                user_id=user_id,
                work_date=work_date,
                clock_in_time=clock_in_time,
                status=decision.status,
                now=now,
            )
        except ConflictError:
            logger.info("Duplicate clock-in rejected user=%s date=%s", user_id, work_date)
            raise

        logger.info(
            "Clock-in user=%s date=%s at=%s status=%s%s",
            user_id, work_date, clock_in_time, record.status.value,
            f" ({decision.note})" if decision.note else "",
        )
        return record

    def clock_out(self, user_id: str, clock_out_time: str, *, now: datetime | None = None) -> AttendanceRecord:
        now = self._now(now)
        clock_out_time = require_hhmm(clock_out_time, "Clock-out time")

        with self._user_locks.hold(user_id):
            record = self._require_today(user_id, now)
            if record.has_clocked_out:
                raise ConflictError("Already clocked out today")

            if record.current_break is not None:
                record, closed = self._breaks.end(record, at=format_hhmm(now), now=now)
                logger.info(
                    "Auto-ended break user=%s break=%s duration=%s before clock-out",
                    user_id, closed.break_id, closed.break_duration,
                )

            record = with_total_hours(replace(record, clock_out_time=clock_out_time, updated_at=now))
            saved = self._attendance.update(record)

        logger.info("Clock-out user=%s at=%s total_hours=%s", user_id, clock_out_time, saved.total_hours)
        return saved

    def start_break(self, user_id: str, *, now: datetime | None = None) -> AttendanceRecord:
        now = self._now(now)

        with self._user_locks.hold(user_id):
            record = self._require_today(user_id, now)
            if record.has_clocked_out:
                raise ConflictError("Cannot take break after clocking out")

            record = self._breaks.start(record, at=format_hhmm(now), now=now)
            saved = self._attendance.update(record)

        logger.info("Break started user=%s at=%s", user_id, format_hhmm(now))
        return saved

    def end_break(self, user_id: str, *, now: datetime | None = None) -> EndBreakResult:
        now = self._now(now)

        with self._user_locks.hold(user_id):
            record = self._require_today(user_id, now)
            record, closed = self._breaks.end(record, at=format_hhmm(now), now=now)
            if record.has_clocked_out:
                record = with_total_hours(record)
            saved = self._attendance.update(record)

        logger.info("Break ended user=%s duration=%s total=%s", user_id, closed.break_duration, saved.total_break_minutes)
        return EndBreakResult(attendance=saved, break_duration=int(closed.break_duration or 0))

    def get_current_break(self, attendance_id: str) -> Optional[Break]:
        record = self._attendance.find_by_id(attendance_id)
        if not record:
            return None
        return self._breaks.current_break(record)

    def get_break_status(self, user_id: str, *, now: datetime | None = None) -> BreakStatus:
        now = self._now(now)
        record = self._attendance.find_by_user_and_date(user_id, format_iso_date(now.date()))
        if not record:
            return BreakStatus(has_clocked_in=False)
        return BreakStatus(
            has_clocked_in=True,
            has_clocked_out=record.has_clocked_out,
            current_break=self._breaks.current_break(record),
            total_break_minutes=record.total_break_minutes,
            breaks=record.breaks,
        )

    def get_today(self, user_id: str, *, now: datetime | None = None) -> Optional[AttendanceRecord]:
        now = self._now(now)
        return self._attendance.find_by_user_and_date(user_id, format_iso_date(now.date()))

    def get_history(self, user_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.find_by_user_id(user_id, limit)

    def list_records(self, criteria: AttendanceFilter | None = None) -> Sequence[AttendanceRecord]:
        return self._attendance.find_all(criteria)
