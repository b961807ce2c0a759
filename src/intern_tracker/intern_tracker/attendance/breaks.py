from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import elapsed_minutes
from ..core.exceptions import ConflictError, NotFoundError
from .model import AttendanceRecord, Break


def _new_break_id() -> str:
    return uuid.uuid4().hex[:12]


class BreakTracker:
    """Keeps the break list of one record consistent.

    At most one break may be open at a time. All methods return new records;
    nothing here touches storage.
    """

    def __init__(self, id_factory: Callable[[], str] = _new_break_id):
        self._id_factory = id_factory

    @staticmethod
    def current_break(record: AttendanceRecord) -> Optional[Break]:
        return record.current_break

    def start(self, record: AttendanceRecord, *, at: str, now: datetime) -> AttendanceRecord:
        if record.current_break is not None:
            raise ConflictError("Already on break")

        existing = {b.break_id for b in record.breaks}
        break_id = self._id_factory()
        while break_id in existing:
            break_id = self._id_factory()

        new_break = Break(break_id=break_id, break_start_time=at)
        return replace(record, breaks=record.breaks + (new_break,), updated_at=now)

    def end(self, record: AttendanceRecord, *, at: str, now: datetime) -> tuple[AttendanceRecord, Break]:
        """Close the open break; returns the updated record and the closed break."""
        open_break = record.current_break
        if open_break is None:
            raise NotFoundError("No active break found")

        duration = elapsed_minutes(open_break.break_start_time, at)
        closed = replace(open_break, break_end_time=at, break_duration=duration)
        breaks = tuple(closed if b.break_id == open_break.break_id else b for b in record.breaks)
        updated = replace(
            record,
            breaks=breaks,
            total_break_minutes=record.total_break_minutes + duration,
            updated_at=now,
        )
        return updated, closed
