from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence

import mysql.connector

from ..common.datetime_utils import format_iso_date
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceFilter, AttendanceRecord, Break
from .repository import AttendanceRepository

_RECORD_COLUMNS = """
    attendance_id, user_id, work_date, clock_in_time, clock_out_time, status,
    total_break_minutes, total_hours, notes, created_at, updated_at
"""


def _as_date_str(value: Any) -> str:
    return format_iso_date(value) if isinstance(value, date) else str(value)


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load_breaks(self, cur, attendance_ids: List[int]) -> Dict[int, List[Break]]:
        if not attendance_ids:
            return {}
        placeholders = ",".join(["%s"] * len(attendance_ids))
        cur.execute(
            f"""
            SELECT attendance_id, break_id, break_start_time, break_end_time, break_duration
            FROM attendance_breaks
            WHERE attendance_id IN ({placeholders})
            ORDER BY attendance_id, seq
            """,
            tuple(attendance_ids),
        )
        out: Dict[int, List[Break]] = {}
        for r in fetchall(cur):
            out.setdefault(int(r["attendance_id"]), []).append(
                Break(
                    break_id=r["break_id"],
                    break_start_time=r["break_start_time"],
                    break_end_time=r.get("break_end_time"),
                    break_duration=int(r["break_duration"]) if r.get("break_duration") is not None else None,
                )
            )
        return out

    def _to_records(self, cur, rows: List[Dict[str, Any]]) -> List[AttendanceRecord]:
        breaks = self._load_breaks(cur, [int(r["attendance_id"]) for r in rows])
        return [
            AttendanceRecord(
                attendance_id=str(r["attendance_id"]),
                user_id=str(r["user_id"]),
                work_date=_as_date_str(r["work_date"]),
                clock_in_time=r["clock_in_time"],
                clock_out_time=r.get("clock_out_time"),
                status=AttendanceStatus(r["status"]),
                breaks=tuple(breaks.get(int(r["attendance_id"]), [])),
                total_break_minutes=int(r.get("total_break_minutes") or 0),
                total_hours=float(r["total_hours"]) if r.get("total_hours") is not None else None,
                notes=r.get("notes"),
                created_at=r["created_at"],
                updated_at=r["updated_at"],
            )
            for r in rows
        ]

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
        # uq_attendance_user_date makes this insert the atomic existence check.
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        user_id, work_date, clock_in_time, status, total_break_minutes, notes, created_at, updated_at
                    )
                    VALUES(%s,%s,%s,%s,0,%s,%s,%s)
                    """,
                    (int(user_id), work_date, clock_in_time, status.value, notes, now, now),
                )
                attendance_id = int(cur.lastrowid)
        except mysql.connector.errors.IntegrityError as exc:
            if exc.errno == 1062:
                raise ConflictError("Attendance already recorded for this date") from exc
            raise

        return AttendanceRecord(
            attendance_id=str(attendance_id),
            user_id=str(user_id),
            work_date=work_date,
            clock_in_time=clock_in_time,
            status=status,
            created_at=now,
            updated_at=now,
            notes=notes,
        )

    def find_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        if not str(attendance_id).isdigit():
            return None
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_RECORD_COLUMNS} FROM attendance_records WHERE attendance_id=%s",
                (int(attendance_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return self._to_records(cur, [r])[0]

    def find_by_user_and_date(self, user_id: str, work_date: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_RECORD_COLUMNS} FROM attendance_records WHERE user_id=%s AND work_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            if not r:
                return None
            return self._to_records(cur, [r])[0]

    def update(self, record: AttendanceRecord) -> AttendanceRecord:
        attendance_id = int(record.attendance_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET clock_in_time=%s, clock_out_time=%s, status=%s, total_break_minutes=%s,
                    total_hours=%s, notes=%s, updated_at=%s
                WHERE attendance_id=%s
                """,
                (
                    record.clock_in_time,
                    record.clock_out_time,
                    record.status.value,
                    record.total_break_minutes,
                    record.total_hours,
                    record.notes,
                    record.updated_at,
                    attendance_id,
                ),
            )
            cur.execute("SELECT 1 FROM attendance_records WHERE attendance_id=%s", (attendance_id,))
            if not fetchone(cur):
                raise NotFoundError("Attendance record not found")

            cur.execute("DELETE FROM attendance_breaks WHERE attendance_id=%s", (attendance_id,))
            if record.breaks:
                cur.executemany(
                    """
                    INSERT INTO attendance_breaks(
                        attendance_id, break_id, seq, break_start_time, break_end_time, break_duration
                    )
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    [
                        (attendance_id, b.break_id, seq, b.break_start_time, b.break_end_time, b.break_duration)
                        for seq, b in enumerate(record.breaks)
                    ],
                )
        return record

    def find_by_user_id(self, user_id: str, limit: Optional[int] = None) -> Sequence[AttendanceRecord]:
        sql = f"""
            SELECT {_RECORD_COLUMNS}
            FROM attendance_records
            WHERE user_id=%s
            ORDER BY work_date DESC
        """
        params: list[object] = [int(user_id)]
        if limit:
            sql += " LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return self._to_records(cur, fetchall(cur))

    def find_all(self, criteria: Optional[AttendanceFilter] = None) -> Sequence[AttendanceRecord]:
        criteria = criteria or AttendanceFilter()
        if criteria.user_id is not None and not str(criteria.user_id).isdigit():
            return []
        clauses = ["1=1"]
        params: list[object] = []

        if criteria.user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(criteria.user_id))
        if criteria.work_date is not None:
            clauses.append("work_date=%s")
            params.append(criteria.work_date)
        if criteria.status is not None:
            clauses.append("status=%s")
            params.append(criteria.status.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY work_date DESC, attendance_id DESC
                """,
                tuple(params),
            )
            return self._to_records(cur, fetchall(cur))
