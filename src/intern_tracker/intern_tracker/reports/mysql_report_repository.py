from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..common.datetime_utils import format_iso_date
from ..core.enums import ReportStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import DailyReport, ReportFilter
from .repository import ReportRepository

_REPORT_COLUMNS = """
    report_id, user_id, work_date, task_title, task_description, tools_used, time_spent, status,
    submitted_at, reviewed_by, reviewed_at, review_comments, created_at, updated_at
"""


def _to_report(r: Dict[str, Any]) -> DailyReport:
    work_date = r["work_date"]
    return DailyReport(
        report_id=str(r["report_id"]),
        user_id=str(r["user_id"]),
        work_date=format_iso_date(work_date) if isinstance(work_date, date) else str(work_date),
        task_title=r["task_title"],
        task_description=r["task_description"],
        tools_used=tuple(json.loads(r.get("tools_used") or "[]")),
        time_spent=r["time_spent"],
        status=ReportStatus(r["status"]),
        submitted_at=r["submitted_at"],
        reviewed_by=str(r["reviewed_by"]) if r.get("reviewed_by") is not None else None,
        reviewed_at=r.get("reviewed_at"),
        review_comments=r.get("review_comments"),
        created_at=r["created_at"],
        updated_at=r["updated_at"],
    )


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        user_id: str,
        work_date: str,
        task_title: str,
        task_description: str,
        tools_used: Sequence[str],
        time_spent: str,
        now: datetime,
    ) -> DailyReport:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO daily_reports(
                        user_id, work_date, task_title, task_description, tools_used, time_spent, status,
                        submitted_at, created_at, updated_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(user_id),
                        work_date,
                        task_title,
                        task_description,
                        json.dumps(list(tools_used)),
                        time_spent,
                        ReportStatus.PENDING.value,
                        now,
                        now,
                        now,
                    ),
                )
                report_id = int(cur.lastrowid)
        except mysql.connector.errors.IntegrityError as exc:
            if exc.errno == 1062:
                raise ConflictError("Report already submitted for this date") from exc
            raise

        return DailyReport(
            report_id=str(report_id),
            user_id=str(user_id),
            work_date=work_date,
            task_title=task_title,
            task_description=task_description,
            tools_used=tuple(tools_used),
            time_spent=time_spent,
            status=ReportStatus.PENDING,
            submitted_at=now,
            created_at=now,
            updated_at=now,
        )

    def find_by_id(self, report_id: str) -> Optional[DailyReport]:
        if not str(report_id).isdigit():
            return None
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_REPORT_COLUMNS} FROM daily_reports WHERE report_id=%s", (int(report_id),))
            r = fetchone(cur)
            return _to_report(r) if r else None

    def find_by_user_id(self, user_id: str, limit: Optional[int] = None) -> Sequence[DailyReport]:
        sql = f"SELECT {_REPORT_COLUMNS} FROM daily_reports WHERE user_id=%s ORDER BY work_date DESC"
        params: list[object] = [int(user_id)]
        if limit:
            sql += " LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_report(r) for r in fetchall(cur)]

    def find_all(self, criteria: Optional[ReportFilter] = None) -> Sequence[DailyReport]:
        criteria = criteria or ReportFilter()
        if criteria.user_id is not None and not str(criteria.user_id).isdigit():
            return []
        clauses = ["1=1"]
        params: list[object] = []

        if criteria.user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(criteria.user_id))
        if criteria.status is not None:
            clauses.append("status=%s")
            params.append(criteria.status.value)
        if criteria.work_date is not None:
            clauses.append("work_date=%s")
            params.append(criteria.work_date)
        if criteria.start_date is not None:
            clauses.append("work_date>=%s")
            params.append(criteria.start_date)
        if criteria.end_date is not None:
            clauses.append("work_date<=%s")
            params.append(criteria.end_date)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_REPORT_COLUMNS}
                FROM daily_reports
                WHERE {where}
                ORDER BY work_date DESC, report_id DESC
                """,
                tuple(params),
            )
            return [_to_report(r) for r in fetchall(cur)]

    def set_review(
        self,
        report_id: str,
        *,
        status: ReportStatus,
        reviewed_by: str,
        review_comments: Optional[str],
        now: datetime,
    ) -> Optional[DailyReport]:
        if not str(report_id).isdigit():
            return None
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE daily_reports
                SET status=%s, reviewed_by=%s, reviewed_at=%s, review_comments=%s, updated_at=%s
                WHERE report_id=%s
                """,
                (status.value, int(reviewed_by), now, review_comments, now, int(report_id)),
            )
            cur.execute(f"SELECT {_REPORT_COLUMNS} FROM daily_reports WHERE report_id=%s", (int(report_id),))
            r = fetchone(cur)
            return _to_report(r) if r else None
