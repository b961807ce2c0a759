from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import ReportStatus
from ..core.exceptions import ConflictError
from ..database.file_store import JsonFileStore
from .model import DailyReport, ReportFilter
from .repository import ReportRepository

COLLECTION = "dailyReports"


class FileReportRepository(ReportRepository):
    def __init__(self, store: JsonFileStore):
        self._store = store

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
        with self._store.transaction() as data:
            docs = data.setdefault(COLLECTION, {})
            if any(d["userId"] == user_id and d["date"] == work_date for d in docs.values()):
                raise ConflictError("Report already submitted for this date")
            report = DailyReport(
                report_id=uuid.uuid4().hex,
                user_id=user_id,
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
            docs[report.report_id] = report.to_dict()
            return report

    def find_by_id(self, report_id: str) -> Optional[DailyReport]:
        doc = self._store.get(COLLECTION, str(report_id))
        return DailyReport.from_dict(doc) if doc else None

    def find_by_user_id(self, user_id: str, limit: Optional[int] = None) -> Sequence[DailyReport]:
        reports = self.find_all(ReportFilter(user_id=user_id))
        return reports[:limit] if limit else reports

    def find_all(self, criteria: Optional[ReportFilter] = None) -> Sequence[DailyReport]:
        criteria = criteria or ReportFilter()
        reports = [DailyReport.from_dict(d) for d in self._store.all(COLLECTION)]
        reports = [r for r in reports if criteria.matches(r)]
        reports.sort(key=lambda r: (r.work_date, r.submitted_at), reverse=True)
        return reports

    def set_review(
        self,
        report_id: str,
        *,
        status: ReportStatus,
        reviewed_by: str,
        review_comments: Optional[str],
        now: datetime,
    ) -> Optional[DailyReport]:
        with self._store.transaction() as data:
            doc = data.setdefault(COLLECTION, {}).get(str(report_id))
            if doc is None:
                return None
            report = replace(
                DailyReport.from_dict(doc),
                status=status,
                reviewed_by=reviewed_by,
                reviewed_at=now,
                review_comments=review_comments,
                updated_at=now,
            )
            data[COLLECTION][report.report_id] = report.to_dict()
            return report
