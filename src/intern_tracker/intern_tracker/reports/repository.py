from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ReportStatus
from .model import DailyReport, ReportFilter


class ReportRepository(Protocol):
    """Daily report store. `create` rejects a second report for the same
    (user_id, work_date) with ConflictError."""

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
        raise NotImplementedError

    def find_by_id(self, report_id: str) -> Optional[DailyReport]:
        raise NotImplementedError

    def find_by_user_id(self, user_id: str, limit: Optional[int] = None) -> Sequence[DailyReport]:
        raise NotImplementedError

    def find_all(self, criteria: Optional[ReportFilter] = None) -> Sequence[DailyReport]:
        raise NotImplementedError

    def set_review(
        self,
        report_id: str,
        *,
        status: ReportStatus,
        reviewed_by: str,
        review_comments: Optional[str],
        now: datetime,
    ) -> Optional[DailyReport]:
        raise NotImplementedError
