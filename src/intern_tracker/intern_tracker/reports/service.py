from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_date, require_length, require_string_list, require_time_spent
from ..core.constants import DEFAULT_REPORTS_LIMIT, MAX_TASK_DESCRIPTION_LENGTH, MAX_TASK_TITLE_LENGTH
from ..core.enums import ReportStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import DailyReport, ReportFilter
from .repository import ReportRepository

logger = logging.getLogger(__name__)


class ReportService:
    def __init__(self, reports: ReportRepository, *, clock=now_local):
        self._reports = reports
        self._clock = clock

    def submit(
        self,
        user_id: str,
        *,
        work_date: Any,
        task_title: Any,
        task_description: Any,
        tools_used: Any,
        time_spent: Any,
        now: datetime | None = None,
    ) -> DailyReport:
        report = self._reports.create(
            user_id=user_id,
            work_date=require_date(work_date),
            task_title=require_length(task_title, "Task title", 1, MAX_TASK_TITLE_LENGTH),
            task_description=require_length(task_description, "Task description", 1, MAX_TASK_DESCRIPTION_LENGTH),
            tools_used=require_string_list(tools_used, "Tools used"),
            time_spent=require_time_spent(time_spent),
            now=now or self._clock(),
        )
        logger.info("Report submitted user=%s date=%s id=%s", user_id, report.work_date, report.report_id)
        return report

    def my_reports(
        self, user_id: str, *, limit: int = DEFAULT_REPORTS_LIMIT, page: int = 1
    ) -> tuple[Sequence[DailyReport], int]:
        """One page of the user's reports, newest first, plus the total count."""
        reports = self._reports.find_by_user_id(user_id)
        start = (page - 1) * limit
        return reports[start : start + limit], len(reports)

    def list_reports(self, criteria: Optional[ReportFilter] = None) -> Sequence[DailyReport]:
        return self._reports.find_all(criteria)

    def review(
        self,
        report_id: str,
        *,
        reviewer_id: str,
        reviewer_role: Role,
        status: Any,
        comments: Optional[str] = None,
        now: datetime | None = None,
    ) -> DailyReport:
        if reviewer_role != Role.ADMIN:
            raise AuthorizationError("Access denied")

        try:
            decision = ReportStatus(status)
        except ValueError:
            raise ValidationError("Status must be APPROVED or REJECTED") from None
        if decision == ReportStatus.PENDING:
            raise ValidationError("Status must be APPROVED or REJECTED")

        report = self._reports.set_review(
            report_id,
            status=decision,
            reviewed_by=reviewer_id,
            review_comments=(comments or "").strip() or None,
            now=now or self._clock(),
        )
        if not report:
            raise NotFoundError("Report not found")

        logger.info("Report %s marked %s by %s", report_id, decision.value, reviewer_id)
        return report
