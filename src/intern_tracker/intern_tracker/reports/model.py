from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import ReportStatus


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _from_iso(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


@dataclass(frozen=True)
class DailyReport:
    """Domain entity: an intern's work log for one day."""

    report_id: str
    user_id: str
    work_date: str
    task_title: str
    task_description: str
    time_spent: str
    status: ReportStatus
    submitted_at: datetime
    created_at: datetime
    updated_at: datetime
    tools_used: tuple[str, ...] = field(default_factory=tuple)
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    review_comments: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.report_id,
            "userId": self.user_id,
            "date": self.work_date,
            "taskTitle": self.task_title,
            "taskDescription": self.task_description,
            "toolsUsed": list(self.tools_used),
            "timeSpent": self.time_spent,
            "status": self.status.value,
            "submittedAt": self.submitted_at.isoformat(),
            "reviewedBy": self.reviewed_by,
            "reviewedAt": _iso(self.reviewed_at),
            "reviewComments": self.review_comments,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DailyReport":
        return cls(
            report_id=str(data["id"]),
            user_id=str(data["userId"]),
            work_date=data["date"],
            task_title=data["taskTitle"],
            task_description=data["taskDescription"],
            tools_used=tuple(data.get("toolsUsed") or ()),
            time_spent=data["timeSpent"],
            status=ReportStatus(data["status"]),
            submitted_at=datetime.fromisoformat(data["submittedAt"]),
            reviewed_by=data.get("reviewedBy"),
            reviewed_at=_from_iso(data.get("reviewedAt")),
            review_comments=data.get("reviewComments"),
            created_at=datetime.fromisoformat(data["createdAt"]),
            updated_at=datetime.fromisoformat(data["updatedAt"]),
        )


@dataclass(frozen=True)
class ReportFilter:
    user_id: Optional[str] = None
    status: Optional[ReportStatus] = None
    work_date: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    def matches(self, report: DailyReport) -> bool:
        if self.user_id is not None and report.user_id != self.user_id:
            return False
        if self.status is not None and report.status != self.status:
            return False
        if self.work_date is not None and report.work_date != self.work_date:
            return False
        # ISO dates compare correctly as strings.
        if self.start_date is not None and report.work_date < self.start_date:
            return False
        if self.end_date is not None and report.work_date > self.end_date:
            return False
        return True
