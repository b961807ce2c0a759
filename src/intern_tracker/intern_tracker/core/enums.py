from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "ADMIN"
    INTERN = "INTERN"


class AttendanceStatus(str, Enum):
    """Attendance status, decided once at clock-in."""

    PRESENT = "PRESENT"
    LATE = "LATE"
    ABSENT = "ABSENT"


class ReportStatus(str, Enum):
    """Review state of a daily work report."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class StoreBackend(str, Enum):
    MYSQL = "mysql"
    FILE = "file"
