from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from .attendance.file_attendance_repository import FileAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import now_local
from .core.constants import DEFAULT_LATE_GRACE_MINUTES, DEFAULT_SHIFT_START
from .core.enums import StoreBackend
from .core.exceptions import ValidationError
from .database.connection import DBConfig, DatabaseConnection
from .database.file_store import JsonFileStore
from .reports.file_report_repository import FileReportRepository
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.repository import ReportRepository
from .reports.service import ReportService
from .users.file_user_repository import FileUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    backend: StoreBackend

    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    reports_repo: ReportRepository

    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    report_service: ReportService


def build_container(
    *,
    backend: str = StoreBackend.FILE.value,
    db_config: Optional[dict] = None,
    data_file: str | Path = "data/store.json",
    shift_start: str = DEFAULT_SHIFT_START,
    grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    """Wire repositories and services for the configured store backend.

    Services only see the repository protocols, never the backend.
    """
    try:
        store_backend = StoreBackend(str(backend).lower())
    except ValueError:
        raise ValidationError(f"Unknown STORE_BACKEND {backend!r}") from None

    if store_backend == StoreBackend.MYSQL:
        config = DBConfig.from_mapping(db_config or {})
        conn = DatabaseConnection.get_instance(config)
        users_repo = MySQLUserRepository(conn)
        attendance_repo = MySQLAttendanceRepository(conn)
        reports_repo = MySQLReportRepository(conn)
        logger.info("Using MySQL store %s", config.describe())
    else:
        store = JsonFileStore(data_file)
        users_repo = FileUserRepository(store)
        attendance_repo = FileAttendanceRepository(store)
        reports_repo = FileReportRepository(store)
        logger.info("Using file store %s", store.path)

    return Container(
        backend=store_backend,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        reports_repo=reports_repo,
        auth_service=AuthService(users_repo, clock=clock),
        user_service=UserService(users_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            shift_start=shift_start,
            grace_minutes=grace_minutes,
            clock=clock,
        ),
        report_service=ReportService(reports_repo, clock=clock),
    )
