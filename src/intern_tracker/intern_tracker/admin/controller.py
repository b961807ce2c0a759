from __future__ import annotations

from flask import Flask, jsonify, request

from ..attendance.model import AttendanceFilter
from ..common.validators import require_date
from ..common.web import admin_required, current_role, current_user_id, json_body, parse_limit
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceStatus, ReportStatus
from ..core.exceptions import ValidationError
from ..reports.model import ReportFilter
from ..container import Container


def _optional_date(name: str):
    value = request.args.get(name)
    return require_date(value, name) if value else None


def _optional_enum(enum_cls, name: str):
    value = request.args.get(name)
    if not value:
        return None
    try:
        return enum_cls(value.upper())
    except ValueError:
        allowed = ", ".join(e.value for e in enum_cls)
        raise ValidationError(f"{name} must be one of {allowed}") from None


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/users", methods=["GET"], endpoint="admin_users")
    @admin_required
    def admin_users():
        users = container.user_service.list_users()
        return jsonify({"users": [u.to_public_dict() for u in users]})

    @app.route("/api/admin/users/<user_id>/attendance", methods=["GET"], endpoint="admin_user_attendance")
    @admin_required
    def admin_user_attendance(user_id: str):
        user = container.user_service.get_user(user_id)
        limit = parse_limit(request.args.get("limit"), DEFAULT_HISTORY_LIMIT)
        records = container.attendance_service.get_history(user.user_id, limit=limit)
        return jsonify({"user": user.to_public_dict(), "attendance": [r.to_dict() for r in records]})

    @app.route("/api/admin/interns/<user_id>/details", methods=["GET"], endpoint="admin_intern_details")
    @admin_required
    def admin_intern_details(user_id: str):
        user = container.user_service.get_user(user_id)
        attendance = container.attendance_service.list_records(AttendanceFilter(user_id=user.user_id))
        reports = container.report_service.list_reports(ReportFilter(user_id=user.user_id))
        return jsonify(
            {
                "intern": user.to_public_dict(),
                "attendance": [r.to_dict() for r in attendance],
                "reports": [r.to_dict() for r in reports],
            }
        )

    @app.route("/api/admin/attendance", methods=["GET"], endpoint="admin_attendance")
    @admin_required
    def admin_attendance():
        criteria = AttendanceFilter(
            user_id=request.args.get("userId") or None,
            work_date=_optional_date("date"),
            status=_optional_enum(AttendanceStatus, "status"),
        )
        records = container.attendance_service.list_records(criteria)
        return jsonify({"attendance": [r.to_dict() for r in records]})

    @app.route("/api/admin/reports", methods=["GET"], endpoint="admin_reports")
    @admin_required
    def admin_reports():
        criteria = ReportFilter(
            user_id=request.args.get("userId") or None,
            status=_optional_enum(ReportStatus, "status"),
            work_date=_optional_date("date"),
            start_date=_optional_date("startDate"),
            end_date=_optional_date("endDate"),
        )
        reports = container.report_service.list_reports(criteria)
        return jsonify({"reports": [r.to_dict() for r in reports]})

    @app.route("/api/admin/reports/<report_id>/review", methods=["PUT"], endpoint="admin_review_report")
    @admin_required
    def admin_review_report(report_id: str):
        data = json_body()
        report = container.report_service.review(
            report_id,
            reviewer_id=current_user_id(),
            reviewer_role=current_role(),
            status=str(data.get("status") or "").upper(),
            comments=data.get("reviewComments"),
        )
        return jsonify({"message": "Report reviewed successfully", "report": report.to_dict()})
