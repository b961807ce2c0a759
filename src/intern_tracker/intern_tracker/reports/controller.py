from __future__ import annotations

import math

from flask import Flask, jsonify, request

from ..common.web import current_user_id, json_body, login_required, parse_limit
from ..core.constants import DEFAULT_REPORTS_LIMIT
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.report_service

    @app.route("/api/reports/submit", methods=["POST"], endpoint="submit_report")
    @login_required
    def submit_report():
        data = json_body()
        report = service.submit(
            current_user_id(),
            work_date=data.get("date"),
            task_title=data.get("taskTitle"),
            task_description=data.get("taskDescription"),
            tools_used=data.get("toolsUsed"),
            time_spent=data.get("timeSpent"),
        )
        return jsonify({"message": "Report submitted successfully", "report": report.to_dict()}), 201

    @app.route("/api/reports/my-reports", methods=["GET"], endpoint="my_reports")
    @login_required
    def my_reports():
        page = parse_limit(request.args.get("page"), 1, "page")
        limit = parse_limit(request.args.get("limit"), DEFAULT_REPORTS_LIMIT)

        reports, total = service.my_reports(current_user_id(), limit=limit, page=page)
        return jsonify(
            {
                "reports": [r.to_dict() for r in reports],
                "pagination": {
                    "page": page,
                    "limit": limit,
                    "total": total,
                    "pages": math.ceil(total / limit),
                },
            }
        )
