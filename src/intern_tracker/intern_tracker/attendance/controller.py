from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import require_date, require_hhmm
from ..common.web import current_user_id, json_body, login_required, parse_limit
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="clock_in")
    @login_required
    def clock_in():
        data = json_body()
        # Format checks happen here so malformed input never reaches the service.
        work_date = require_date(data.get("date"), "Date")
        clock_in_time = require_hhmm(data.get("clockInTime"), "Time")

        record = service.clock_in(current_user_id(), work_date, clock_in_time)
        return jsonify({"message": "Clocked in successfully", "attendance": record.to_dict()}), 201

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="clock_out")
    @login_required
    def clock_out():
        data = json_body()
        clock_out_time = require_hhmm(data.get("clockOutTime"), "Time")

        record = service.clock_out(current_user_id(), clock_out_time)
        return jsonify({"message": "Clocked out successfully", "attendance": record.to_dict()}), 200

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def today():
        record = service.get_today(current_user_id())
        return jsonify({"attendance": record.to_dict() if record else None})

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def history():
        limit = parse_limit(request.args.get("limit"), DEFAULT_HISTORY_LIMIT)
        records = service.get_history(current_user_id(), limit=limit)
        return jsonify({"attendance": [r.to_dict() for r in records]})

    @app.route("/api/attendance/start-break", methods=["POST"], endpoint="start_break")
    @login_required
    def start_break():
        record = service.start_break(current_user_id())
        return jsonify({"message": "Break started successfully", "attendance": record.to_dict()}), 200

    @app.route("/api/attendance/end-break", methods=["POST"], endpoint="end_break")
    @login_required
    def end_break():
        result = service.end_break(current_user_id())
        return (
            jsonify(
                {
                    "message": "Break ended successfully",
                    "attendance": result.attendance.to_dict(),
                    "breakDuration": result.break_duration,
                }
            ),
            200,
        )

    @app.route("/api/attendance/break-status", methods=["GET"], endpoint="break_status")
    @login_required
    def break_status():
        return jsonify(service.get_break_status(current_user_id()).to_dict()), 200
