from __future__ import annotations

import logging
from datetime import datetime
from functools import wraps
from typing import Any

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def current_user_id() -> str:
    return str(session["user_id"])


def current_role() -> Role:
    return Role(session.get("role"))


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response("Access denied. No token provided.", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response("Access denied. No token provided.", 401)
        if session.get("role") != Role.ADMIN.value:
            return error_response("Access denied", 403)
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        for error_type, status in STATUS_BY_ERROR:
            if isinstance(exc, error_type):
                return error_response(str(exc), status)
        return error_response(str(exc), 400)

    @app.errorhandler(404)
    def handle_not_found(_exc):
        return error_response(f"Not found - {request.path}", 404)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        if isinstance(exc, HTTPException):
            return error_response(exc.description or exc.name, exc.code or 500)
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        if app.config.get("DEBUG"):
            return error_response(f"Server Error: {exc}", 500)
        return error_response("Server Error", 500)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "OK", "timestamp": datetime.now().isoformat()})


def parse_limit(value: Any, default: int, name: str = "limit") -> int:
    if value in (None, ""):
        return default
    try:
        limit = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a positive integer") from None
    if limit < 1:
        raise ValidationError(f"{name} must be a positive integer")
    return limit
