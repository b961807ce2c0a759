from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from ..core.exceptions import ValidationError

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_HHMM_RE = re.compile(r"^\d{2}:\d{2}$")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_TIME_SPENT_RE = re.compile(r"^\d+h\s*\d*m$|^\d+h$|^\d+m$")


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Any, field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_length(value: Any, field_name: str, min_len: int, max_len: int) -> str:
    value = value.strip() if isinstance(value, str) else ""
    if not min_len <= len(value) <= max_len:
        raise ValidationError(f"{field_name} must be between {min_len} and {max_len} characters")
    return value


def require_date(value: Any, field_name: str = "Date") -> str:
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise ValidationError(f"{field_name} must be in YYYY-MM-DD format")
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid calendar date") from None
    return value


def require_hhmm(value: Any, field_name: str = "Time") -> str:
    """HH:MM with hours 00-23 and minutes 00-59."""
    if not isinstance(value, str) or not _HHMM_RE.match(value):
        raise ValidationError(f"{field_name} must be in HH:MM format")
    hours, minutes = (int(p) for p in value.split(":"))
    if hours > 23 or minutes > 59:
        raise ValidationError(f"{field_name} must be a valid time of day")
    return value


def require_email(value: Any) -> str:
    value = require_non_empty(value, "Email").lower()
    if not _EMAIL_RE.match(value):
        raise ValidationError("Please provide a valid email")
    return value


def require_time_spent(value: Any) -> str:
    if not isinstance(value, str) or not _TIME_SPENT_RE.match(value.strip()):
        raise ValidationError('Time spent must be in format "Xh Ym", "Xh", or "Ym"')
    return value.strip()


def require_string_list(value: Any, field_name: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"{field_name} must be an array")
    return [v.strip() for v in value if v.strip()]
