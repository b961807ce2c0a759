from __future__ import annotations

import math
from datetime import date, datetime

from ..core.constants import MINUTES_PER_DAY


def parse_hhmm(value: str) -> int:
    """Parse an HH:MM wall-clock string into minutes since midnight."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def elapsed_minutes(start: str, end: str) -> int:
    """Minutes from start to end; an end before start crosses midnight."""
    minutes = parse_hhmm(end) - parse_hhmm(start)
    if minutes < 0:
        minutes += MINUTES_PER_DAY
    return minutes


def round_half_up(value: float, digits: int = 2) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def elapsed_hours(start: str, end: str, minus_minutes: int = 0) -> float:
    """Hours between two HH:MM strings, less minus_minutes, to two decimals.

    The result is not clamped; callers decide what a negative total means.
    """
    minutes = elapsed_minutes(start, end) - int(minus_minutes or 0)
    return round_half_up(minutes / 60)


def format_hhmm(value: datetime) -> str:
    return value.strftime("%H:%M")


def format_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
