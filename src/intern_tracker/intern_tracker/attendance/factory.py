from __future__ import annotations

from dataclasses import dataclass

from ..common.datetime_utils import parse_hhmm
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_clock_in(self, *, clock_in_time: str, shift_start: str, grace_minutes: int) -> AttendanceStrategy:
        # Grace boundary is inclusive: shift start + grace is still on time.
        if parse_hhmm(clock_in_time) > parse_hhmm(shift_start) + grace_minutes:
            return LateStrategy()
        return PresentStrategy()
