from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late clock-in."""

    def decide_clock_in(self, *, clock_in_minutes: int, shift_start_minutes: int, grace_minutes: int) -> StatusDecision:
        late_by = clock_in_minutes - shift_start_minutes
        return StatusDecision(status=AttendanceStatus.LATE, note=f"Late by {late_by} minutes")
