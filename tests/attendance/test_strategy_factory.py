import pytest

from src.intern_tracker.intern_tracker.attendance.factory import AttendanceStrategyFactory
from src.intern_tracker.intern_tracker.attendance.strategies.late_strategy import LateStrategy
from src.intern_tracker.intern_tracker.attendance.strategies.present_strategy import PresentStrategy
from src.intern_tracker.intern_tracker.core.enums import AttendanceStatus


@pytest.mark.parametrize("clock_in", ["07:30", "09:00", "09:10", "09:15"])
def test_factory_clock_in_within_grace_is_present(clock_in):
    factory = AttendanceStrategyFactory()
    strategy = factory.for_clock_in(clock_in_time=clock_in, shift_start="09:00", grace_minutes=15)

    assert isinstance(strategy, PresentStrategy)


def test_factory_clock_in_after_grace_is_late():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_clock_in(clock_in_time="09:16", shift_start="09:00", grace_minutes=15)

    assert isinstance(strategy, LateStrategy)


def test_late_strategy_notes_minutes_late():
    decision = LateStrategy().decide_clock_in(clock_in_minutes=9 * 60 + 40, shift_start_minutes=9 * 60, grace_minutes=15)

    assert decision.status == AttendanceStatus.LATE
    assert decision.note == "Late by 40 minutes"


def test_present_strategy_has_no_note():
    decision = PresentStrategy().decide_clock_in(clock_in_minutes=9 * 60, shift_start_minutes=9 * 60, grace_minutes=15)

    assert decision.status == AttendanceStatus.PRESENT
    assert decision.note is None
