import pytest

from src.intern_tracker.intern_tracker.common.datetime_utils import (
    elapsed_hours,
    elapsed_minutes,
    parse_hhmm,
    round_half_up,
)
from src.intern_tracker.intern_tracker.common.validators import require_hhmm
from src.intern_tracker.intern_tracker.core.exceptions import ValidationError


def test_parse_hhmm_minutes_since_midnight():
    assert parse_hhmm("00:00") == 0
    assert parse_hhmm("09:15") == 555
    assert parse_hhmm("23:59") == 1439


def test_elapsed_minutes_same_day():
    assert elapsed_minutes("12:00", "12:30") == 30
    assert elapsed_minutes("08:00", "08:00") == 0


def test_elapsed_minutes_wraps_past_midnight():
    assert elapsed_minutes("23:50", "00:10") == 20
    assert elapsed_minutes("23:00", "01:00") == 120


def test_elapsed_hours_subtracts_breaks_and_rounds():
    assert elapsed_hours("09:00", "17:00", 30) == 7.5
    assert elapsed_hours("09:00", "09:10") == 0.17
    assert elapsed_hours("09:00", "09:01") == 0.02
    assert elapsed_hours("23:00", "01:00") == 2.0


def test_elapsed_hours_is_not_clamped():
    assert elapsed_hours("09:00", "09:30", 60) == -0.5


def test_round_half_up_rounds_ties_away_from_zero():
    assert round_half_up(0.125) == 0.13
    assert round_half_up(7.5) == 7.5


@pytest.mark.parametrize("value", ["9:00", "24:00", "12:60", "ab:cd", "", None, "12:5"])
def test_require_hhmm_rejects_malformed(value):
    with pytest.raises(ValidationError):
        require_hhmm(value, "Time")
