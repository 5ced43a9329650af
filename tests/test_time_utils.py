"""Shift window arithmetic: lateness, early leave, recorded check-out."""

from datetime import time

import pytest

from app.core.enums import ShiftKey
from app.core.shifts import SHIFTS, get_shift
from app.core.time_utils import (
    early_leave_minutes,
    effective_check_out_time,
    late_minutes,
    minutes_to_time,
    time_to_minutes,
)


def test_time_to_minutes_ignores_seconds() -> None:
    assert time_to_minutes("07:45") == 465
    assert time_to_minutes("07:45:59") == 465
    assert time_to_minutes(time(13, 30, 12)) == 810


def test_minutes_to_time() -> None:
    assert minutes_to_time(0) == "00:00:00"
    assert minutes_to_time(465) == "07:45:00"


@pytest.mark.parametrize("key", list(ShiftKey))
def test_no_lateness_at_or_before_start(key: ShiftKey) -> None:
    shift = SHIFTS[key]
    start = time_to_minutes(shift.start)
    for t in (start - 90, start - 1, start):
        assert late_minutes(shift, minutes_to_time(t)) == 0


@pytest.mark.parametrize("key", list(ShiftKey))
def test_lateness_inside_window(key: ShiftKey) -> None:
    shift = SHIFTS[key]
    start = time_to_minutes(shift.start)
    end = time_to_minutes(shift.end)
    for t in (start + 1, start + 15, end):
        assert late_minutes(shift, minutes_to_time(t)) == t - start


@pytest.mark.parametrize("key", list(ShiftKey))
def test_lateness_capped_after_shift_end(key: ShiftKey) -> None:
    shift = SHIFTS[key]
    end = time_to_minutes(shift.end)
    for t in (end + 1, end + 120):
        assert late_minutes(shift, minutes_to_time(t)) == shift.duration_minutes


@pytest.mark.parametrize("key", list(ShiftKey))
def test_early_leave(key: ShiftKey) -> None:
    shift = SHIFTS[key]
    end = time_to_minutes(shift.end)
    assert early_leave_minutes(shift, minutes_to_time(end)) == 0
    assert early_leave_minutes(shift, minutes_to_time(end + 30)) == 0
    assert early_leave_minutes(shift, minutes_to_time(end - 1)) == 1
    assert early_leave_minutes(shift, minutes_to_time(end - 45)) == 45


def test_shift1_example() -> None:
    shift = get_shift("shift1")
    assert late_minutes(shift, "07:45:00") == 15
    assert early_leave_minutes(shift, "13:10:00") == 20
    assert effective_check_out_time(shift, "13:10:05") == time(13, 10, 5)


def test_piket_example_clamps_checkout() -> None:
    shift = get_shift("piket")
    assert late_minutes(shift, "07:50:00") == 0
    assert early_leave_minutes(shift, "16:30:00") == 0
    assert effective_check_out_time(shift, "16:30:00") == time(16, 0)


def test_checkout_not_clamped_when_disabled() -> None:
    shift = get_shift(ShiftKey.PIKET)
    assert effective_check_out_time(shift, time(16, 30, 10), clamp=False) == time(16, 30, 10)
