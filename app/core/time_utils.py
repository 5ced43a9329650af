"""Minute-resolution time arithmetic against a shift window.

Seconds are carried for display only; every comparison is done on
minutes since midnight.
"""

from datetime import time
from typing import Union

from app.core.shifts import ShiftWindow

TimeLike = Union[str, time]


def time_to_minutes(value: TimeLike) -> int:
    """``"HH:MM[:SS]"`` (or a ``time``) -> minutes since midnight."""
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    parts = value.strip().split(":")
    return int(parts[0]) * 60 + int(parts[1])


def minutes_to_time(minutes: int) -> str:
    """Minutes since midnight -> ``"HH:MM:SS"``."""
    h, m = divmod(minutes, 60)
    return f"{h:02d}:{m:02d}:00"


def late_minutes(shift: ShiftWindow, check_in: TimeLike) -> int:
    start = time_to_minutes(shift.start)
    end = time_to_minutes(shift.end)
    now = time_to_minutes(check_in)
    if now <= start:
        return 0
    # capped at the shift duration
    return min(now - start, end - start)


def early_leave_minutes(shift: ShiftWindow, check_out: TimeLike) -> int:
    end = time_to_minutes(shift.end)
    now = time_to_minutes(check_out)
    if now >= end:
        return 0
    return end - now


def _as_time(value: TimeLike) -> time:
    if isinstance(value, time):
        return value
    parts = [int(p) for p in value.strip().split(":")]
    return time(*parts[:3])


def effective_check_out_time(shift: ShiftWindow, check_out: TimeLike, clamp: bool = True) -> time:
    """Recorded jam_keluar: the actual time, or the shift end if checked out after it."""
    actual = _as_time(check_out).replace(microsecond=0)
    if clamp and time_to_minutes(actual) > time_to_minutes(shift.end):
        return shift.end
    return actual
