"""Shift catalog: the fixed daily windows interns can check in against."""

from dataclasses import dataclass
from datetime import time
from typing import Dict, Union

from app.core.enums import ShiftKey
from app.core.exceptions import InvalidShift

# Shift value stored on leave rows when no work shift is given.
LEAVE_SHIFT = "izin"


@dataclass(frozen=True)
class ShiftWindow:
    key: ShiftKey
    label: str
    start: time
    end: time

    @property
    def duration_minutes(self) -> int:
        return (self.end.hour * 60 + self.end.minute) - (self.start.hour * 60 + self.start.minute)


SHIFTS: Dict[ShiftKey, ShiftWindow] = {
    ShiftKey.SHIFT1: ShiftWindow(ShiftKey.SHIFT1, "Shift 1", time(7, 30), time(13, 30)),
    ShiftKey.SHIFT2: ShiftWindow(ShiftKey.SHIFT2, "Shift 2", time(12, 30), time(18, 30)),
    ShiftKey.PIKET: ShiftWindow(ShiftKey.PIKET, "Piket", time(8, 0), time(16, 0)),
}


def parse_shift_key(value: Union[str, ShiftKey, None]) -> ShiftKey:
    """Map a raw shift value to ShiftKey; raises InvalidShift for anything else."""
    if isinstance(value, ShiftKey):
        return value
    try:
        return ShiftKey(str(value).strip().lower())
    except ValueError:
        raise InvalidShift(value)


def get_shift(value: Union[str, ShiftKey, None]) -> ShiftWindow:
    return SHIFTS[parse_shift_key(value)]
