from datetime import time

import pytest

from app.core.enums import ShiftKey
from app.core.exceptions import InvalidShift
from app.core.shifts import SHIFTS, get_shift, parse_shift_key


def test_catalog_windows() -> None:
    assert (SHIFTS[ShiftKey.SHIFT1].start, SHIFTS[ShiftKey.SHIFT1].end) == (time(7, 30), time(13, 30))
    assert (SHIFTS[ShiftKey.SHIFT2].start, SHIFTS[ShiftKey.SHIFT2].end) == (time(12, 30), time(18, 30))
    assert (SHIFTS[ShiftKey.PIKET].start, SHIFTS[ShiftKey.PIKET].end) == (time(8, 0), time(16, 0))


def test_every_shift_starts_before_it_ends() -> None:
    for window in SHIFTS.values():
        assert window.start < window.end
        assert window.duration_minutes > 0


def test_parse_is_case_and_space_tolerant() -> None:
    assert parse_shift_key(" Shift2 ") is ShiftKey.SHIFT2
    assert get_shift("PIKET").label == "Piket"


@pytest.mark.parametrize("raw", ["shift3", "", None, "izin", "libur"])
def test_unknown_shift_rejected(raw) -> None:
    with pytest.raises(InvalidShift) as exc_info:
        get_shift(raw)
    assert exc_info.value.status_code == 400
