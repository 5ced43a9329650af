from enum import Enum


class ShiftKey(str, Enum):
    SHIFT1 = "shift1"
    SHIFT2 = "shift2"
    PIKET = "piket"


class AttendanceStatus(str, Enum):
    HADIR = "hadir"
    IZIN = "izin"
    ALPA = "alpa"


class AbsenceReason(str, Enum):
    """Stored in attendance.keterangan for sweeper-created rows."""

    ALPA = "alpa"
    LIBUR = "libur"


class InternStatus(str, Enum):
    AKTIF = "Aktif"
    NONAKTIF = "Nonaktif"
