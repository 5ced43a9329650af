from datetime import date, time
from typing import Optional

from pydantic import BaseModel, Field


class CheckInRequest(BaseModel):
    intern_id: int
    shift: str = Field(..., description="shift1, shift2, piket")


class CheckOutRequest(BaseModel):
    intern_id: int


class LeaveRequest(BaseModel):
    intern_id: int
    shift: Optional[str] = Field(None, description="shift1, shift2, piket or izin (default)")


class AttendanceRecordResponse(BaseModel):
    """Single attendance row; times are local HH:MM:SS."""

    id: int
    intern_id: int
    tanggal: date
    shift: Optional[str] = None
    jam_masuk: Optional[time] = None
    jam_keluar: Optional[time] = None
    telat_menit: int = 0
    pulang_awal_menit: int = 0
    status: str
    keterangan: Optional[str] = None

    class Config:
        from_attributes = True


class AttendanceActionResponse(AttendanceRecordResponse):
    message: str


class AttendanceListItem(AttendanceRecordResponse):
    intern_name: Optional[str] = None
