"""Attendance API router."""

from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.clock import get_local_now
from app.core.exceptions import ServiceError
from app.db.session import get_db

from . import service
from .schemas import (
    AttendanceActionResponse,
    AttendanceListItem,
    AttendanceRecordResponse,
    CheckInRequest,
    CheckOutRequest,
    LeaveRequest,
)

router = APIRouter(prefix="/api/attendance", tags=["attendance"])


def _action_response(record, message: str) -> AttendanceActionResponse:
    return AttendanceActionResponse(**service.record_to_response(record).model_dump(), message=message)


@router.get("", response_model=List[AttendanceListItem])
async def list_attendance(
    tanggal: Optional[date] = Query(None, description="Only rows for this date (YYYY-MM-DD)"),
    db: AsyncSession = Depends(get_db),
) -> List[AttendanceListItem]:
    return await service.list_attendance(db, tanggal)


@router.get("/today/{intern_id}", response_model=Optional[AttendanceRecordResponse])
async def get_today_attendance(
    intern_id: int,
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_local_now),
) -> Optional[AttendanceRecordResponse]:
    return await service.query_today(db, intern_id, now.date())


@router.get("/history/{intern_id}", response_model=List[AttendanceRecordResponse])
async def get_attendance_history(
    intern_id: int,
    db: AsyncSession = Depends(get_db),
) -> List[AttendanceRecordResponse]:
    """All rows for the intern, most recent date first."""
    return await service.query_history(db, intern_id)


@router.post("/checkin", response_model=AttendanceActionResponse, status_code=status.HTTP_201_CREATED)
async def check_in(
    payload: CheckInRequest,
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_local_now),
) -> AttendanceActionResponse:
    try:
        record = await service.check_in(db, payload.intern_id, payload.shift, now)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    if record.telat_menit:
        message = f"Check-in berhasil, terlambat {record.telat_menit} menit"
    else:
        message = "Check-in berhasil"
    return _action_response(record, message)


@router.post("/checkout", response_model=AttendanceActionResponse)
async def check_out(
    payload: CheckOutRequest,
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_local_now),
) -> AttendanceActionResponse:
    try:
        record = await service.check_out(db, payload.intern_id, now)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    if record.pulang_awal_menit:
        message = f"Check-out berhasil, pulang awal {record.pulang_awal_menit} menit"
    else:
        message = "Check-out berhasil"
    return _action_response(record, message)


@router.post("/izin", response_model=AttendanceActionResponse, status_code=status.HTTP_201_CREATED)
async def request_leave(
    payload: LeaveRequest,
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_local_now),
) -> AttendanceActionResponse:
    try:
        record = await service.request_leave(db, payload.intern_id, payload.shift, now.date())
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return _action_response(record, "Izin berhasil dicatat")
