"""Check-in, check-out and leave (izin) with the one-row-per-day lock."""

import logging
from datetime import date, datetime, time
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.interns.service import get_active_intern
from app.core.config import settings
from app.core.enums import AttendanceStatus
from app.core.exceptions import AlreadyCheckedOut, AlreadyRecordedToday, NotCheckedIn, PersistenceError
from app.core.models import Attendance, Intern
from app.core.shifts import LEAVE_SHIFT, get_shift, parse_shift_key
from app.core.time_utils import early_leave_minutes, effective_check_out_time, late_minutes

from .schemas import AttendanceListItem, AttendanceRecordResponse

logger = logging.getLogger(__name__)


def _wall_time(now: datetime) -> time:
    return now.time().replace(microsecond=0)


def record_to_response(r: Attendance) -> AttendanceRecordResponse:
    return AttendanceRecordResponse.model_validate(r)


async def get_record(db: AsyncSession, intern_id: int, tanggal: date) -> Optional[Attendance]:
    result = await db.execute(
        select(Attendance).where(
            Attendance.intern_id == intern_id,
            Attendance.tanggal == tanggal,
        )
    )
    return result.scalar_one_or_none()


async def insert_record(db: AsyncSession, record: Attendance) -> Attendance:
    """
    Insert a new day row. The (intern_id, tanggal) unique constraint decides
    between concurrent writers; the loser gets AlreadyRecordedToday.
    """
    db.add(record)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.info("Duplicate attendance rejected for intern %s on %s", record.intern_id, record.tanggal)
        raise AlreadyRecordedToday()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Failed to insert attendance for intern %s on %s", record.intern_id, record.tanggal)
        raise PersistenceError()
    await db.refresh(record)
    return record


async def check_in(db: AsyncSession, intern_id: int, shift: str, now: datetime) -> Attendance:
    window = get_shift(shift)
    await get_active_intern(db, intern_id)
    today = now.date()
    if await get_record(db, intern_id, today):
        raise AlreadyRecordedToday()

    jam_masuk = _wall_time(now)
    record = Attendance(
        intern_id=intern_id,
        tanggal=today,
        shift=window.key.value,
        jam_masuk=jam_masuk,
        jam_keluar=None,
        telat_menit=late_minutes(window, jam_masuk),
        pulang_awal_menit=0,
        status=AttendanceStatus.HADIR.value,
    )
    record = await insert_record(db, record)
    logger.info(
        "Intern %s checked in on %s (%s) at %s, late %s min",
        intern_id, today, window.key.value, jam_masuk, record.telat_menit,
    )
    return record


async def check_out(
    db: AsyncSession,
    intern_id: int,
    now: datetime,
    clamp: Optional[bool] = None,
) -> Attendance:
    await get_active_intern(db, intern_id)
    today = now.date()
    record = await get_record(db, intern_id, today)
    if not record or record.status != AttendanceStatus.HADIR.value:
        raise NotCheckedIn()
    if record.jam_keluar is not None:
        raise AlreadyCheckedOut()

    window = get_shift(record.shift)
    actual = _wall_time(now)
    if clamp is None:
        clamp = settings.clamp_checkout_to_shift_end
    jam_keluar = effective_check_out_time(window, actual, clamp=clamp)
    pulang_awal = early_leave_minutes(window, actual)

    # Conditional update so two concurrent check-outs cannot both win.
    try:
        result = await db.execute(
            update(Attendance)
            .where(Attendance.id == record.id, Attendance.jam_keluar.is_(None))
            .values(jam_keluar=jam_keluar, pulang_awal_menit=pulang_awal)
        )
        if result.rowcount == 0:
            await db.rollback()
            raise AlreadyCheckedOut()
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Failed to check out intern %s on %s", intern_id, today)
        raise PersistenceError()
    await db.refresh(record)
    logger.info(
        "Intern %s checked out on %s at %s (recorded %s), early %s min",
        intern_id, today, actual, jam_keluar, pulang_awal,
    )
    return record


async def request_leave(
    db: AsyncSession,
    intern_id: int,
    shift: Optional[str],
    today: date,
) -> Attendance:
    if shift is None or str(shift).strip().lower() == LEAVE_SHIFT:
        shift_value = LEAVE_SHIFT
    else:
        shift_value = parse_shift_key(shift).value
    await get_active_intern(db, intern_id)
    if await get_record(db, intern_id, today):
        raise AlreadyRecordedToday()

    record = Attendance(
        intern_id=intern_id,
        tanggal=today,
        shift=shift_value,
        jam_masuk=None,
        jam_keluar=None,
        telat_menit=0,
        pulang_awal_menit=0,
        status=AttendanceStatus.IZIN.value,
    )
    record = await insert_record(db, record)
    logger.info("Intern %s on leave for %s", intern_id, today)
    return record


async def query_today(db: AsyncSession, intern_id: int, today: date) -> Optional[AttendanceRecordResponse]:
    record = await get_record(db, intern_id, today)
    return record_to_response(record) if record else None


async def query_history(db: AsyncSession, intern_id: int) -> List[AttendanceRecordResponse]:
    result = await db.execute(
        select(Attendance)
        .where(Attendance.intern_id == intern_id)
        .order_by(Attendance.tanggal.desc())
    )
    return [record_to_response(r) for r in result.scalars().all()]


async def list_attendance(db: AsyncSession, tanggal: Optional[date] = None) -> List[AttendanceListItem]:
    stmt = select(Attendance, Intern.name).join(Intern, Attendance.intern_id == Intern.id)
    if tanggal is not None:
        stmt = stmt.where(Attendance.tanggal == tanggal)
    stmt = stmt.order_by(Attendance.tanggal.desc(), Attendance.id.desc())
    result = await db.execute(stmt)
    items = []
    for record, intern_name in result.all():
        item = AttendanceListItem.model_validate(record)
        item.intern_name = intern_name
        items.append(item)
    return items
