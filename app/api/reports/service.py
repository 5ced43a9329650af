"""Read-side aggregation over attendance: per-intern summary and per-day recap."""

from collections import defaultdict
from datetime import date
from typing import Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.interns.schemas import InternDetailResponse
from app.core.enums import AttendanceStatus, InternStatus
from app.core.exceptions import ValidationError
from app.core.models import Attendance, Intern

from .schemas import DailyRecapResponse, DailyRecapRow, RecapSummary


def attendance_percentage(hadir: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return round(hadir / total * 100, 1)


async def get_intern_summary(db: AsyncSession, intern_id: int) -> Optional[InternDetailResponse]:
    intern = await db.get(Intern, intern_id)
    if not intern:
        return None
    result = await db.execute(
        select(Attendance.status, func.count(Attendance.id))
        .where(Attendance.intern_id == intern_id)
        .group_by(Attendance.status)
    )
    counts: Dict[str, int] = {s: c for s, c in result.all()}
    hadir = counts.get(AttendanceStatus.HADIR.value, 0)
    izin = counts.get(AttendanceStatus.IZIN.value, 0)
    alpa = counts.get(AttendanceStatus.ALPA.value, 0)
    total = hadir + izin + alpa
    return InternDetailResponse(
        id=intern.id,
        name=intern.name,
        school=intern.school,
        status=intern.status,
        created_at=intern.created_at,
        hadir=hadir,
        izin=izin,
        alpa=alpa,
        total=total,
        percentage=attendance_percentage(hadir, total),
    )


async def get_daily_recap(db: AsyncSession, start: date, end: date) -> DailyRecapResponse:
    """
    One row per date that has any attendance. ``alpa`` is every active intern
    without a hadir or izin row that day, swept or not.

    Every day is measured against the roster as it is now: interns added later
    count as alpa on earlier days, and deactivated interns drop out of past
    days entirely. Deactivation is not dated, so past rosters are not rebuilt.
    """
    if end < start:
        raise ValidationError("Tanggal akhir harus setelah tanggal awal")

    total_interns = (
        await db.execute(select(func.count(Intern.id)).where(Intern.status == InternStatus.AKTIF.value))
    ).scalar_one()

    result = await db.execute(
        select(Attendance.tanggal, Attendance.status, func.count(Attendance.id))
        .join(Intern, Attendance.intern_id == Intern.id)
        .where(
            Attendance.tanggal >= start,
            Attendance.tanggal <= end,
            Intern.status == InternStatus.AKTIF.value,
        )
        .group_by(Attendance.tanggal, Attendance.status)
    )
    per_day: Dict[date, Dict[str, int]] = defaultdict(dict)
    for tanggal, status, count in result.all():
        per_day[tanggal][status] = count

    rows = []
    for tanggal in sorted(per_day, reverse=True):
        counts = per_day[tanggal]
        hadir = counts.get(AttendanceStatus.HADIR.value, 0)
        izin = counts.get(AttendanceStatus.IZIN.value, 0)
        alpa = max(total_interns - hadir - izin, 0)
        total = hadir + izin + alpa
        rows.append(
            DailyRecapRow(
                tanggal=tanggal,
                hadir=hadir,
                izin=izin,
                alpa=alpa,
                total=total,
                percentage=attendance_percentage(hadir, total),
            )
        )

    hadir_sum = sum(r.hadir for r in rows)
    izin_sum = sum(r.izin for r in rows)
    alpa_sum = sum(r.alpa for r in rows)
    return DailyRecapResponse(
        start=start,
        end=end,
        total_interns=total_interns,
        rows=rows,
        summary=RecapSummary(
            hadir=hadir_sum,
            izin=izin_sum,
            alpa=alpa_sum,
            average=attendance_percentage(hadir_sum, hadir_sum + izin_sum + alpa_sum),
        ),
    )
