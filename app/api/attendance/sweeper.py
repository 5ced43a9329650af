"""
Daily absence sweep: give every active intern without a row for the target
date an ``alpa`` row. Re-running for the same date is a no-op, and one
intern's failure does not stop the others.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Awaitable, Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.clock import local_now
from app.core.config import settings
from app.core.enums import AbsenceReason, AttendanceStatus, InternStatus
from app.core.models import Attendance, Intern

logger = logging.getLogger(__name__)


@dataclass
class SweepResult:
    target_date: date
    created: List[int] = field(default_factory=list)
    skipped: List[int] = field(default_factory=list)
    failed: List[int] = field(default_factory=list)


def resolve_sweep_date(now: datetime, target: str = "yesterday") -> date:
    """'yesterday' (the default, a closed day) or 'today'."""
    if target == "today":
        return now.date()
    if target == "yesterday":
        return now.date() - timedelta(days=1)
    raise ValueError(f"Unknown sweep target: {target}")


async def sweep_absences(
    db: AsyncSession,
    target_date: date,
    reason: str = AbsenceReason.ALPA.value,
) -> SweepResult:
    reason = AbsenceReason(reason).value
    result = SweepResult(target_date=target_date)

    intern_ids = (
        await db.execute(
            select(Intern.id).where(Intern.status == InternStatus.AKTIF.value).order_by(Intern.id)
        )
    ).scalars().all()
    recorded = set(
        (
            await db.execute(select(Attendance.intern_id).where(Attendance.tanggal == target_date))
        ).scalars().all()
    )

    for intern_id in intern_ids:
        if intern_id in recorded:
            result.skipped.append(intern_id)
            continue
        db.add(
            Attendance(
                intern_id=intern_id,
                tanggal=target_date,
                shift=None,
                jam_masuk=None,
                jam_keluar=None,
                telat_menit=0,
                pulang_awal_menit=0,
                status=AttendanceStatus.ALPA.value,
                keterangan=reason,
            )
        )
        try:
            await db.commit()
        except IntegrityError:
            # Row appeared after the snapshot above.
            await db.rollback()
            result.skipped.append(intern_id)
        except SQLAlchemyError:
            await db.rollback()
            logger.exception("Absence sweep failed for intern %s on %s", intern_id, target_date)
            result.failed.append(intern_id)
        else:
            result.created.append(intern_id)

    logger.info(
        "Absence sweep for %s: created=%s skipped=%s failed=%s",
        target_date, len(result.created), len(result.skipped), len(result.failed),
    )
    return result


def next_trigger_at(now: datetime, trigger: str) -> datetime:
    """Next ``HH:MM`` strictly after ``now`` on the same wall clock."""
    hour, minute = (int(p) for p in trigger.split(":")[:2])
    next_run = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if next_run <= now:
        next_run += timedelta(days=1)
    return next_run


def seconds_until(now: datetime, trigger: str) -> float:
    return (next_trigger_at(now, trigger) - now).total_seconds()


async def run_daily_sweeper(
    session_factory: async_sessionmaker,
    clock: Optional[Callable[[], datetime]] = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> None:
    """
    Loop forever: sleep until the configured local time, then sweep.

    The target date comes from the scheduled run time, not from the clock
    after waking. A failed run is logged and the loop waits for the next
    day. Only cancellation ends the loop.
    """
    clock = clock or local_now
    logger.info(
        "Absence sweeper scheduled daily at %s %s (target=%s, reason=%s)",
        settings.absence_sweep_time, settings.timezone,
        settings.absence_sweep_target, settings.absence_sweep_reason,
    )
    while True:
        now = clock()
        next_run = next_trigger_at(now, settings.absence_sweep_time)
        await sleep(max((next_run - now).total_seconds(), 0.0))
        target_date = resolve_sweep_date(next_run, settings.absence_sweep_target)
        try:
            async with session_factory() as session:
                await sweep_absences(session, target_date, settings.absence_sweep_reason)
        except Exception:
            logger.exception("Absence sweep for %s aborted", target_date)
        # Avoid firing twice within the trigger minute.
        await sleep(60)
