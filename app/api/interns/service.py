import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import InternStatus
from app.core.exceptions import NotFoundError, PersistenceError, ValidationError
from app.core.models import Intern

from .schemas import InternCreate, InternResponse

logger = logging.getLogger(__name__)


def _to_response(intern: Intern) -> InternResponse:
    return InternResponse(
        id=intern.id,
        name=intern.name,
        school=intern.school,
        status=intern.status,
        created_at=intern.created_at,
    )


async def create_intern(db: AsyncSession, payload: InternCreate) -> InternResponse:
    name = payload.name.strip()
    school = payload.school.strip()
    if not name or not school:
        raise ValidationError("Nama & sekolah wajib")
    intern = Intern(name=name, school=school, status=InternStatus.AKTIF.value)
    db.add(intern)
    try:
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Failed to create intern %r", name)
        raise PersistenceError()
    await db.refresh(intern)
    logger.info("Intern %s created (%s, %s)", intern.id, intern.name, intern.school)
    return _to_response(intern)


async def list_interns(db: AsyncSession, active_only: bool = False) -> List[InternResponse]:
    stmt = select(Intern)
    if active_only:
        stmt = stmt.where(Intern.status == InternStatus.AKTIF.value)
    stmt = stmt.order_by(Intern.id.desc())
    result = await db.execute(stmt)
    return [_to_response(i) for i in result.scalars().all()]


async def get_intern(db: AsyncSession, intern_id: int) -> Optional[Intern]:
    return await db.get(Intern, intern_id)


async def get_active_intern(db: AsyncSession, intern_id: int) -> Intern:
    """Intern that may still record attendance; raises NotFoundError / ValidationError."""
    intern = await db.get(Intern, intern_id)
    if not intern:
        raise NotFoundError("Peserta tidak ditemukan")
    if not intern.is_active:
        raise ValidationError("Peserta sudah tidak aktif")
    return intern


async def deactivate_intern(db: AsyncSession, intern_id: int) -> bool:
    """Soft delete: attendance history stays, the intern drops out of check-in and the sweep."""
    intern = await db.get(Intern, intern_id)
    if not intern:
        return False
    if intern.status == InternStatus.NONAKTIF.value:
        return True
    intern.status = InternStatus.NONAKTIF.value
    try:
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Failed to deactivate intern %s", intern_id)
        raise PersistenceError()
    logger.info("Intern %s deactivated", intern_id)
    return True
