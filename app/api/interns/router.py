from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.reports.service import get_intern_summary
from app.core.exceptions import ServiceError
from app.db.session import get_db

from . import service
from .schemas import InternCreate, InternDetailResponse, InternResponse, MessageResponse

router = APIRouter(prefix="/api/interns", tags=["interns"])


@router.get("", response_model=List[InternResponse])
async def list_interns(
    active_only: bool = Query(False, description="Return only status=Aktif"),
    db: AsyncSession = Depends(get_db),
) -> List[InternResponse]:
    return await service.list_interns(db, active_only=active_only)


@router.post("", response_model=InternResponse, status_code=status.HTTP_201_CREATED)
async def create_intern(
    payload: InternCreate,
    db: AsyncSession = Depends(get_db),
) -> InternResponse:
    try:
        return await service.create_intern(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{intern_id}", response_model=InternDetailResponse)
async def get_intern(
    intern_id: int,
    db: AsyncSession = Depends(get_db),
) -> InternDetailResponse:
    """Intern with hadir / izin / alpa counts and attendance percentage."""
    summary = await get_intern_summary(db, intern_id)
    if not summary:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Peserta tidak ditemukan")
    return summary


@router.delete("/{intern_id}", response_model=MessageResponse)
async def delete_intern(
    intern_id: int,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    try:
        deleted = await service.deactivate_intern(db, intern_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Peserta tidak ditemukan")
    return MessageResponse(message="Peserta berhasil dihapus")
