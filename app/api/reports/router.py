from datetime import date, datetime, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.clock import get_local_now
from app.core.exceptions import ServiceError
from app.db.session import get_db

from . import service
from .schemas import DailyRecapResponse

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/daily", response_model=DailyRecapResponse)
async def daily_recap(
    start: Optional[date] = Query(None, description="First date (default: 29 days before end)"),
    end: Optional[date] = Query(None, description="Last date (default: today)"),
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_local_now),
) -> DailyRecapResponse:
    end = end or now.date()
    start = start or end - timedelta(days=29)
    try:
        return await service.get_daily_recap(db, start, end)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
