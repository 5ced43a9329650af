from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class InternCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    school: str = Field(..., min_length=1, max_length=150)


class InternResponse(BaseModel):
    id: int
    name: str
    school: str
    status: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class InternDetailResponse(InternResponse):
    """Intern plus attendance counts across the whole history."""

    hadir: int
    izin: int
    alpa: int
    total: int
    percentage: float


class MessageResponse(BaseModel):
    message: str
