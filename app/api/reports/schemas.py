from datetime import date
from typing import List

from pydantic import BaseModel


class DailyRecapRow(BaseModel):
    tanggal: date
    hadir: int
    izin: int
    alpa: int
    total: int
    percentage: float


class RecapSummary(BaseModel):
    hadir: int
    izin: int
    alpa: int
    average: float


class DailyRecapResponse(BaseModel):
    start: date
    end: date
    total_interns: int
    rows: List[DailyRecapRow]
    summary: RecapSummary
