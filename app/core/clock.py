from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from app.core.config import settings


def local_now(tz_name: Optional[str] = None) -> datetime:
    """Current wall-clock time in the configured reference zone, second resolution."""
    tz = ZoneInfo(tz_name or settings.timezone)
    return datetime.now(tz).replace(microsecond=0)


def get_local_now() -> datetime:
    """FastAPI dependency; overridden in tests to pin the clock."""
    return local_now()
