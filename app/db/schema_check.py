import asyncio
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

# Import models so Base.metadata knows every table.
from app.core.models import Attendance, Intern  # noqa: F401
from app.db.session import Base, engine

logger = logging.getLogger(__name__)


# Databases created before the daily lock existed can hold several rows for
# one (intern_id, tanggal); keep the earliest one.
DELETE_DUPLICATE_ATTENDANCE: str = """
    DELETE FROM attendance
    WHERE id NOT IN (
        SELECT MIN(id) FROM attendance GROUP BY intern_id, tanggal
    );
"""

CREATE_ATTENDANCE_DAILY_UNIQUE: str = """
    CREATE UNIQUE INDEX IF NOT EXISTS uq_attendance_intern_tanggal
    ON attendance (intern_id, tanggal);
"""


async def ensure_daily_unique(db_engine: AsyncEngine) -> int:
    """Deduplicate attendance and install the (intern_id, tanggal) unique index. Returns rows removed."""
    async with db_engine.begin() as conn:
        result = await conn.execute(text(DELETE_DUPLICATE_ATTENDANCE))
        removed = result.rowcount or 0
        await conn.execute(text(CREATE_ATTENDANCE_DAILY_UNIQUE))
    if removed:
        logger.warning("Removed %s duplicate attendance rows before adding daily unique index", removed)
    return removed


async def ensure_tables(db_engine: AsyncEngine) -> None:
    """
    Ensure that all tables exist in the connected database.
    Missing tables are created; existing ones are left as they are apart from
    the attendance daily unique index.
    """
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await ensure_daily_unique(db_engine)
    logger.info("Database tables verified")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(ensure_tables(engine))
