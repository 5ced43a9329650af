"""
Migration: enforce one attendance row per intern per day.

- Adds attendance.keterangan (absence reason) to databases created before it existed.
- Removes duplicate (intern_id, tanggal) rows, keeping the lowest id.
- Creates the unique index uq_attendance_intern_tanggal.

Run once (or rely on schema_check, which applies the index part at startup):
  python -m app.db.migrations.001_add_attendance_daily_unique
"""
import asyncio

from sqlalchemy import inspect, text
from sqlalchemy.ext.asyncio import AsyncEngine

from app.db.schema_check import ensure_daily_unique
from app.db.session import engine


ADD_KETERANGAN_COLUMN = "ALTER TABLE attendance ADD COLUMN keterangan VARCHAR(20)"


def _attendance_columns(sync_conn) -> set:
    return {c["name"] for c in inspect(sync_conn).get_columns("attendance")}


async def run_migration(db_engine: AsyncEngine) -> None:
    async with db_engine.begin() as conn:
        columns = await conn.run_sync(_attendance_columns)
        if "keterangan" not in columns:
            await conn.execute(text(ADD_KETERANGAN_COLUMN))
            print("Added attendance.keterangan")

    removed = await ensure_daily_unique(db_engine)
    print(f"Removed {removed} duplicate attendance rows")
    print("Migration 001_add_attendance_daily_unique done.")


if __name__ == "__main__":
    asyncio.run(run_migration(engine))
