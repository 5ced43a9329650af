"""
Run the daily absence sweep once, outside the API process (e.g. from cron).

Usage:
  python -m app.scripts.sweep_absences
  python -m app.scripts.sweep_absences --date 2024-05-01
  python -m app.scripts.sweep_absences --target today --reason libur
"""

import argparse
import asyncio
import logging
from datetime import date
from typing import Optional

from app.api.attendance.sweeper import resolve_sweep_date, sweep_absences
from app.core.clock import local_now
from app.core.config import settings
from app.db.session import AsyncSessionLocal


async def run(target_date: date, reason: str) -> int:
    async with AsyncSessionLocal() as session:
        result = await sweep_absences(session, target_date, reason)
    print(
        f"{result.target_date}: created={len(result.created)} "
        f"skipped={len(result.skipped)} failed={len(result.failed)}"
    )
    return 1 if result.failed else 0


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description="Mark interns without attendance as absent")
    parser.add_argument("--date", type=date.fromisoformat, help="Target date YYYY-MM-DD")
    parser.add_argument("--target", choices=["yesterday", "today"], default=settings.absence_sweep_target)
    parser.add_argument("--reason", choices=["alpa", "libur"], default=settings.absence_sweep_reason)
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level.upper())
    target_date = args.date or resolve_sweep_date(local_now(), args.target)
    return asyncio.run(run(target_date, args.reason))


if __name__ == "__main__":
    raise SystemExit(main())
