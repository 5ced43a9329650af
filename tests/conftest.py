import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("AUTO_CREATE_TABLES", "0")
os.environ.setdefault("ABSENCE_SWEEP_ENABLED", "0")
os.environ.setdefault("APP_TIMEZONE", "Asia/Jakarta")

from datetime import date, datetime, time  # noqa: E402
from typing import AsyncGenerator, Callable, Optional  # noqa: E402
from zoneinfo import ZoneInfo  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

from app.core.clock import get_local_now  # noqa: E402
from app.core.enums import InternStatus  # noqa: E402
from app.core.models import Intern  # noqa: E402
from app.db.session import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402

TZ = ZoneInfo("Asia/Jakarta")
TODAY = date(2024, 5, 1)


class FrozenClock:
    """Pinned local time for the get_local_now dependency."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def set(self, hour: int, minute: int, second: int = 0, day: Optional[date] = None) -> datetime:
        day = day or self.now.date()
        self.now = datetime.combine(day, time(hour, minute, second), tzinfo=TZ)
        return self.now

    def __call__(self) -> datetime:
        return self.now


def at(hour: int, minute: int, second: int = 0, day: date = TODAY) -> datetime:
    return datetime.combine(day, time(hour, minute, second), tzinfo=TZ)


@pytest.fixture()
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """File-backed SQLite so concurrent sessions really hit the same database."""
    db_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False, future=True)
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield db_engine
    await db_engine.dispose()


@pytest.fixture()
def session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
async def db_session(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture()
def make_intern(session_factory: async_sessionmaker) -> Callable:
    async def _make(name: str = "Budi", school: str = "SMKN 1", status: str = InternStatus.AKTIF.value) -> int:
        async with session_factory() as session:
            intern = Intern(name=name, school=school, status=status)
            session.add(intern)
            await session.commit()
            return intern.id

    return _make


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock(at(7, 0))


@pytest.fixture()
async def client(session_factory: async_sessionmaker, clock: FrozenClock) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the FastAPI app, one session per request."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_local_now] = clock
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
