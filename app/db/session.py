from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.core.config import settings


def make_engine(database_url: str) -> AsyncEngine:
    # pool_pre_ping / pool_recycle: drop connections the server closed while idle.
    kwargs = {"echo": False, "future": True}
    if not database_url.startswith("sqlite"):
        kwargs.update(pool_pre_ping=True, pool_recycle=300)
    return create_async_engine(database_url, **kwargs)


def make_session_factory(db_engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)


engine = make_engine(settings.database_url)

AsyncSessionLocal = make_session_factory(engine)

Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session
