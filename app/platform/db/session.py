from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.platform.config import settings


def build_engine(database_url: str | None = None) -> AsyncEngine:
    url = database_url or settings.DATABASE_URL
    if url.startswith("sqlite"):
        return create_async_engine(url, echo=False, future=True)

    return create_async_engine(
        url,
        echo=False,
        future=True,
        pool_pre_ping=True,
        pool_recycle=1800,
        pool_size=20,
        max_overflow=30,  # (burst capacity)
        pool_timeout=30,
    )


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False, autocommit=False)


async def create_tables(engine: AsyncEngine) -> None:
    from app.platform.db.models import metadata

    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    async with request.app.state.sessionmaker() as session:
        yield session
