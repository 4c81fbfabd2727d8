"""Catalog storage: one async SQLite engine, one session per request.

Every service call commits its own statements, so a session never carries
work across requests. A failed request rolls its session back before the
connection goes back to the pool.
"""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from workflow_catalog.config import settings

logger = logging.getLogger(__name__)

# Concurrent writers wait on SQLite's file lock instead of failing at once.
engine = create_async_engine(
    settings.database_url,
    echo=(settings.env == "development"),
    connect_args={"timeout": settings.database_timeout},
)
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a catalog session."""
    async with async_session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create the catalog tables that do not exist yet; existing data is kept."""
    import workflow_catalog.models  # noqa: F401  registers every table on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Catalog schema ready (%d tables)", len(Base.metadata.tables))


async def dispose_db() -> None:
    await engine.dispose()
    logger.info("Database connections disposed")
