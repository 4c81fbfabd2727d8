"""Engine lifecycle and per-request session tests."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import create_async_engine

from workflow_catalog import database


@pytest.mark.asyncio
async def test_init_db_creates_catalog_tables(tmp_path, monkeypatch):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'fresh.db'}")
    monkeypatch.setattr(database, "engine", engine)

    await database.init_db()
    await database.init_db()  # existing tables are left alone

    async with engine.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    assert {"users", "categories", "templates", "collections"} <= set(tables)

    await database.dispose_db()


@pytest.mark.asyncio
async def test_get_db_rolls_back_failed_request(session_factory, monkeypatch):
    monkeypatch.setattr(database, "async_session", session_factory)

    sessions = database.get_db()
    session = await sessions.__anext__()
    session.rollback = AsyncMock()

    with pytest.raises(RuntimeError):
        await sessions.athrow(RuntimeError("handler failed"))
    session.rollback.assert_awaited_once()
