"""Tests for store startup: table creation and recoverable init failures."""

import pytest
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import create_async_engine

from src.core.config import get_settings
from src.core.exceptions import StoreInitializationError
from src.services.storage import database


@pytest.fixture(autouse=True)
def _reset_database_module():
    database.reset_engine()
    get_settings.cache_clear()
    yield
    database.reset_engine()
    get_settings.cache_clear()


async def test_init_db_creates_transactions_table():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    await database.init_db(engine)
    async with engine.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    assert "transactions" in tables
    await engine.dispose()


async def test_init_db_creates_sqlite_parent_dir(tmp_path, monkeypatch):
    db_file = tmp_path / "nested" / "poker.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{db_file}")
    await database.init_db()
    assert db_file.exists()
    await database.close_db()


async def test_init_db_failure_is_recoverable(tmp_path, monkeypatch):
    """An unopenable store raises StoreInitializationError instead of exiting."""
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{blocker}/sub/poker.db")
    with pytest.raises(StoreInitializationError) as excinfo:
        await database.init_db()
    assert excinfo.value.code == "STORE_INIT_ERROR"
    await database.close_db()


async def test_get_session_rolls_back_on_error(db_engine):
    from src.services.storage.repository import TransactionRepository

    database._engine = db_engine
    with pytest.raises(RuntimeError):
        async with database.get_session() as session:
            await TransactionRepository(session).create_transaction(-5)
            raise RuntimeError("boom")
    async with database.get_session() as session:
        assert await TransactionRepository(session).count_transactions() == 0


async def test_close_db_drops_engine_and_factory(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'poker.db'}")
    await database.init_db()
    first = database.get_engine()
    database.get_session_factory()

    await database.close_db()

    assert database._engine is None
    assert database._session_factory is None
    assert database.get_engine() is not first
    await database.close_db()
