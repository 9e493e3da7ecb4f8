"""Shared pytest fixtures for the Poker Tracker test suite.

Provides common test fixtures used across unit and integration tests,
including a mock STT provider, a sample voice note, and database setup
helpers backed by in-memory SQLite.
"""

from unittest.mock import AsyncMock

import pytest

# ---------------------------------------------------------------------------
# STT Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_stt():
    """Create a mock STT provider for unit testing.

    Returns:
        AsyncMock: A mock implementing the BaseSTT interface that
        transcribes every clip to the same sentence.
    """
    from src.services.transcription.base import BaseSTT

    stt = AsyncMock(spec=BaseSTT)
    stt.transcribe.return_value = "Raised the river with top pair."
    return stt


# ---------------------------------------------------------------------------
# Audio Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_audio_bytes():
    """A few bytes standing in for an encoded voice note."""
    return b"RIFF\x24\x00\x00\x00WAVEfmt " + b"\x00" * 32


@pytest.fixture
def sample_audio_path(tmp_path, sample_audio_bytes):
    """Write the sample voice note to a temporary file.

    Returns:
        Path: Location of the temporary audio file.
    """
    path = tmp_path / "3f2b8c1e-voice.wav"
    path.write_bytes(sample_audio_bytes)
    return path


# ---------------------------------------------------------------------------
# Database Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite async engine with tables, dispose after test."""
    from sqlalchemy.ext.asyncio import create_async_engine

    from src.services.storage.database import Base

    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Yield an AsyncSession bound to the test engine; rolls back after test."""
    from sqlalchemy.ext.asyncio import async_sessionmaker

    factory = async_sessionmaker(db_engine, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def repository(db_session):
    """Return a TransactionRepository bound to the test session."""
    from src.services.storage.repository import TransactionRepository

    return TransactionRepository(db_session)


@pytest.fixture
def isolated_settings(tmp_path, monkeypatch):
    """Point recordings at a temp dir and clear cached settings around the test."""
    from src.core.config import get_settings

    monkeypatch.setenv("RECORDINGS_DIR", str(tmp_path / "recordings"))
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()
