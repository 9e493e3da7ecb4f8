"""Integration test fixtures for the Poker Tracker API.

Provides an async HTTP client that uses an in-memory SQLite database with
real repository operations, a temp recordings directory, and a mocked STT
provider shared by every annotation workflow.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.app import create_app
from src.services import annotation
from src.services.storage import database


@pytest.fixture
def app():
    """Create a fresh FastAPI application instance."""
    return create_app()


@pytest.fixture
async def async_client(app, db_engine, isolated_settings, mock_stt, monkeypatch):
    """AsyncClient backed by the in-memory test engine.

    Injects the test engine into the database module so that all routes
    use the same in-memory SQLite with tables already created, and swaps in
    the mocked STT provider so no request leaves the process.
    """
    monkeypatch.setattr(annotation, "_workflows", {})
    monkeypatch.setattr(annotation, "_stt", mock_stt)
    database._engine = db_engine
    database._session_factory = None
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    database.reset_engine()
