"""
Blog API Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: AsyncMock session for data-access unit tests
    ├── test_settings:   Settings pointing at a per-test SQLite file
    ├── database:        Database context with the schema created
    ├── db_session:      Real session on that database
    ├── test_app:        FastAPI app built by create_app(test_settings)
    └── test_client:     HTTPX AsyncClient talking to test_app
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set before blogapi is imported: blogapi.main builds a module-level app from
# the environment, and it must not point at a real server database.
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(prefix="blogapi_test_"), "default.db")
)
os.environ["LOG_LEVEL"] = "WARNING"

from blogapi.config import Settings  # noqa: E402
from blogapi.database import Database  # noqa: E402
from blogapi.main import create_app  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Mocked Session
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_lookup(mock_db_session):
            mock_result = MagicMock()
            mock_result.scalar_one_or_none.return_value = 7
            mock_db_session.execute.return_value = mock_result
            user_id = await blog_service.get_user_id_by_email(mock_db_session, "a@b.c")
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    # get_bind() is synchronous on AsyncSession
    session.get_bind = MagicMock()
    session.get_bind.return_value.dialect.name = "sqlite"
    return session


# ══════════════════════════════════════════════════════════════════════════
# Real Database (SQLite via aiosqlite)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings(tmp_path):
    """Settings for an isolated SQLite database file under tmp_path."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'blog.db'}",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def database(test_settings):
    """A Database context with all tables created; disposed after the test."""
    db = Database(test_settings)
    await db.create_schema()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    """A real AsyncSession on the per-test database file."""
    async with database.session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_app(test_settings):
    """An application built for the test database, schema created."""
    app = create_app(test_settings)
    await app.state.database.create_schema()
    yield app
    await app.state.database.dispose()


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_home(test_client):
            response = await test_client.get("/home")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# Data Helpers
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def sample_user():
    return {"email": "ada@example.com", "firstname": "Ada", "lastname": "Lovelace"}


@pytest.fixture
def auth(sample_user):
    """Headers identifying the sample user."""
    return {"Email": sample_user["email"]}
