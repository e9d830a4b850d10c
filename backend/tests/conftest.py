"""
PasteBin Backend - Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (service unit tests)
    ├── identity / other_identity: Resolved caller identities
    ├── database: Real schema in a temporary SQLite file, dropped afterwards
    ├── test_client: HTTPX AsyncClient bound to the FastAPI app via ASGI
    └── signup: Helper that registers a user and returns (token, user)
"""

import os
import tempfile

# Environment must be in place BEFORE anything imports app.config:
# the settings singleton and the engine are built at import time
_TEST_DB_DIR = tempfile.mkdtemp(prefix="pastebin_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR}/test.db"
os.environ["JWT_SECRET"] = "test-secret-key-that-is-long-enough-for-hs256-signing"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timezone  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402

from app.services.token_service import TokenIdentity  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Unit-test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_paste(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = paste
            result = await paste_service.get_paste(mock_db_session, "some-uuid")
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def identity():
    return TokenIdentity(user_id=1, email="owner@example.com")


@pytest.fixture
def other_identity():
    return TokenIdentity(user_id=2, email="someone-else@example.com")


@pytest.fixture
def sample_paste_data():
    """A dictionary matching the Paste model's public fields."""
    return {
        "id": 7,
        "uuid": "3f0c6a52-8d5e-4b8f-9c1e-2f6d7a9b0e11",
        "content": "hello\nworld",
        "user_id": 1,
        "created_at": datetime.now(timezone.utc),
    }


# ══════════════════════════════════════════════════════════════════════════
# Integration Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def database():
    """Create every table before the test and drop them all afterwards."""
    from app.database import Base, engine
    import app.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def test_client(database):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from app.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def signup(test_client):
    """Register a user through the API; returns (token, user_dict)."""

    async def _signup(email: str = "a@x.com", password: str = "secret1"):
        response = await test_client.post(
            "/api/auth/signup", json={"email": email, "password": password}
        )
        assert response.status_code == 200, response.text
        body = response.json()
        return body["token"], body["user"]

    return _signup
