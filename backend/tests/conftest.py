"""
VendorHub Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment is pinned before any vendorhub import; each test then gets
       its own SQLite file (aiosqlite) wired into the app through
       dependency_overrides, so no PostgreSQL is needed.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for pure service unit tests
    ├── db_session_factory: async_sessionmaker on a fresh SQLite database
    ├── db_session: one session from that factory
    ├── upload_dir / file_service: FileService on a temporary directory
    ├── token_service: TokenService with a test secret
    ├── sample_image_bytes: tiny JPEG for upload tests
    ├── test_client: HTTPX AsyncClient on the app with the DB overridden
    └── registered_vendor / auth_headers: a vendor account and its token header
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any vendorhub imports
_TEST_ROOT = tempfile.mkdtemp(prefix="vendorhub_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_ROOT}/health.db"
os.environ["JWT_SECRET"] = "test-secret-not-for-production"
os.environ["BCRYPT_ROUNDS"] = "4"  # minimum cost keeps the suite fast
os.environ["UPLOAD_DIR"] = os.path.join(_TEST_ROOT, "uploads")
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_REQUESTS"] = "10000"  # the shared app must never throttle tests

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from vendorhub.database import Base, build_session_factory, get_db_session
from vendorhub.services.file_service import FileService
from vendorhub.services.security import TokenService

import vendorhub.models  # noqa: F401  registers every table on Base.metadata


# ══════════════════════════════════════════════════════════════════════════
# Unit-Test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_login_unknown(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = None
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.execute.return_value = MagicMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def file_service(upload_dir):
    return FileService(upload_dir=str(upload_dir), max_size=1024)


@pytest.fixture
def token_service():
    return TokenService(secret="unit-test-secret", algorithm="HS256", expires_in=3600)


@pytest.fixture
def sample_image_bytes():
    """Minimal JPEG: Start of Image (FFD8) + JFIF marker + End of Image (FFD9)."""
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_session_factory(tmp_path):
    """Fresh SQLite database with every table created."""
    from sqlalchemy.ext.asyncio import create_async_engine

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield build_session_factory(engine)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_session_factory):
    async with db_session_factory() as session:
        yield session


# ══════════════════════════════════════════════════════════════════════════
# API Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(db_session_factory):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    get_db_session is replaced with one bound to the per-test database,
    keeping its commit-on-success / rollback-on-error contract.
    """
    from vendorhub.main import app

    async def override_get_db_session():
        async with db_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def registered_vendor(test_client):
    """Registers and logs in a vendor; returns {email, password, token, vendor_id}."""
    credentials = {"userName": "Asha", "email": "asha@example.com", "password": "s3cret-pass"}
    response = await test_client.post("/vendor/register", json=credentials)
    assert response.status_code == 201

    response = await test_client.post(
        "/vendor/login",
        json={"email": credentials["email"], "password": credentials["password"]},
    )
    assert response.status_code == 200
    body = response.json()
    return {**credentials, "token": body["token"], "vendor_id": body["vendorId"]}


@pytest.fixture
def auth_headers(registered_vendor):
    return {"Authorization": f"Bearer {registered_vendor['token']}"}
