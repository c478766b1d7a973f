"""Shared test fixtures."""

import os
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

# Tests run against a throwaway in-memory SQLite database with mock auth
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("AUTH_MOCK", "true")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-jwt")
os.environ.setdefault("APP_DOMAIN", "aurastore.com")

import storefront.models  # noqa: E402, F401
from storefront.core.security import create_mock_access_token  # noqa: E402
from storefront.db.base import Base  # noqa: E402
from storefront.db.session import async_session_factory  # noqa: E402
from storefront.db.session import engine as app_engine  # noqa: E402
from storefront.main import app  # noqa: E402


@pytest.fixture
async def tables() -> AsyncGenerator[None, None]:
    """Create the schema for one test, then dispose the app's pool.

    With an in-memory database, disposing the pool drops every table, so
    each test starts from an empty store list.
    """
    async with app_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    await app_engine.dispose()


@pytest.fixture
async def db(tables) -> AsyncGenerator[AsyncSession, None]:
    """Async DB session on the app's engine, rolled back after each test."""
    async with async_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client(tables) -> AsyncGenerator[AsyncClient, None]:
    """HTTP test client for the FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def make_token(sub: str = "test-sub", email: str = "test@example.com") -> str:
    """Generate a mock JWT for testing."""
    return create_mock_access_token(sub=sub, email=email)


def auth_headers(sub: str = "test-sub", email: str = "test@example.com") -> dict:
    """Return Authorization headers with a mock JWT."""
    token = make_token(sub=sub, email=email)
    return {"Authorization": f"Bearer {token}"}
