"""Async engine and session factory shared by the app."""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from storefront.core.config import settings


def _engine_kwargs(url: str) -> dict:
    # In-memory SQLite only exists on one connection; every session must share it.
    if url.startswith("sqlite") and ":memory:" in url:
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    **_engine_kwargs(settings.DATABASE_URL),
)

async_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
