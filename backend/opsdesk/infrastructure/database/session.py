"""Async engine, per-request sessions and table creation."""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from opsdesk.config import get_settings
from opsdesk.infrastructure.database import models  # noqa: F401  registers every table
from opsdesk.infrastructure.database.base import Base

_ASYNC_DRIVERS = {
    "sqlite://": "sqlite+aiosqlite://",
    "postgres://": "postgresql+asyncpg://",
    "postgresql://": "postgresql+asyncpg://",
}


def async_url(url: str) -> str:
    """Map a plain ``sqlite://`` or ``postgres(ql)://`` URL onto its async driver."""
    for prefix, replacement in _ASYNC_DRIVERS.items():
        if url.startswith(prefix):
            return replacement + url[len(prefix):]
    return url


def _engine_options(url: str) -> dict[str, Any]:
    settings = get_settings()
    options: dict[str, Any] = {
        "echo": settings.app_env == "development" and settings.log_level_sql == "DEBUG",
    }
    if not url.startswith("sqlite"):
        options["pool_pre_ping"] = True
    return options


settings = get_settings()
_url = async_url(settings.database_url)

engine = create_async_engine(_url, **_engine_options(_url))

async_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency — one session per request, committed only if the handler succeeds."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def create_tables() -> None:
    """Create any missing tables; called from the application lifespan."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
