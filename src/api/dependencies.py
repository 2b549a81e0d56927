"""FastAPI dependency injection: DB session and settings."""

from __future__ import annotations

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import Settings, settings
from src.db.database import async_session_factory


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async DB session (auto-closes)."""
    async with async_session_factory() as session:
        yield session


def get_settings() -> Settings:
    """Return the process settings (overridable in tests)."""
    return settings
