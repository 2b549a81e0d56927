from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config.settings import settings


def build_engine(database_url: str) -> AsyncEngine:
    """Create the async engine. Pool sizing only applies to server databases."""
    kwargs: dict[str, Any] = {"echo": False}
    if not database_url.startswith("sqlite"):
        kwargs.update(
            pool_size=10,
            max_overflow=5,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
    return create_async_engine(database_url, **kwargs)


engine = build_engine(settings.database_url)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)
