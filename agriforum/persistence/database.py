"""Database connection and session management.

Provides the async engine and session factory for PostgreSQL.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from agriforum.config import Settings
from agriforum.util.error import ConfigurationError

ASYNC_DRIVER = "postgresql+asyncpg"


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL and pool sizes

    Returns:
        Configured async engine

    Raises:
        ConfigurationError: If the URL does not use the asyncpg driver
    """
    if not settings.database_url.startswith(ASYNC_DRIVER + "://"):
        raise ConfigurationError(
            f"DATABASE__URL must use the {ASYNC_DRIVER} driver"
        )

    return create_async_engine(
        settings.database_url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        pool_timeout=settings.database.pool_timeout,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Sessions never autoflush and keep loaded rows after commit; every write
    goes through an explicit unit of work.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def session_scope(
    settings: Settings,
) -> AsyncGenerator[AsyncSession, None]:
    """Open a standalone session for scripts, disposing the engine afterwards.

    Args:
        settings: Application settings

    Yields:
        Database session
    """
    engine = create_engine(settings)
    session_factory = create_session_factory(engine)
    try:
        async with session_factory() as session:
            yield session
    finally:
        await engine.dispose()
