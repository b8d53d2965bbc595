"""Database engine and session configuration."""

import os
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def _get_database_url() -> str:
    """Get database URL from environment or config."""
    # Environment first so Alembic can run without the app config
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    from tailless.config import config
    return config.database_url


def _get_log_level() -> str:
    level = os.getenv("LOG_LEVEL")
    if level:
        return level.upper()

    from tailless.config import config
    return config.log_level


def get_engine() -> AsyncEngine:
    """Get or create the database engine.

    Returns:
        AsyncEngine instance configured for the application
    """
    global _engine

    if _engine is None:
        from tailless.logging import get_logger
        logger = get_logger(__name__)

        database_url = _get_database_url()
        logger.info(f"Creating database engine for {database_url}")
        _engine = create_async_engine(
            database_url,
            echo=_get_log_level() == "DEBUG",
            pool_pre_ping=True,
        )

    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create the session factory.

    Returns:
        Session factory for creating database sessions
    """
    global _session_factory

    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )

    return _session_factory


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request."""
    session_factory = get_session_factory()
    async with session_factory() as session:
        yield session


async def create_tables() -> None:
    """Create all tables that do not exist yet (idempotent)."""
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_engine() -> None:
    """Close the database engine and dispose connections."""
    global _engine, _session_factory

    if _engine is not None:
        from tailless.logging import get_logger
        logger = get_logger(__name__)
        logger.info("Closing database engine")
        await _engine.dispose()
        _engine = None
        _session_factory = None
