"""Pytest configuration and shared fixtures."""

import os

# Set test environment variables before any imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test_tailless.db"
os.environ["IDENTITY_PROVIDER_SECRET"] = "test-identity-secret"
os.environ["LLM_ENABLED"] = "true"
os.environ["LLM_PROVIDER"] = "openai"
os.environ["OPENAI_API_KEY"] = "sk-test"
os.environ["LLM_MAX_RETRIES"] = "3"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from tailless.actions import AuthContext, sign_in
from tailless.storage import Base

TEST_DB_PATH = "./test_tailless.db"


@pytest.fixture(scope="session")
def anyio_backend():
    """Use asyncio as the async backend for tests."""
    return "asyncio"


@pytest.fixture
async def engine():
    """Create test database engine."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{TEST_DB_PATH}", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()

    # Cleanup test database file
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    """Create test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def login(session):
    """Sign a user in and return their AuthContext."""

    async def _login(user_id: str, name: str | None = None) -> AuthContext:
        grant = await sign_in(
            session,
            {"id": user_id, "name": name or user_id.title(), "email": f"{user_id}@example.com"},
        )
        assert grant.ok, grant.error_messages
        return AuthContext(token=grant.data.token)

    return _login
