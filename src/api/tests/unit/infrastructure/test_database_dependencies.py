"""Unit tests for database dependency injection.

Tests the FastAPI dependency providers for async database sessions.
No connection is opened: engines and sessions are lazy.
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from infrastructure.database.dependencies import (
    close_database_connections,
    get_engine,
    get_read_session,
    get_sessionmaker,
    get_write_session,
)


@pytest_asyncio.fixture(autouse=True)
async def reset_engine():
    yield
    await close_database_connections()


@pytest.mark.asyncio
async def test_get_engine():
    engine = get_engine()

    assert isinstance(engine, AsyncEngine)
    assert engine.url.drivername == "postgresql+asyncpg"


@pytest.mark.asyncio
async def test_engine_and_sessionmaker_are_singletons():
    assert get_engine() is get_engine()
    assert get_sessionmaker() is get_sessionmaker()


@pytest.mark.asyncio
async def test_sessions_share_the_engine():
    engine = get_engine()

    async for session in get_write_session():
        assert isinstance(session, AsyncSession)
        assert session.bind.sync_engine is engine.sync_engine

    async for session in get_read_session():
        assert session.bind.sync_engine is engine.sync_engine


@pytest.mark.asyncio
async def test_close_database_connections_resets_the_engine():
    engine = get_engine()

    await close_database_connections()

    assert get_engine() is not engine
