"""Database dependency injection for FastAPI.

Provides the async engine, the session factory shared with the reactor
worker, and per-request sessions.
"""

from __future__ import annotations

import threading
from typing import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_engine
from infrastructure.database.exceptions import SchemaCreationError
from infrastructure.database.models import Base
from infrastructure.observability import DefaultConnectionProbe
from infrastructure.settings import get_database_settings

_probe = DefaultConnectionProbe()

_engine: AsyncEngine | None = None
_sessionmaker: async_sessionmaker[AsyncSession] | None = None

# Thread lock for safe engine initialization
_engine_lock = threading.Lock()


def get_engine() -> AsyncEngine:
    """Get the database engine (singleton).

    Creates engine on first call and caches for subsequent calls.
    Uses double-check locking for thread-safe initialization.
    Also creates and caches the sessionmaker.
    """
    global _engine, _sessionmaker
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                settings = get_database_settings()
                _engine = create_engine(settings)
                _sessionmaker = async_sessionmaker(
                    _engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
                _probe.engine_created(
                    host=settings.host,
                    database=settings.database,
                    pool_size=settings.pool_max_connections,
                )
    return _engine


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Get the session factory used outside of request scope.

    The reactor worker and the action runner's customer lookup open their
    own sessions from this factory.
    """
    get_engine()
    assert _sessionmaker is not None
    return _sessionmaker


async def get_write_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a session for mutations (FastAPI dependency).

    The session is configured to NOT auto-commit. Callers must explicitly
    manage transactions using `async with session.begin()`.
    """
    async with get_sessionmaker()() as session:
        yield session


async def get_read_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a session for queries only (FastAPI dependency)."""
    async with get_sessionmaker()() as session:
        yield session


async def ensure_schema() -> None:
    """Create any missing tables registered on the declarative base.

    Raises:
        SchemaCreationError: If the DDL could not be executed
    """
    engine = get_engine()
    try:
        async with engine.begin() as connection:
            await connection.run_sync(Base.metadata.create_all)
    except (SQLAlchemyError, OSError) as e:
        raise SchemaCreationError(f"Could not create tables: {e}") from e

    _probe.schema_ensured(sorted(Base.metadata.tables))


async def close_database_connections() -> None:
    """Close the engine's connections.

    Should be called on application shutdown. Also resets the sessionmaker
    to allow reinitialization.
    """
    global _engine, _sessionmaker

    if _engine is not None:
        await _engine.dispose()
        _probe.pool_closed()
        _engine = None
        _sessionmaker = None
