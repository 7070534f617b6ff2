"""Process-wide database engine and session factory.

The engine is created lazily on first use and shared by every repository
and publisher assembled at process start.
"""

from __future__ import annotations

import threading

import structlog
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_engine, create_session_factory
from infrastructure.settings import get_database_settings

_logger = structlog.get_logger()

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None

# Thread lock for safe engine initialization
_engine_lock = threading.Lock()


def get_engine() -> AsyncEngine:
    """Get the database engine (singleton).

    Uses double-check locking for thread-safe initialization and creates the
    session factory alongside the engine.
    """
    global _engine, _session_factory
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                settings = get_database_settings()
                _engine = create_engine(settings)
                _session_factory = create_session_factory(_engine)
                _logger.info(
                    "database_engine_created",
                    connection=settings.connection_string,
                    pool_size=settings.pool_max_connections,
                )
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the shared session factory, creating the engine if needed."""
    get_engine()
    assert _session_factory is not None
    return _session_factory


async def close_database_connections() -> None:
    """Dispose of the engine on application shutdown.

    Also resets the session factory to allow reinitialization.
    """
    global _engine, _session_factory

    if _engine is not None:
        await _engine.dispose()
        _logger.info("database_engine_disposed")
        _engine = None
        _session_factory = None
