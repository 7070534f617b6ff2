"""Integration test fixtures for database tests.

Tests run against an in-memory SQLite database through aiosqlite so the
unique email constraint, the ON DELETE CASCADE and the transactional merge
are exercised by a real engine. Every test gets a fresh schema.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

import employees.infrastructure.models  # noqa: F401
import infrastructure.outbox.models  # noqa: F401
from infrastructure.database.engines import create_session_factory
from infrastructure.database.models import Base
from shared_kernel.tenant_scope import RequestContext


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires database)",
    )


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Provide a fresh in-memory database with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(engine)


@pytest.fixture
def acme() -> RequestContext:
    return RequestContext(tenant_id="tenant-acme", user_id="user-alice")


@pytest.fixture
def globex() -> RequestContext:
    return RequestContext(tenant_id="tenant-globex", user_id="user-bob")
