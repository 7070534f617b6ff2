"""Database infrastructure - shared connection primitives."""

from infrastructure.database.engines import (
    build_async_url,
    create_engine,
    create_session_factory,
)
from infrastructure.database.models import Base, utc_now

__all__ = [
    "Base",
    "build_async_url",
    "create_engine",
    "create_session_factory",
    "utc_now",
]
