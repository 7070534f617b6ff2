"""Outbox repository implementation.

This module provides the SQLAlchemy implementation of the outbox repository.
It persists serialized events to the outbox table and tracks which of
them the relay has delivered.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.models import utc_now
from infrastructure.outbox.models import OutboxModel
from shared_kernel.outbox.ports import IOutboxRepository
from shared_kernel.outbox.value_objects import OutboxEntry


class OutboxRepository(IOutboxRepository):
    """SQLAlchemy implementation of the outbox repository.

    The repository only calls session.add() and session.execute() - it never
    calls session.commit(). The calling code owns the transaction boundary.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with the caller's session.

        Args:
            session: The SQLAlchemy async session (shared with the caller)
        """
        self._session = session

    async def append(
        self,
        event_type: str,
        subject: str,
        payload: dict[str, Any],
        occurred_at: datetime,
        aggregate_type: str,
        aggregate_id: str,
    ) -> None:
        """Append a serialized event to the outbox within the current transaction."""
        model = OutboxModel(
            aggregate_type=aggregate_type,
            aggregate_id=aggregate_id,
            event_type=event_type,
            subject=subject,
            payload=payload,
            occurred_at=occurred_at,
            processed_at=None,
        )

        self._session.add(model)

    async def fetch_unprocessed(self, limit: int = 100) -> list[OutboxEntry]:
        """Fetch unprocessed entries ordered by creation time.

        Uses FOR UPDATE SKIP LOCKED so that concurrent relays never pick up
        the same entry (ignored by dialects without row locking).

        Args:
            limit: Maximum number of entries to fetch

        Returns:
            List of unprocessed OutboxEntry value objects
        """
        stmt = (
            select(OutboxModel)
            .where(OutboxModel.processed_at.is_(None))
            .order_by(OutboxModel.created_at, OutboxModel.id)
            .limit(limit)
            .with_for_update(skip_locked=True)
        )

        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [model.to_value_object() for model in models]

    async def mark_processed(self, entry_id: str) -> None:
        """Mark an entry as relayed within the current transaction."""
        stmt = (
            update(OutboxModel)
            .where(OutboxModel.id == entry_id)
            .values(processed_at=utc_now())
        )
        await self._session.execute(stmt)
