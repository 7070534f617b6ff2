"""SQLAlchemy ORM models for the outbox pattern.

This module provides the database model for the outbox table that
lifecycle events are written to before a relay forwards them to the broker.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column
from ulid import ULID

from infrastructure.database.models import Base, CreatedAtMixin
from shared_kernel.outbox.value_objects import OutboxEntry


def _generate_id() -> str:
    return str(ULID())


class OutboxModel(Base, CreatedAtMixin):
    """ORM model for the outbox table.

    Entries are written once and later marked processed by the relay.
    The (processed_at, created_at) index keeps polling for pending
    entries cheap.
    """

    __tablename__ = "outbox"
    __table_args__ = (Index("ix_outbox_pending", "processed_at", "created_at"),)

    id: Mapped[str] = mapped_column(
        String(26), primary_key=True, insert_default=_generate_id
    )
    aggregate_type: Mapped[str] = mapped_column(String(255), nullable=False)
    aggregate_id: Mapped[str] = mapped_column(String(26), nullable=False)
    event_type: Mapped[str] = mapped_column(String(255), nullable=False)
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    payload: Mapped[dict] = mapped_column(JSON, nullable=False)
    occurred_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    processed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    def to_value_object(self) -> OutboxEntry:
        """Convert this ORM model to an OutboxEntry value object."""
        return OutboxEntry(
            id=self.id,
            aggregate_type=self.aggregate_type,
            aggregate_id=self.aggregate_id,
            event_type=self.event_type,
            subject=self.subject,
            payload=self.payload,
            occurred_at=self.occurred_at,
            processed_at=self.processed_at,
            created_at=self.created_at,
        )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<OutboxModel("
            f"id={self.id}, "
            f"aggregate_type={self.aggregate_type}, "
            f"event_type={self.event_type}, "
            f"processed_at={self.processed_at}"
            f")>"
        )
