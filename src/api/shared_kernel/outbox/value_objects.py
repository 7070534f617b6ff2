"""Value objects for the outbox pattern.

Value objects are immutable descriptors that provide type safety and
domain semantics for outbox entries.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class OutboxEntry:
    """Represents a single entry in the outbox table.

    Captures an outbox row as it exists in the database, with everything a
    relay needs to forward the event to a message broker.

    Attributes:
        id: ULID of the entry
        aggregate_type: Type of aggregate that generated the event (e.g., "employee")
        aggregate_id: ULID of the aggregate
        event_type: Name of the event type (e.g., "EmployeeCreated")
        subject: Versioned broker subject (e.g., "employees.v1.created")
        payload: Serialized event data as a dictionary
        occurred_at: When the event occurred
        processed_at: When the entry was relayed (None if pending)
        created_at: When the entry was written to the outbox
    """

    id: str
    aggregate_type: str
    aggregate_id: str
    event_type: str
    subject: str
    payload: dict[str, Any]
    occurred_at: datetime
    processed_at: datetime | None
    created_at: datetime

    @property
    def is_processed(self) -> bool:
        """Check if this entry has been relayed."""
        return self.processed_at is not None
