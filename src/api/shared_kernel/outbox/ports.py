"""Protocols (ports) for the outbox pattern.

These protocols define the interfaces for outbox operations so that
bounded contexts can append their events without depending on the
storage implementation.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from shared_kernel.outbox.value_objects import OutboxEntry


@runtime_checkable
class IOutboxRepository(Protocol):
    """Repository for outbox entry persistence.

    The repository shares the database session of its caller; it never
    commits. The caller owns the transaction boundary.
    """

    async def append(
        self,
        event_type: str,
        subject: str,
        payload: dict[str, Any],
        occurred_at: datetime,
        aggregate_type: str,
        aggregate_id: str,
    ) -> None:
        """Append a pre-serialized event to the outbox within the current transaction.

        Args:
            event_type: Name of the event type (e.g., "EmployeeCreated")
            subject: Versioned broker subject the relay publishes to
            payload: Pre-serialized event data as a dictionary
            occurred_at: When the event occurred
            aggregate_type: Type of aggregate (e.g., "employee")
            aggregate_id: ULID of the aggregate
        """
        ...

    async def fetch_unprocessed(self, limit: int = 100) -> list["OutboxEntry"]:
        """Fetch entries not yet relayed, oldest first.

        Args:
            limit: Maximum number of entries to fetch

        Returns:
            List of unprocessed OutboxEntry objects
        """
        ...

    async def mark_processed(self, entry_id: str) -> None:
        """Record that an entry has been delivered to the broker.

        Args:
            entry_id: ULID of the entry
        """
        ...


@runtime_checkable
class IMessageBroker(Protocol):
    """Broker the outbox relay forwards entries to.

    Publishing returns once the broker has accepted the message.
    """

    async def publish(self, subject: str, payload: bytes) -> None:
        """Publish a message on a subject.

        Raises:
            Exception: Any transport failure; the entry stays pending
        """
        ...


@runtime_checkable
class EventSerializer(Protocol):
    """Serializes and deserializes domain events.

    Each bounded context provides its own implementation so that the
    shared kernel stays agnostic of specific event structures.
    """

    def supported_event_types(self) -> frozenset[str]:
        """Return the event type names this serializer handles."""
        ...

    def serialize(self, event: Any) -> dict[str, Any]:
        """Convert a domain event to a JSON-serializable dictionary.

        Raises:
            ValueError: If the event type is not supported
        """
        ...

    def deserialize(self, event_type: str, payload: dict[str, Any]) -> Any:
        """Reconstruct a domain event from its serialized form.

        Raises:
            ValueError: If the event type is not supported
        """
        ...
