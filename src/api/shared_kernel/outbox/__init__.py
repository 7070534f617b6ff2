"""Shared outbox contracts used by bounded contexts to emit events."""

from shared_kernel.outbox.ports import (
    EventSerializer,
    IMessageBroker,
    IOutboxRepository,
)
from shared_kernel.outbox.value_objects import OutboxEntry

__all__ = ["EventSerializer", "IMessageBroker", "IOutboxRepository", "OutboxEntry"]
