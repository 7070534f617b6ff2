"""Infrastructure layer for the outbox pattern.

Contains the SQLAlchemy model, the repository and the relay that forwards
pending entries to the message broker.
"""

from infrastructure.outbox.models import OutboxModel
from infrastructure.outbox.repository import OutboxRepository
from infrastructure.outbox.worker import OutboxRelay

__all__ = ["OutboxModel", "OutboxRelay", "OutboxRepository"]
