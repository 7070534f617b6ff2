"""Outbox-backed implementation of IEmployeeEventPublisher.

Each publish call builds a lifecycle event, serializes it and appends it to
the outbox table in its own short transaction. The triggering change has
already committed by then, so a failure here loses the event but never the
change. The outbox relay (infrastructure.outbox.worker) forwards each row
to the broker subject named on it.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from employees.domain.aggregates import Employee
from employees.domain.events import (
    DomainEvent,
    EmployeeCreated,
    EmployeeDeleted,
    EmployeeMerged,
    EmployeeSnapshot,
    EmployeeUpdated,
)
from employees.infrastructure.observability import (
    DefaultEventPublisherProbe,
    EventPublisherProbe,
)
from employees.infrastructure.outbox.serializer import EmployeeEventSerializer
from employees.ports.events import IEmployeeEventPublisher
from employees.ports.exceptions import EventPublishError
from infrastructure.outbox.repository import OutboxRepository

AGGREGATE_TYPE = "employee"


class OutboxEmployeeEventPublisher(IEmployeeEventPublisher):
    """Publishes employee lifecycle events through the outbox table."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        serializer: EmployeeEventSerializer | None = None,
        probe: EventPublisherProbe | None = None,
    ) -> None:
        """Initialize the publisher.

        Args:
            session_factory: Factory producing one session per publish
            serializer: Optional event serializer for testability
            probe: Optional domain probe for observability
        """
        self._session_factory = session_factory
        self._serializer = serializer or EmployeeEventSerializer()
        self._probe = probe or DefaultEventPublisherProbe()

    async def publish_created(
        self, tenant_id: str, user_id: str, employee: Employee
    ) -> None:
        await self._publish(
            EmployeeCreated(
                tenant_id=tenant_id,
                user_id=user_id,
                employee=EmployeeSnapshot.from_employee(employee),
            )
        )

    async def publish_updated(
        self,
        tenant_id: str,
        user_id: str,
        employee: Employee,
        changed_fields: Sequence[str],
    ) -> None:
        await self._publish(
            EmployeeUpdated(
                tenant_id=tenant_id,
                user_id=user_id,
                employee=EmployeeSnapshot.from_employee(employee),
                changed_fields=tuple(changed_fields),
            )
        )

    async def publish_deleted(
        self, tenant_id: str, user_id: str, employee: Employee
    ) -> None:
        await self._publish(
            EmployeeDeleted(
                tenant_id=tenant_id,
                user_id=user_id,
                employee=EmployeeSnapshot.from_employee(employee),
            )
        )

    async def publish_merged(
        self,
        tenant_id: str,
        user_id: str,
        employee: Employee,
        merged_from_email: str,
    ) -> None:
        await self._publish(
            EmployeeMerged(
                tenant_id=tenant_id,
                user_id=user_id,
                employee=EmployeeSnapshot.from_employee(employee),
                merged_from_email=merged_from_email,
            )
        )

    async def _publish(self, event: DomainEvent) -> None:
        """Append one event to the outbox in its own transaction.

        Raises:
            EventPublishError: If the outbox write fails
        """
        event_type = type(event).__name__
        employee_id = event.employee.id
        payload = self._serializer.serialize(event)

        try:
            async with self._session_factory() as session, session.begin():
                await OutboxRepository(session).append(
                    event_type=event_type,
                    subject=event.subject,
                    payload=payload,
                    occurred_at=event.occurred_at,
                    aggregate_type=AGGREGATE_TYPE,
                    aggregate_id=employee_id,
                )
        except SQLAlchemyError as e:
            self._probe.event_publish_failed(
                event_type, employee_id, event.tenant_id, str(e)
            )
            raise EventPublishError(f"failed to publish {event_type}") from e

        self._probe.event_published(event_type, event.subject, employee_id, event.tenant_id)
