"""Domain probe for employee event publication."""

from __future__ import annotations

from typing import Protocol

import structlog


class EventPublisherProbe(Protocol):
    """Domain probe for the outbox-backed event publisher."""

    def event_published(
        self, event_type: str, subject: str, employee_id: str, tenant_id: str
    ) -> None:
        """Record that an event was written to the outbox."""
        ...

    def event_publish_failed(
        self, event_type: str, employee_id: str, tenant_id: str, error: str
    ) -> None:
        """Record that writing an event to the outbox failed."""
        ...


class DefaultEventPublisherProbe:
    """Default implementation of EventPublisherProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def event_published(
        self, event_type: str, subject: str, employee_id: str, tenant_id: str
    ) -> None:
        self._logger.info(
            "employee_event_published",
            event_type=event_type,
            subject=subject,
            employee_id=employee_id,
            tenant_id=tenant_id,
        )

    def event_publish_failed(
        self, event_type: str, employee_id: str, tenant_id: str, error: str
    ) -> None:
        self._logger.error(
            "employee_event_publish_failed",
            event_type=event_type,
            employee_id=employee_id,
            tenant_id=tenant_id,
            error=error,
        )
