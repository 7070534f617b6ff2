"""Outbox integration for employee lifecycle events."""

from employees.infrastructure.outbox.publisher import OutboxEmployeeEventPublisher
from employees.infrastructure.outbox.serializer import EmployeeEventSerializer

__all__ = ["EmployeeEventSerializer", "OutboxEmployeeEventPublisher"]
