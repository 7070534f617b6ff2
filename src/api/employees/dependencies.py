"""Wiring for the employee lifecycle context.

Components receive their collaborators through constructor parameters; these
helpers assemble them once at process start.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from employees.application.observability import (
    DefaultEmployeeServiceProbe,
    EmployeeServiceProbe,
)
from employees.application.services import EmployeeService
from employees.infrastructure.employee_repository import EmployeeRepository
from employees.infrastructure.outbox import OutboxEmployeeEventPublisher
from employees.ports.events import IEmployeeEventPublisher
from infrastructure.database.dependencies import get_session_factory
from infrastructure.settings import EventSettings, get_event_settings


def get_employee_service_probe() -> EmployeeServiceProbe:
    """Get EmployeeServiceProbe instance.

    Returns:
        DefaultEmployeeServiceProbe instance for observability
    """
    return DefaultEmployeeServiceProbe()


def get_employee_repository(
    session_factory: async_sessionmaker[AsyncSession],
) -> EmployeeRepository:
    """Get EmployeeRepository instance bound to a session factory."""
    return EmployeeRepository(session_factory=session_factory)


def get_event_publisher(
    session_factory: async_sessionmaker[AsyncSession],
    settings: EventSettings,
) -> IEmployeeEventPublisher | None:
    """Get the outbox-backed event publisher, or None when events are disabled."""
    if not settings.enabled:
        return None
    return OutboxEmployeeEventPublisher(session_factory=session_factory)


def build_employee_service(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    event_settings: EventSettings | None = None,
) -> EmployeeService:
    """Assemble an EmployeeService with its repository and publisher.

    Args:
        session_factory: Session factory to use; defaults to the shared one
        event_settings: Event settings to use; defaults to the cached ones

    Returns:
        EmployeeService ready for use
    """
    if session_factory is None:
        session_factory = get_session_factory()
    if event_settings is None:
        event_settings = get_event_settings()

    return EmployeeService(
        repository=get_employee_repository(session_factory),
        event_publisher=get_event_publisher(session_factory, event_settings),
        probe=get_employee_service_probe(),
        publish_timeout_seconds=event_settings.publish_timeout_seconds,
    )
