"""Lifecycle events for the employee context.

Events describe a state change that has already been committed. They carry
a snapshot of the employee as seen by consumers: a single primary address
plus the remaining addresses as secondaries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

from ulid import ULID

from employees.domain.aggregates import Employee


class EventType(StrEnum):
    """Kinds of employee lifecycle events."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    MERGED = "merged"

    @property
    def subject(self) -> str:
        """Versioned broker subject for this event type."""
        return f"employees.v1.{self.value}"


@dataclass(frozen=True)
class EmployeeSnapshot:
    """Consumer-facing view of an employee at the time of an event."""

    id: str
    email: str
    secondary_emails: tuple[str, ...]
    first_name: str
    last_name: str
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_employee(cls, employee: Employee) -> EmployeeSnapshot:
        return cls(
            id=employee.id.value if employee.id else "",
            email=employee.primary_email or "",
            secondary_emails=employee.secondary_emails,
            first_name=employee.first_name,
            last_name=employee.last_name,
            created_at=employee.created_at,
            updated_at=employee.updated_at,
        )


def _event_id() -> str:
    return str(ULID())


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, kw_only=True)
class EmployeeEvent:
    """Common envelope of every employee lifecycle event.

    Attributes:
        tenant_id: Tenant in which the change happened
        user_id: Acting user from the resolved tenant scope
        employee: Snapshot of the affected employee
        event_id: Unique id of this event (ULID)
        occurred_at: When the event was emitted (UTC)
        metadata: Free-form string annotations
    """

    tenant_id: str
    user_id: str
    employee: EmployeeSnapshot
    event_id: str = field(default_factory=_event_id)
    occurred_at: datetime = field(default_factory=_now)
    metadata: dict[str, str] = field(default_factory=dict)

    event_type: EventType = field(init=False, default=EventType.CREATED)

    @property
    def subject(self) -> str:
        return self.event_type.subject


@dataclass(frozen=True, kw_only=True)
class EmployeeCreated(EmployeeEvent):
    """Event raised after an employee was created."""

    event_type: EventType = field(init=False, default=EventType.CREATED)


@dataclass(frozen=True, kw_only=True)
class EmployeeUpdated(EmployeeEvent):
    """Event raised after an employee was updated.

    Attributes:
        changed_fields: Names of the fields whose values changed
    """

    changed_fields: tuple[str, ...] = ()
    event_type: EventType = field(init=False, default=EventType.UPDATED)


@dataclass(frozen=True, kw_only=True)
class EmployeeDeleted(EmployeeEvent):
    """Event raised after an employee was deleted.

    The snapshot is the record as it was before deletion.
    """

    event_type: EventType = field(init=False, default=EventType.DELETED)


@dataclass(frozen=True, kw_only=True)
class EmployeeMerged(EmployeeEvent):
    """Event raised after a secondary employee was absorbed into a primary.

    Attributes:
        merged_from_email: The secondary address used to locate the absorbed record
    """

    merged_from_email: str = ""
    event_type: EventType = field(init=False, default=EventType.MERGED)


DomainEvent = EmployeeCreated | EmployeeUpdated | EmployeeDeleted | EmployeeMerged

__all__ = [
    "DomainEvent",
    "EmployeeCreated",
    "EmployeeDeleted",
    "EmployeeEvent",
    "EmployeeMerged",
    "EmployeeSnapshot",
    "EmployeeUpdated",
    "EventType",
]
