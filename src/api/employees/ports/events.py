"""Event publisher protocol (port) for the employee lifecycle context."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from employees.domain.aggregates import Employee


@runtime_checkable
class IEmployeeEventPublisher(Protocol):
    """Emits employee lifecycle notifications.

    Called only after the triggering change has committed. Any method may
    raise; callers treat failures as non-fatal.
    """

    async def publish_created(
        self, tenant_id: str, user_id: str, employee: Employee
    ) -> None:
        """Publish that an employee was created."""
        ...

    async def publish_updated(
        self,
        tenant_id: str,
        user_id: str,
        employee: Employee,
        changed_fields: Sequence[str],
    ) -> None:
        """Publish that an employee was updated, naming the changed fields."""
        ...

    async def publish_deleted(
        self, tenant_id: str, user_id: str, employee: Employee
    ) -> None:
        """Publish that an employee was deleted, with its pre-deletion snapshot."""
        ...

    async def publish_merged(
        self,
        tenant_id: str,
        user_id: str,
        employee: Employee,
        merged_from_email: str,
    ) -> None:
        """Publish that another employee was absorbed into ``employee``."""
        ...
