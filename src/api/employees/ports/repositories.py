"""Repository protocols (ports) for the employee lifecycle context.

Every method takes the tenant id explicitly and implementations must
include it in every query, update and delete predicate.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from employees.domain.aggregates import Employee
from employees.domain.value_objects import EmployeeId, EmployeeUpdate, ListFilter


@runtime_checkable
class IEmployeeRepository(Protocol):
    """Repository for Employee aggregate persistence.

    Employees are stored with their email addresses normalized into a
    separate table carrying a (tenant_id, email) unique constraint.
    Returned aggregates are always fully hydrated with their email set.
    """

    async def create(self, tenant_id: str, employee: Employee) -> Employee:
        """Persist a new employee and one email row per address atomically.

        Generates an id when the employee has none.

        Returns:
            The stored employee, re-read after commit

        Raises:
            DuplicateEmailError: If an address is already owned in the tenant
            StorageError: If persistence fails
        """
        ...

    async def update(
        self, tenant_id: str, employee_id: EmployeeId, changes: EmployeeUpdate
    ) -> Employee:
        """Apply a partial update atomically.

        Only supplied fields are written. A supplied email set replaces the
        existing one (delete then insert). updated_at is always refreshed.

        Raises:
            EmployeeNotFoundError: If no employee matches (id, tenant)
            DuplicateEmailError: If a new address is owned by another employee
            StorageError: If persistence fails
        """
        ...

    async def delete(self, tenant_id: str, employee_id: EmployeeId) -> None:
        """Delete an employee; its email rows are removed by cascade.

        Raises:
            EmployeeNotFoundError: If no employee matches (id, tenant)
            StorageError: If persistence fails
        """
        ...

    async def get_by_id(
        self, tenant_id: str, employee_id: EmployeeId
    ) -> Employee | None:
        """Retrieve an employee by id within a tenant, or None."""
        ...

    async def get_by_email(self, tenant_id: str, email: str) -> Employee | None:
        """Retrieve the employee owning an address within a tenant, or None."""
        ...

    async def list(
        self, tenant_id: str, list_filter: ListFilter
    ) -> tuple[list[Employee], int]:
        """List employees newest first with offset pagination.

        Args:
            tenant_id: The tenant to list employees for
            list_filter: Effective page/page size and inclusive created_at bounds

        Returns:
            The requested page of employees and the total matching count
        """
        ...

    async def check_email_exists(self, tenant_id: str, email: str) -> bool:
        """Check whether an address is owned by any employee in the tenant."""
        ...

    async def merge_employees(
        self, tenant_id: str, primary_email: str, secondary_email: str
    ) -> Employee:
        """Absorb the secondary employee into the primary atomically.

        Every email row of the secondary employee is reassigned to the
        primary, then the secondary employee is deleted.

        Returns:
            The primary employee with its expanded email set

        Raises:
            EmployeeNotFoundError: If either address does not resolve
            CannotMergeSameError: If both addresses belong to one employee
            StorageError: If persistence fails
        """
        ...
