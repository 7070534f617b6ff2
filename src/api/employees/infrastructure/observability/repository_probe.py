"""Domain probe for employee repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to employee persistence.
"""

from __future__ import annotations

from typing import Protocol

import structlog


class EmployeeRepositoryProbe(Protocol):
    """Domain probe for employee repository operations."""

    def employee_saved(self, employee_id: str, tenant_id: str, email_count: int) -> None:
        """Record that an employee was inserted or updated."""
        ...

    def employee_deleted(self, employee_id: str, tenant_id: str) -> None:
        """Record that an employee was deleted."""
        ...

    def employee_not_found(self, employee_id: str, tenant_id: str) -> None:
        """Record that a write matched no employee in the tenant."""
        ...

    def employees_merged(
        self,
        primary_id: str,
        secondary_id: str,
        tenant_id: str,
        emails_moved: int,
    ) -> None:
        """Record that a secondary employee was absorbed into a primary."""
        ...

    def duplicate_email(self, tenant_id: str, operation: str) -> None:
        """Record that the unique email constraint rejected a write."""
        ...

    def storage_failed(self, operation: str, tenant_id: str, error: str) -> None:
        """Record that a storage operation failed and was rolled back."""
        ...


class DefaultEmployeeRepositoryProbe:
    """Default implementation of EmployeeRepositoryProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def employee_saved(self, employee_id: str, tenant_id: str, email_count: int) -> None:
        """Record that an employee was inserted or updated."""
        self._logger.info(
            "employee_saved",
            employee_id=employee_id,
            tenant_id=tenant_id,
            email_count=email_count,
        )

    def employee_deleted(self, employee_id: str, tenant_id: str) -> None:
        """Record that an employee was deleted."""
        self._logger.info(
            "employee_row_deleted",
            employee_id=employee_id,
            tenant_id=tenant_id,
        )

    def employee_not_found(self, employee_id: str, tenant_id: str) -> None:
        """Record that a write matched no employee in the tenant."""
        self._logger.debug(
            "employee_not_found",
            employee_id=employee_id,
            tenant_id=tenant_id,
        )

    def employees_merged(
        self,
        primary_id: str,
        secondary_id: str,
        tenant_id: str,
        emails_moved: int,
    ) -> None:
        """Record that a secondary employee was absorbed into a primary."""
        self._logger.info(
            "employee_rows_merged",
            primary_id=primary_id,
            secondary_id=secondary_id,
            tenant_id=tenant_id,
            emails_moved=emails_moved,
        )

    def duplicate_email(self, tenant_id: str, operation: str) -> None:
        """Record that the unique email constraint rejected a write."""
        self._logger.warning(
            "duplicate_email_rejected_by_storage",
            tenant_id=tenant_id,
            operation=operation,
        )

    def storage_failed(self, operation: str, tenant_id: str, error: str) -> None:
        """Record that a storage operation failed and was rolled back."""
        self._logger.error(
            "employee_storage_failed",
            operation=operation,
            tenant_id=tenant_id,
            error=error,
        )
