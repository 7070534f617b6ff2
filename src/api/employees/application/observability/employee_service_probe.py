"""Protocol for employee application service observability.

Defines the interface for domain probes that capture application-level
domain events for employee lifecycle operations.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

import structlog


class EmployeeServiceProbe(Protocol):
    """Domain probe for employee application service operations."""

    def employee_created(
        self, employee_id: str, tenant_id: str, user_id: str
    ) -> None:
        """Record that an employee was created."""
        ...

    def employee_updated(
        self,
        employee_id: str,
        tenant_id: str,
        user_id: str,
        changed_fields: Sequence[str],
    ) -> None:
        """Record that an employee was updated."""
        ...

    def employee_deleted(
        self, employee_id: str, tenant_id: str, user_id: str
    ) -> None:
        """Record that an employee was deleted."""
        ...

    def employees_merged(
        self,
        primary_id: str,
        merged_from_email: str,
        tenant_id: str,
        user_id: str,
    ) -> None:
        """Record that a secondary employee was absorbed into a primary."""
        ...

    def duplicate_email_rejected(
        self, tenant_id: str, operation: str, email: str | None = None
    ) -> None:
        """Record that an email uniqueness violation was rejected."""
        ...

    def employee_operation_failed(
        self, operation: str, tenant_id: str, error: str
    ) -> None:
        """Record that an operation failed on a storage error."""
        ...

    def event_publish_failed(
        self, event_type: str, employee_id: str, tenant_id: str, error: str
    ) -> None:
        """Record that a lifecycle event was dropped."""
        ...


class DefaultEmployeeServiceProbe:
    """Default implementation of EmployeeServiceProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def employee_created(
        self, employee_id: str, tenant_id: str, user_id: str
    ) -> None:
        """Record that an employee was created."""
        self._logger.info(
            "employee_created",
            employee_id=employee_id,
            tenant_id=tenant_id,
            user_id=user_id,
        )

    def employee_updated(
        self,
        employee_id: str,
        tenant_id: str,
        user_id: str,
        changed_fields: Sequence[str],
    ) -> None:
        """Record that an employee was updated."""
        self._logger.info(
            "employee_updated",
            employee_id=employee_id,
            tenant_id=tenant_id,
            user_id=user_id,
            changed_fields=list(changed_fields),
        )

    def employee_deleted(
        self, employee_id: str, tenant_id: str, user_id: str
    ) -> None:
        """Record that an employee was deleted."""
        self._logger.info(
            "employee_deleted",
            employee_id=employee_id,
            tenant_id=tenant_id,
            user_id=user_id,
        )

    def employees_merged(
        self,
        primary_id: str,
        merged_from_email: str,
        tenant_id: str,
        user_id: str,
    ) -> None:
        """Record that a secondary employee was absorbed into a primary."""
        self._logger.info(
            "employees_merged",
            primary_id=primary_id,
            merged_from_email=merged_from_email,
            tenant_id=tenant_id,
            user_id=user_id,
        )

    def duplicate_email_rejected(
        self, tenant_id: str, operation: str, email: str | None = None
    ) -> None:
        """Record that an email uniqueness violation was rejected."""
        self._logger.warning(
            "duplicate_email_rejected",
            tenant_id=tenant_id,
            operation=operation,
            email=email,
        )

    def employee_operation_failed(
        self, operation: str, tenant_id: str, error: str
    ) -> None:
        """Record that an operation failed on a storage error."""
        self._logger.error(
            "employee_operation_failed",
            operation=operation,
            tenant_id=tenant_id,
            error=error,
        )

    def event_publish_failed(
        self, event_type: str, employee_id: str, tenant_id: str, error: str
    ) -> None:
        """Record that a lifecycle event was dropped."""
        self._logger.warning(
            "employee_event_dropped",
            event_type=event_type,
            employee_id=employee_id,
            tenant_id=tenant_id,
            error=error,
        )
