"""Employee application service for the employee lifecycle context.

Orchestrates business rules that span several repository calls and emits
lifecycle events after each successful change.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Iterator
from contextlib import contextmanager

from employees.application.observability import (
    DefaultEmployeeServiceProbe,
    EmployeeServiceProbe,
)
from employees.domain.aggregates import Employee
from employees.domain.events import EventType
from employees.domain.exceptions import (
    CannotMergeSameError,
    EmployeeAlreadyExistsError,
    EmployeeNotFoundError,
    InvalidDateRangeError,
    InvalidEmailError,
    InvalidMergeError,
    PrimaryNotFoundError,
    SecondaryNotFoundError,
)
from employees.domain.value_objects import (
    EmployeeId,
    EmployeePage,
    EmployeeUpdate,
    ListFilter,
)
from employees.ports.events import IEmployeeEventPublisher
from employees.ports.exceptions import DuplicateEmailError, StorageError
from employees.ports.repositories import IEmployeeRepository
from shared_kernel.observability import TenantScopeProbe
from shared_kernel.tenant_scope import RequestContext, TenantScope, resolve_tenant_scope

DEFAULT_PUBLISH_TIMEOUT_SECONDS = 2.0

PublishCall = Callable[[IEmployeeEventPublisher], Awaitable[None]]


class EmployeeService:
    """Application service for employee lifecycle management.

    Every operation resolves the caller's tenant scope first and fails
    closed before touching storage. Event publication is best-effort:
    failures and timeouts are logged and never reach the caller.
    """

    def __init__(
        self,
        repository: IEmployeeRepository,
        event_publisher: IEmployeeEventPublisher | None = None,
        probe: EmployeeServiceProbe | None = None,
        scope_probe: TenantScopeProbe | None = None,
        publish_timeout_seconds: float = DEFAULT_PUBLISH_TIMEOUT_SECONDS,
    ):
        """Initialize EmployeeService with dependencies.

        Args:
            repository: Repository for employee persistence
            event_publisher: Optional lifecycle event publisher; None disables events
            probe: Optional domain probe for observability
            scope_probe: Optional probe passed to tenant scope resolution
            publish_timeout_seconds: Upper bound for a single publish call
        """
        self._repository = repository
        self._event_publisher = event_publisher
        self._probe = probe or DefaultEmployeeServiceProbe()
        self._scope_probe = scope_probe
        self._publish_timeout = publish_timeout_seconds

    def _resolve(self, context: RequestContext | None) -> TenantScope:
        return resolve_tenant_scope(context, probe=self._scope_probe)

    @contextmanager
    def _storage_errors(self, operation: str, scope: TenantScope) -> Iterator[None]:
        """Translate a unique-constraint violation and record storage failures."""
        try:
            yield
        except DuplicateEmailError as e:
            self._probe.duplicate_email_rejected(scope.tenant_id, operation)
            raise EmployeeAlreadyExistsError() from e
        except StorageError as e:
            self._probe.employee_operation_failed(operation, scope.tenant_id, str(e))
            raise

    async def _ensure_emails_available(
        self, scope: TenantScope, emails: Iterable[str], operation: str
    ) -> None:
        """Advisory uniqueness pre-check; the storage constraint is authoritative."""
        for email in emails:
            with self._storage_errors(operation, scope):
                exists = await self._repository.check_email_exists(
                    scope.tenant_id, email
                )
            if exists:
                self._probe.duplicate_email_rejected(scope.tenant_id, operation, email)
                raise EmployeeAlreadyExistsError(f"email {email} already exists")

    async def _publish(
        self,
        event_type: EventType,
        scope: TenantScope,
        employee: Employee,
        call: PublishCall,
    ) -> None:
        """Hand one event to the publisher, absorbing any failure."""
        if self._event_publisher is None:
            return

        try:
            async with asyncio.timeout(self._publish_timeout):
                await call(self._event_publisher)
        except Exception as e:
            self._probe.event_publish_failed(
                event_type.value,
                employee.id.value if employee.id else "",
                scope.tenant_id,
                str(e) or type(e).__name__,
            )

    async def create_employee(
        self,
        context: RequestContext | None,
        emails: Iterable[str],
        first_name: str,
        last_name: str,
    ) -> Employee:
        """Create a new employee in the caller's tenant.

        Args:
            context: Identity of the caller
            emails: Addresses owned by the new employee, at least one
            first_name: Given name
            last_name: Family name

        Returns:
            The stored Employee with its generated id and timestamps

        Raises:
            UnauthorizedError: If tenant or user identity is missing
            InvalidEmailError: If no email address was supplied
            EmployeeAlreadyExistsError: If any address is owned in the tenant
            StorageError: If persistence fails
        """
        scope = self._resolve(context)

        employee = Employee.create(
            tenant_id=scope.tenant_id,
            emails=emails,
            first_name=first_name,
            last_name=last_name,
        )
        if not employee.emails:
            raise InvalidEmailError()

        await self._ensure_emails_available(scope, employee.emails, "create_employee")

        with self._storage_errors("create_employee", scope):
            created = await self._repository.create(scope.tenant_id, employee)

        self._probe.employee_created(created.id.value, scope.tenant_id, scope.user_id)
        await self._publish(
            EventType.CREATED,
            scope,
            created,
            lambda publisher: publisher.publish_created(
                scope.tenant_id, scope.user_id, created
            ),
        )
        return created

    async def update_employee(
        self,
        context: RequestContext | None,
        employee_id: EmployeeId,
        changes: EmployeeUpdate,
    ) -> Employee:
        """Apply a partial update to an employee.

        Empty values in ``changes`` leave the stored data untouched; a
        supplied email set replaces the existing one.

        Raises:
            UnauthorizedError: If tenant or user identity is missing
            EmployeeNotFoundError: If the employee does not exist in the tenant
            EmployeeAlreadyExistsError: If a new address is owned by someone else
            StorageError: If persistence fails
        """
        scope = self._resolve(context)

        with self._storage_errors("update_employee", scope):
            existing = await self._repository.get_by_id(scope.tenant_id, employee_id)
        if existing is None:
            raise EmployeeNotFoundError(f"employee {employee_id} not found")

        changed_fields = existing.changed_fields(changes)
        await self._ensure_emails_available(
            scope, existing.new_emails(changes.emails), "update_employee"
        )

        with self._storage_errors("update_employee", scope):
            updated = await self._repository.update(
                scope.tenant_id, employee_id, changes
            )

        self._probe.employee_updated(
            employee_id.value, scope.tenant_id, scope.user_id, changed_fields
        )
        await self._publish(
            EventType.UPDATED,
            scope,
            updated,
            lambda publisher: publisher.publish_updated(
                scope.tenant_id, scope.user_id, updated, changed_fields
            ),
        )
        return updated

    async def delete_employee(
        self, context: RequestContext | None, employee_id: EmployeeId
    ) -> None:
        """Delete an employee, emitting its pre-deletion snapshot.

        Raises:
            UnauthorizedError: If tenant or user identity is missing
            EmployeeNotFoundError: If the employee does not exist in the tenant
            StorageError: If persistence fails
        """
        scope = self._resolve(context)

        with self._storage_errors("delete_employee", scope):
            existing = await self._repository.get_by_id(scope.tenant_id, employee_id)
            if existing is None:
                raise EmployeeNotFoundError(f"employee {employee_id} not found")
            await self._repository.delete(scope.tenant_id, employee_id)

        self._probe.employee_deleted(employee_id.value, scope.tenant_id, scope.user_id)
        await self._publish(
            EventType.DELETED,
            scope,
            existing,
            lambda publisher: publisher.publish_deleted(
                scope.tenant_id, scope.user_id, existing
            ),
        )

    async def get_employee(
        self, context: RequestContext | None, employee_id: EmployeeId
    ) -> Employee:
        """Fetch an employee by id.

        Raises:
            UnauthorizedError: If tenant or user identity is missing
            EmployeeNotFoundError: If the employee does not exist in the tenant
        """
        scope = self._resolve(context)

        with self._storage_errors("get_employee", scope):
            employee = await self._repository.get_by_id(scope.tenant_id, employee_id)
        if employee is None:
            raise EmployeeNotFoundError(f"employee {employee_id} not found")
        return employee

    async def get_employee_by_email(
        self, context: RequestContext | None, email: str
    ) -> Employee:
        """Fetch the employee owning an address.

        Raises:
            UnauthorizedError: If tenant or user identity is missing
            EmployeeNotFoundError: If no employee owns the address in the tenant
        """
        scope = self._resolve(context)

        with self._storage_errors("get_employee_by_email", scope):
            employee = await self._repository.get_by_email(
                scope.tenant_id, email.strip()
            )
        if employee is None:
            raise EmployeeNotFoundError(f"no employee owns {email}")
        return employee

    async def list_employees(
        self, context: RequestContext | None, list_filter: ListFilter | None = None
    ) -> EmployeePage:
        """List employees newest first.

        Out-of-range pagination is clamped rather than rejected; the returned
        page carries the effective values.

        Raises:
            UnauthorizedError: If tenant or user identity is missing
            InvalidDateRangeError: If created_after is later than created_before
        """
        scope = self._resolve(context)

        effective = (list_filter or ListFilter()).clamped()
        if effective.has_inverted_range:
            raise InvalidDateRangeError()

        with self._storage_errors("list_employees", scope):
            employees, total = await self._repository.list(scope.tenant_id, effective)

        return EmployeePage(
            employees=employees,
            total=total,
            page=effective.page,
            page_size=effective.page_size,
        )

    async def merge_employees(
        self,
        context: RequestContext | None,
        primary_email: str,
        secondary_email: str,
    ) -> Employee:
        """Absorb the employee owning ``secondary_email`` into the primary.

        Returns:
            The primary Employee with its expanded email set

        Raises:
            UnauthorizedError: If tenant or user identity is missing
            InvalidMergeError: If both addresses are identical
            PrimaryNotFoundError: If the primary address does not resolve
            SecondaryNotFoundError: If the secondary address does not resolve
            CannotMergeSameError: If both addresses belong to one employee
            StorageError: If persistence fails
        """
        scope = self._resolve(context)

        primary_email = primary_email.strip()
        secondary_email = secondary_email.strip()
        if primary_email == secondary_email:
            raise InvalidMergeError()

        with self._storage_errors("merge_employees", scope):
            primary = await self._repository.get_by_email(
                scope.tenant_id, primary_email
            )
            if primary is None:
                raise PrimaryNotFoundError()

            secondary = await self._repository.get_by_email(
                scope.tenant_id, secondary_email
            )
            if secondary is None:
                raise SecondaryNotFoundError()

            if primary.id == secondary.id:
                raise CannotMergeSameError()

            merged = await self._repository.merge_employees(
                scope.tenant_id, primary_email, secondary_email
            )

        self._probe.employees_merged(
            merged.id.value, secondary_email, scope.tenant_id, scope.user_id
        )
        await self._publish(
            EventType.MERGED,
            scope,
            merged,
            lambda publisher: publisher.publish_merged(
                scope.tenant_id, scope.user_id, merged, secondary_email
            ),
        )
        return merged
