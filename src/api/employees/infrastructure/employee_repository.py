"""SQLAlchemy implementation of IEmployeeRepository.

Each public operation runs in its own session and transaction obtained from
the session factory, so multi-row writes (create, email replacement, merge)
either apply completely or not at all. Rows are mapped to and from the
Employee aggregate at this boundary; callers never see ORM models.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from datetime import datetime

from sqlalchemy import delete, exists, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload
from ulid import ULID

from employees.domain.aggregates import Employee
from employees.domain.exceptions import CannotMergeSameError, EmployeeNotFoundError
from employees.domain.value_objects import EmployeeId, EmployeeUpdate, ListFilter
from employees.infrastructure.models import (
    EMAIL_UNIQUE_CONSTRAINT,
    EmployeeEmailModel,
    EmployeeModel,
)
from employees.infrastructure.observability import (
    DefaultEmployeeRepositoryProbe,
    EmployeeRepositoryProbe,
)
from employees.ports.exceptions import DuplicateEmailError, StorageError
from employees.ports.repositories import IEmployeeRepository
from infrastructure.database.models import utc_now


def _ordered_ids(count: int) -> list[str]:
    """Generate ``count`` ULIDs in ascending order.

    Email rows written together share a created_at, so their ids break the
    tie and keep the supplied order on reload.
    """
    return sorted(str(ULID()) for _ in range(count))


def _email_models(
    tenant_id: str, employee_id: str, emails: Iterable[str], created_at: datetime
) -> list[EmployeeEmailModel]:
    emails = list(emails)
    return [
        EmployeeEmailModel(
            id=row_id,
            employee_id=employee_id,
            tenant_id=tenant_id,
            email=email,
            created_at=created_at,
        )
        for row_id, email in zip(_ordered_ids(len(emails)), emails)
    ]


def _to_model(tenant_id: str, employee_id: str, employee: Employee) -> EmployeeModel:
    """Map a new Employee aggregate to its storage rows."""
    now = utc_now()
    return EmployeeModel(
        id=employee_id,
        tenant_id=tenant_id,
        first_name=employee.first_name,
        last_name=employee.last_name,
        created_at=now,
        updated_at=now,
        emails=_email_models(tenant_id, employee_id, employee.emails, now),
    )


def _to_domain(model: EmployeeModel) -> Employee:
    """Map stored rows back to an Employee aggregate."""
    return Employee(
        id=EmployeeId(value=model.id),
        tenant_id=model.tenant_id,
        emails=tuple(row.email for row in model.emails),
        first_name=model.first_name,
        last_name=model.last_name,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def _constraint_name(error: IntegrityError) -> str | None:
    """Constraint name reported by the driver, when it reports one.

    asyncpg exposes it on the driver exception chained behind the DBAPI
    adapter; psycopg exposes it through ``diag``.
    """
    orig = error.orig
    for candidate in (orig, getattr(orig, "__cause__", None)):
        name = getattr(candidate, "constraint_name", None)
        if name:
            return name
    diag = getattr(orig, "diag", None)
    return getattr(diag, "constraint_name", None)


def _is_email_conflict(error: IntegrityError) -> bool:
    """Whether an IntegrityError came from the (tenant_id, email) constraint."""
    name = _constraint_name(error)
    if name is not None:
        return name == EMAIL_UNIQUE_CONSTRAINT
    # SQLite reports the offending columns instead of the constraint name
    message = str(error.orig)
    return EMAIL_UNIQUE_CONSTRAINT in message or "employee_emails.email" in message


class EmployeeRepository(IEmployeeRepository):
    """Repository storing Employee aggregates in two normalized tables.

    The (tenant_id, email) unique constraint is the authoritative guard for
    per-tenant email uniqueness; violations surface as DuplicateEmailError.
    Every predicate includes the tenant id.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        probe: EmployeeRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: Factory producing one session per operation
            probe: Optional domain probe for observability
        """
        self._session_factory = session_factory
        self._probe = probe or DefaultEmployeeRepositoryProbe()

    @asynccontextmanager
    async def _transaction(
        self, operation: str, tenant_id: str
    ) -> AsyncIterator[AsyncSession]:
        """Run the enclosed block in one transaction, translating driver errors.

        Business exceptions raised inside the block roll the transaction
        back and propagate unchanged.
        """
        try:
            async with self._session_factory() as session, session.begin():
                yield session
        except IntegrityError as e:
            if _is_email_conflict(e):
                self._probe.duplicate_email(tenant_id, operation)
                raise DuplicateEmailError(
                    f"email already exists in tenant {tenant_id}",
                    tenant_id=tenant_id,
                ) from e
            self._probe.storage_failed(operation, tenant_id, str(e))
            raise StorageError(f"{operation} failed: integrity violation") from e
        except SQLAlchemyError as e:
            self._probe.storage_failed(operation, tenant_id, str(e))
            raise StorageError(f"{operation} failed") from e

    async def _load(
        self, session: AsyncSession, tenant_id: str, employee_id: str
    ) -> Employee | None:
        stmt = (
            select(EmployeeModel)
            .options(selectinload(EmployeeModel.emails))
            .where(
                EmployeeModel.id == employee_id,
                EmployeeModel.tenant_id == tenant_id,
            )
        )
        result = await session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_domain(model) if model is not None else None

    async def _reload(self, tenant_id: str, employee_id: str) -> Employee:
        """Re-read an employee after a committed write."""
        async with self._transaction("reload", tenant_id) as session:
            employee = await self._load(session, tenant_id, employee_id)
        if employee is None:
            self._probe.employee_not_found(employee_id, tenant_id)
            raise EmployeeNotFoundError(f"employee {employee_id} not found")
        return employee

    async def create(self, tenant_id: str, employee: Employee) -> Employee:
        """Insert the employee row and its email rows in one transaction."""
        employee_id = (employee.id or EmployeeId.generate()).value
        model = _to_model(tenant_id, employee_id, employee)

        async with self._transaction("create", tenant_id) as session:
            session.add(model)

        self._probe.employee_saved(employee_id, tenant_id, len(employee.emails))
        return await self._reload(tenant_id, employee_id)

    async def update(
        self, tenant_id: str, employee_id: EmployeeId, changes: EmployeeUpdate
    ) -> Employee:
        """Apply supplied fields; a supplied email set replaces the old one."""
        now = utc_now()
        values: dict[str, object] = {"updated_at": now}
        if changes.first_name:
            values["first_name"] = changes.first_name
        if changes.last_name:
            values["last_name"] = changes.last_name

        async with self._transaction("update", tenant_id) as session:
            result = await session.execute(
                update(EmployeeModel)
                .where(
                    EmployeeModel.id == employee_id.value,
                    EmployeeModel.tenant_id == tenant_id,
                )
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                self._probe.employee_not_found(employee_id.value, tenant_id)
                raise EmployeeNotFoundError(f"employee {employee_id} not found")

            if changes.emails:
                await session.execute(
                    delete(EmployeeEmailModel)
                    .where(
                        EmployeeEmailModel.employee_id == employee_id.value,
                        EmployeeEmailModel.tenant_id == tenant_id,
                    )
                    .execution_options(synchronize_session=False)
                )
                session.add_all(
                    _email_models(tenant_id, employee_id.value, changes.emails, now)
                )

        self._probe.employee_saved(employee_id.value, tenant_id, len(changes.emails))
        return await self._reload(tenant_id, employee_id.value)

    async def delete(self, tenant_id: str, employee_id: EmployeeId) -> None:
        """Delete the employee; email rows go with it through ON DELETE CASCADE."""
        async with self._transaction("delete", tenant_id) as session:
            result = await session.execute(
                delete(EmployeeModel)
                .where(
                    EmployeeModel.id == employee_id.value,
                    EmployeeModel.tenant_id == tenant_id,
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                self._probe.employee_not_found(employee_id.value, tenant_id)
                raise EmployeeNotFoundError(f"employee {employee_id} not found")

        self._probe.employee_deleted(employee_id.value, tenant_id)

    async def get_by_id(
        self, tenant_id: str, employee_id: EmployeeId
    ) -> Employee | None:
        async with self._transaction("get_by_id", tenant_id) as session:
            return await self._load(session, tenant_id, employee_id.value)

    async def get_by_email(self, tenant_id: str, email: str) -> Employee | None:
        """Resolve the owning employee through the email table."""
        async with self._transaction("get_by_email", tenant_id) as session:
            owner_id = await session.scalar(
                select(EmployeeEmailModel.employee_id).where(
                    EmployeeEmailModel.email == email,
                    EmployeeEmailModel.tenant_id == tenant_id,
                )
            )
            if owner_id is None:
                return None
            return await self._load(session, tenant_id, owner_id)

    async def list(
        self, tenant_id: str, list_filter: ListFilter
    ) -> tuple[list[Employee], int]:
        """List employees newest first, filtered by inclusive created_at bounds."""
        conditions = [EmployeeModel.tenant_id == tenant_id]
        if list_filter.created_after is not None:
            conditions.append(EmployeeModel.created_at >= list_filter.created_after)
        if list_filter.created_before is not None:
            conditions.append(EmployeeModel.created_at <= list_filter.created_before)

        async with self._transaction("list", tenant_id) as session:
            total = await session.scalar(
                select(func.count()).select_from(EmployeeModel).where(*conditions)
            )
            result = await session.execute(
                select(EmployeeModel)
                .options(selectinload(EmployeeModel.emails))
                .where(*conditions)
                .order_by(EmployeeModel.created_at.desc(), EmployeeModel.id.desc())
                .offset(list_filter.offset)
                .limit(list_filter.page_size)
            )
            models = result.scalars().all()

        return [_to_domain(model) for model in models], int(total or 0)

    async def check_email_exists(self, tenant_id: str, email: str) -> bool:
        async with self._transaction("check_email_exists", tenant_id) as session:
            found = await session.scalar(
                select(
                    exists().where(
                        EmployeeEmailModel.email == email,
                        EmployeeEmailModel.tenant_id == tenant_id,
                    )
                )
            )
        return bool(found)

    async def _lock_owner(
        self, session: AsyncSession, tenant_id: str, email: str
    ) -> str | None:
        """Return the owner id of an address, locking its row for the merge."""
        return await session.scalar(
            select(EmployeeEmailModel.employee_id)
            .where(
                EmployeeEmailModel.email == email,
                EmployeeEmailModel.tenant_id == tenant_id,
            )
            .with_for_update()
        )

    async def merge_employees(
        self, tenant_id: str, primary_email: str, secondary_email: str
    ) -> Employee:
        """Move every address of the secondary to the primary, then drop the secondary.

        Moved rows get a fresh created_at so they order after the primary's
        own addresses.
        """
        async with self._transaction("merge_employees", tenant_id) as session:
            primary_id = await self._lock_owner(session, tenant_id, primary_email)
            if primary_id is None:
                raise EmployeeNotFoundError(f"no employee owns {primary_email}")

            secondary_id = await self._lock_owner(session, tenant_id, secondary_email)
            if secondary_id is None:
                raise EmployeeNotFoundError(f"no employee owns {secondary_email}")

            if primary_id == secondary_id:
                raise CannotMergeSameError()

            now = utc_now()
            moved = await session.execute(
                update(EmployeeEmailModel)
                .where(
                    EmployeeEmailModel.employee_id == secondary_id,
                    EmployeeEmailModel.tenant_id == tenant_id,
                )
                .values(employee_id=primary_id, created_at=now)
                .execution_options(synchronize_session=False)
            )
            emails_moved = moved.rowcount
            await session.execute(
                delete(EmployeeModel)
                .where(
                    EmployeeModel.id == secondary_id,
                    EmployeeModel.tenant_id == tenant_id,
                )
                .execution_options(synchronize_session=False)
            )
            await session.execute(
                update(EmployeeModel)
                .where(
                    EmployeeModel.id == primary_id,
                    EmployeeModel.tenant_id == tenant_id,
                )
                .values(updated_at=now)
                .execution_options(synchronize_session=False)
            )

        self._probe.employees_merged(primary_id, secondary_id, tenant_id, emails_moved)
        return await self._reload(tenant_id, primary_id)
