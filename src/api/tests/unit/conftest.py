"""Unit test fixtures with mocked dependencies."""

from datetime import UTC, datetime
from unittest.mock import create_autospec

import pytest
from pydantic import SecretStr

from employees.domain.aggregates import Employee
from employees.domain.value_objects import EmployeeId
from shared_kernel.tenant_scope import RequestContext


@pytest.fixture
def mock_db_settings():
    """Provide test database settings."""
    from infrastructure.settings import DatabaseSettings

    return DatabaseSettings(
        host="testhost",
        port=5432,
        database="testdb",
        username="testuser",
        password=SecretStr("testpass"),
        pool_min_connections=2,
        pool_max_connections=10,
    )


@pytest.fixture
def tenant_id() -> str:
    return "tenant-acme"


@pytest.fixture
def user_id() -> str:
    return "user-alice"


@pytest.fixture
def request_context(tenant_id, user_id) -> RequestContext:
    """Context of an authenticated caller."""
    return RequestContext(tenant_id=tenant_id, user_id=user_id)


@pytest.fixture
def mock_scope_probe():
    """Create mock tenant scope probe."""
    from shared_kernel.observability import TenantScopeProbe

    return create_autospec(TenantScopeProbe, instance=True)


@pytest.fixture
def make_employee(tenant_id):
    """Factory for persisted-looking Employee aggregates."""

    def _make(
        emails=("jane@acme.io",),
        first_name="Jane",
        last_name="Doe",
        employee_id: EmployeeId | None = None,
    ) -> Employee:
        now = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
        return Employee(
            id=employee_id or EmployeeId.generate(),
            tenant_id=tenant_id,
            emails=tuple(emails),
            first_name=first_name,
            last_name=last_name,
            created_at=now,
            updated_at=now,
        )

    return _make
