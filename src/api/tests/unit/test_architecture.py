"""Architecture tests using pytest-archon.

These tests enforce DDD architectural boundaries between layers
within the Employees bounded context.
"""

from importlib.util import find_spec
from pathlib import Path

from pytest_archon import archrule


class TestEmployeesDomainLayerBoundaries:
    """Tests that the domain layer has no forbidden dependencies."""

    def test_domain_does_not_import_infrastructure(self):
        """Domain layer should not depend on infrastructure.

        The domain layer contains pure business logic and should not
        know about database clients, SQL, or other infrastructure concerns.
        """
        (
            archrule("domain_no_infrastructure")
            .match("employees.domain*")
            .should_not_import("employees.infrastructure*", "infrastructure*")
            .check("employees")
        )

    def test_domain_does_not_import_application(self):
        """Domain objects should be usable without application services."""
        (
            archrule("domain_no_application")
            .match("employees.domain*")
            .should_not_import("employees.application*")
            .check("employees")
        )

    def test_domain_does_not_import_sqlalchemy(self):
        """Domain objects should be persistence-agnostic."""
        (
            archrule("domain_no_sqlalchemy")
            .match("employees.domain*")
            .should_not_import("sqlalchemy*", "asyncpg*")
            .check("employees")
        )


class TestEmployeesPortsLayerBoundaries:
    """Tests that the ports layer has no forbidden dependencies."""

    def test_ports_does_not_import_infrastructure(self):
        """Ports define interfaces; they should not know about implementations."""
        (
            archrule("ports_no_infrastructure")
            .match("employees.ports*")
            .should_not_import("employees.infrastructure*", "infrastructure*")
            .check("employees")
        )

    def test_ports_does_not_import_application(self):
        (
            archrule("ports_no_application")
            .match("employees.ports*")
            .should_not_import("employees.application*")
            .check("employees")
        )


class TestEmployeesApplicationLayerBoundaries:
    """Tests that the application layer depends only on ports."""

    def test_application_does_not_import_infrastructure(self):
        """Application services receive adapters through their constructor."""
        (
            archrule("application_no_infrastructure")
            .match("employees.application*")
            .should_not_import(
                "employees.infrastructure*", "infrastructure*", "sqlalchemy*"
            )
            .check("employees")
        )


class TestSharedKernelBoundaries:
    """Tests that the shared kernel stays independent of bounded contexts."""

    def test_shared_kernel_does_not_import_employees(self):
        (
            archrule("shared_kernel_no_employees")
            .match("shared_kernel*")
            .should_not_import("employees*")
            .check("shared_kernel")
        )


class TestRuleTargets:
    """Tests that layer rules walk the source tree, not the test tree."""

    def test_employees_resolves_to_source_package(self):
        """Test directories named after a context must not shadow it.

        Layer rules collect modules from the first location of the
        package; a namespace package would let tests/unit/employees win.
        """
        spec = find_spec("employees")

        assert spec is not None
        assert spec.origin is not None
        origin = Path(spec.origin)
        assert origin.name == "__init__.py"
        assert "tests" not in origin.parent.parts
        assert (origin.parent / "ports" / "repositories.py").is_file()
