"""Unit tests for OutboxModel.

These tests verify the ORM model behavior and conversion methods.
"""

from datetime import UTC, datetime

from infrastructure.outbox.models import OutboxModel
from shared_kernel.outbox.value_objects import OutboxEntry


class TestOutboxModelToValueObject:
    """Tests for OutboxModel.to_value_object() method."""

    def test_converts_model_to_outbox_entry(self):
        """Should convert all fields from model to OutboxEntry."""
        occurred_at = datetime(2026, 1, 9, 12, 0, 0, tzinfo=UTC)
        created_at = datetime(2026, 1, 9, 12, 0, 1, tzinfo=UTC)

        model = OutboxModel(
            id="01HZY8Q3J7ZK9V4C3W3N2XGZ5R",
            aggregate_type="employee",
            aggregate_id="01ARZCX0P0HZGQP3MZXQQ0NNZZ",
            event_type="EmployeeCreated",
            subject="employees.v1.created",
            payload={"tenant_id": "tenant-acme"},
            occurred_at=occurred_at,
            processed_at=None,
            created_at=created_at,
        )

        entry = model.to_value_object()

        assert isinstance(entry, OutboxEntry)
        assert entry.id == "01HZY8Q3J7ZK9V4C3W3N2XGZ5R"
        assert entry.aggregate_type == "employee"
        assert entry.event_type == "EmployeeCreated"
        assert entry.subject == "employees.v1.created"
        assert entry.payload == {"tenant_id": "tenant-acme"}
        assert entry.occurred_at == occurred_at
        assert entry.created_at == created_at
        assert not entry.is_processed

    def test_converts_processed_entry(self):
        """Should preserve processed_at when set."""
        processed_at = datetime(2026, 1, 9, 12, 5, 0, tzinfo=UTC)

        model = OutboxModel(
            id="01HZY8Q3J7ZK9V4C3W3N2XGZ5R",
            aggregate_type="employee",
            aggregate_id="01ARZCX0P0HZGQP3MZXQQ0NNZZ",
            event_type="EmployeeDeleted",
            subject="employees.v1.deleted",
            payload={},
            occurred_at=processed_at,
            processed_at=processed_at,
            created_at=processed_at,
        )

        assert model.to_value_object().is_processed
