"""Unit tests for OutboxRepository.

These tests use mocked database sessions to test the repository logic
without requiring a real database connection.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from infrastructure.outbox.repository import OutboxRepository
from shared_kernel.outbox.value_objects import OutboxEntry

EMPLOYEE_ID = "01ARZCX0P0HZGQP3MZXQQ0NNZZ"


class TestOutboxRepositoryAppend:
    """Tests for OutboxRepository.append() method."""

    @pytest.mark.asyncio
    async def test_append_creates_outbox_model(self):
        """Test that append creates an OutboxModel and adds it to session."""
        mock_session = MagicMock()
        repo = OutboxRepository(mock_session)
        occurred_at = datetime(2026, 1, 8, 12, 0, 0, tzinfo=UTC)

        await repo.append(
            event_type="EmployeeCreated",
            subject="employees.v1.created",
            payload={"tenant_id": "tenant-acme"},
            occurred_at=occurred_at,
            aggregate_type="employee",
            aggregate_id=EMPLOYEE_ID,
        )

        mock_session.add.assert_called_once()
        added_model = mock_session.add.call_args[0][0]
        assert added_model.aggregate_type == "employee"
        assert added_model.aggregate_id == EMPLOYEE_ID
        assert added_model.event_type == "EmployeeCreated"
        assert added_model.subject == "employees.v1.created"
        assert added_model.payload == {"tenant_id": "tenant-acme"}
        assert added_model.occurred_at == occurred_at
        assert added_model.processed_at is None

    @pytest.mark.asyncio
    async def test_append_never_commits(self):
        """The caller owns the transaction boundary."""
        mock_session = MagicMock()
        repo = OutboxRepository(mock_session)

        await repo.append(
            event_type="EmployeeDeleted",
            subject="employees.v1.deleted",
            payload={},
            occurred_at=datetime.now(UTC),
            aggregate_type="employee",
            aggregate_id=EMPLOYEE_ID,
        )

        mock_session.commit.assert_not_called()


class TestOutboxRepositoryFetchUnprocessed:
    """Tests for OutboxRepository.fetch_unprocessed() method."""

    @pytest.mark.asyncio
    async def test_fetch_unprocessed_returns_outbox_entries(self):
        """Test that fetch_unprocessed returns OutboxEntry value objects."""
        mock_session = AsyncMock()
        expected_entry = OutboxEntry(
            id="01HZY8Q3J7ZK9V4C3W3N2XGZ5R",
            aggregate_type="employee",
            aggregate_id=EMPLOYEE_ID,
            event_type="EmployeeCreated",
            subject="employees.v1.created",
            payload={"__type__": "EmployeeCreated"},
            occurred_at=datetime(2026, 1, 8, 12, 0, 0, tzinfo=UTC),
            processed_at=None,
            created_at=datetime(2026, 1, 8, 12, 0, 1, tzinfo=UTC),
        )
        mock_model = MagicMock()
        mock_model.to_value_object.return_value = expected_entry
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = [mock_model]
        mock_session.execute = AsyncMock(return_value=mock_result)

        entries = await OutboxRepository(mock_session).fetch_unprocessed(limit=10)

        assert entries == [expected_entry]
        mock_model.to_value_object.assert_called_once()

    @pytest.mark.asyncio
    async def test_fetch_unprocessed_respects_limit(self):
        """The limit is rendered into the query."""
        mock_session = AsyncMock()
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_session.execute = AsyncMock(return_value=mock_result)

        await OutboxRepository(mock_session).fetch_unprocessed(limit=50)

        stmt = mock_session.execute.call_args[0][0]
        assert stmt._limit_clause.value == 50


class TestOutboxRepositoryMarkProcessed:
    """Tests for OutboxRepository.mark_processed() method."""

    @pytest.mark.asyncio
    async def test_mark_processed_updates_only_the_entry(self):
        mock_session = AsyncMock()
        entry_id = "01HZY8Q3J7ZK9V4C3W3N2XGZ5R"

        await OutboxRepository(mock_session).mark_processed(entry_id)

        mock_session.execute.assert_awaited_once()
        stmt = mock_session.execute.call_args[0][0]
        assert stmt.table.name == "outbox"
        params = stmt.compile().params
        assert params["processed_at"] is not None
        assert entry_id in params.values()
        mock_session.commit.assert_not_called()
