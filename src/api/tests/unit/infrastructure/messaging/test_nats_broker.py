"""Unit tests for NatsMessageBroker.

The NATS client is replaced with a mock so no server is needed.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from infrastructure.messaging.nats_broker import (
    BrokerConnectionError,
    DefaultMessageBrokerProbe,
    NatsMessageBroker,
)
from infrastructure.messaging_dependencies import (
    build_outbox_relay,
    get_message_broker,
)
from infrastructure.settings import NatsSettings, OutboxRelaySettings
from shared_kernel.outbox.ports import IMessageBroker

SERVERS = ["nats://nats-1:4222", "nats://nats-2:4222"]


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.is_closed = False
    client.publish = AsyncMock()
    client.flush = AsyncMock()
    client.drain = AsyncMock()
    return client


@pytest.fixture
def mock_connect(monkeypatch, mock_client):
    connect = AsyncMock(return_value=mock_client)
    monkeypatch.setattr("infrastructure.messaging.nats_broker.nats.connect", connect)
    return connect


@pytest.fixture
def mock_probe():
    return MagicMock(spec=DefaultMessageBrokerProbe)


@pytest.fixture
def broker(mock_probe) -> NatsMessageBroker:
    return NatsMessageBroker(
        servers=SERVERS,
        client_name="employees-test",
        connect_timeout_seconds=1.5,
        flush_timeout_seconds=0.5,
        probe=mock_probe,
    )


class TestNatsMessageBrokerPublish:
    """Tests for NatsMessageBroker.publish()."""

    def test_implements_message_broker_port(self, broker):
        assert isinstance(broker, IMessageBroker)

    @pytest.mark.asyncio
    async def test_connects_lazily_on_first_publish(
        self, broker, mock_connect, mock_probe
    ):
        mock_connect.assert_not_awaited()

        await broker.publish("employees.v1.created", b"{}")

        mock_connect.assert_awaited_once_with(
            servers=SERVERS,
            name="employees-test",
            connect_timeout=1.5,
            allow_reconnect=True,
        )
        mock_probe.connected.assert_called_once_with(SERVERS)

    @pytest.mark.asyncio
    async def test_publishes_and_flushes(self, broker, mock_connect, mock_client):
        await broker.publish("employees.v1.deleted", b'{"tenant_id": "t"}')

        mock_client.publish.assert_awaited_once_with(
            "employees.v1.deleted", b'{"tenant_id": "t"}'
        )
        mock_client.flush.assert_awaited_once_with(timeout=0.5)

    @pytest.mark.asyncio
    async def test_reuses_open_connection(self, broker, mock_connect):
        await broker.publish("employees.v1.created", b"{}")
        await broker.publish("employees.v1.updated", b"{}")

        mock_connect.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_reconnects_after_connection_closed(
        self, broker, mock_connect, mock_client
    ):
        await broker.publish("employees.v1.created", b"{}")
        mock_client.is_closed = True

        await broker.publish("employees.v1.created", b"{}")

        assert mock_connect.await_count == 2

    @pytest.mark.asyncio
    async def test_connection_failure_raises_broker_error(
        self, broker, monkeypatch, mock_probe
    ):
        error = OSError("connection refused")
        monkeypatch.setattr(
            "infrastructure.messaging.nats_broker.nats.connect",
            AsyncMock(side_effect=error),
        )

        with pytest.raises(BrokerConnectionError, match="nats-1"):
            await broker.publish("employees.v1.created", b"{}")

        mock_probe.connection_failed.assert_called_once_with(SERVERS, error)


class TestNatsMessageBrokerClose:
    """Tests for NatsMessageBroker.close()."""

    @pytest.mark.asyncio
    async def test_close_drains_connection(
        self, broker, mock_connect, mock_client, mock_probe
    ):
        await broker.publish("employees.v1.created", b"{}")

        await broker.close()

        mock_client.drain.assert_awaited_once()
        mock_probe.closed.assert_called_once()

    @pytest.mark.asyncio
    async def test_close_without_connection_is_noop(self, broker, mock_probe):
        await broker.close()

        mock_probe.closed.assert_not_called()


class TestMessagingDependencies:
    """Tests for broker and relay wiring."""

    def test_broker_is_configured_from_settings(self):
        settings = NatsSettings(
            url="nats://a:4222,nats://b:4222", flush_timeout_seconds=3.0
        )

        broker = get_message_broker(settings)

        assert broker._servers == ["nats://a:4222", "nats://b:4222"]
        assert broker._flush_timeout == 3.0

    def test_relay_is_configured_from_settings(self):
        session_factory = MagicMock()
        broker = MagicMock()

        relay = build_outbox_relay(
            broker,
            session_factory=session_factory,
            settings=OutboxRelaySettings(poll_interval_seconds=5, batch_size=10),
        )

        assert relay._broker is broker
        assert relay._session_factory is session_factory
        assert relay._poll_interval == 5
        assert relay._batch_size == 10
