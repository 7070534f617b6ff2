"""NATS implementation of the message broker port."""

from __future__ import annotations

from typing import Protocol

import nats
import structlog
from nats.aio.client import Client


class BrokerConnectionError(Exception):
    """Raised when the broker cannot be reached."""


class MessageBrokerProbe(Protocol):
    """Domain probe for broker connectivity."""

    def connected(self, servers: list[str]) -> None: ...

    def connection_failed(self, servers: list[str], error: Exception) -> None: ...

    def closed(self) -> None: ...


class DefaultMessageBrokerProbe:
    """Default implementation of MessageBrokerProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def connected(self, servers: list[str]) -> None:
        self._logger.info("message_broker_connected", servers=servers)

    def connection_failed(self, servers: list[str], error: Exception) -> None:
        self._logger.error(
            "message_broker_connection_failed",
            servers=servers,
            error=str(error),
            error_type=type(error).__name__,
        )

    def closed(self) -> None:
        self._logger.info("message_broker_closed")


class NatsMessageBroker:
    """Publishes outbox entries on NATS core subjects.

    The connection is opened lazily on first publish. Each publish is
    followed by a flush so the call only returns once the server has
    received the message.
    """

    def __init__(
        self,
        servers: list[str],
        client_name: str = "employee-lifecycle",
        connect_timeout_seconds: float = 2.0,
        flush_timeout_seconds: float = 2.0,
        probe: MessageBrokerProbe | None = None,
    ):
        """Initialize the broker.

        Args:
            servers: NATS server URLs (e.g., ["nats://localhost:4222"])
            client_name: Connection name reported to the server
            connect_timeout_seconds: Timeout for establishing the connection
            flush_timeout_seconds: Timeout for the server to acknowledge a publish
            probe: Optional domain probe for observability
        """
        self._servers = servers
        self._client_name = client_name
        self._connect_timeout = connect_timeout_seconds
        self._flush_timeout = flush_timeout_seconds
        self._client: Client | None = None
        self._probe = probe or DefaultMessageBrokerProbe()

    async def _ensure_client(self) -> Client:
        """Lazily open the NATS connection."""
        if self._client is None or self._client.is_closed:
            try:
                self._client = await nats.connect(
                    servers=self._servers,
                    name=self._client_name,
                    connect_timeout=self._connect_timeout,
                    allow_reconnect=True,
                )
            except Exception as e:
                self._probe.connection_failed(self._servers, e)
                raise BrokerConnectionError(
                    f"Failed to connect to NATS at {', '.join(self._servers)}: {e}"
                ) from e
            self._probe.connected(self._servers)
        return self._client

    async def publish(self, subject: str, payload: bytes) -> None:
        """Publish a message and wait until the server has received it."""
        client = await self._ensure_client()
        await client.publish(subject, payload)
        await client.flush(timeout=self._flush_timeout)

    async def close(self) -> None:
        """Drain pending messages and close the connection."""
        if self._client is None:
            return
        client, self._client = self._client, None
        if not client.is_closed:
            await client.drain()
        self._probe.closed()
