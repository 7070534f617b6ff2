"""Message broker and outbox relay wiring.

Builds the NATS broker from settings and the relay that drains the outbox
into it. The process that hosts the relay owns both lifecycles: call
``relay.start()`` at startup, then ``relay.stop()`` and ``broker.close()``
at shutdown.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.dependencies import get_session_factory
from infrastructure.messaging.nats_broker import NatsMessageBroker
from infrastructure.outbox.worker import OutboxRelay
from infrastructure.settings import (
    NatsSettings,
    OutboxRelaySettings,
    get_nats_settings,
    get_outbox_relay_settings,
)
from shared_kernel.outbox.ports import IMessageBroker


def get_message_broker(settings: NatsSettings | None = None) -> NatsMessageBroker:
    """Create a NATS broker configured from settings."""
    if settings is None:
        settings = get_nats_settings()
    return NatsMessageBroker(
        servers=settings.servers,
        client_name=settings.client_name,
        connect_timeout_seconds=settings.connect_timeout_seconds,
        flush_timeout_seconds=settings.flush_timeout_seconds,
    )


def build_outbox_relay(
    broker: IMessageBroker,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    settings: OutboxRelaySettings | None = None,
) -> OutboxRelay:
    """Create the relay that forwards outbox entries to ``broker``."""
    if session_factory is None:
        session_factory = get_session_factory()
    if settings is None:
        settings = get_outbox_relay_settings()
    return OutboxRelay(
        session_factory=session_factory,
        broker=broker,
        poll_interval_seconds=settings.poll_interval_seconds,
        batch_size=settings.batch_size,
    )
