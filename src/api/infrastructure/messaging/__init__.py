"""Message broker adapters the outbox relay publishes through."""

from infrastructure.messaging.nats_broker import (
    BrokerConnectionError,
    NatsMessageBroker,
)

__all__ = ["BrokerConnectionError", "NatsMessageBroker"]
