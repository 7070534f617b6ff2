"""Outbox relay forwarding committed events to the message broker.

The relay polls the outbox for pending entries, publishes each one to its
versioned subject and marks it processed in the same transaction that
locked it. Entries are delivered at least once and in creation order.
"""

from __future__ import annotations

import asyncio
import json

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.outbox.repository import OutboxRepository
from shared_kernel.outbox.observability import (
    DefaultOutboxRelayProbe,
    OutboxRelayProbe,
)
from shared_kernel.outbox.ports import IMessageBroker
from shared_kernel.outbox.value_objects import OutboxEntry


def encode_entry(entry: OutboxEntry) -> bytes:
    """Encode an entry's payload as the JSON message body."""
    return json.dumps(entry.payload, sort_keys=True).encode("utf-8")


class OutboxRelay:
    """Background relay that publishes outbox entries to the broker.

    A publish failure stops the current batch so that later entries for the
    same aggregate are not delivered ahead of the failed one. The failed
    entry stays pending and is retried on the next poll.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        broker: IMessageBroker,
        probe: OutboxRelayProbe | None = None,
        poll_interval_seconds: float = 1.0,
        batch_size: int = 100,
    ) -> None:
        """Initialize the relay.

        Args:
            session_factory: Factory for creating database sessions
            broker: Broker the entries are published to
            probe: Observability probe for logging
            poll_interval_seconds: Pause between polls
            batch_size: Maximum entries to relay per poll
        """
        self._session_factory = session_factory
        self._broker = broker
        self._probe = probe or DefaultOutboxRelayProbe()
        self._poll_interval = poll_interval_seconds
        self._batch_size = batch_size
        self._running = False
        self._task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start the poll loop as a background task."""
        if self._running:
            return
        self._running = True
        self._probe.relay_started()
        self._task = asyncio.create_task(self._poll_loop())

    async def stop(self) -> None:
        """Stop the poll loop and wait for it to finish."""
        self._running = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        self._probe.relay_stopped()

    async def process_batch(self) -> int:
        """Relay one batch of pending entries.

        Returns:
            Number of entries published and marked processed
        """
        relayed = 0
        async with self._session_factory() as session, session.begin():
            repository = OutboxRepository(session)
            entries = await repository.fetch_unprocessed(limit=self._batch_size)

            for entry in entries:
                try:
                    await self._broker.publish(entry.subject, encode_entry(entry))
                except Exception as e:
                    self._probe.event_relay_failed(entry.id, entry.subject, str(e))
                    break

                await repository.mark_processed(entry.id)
                self._probe.event_relayed(entry.id, entry.event_type, entry.subject)
                relayed += 1

        self._probe.batch_relayed(relayed)
        return relayed

    async def _poll_loop(self) -> None:
        while self._running:
            try:
                await self.process_batch()
            except Exception as e:
                self._probe.poll_loop_error(str(e))

            await asyncio.sleep(self._poll_interval)
