"""Observability probes for the outbox relay.

Following Domain Oriented Observability, probes capture domain-significant
events without cluttering the relay loop with logging concerns.
"""

from __future__ import annotations

from typing import Protocol

import structlog


class OutboxRelayProbe(Protocol):
    """Protocol for outbox relay observability."""

    def relay_started(self) -> None:
        """Called when the relay starts polling."""
        ...

    def relay_stopped(self) -> None:
        """Called when the relay stops."""
        ...

    def event_relayed(self, entry_id: str, event_type: str, subject: str) -> None:
        """Called when an entry has been published and marked processed."""
        ...

    def event_relay_failed(self, entry_id: str, subject: str, error: str) -> None:
        """Called when publishing an entry fails; it stays pending."""
        ...

    def batch_relayed(self, count: int) -> None:
        """Called after a batch has been committed."""
        ...

    def poll_loop_error(self, error: str) -> None:
        """Called when a poll iteration fails as a whole."""
        ...


class DefaultOutboxRelayProbe:
    """Default implementation using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._log = logger or structlog.get_logger().bind(component="outbox_relay")

    def relay_started(self) -> None:
        self._log.info("outbox_relay_started")

    def relay_stopped(self) -> None:
        self._log.info("outbox_relay_stopped")

    def event_relayed(self, entry_id: str, event_type: str, subject: str) -> None:
        self._log.debug(
            "outbox_event_relayed",
            entry_id=entry_id,
            event_type=event_type,
            subject=subject,
        )

    def event_relay_failed(self, entry_id: str, subject: str, error: str) -> None:
        self._log.warning(
            "outbox_event_relay_failed",
            entry_id=entry_id,
            subject=subject,
            error=error,
        )

    def batch_relayed(self, count: int) -> None:
        if count > 0:
            self._log.info("outbox_batch_relayed", count=count)

    def poll_loop_error(self, error: str) -> None:
        self._log.warning("outbox_poll_loop_error", error=error)
