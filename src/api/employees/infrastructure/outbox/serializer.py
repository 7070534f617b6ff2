"""Event serializer for employee lifecycle events.

Converts events to JSON-compatible dictionaries for the outbox table and
back. Datetimes are stored as ISO-8601 strings and tuples as lists.
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from typing import Any

from employees.domain.events import (
    DomainEvent,
    EmployeeCreated,
    EmployeeDeleted,
    EmployeeMerged,
    EmployeeSnapshot,
    EmployeeUpdated,
)
from shared_kernel.outbox.ports import EventSerializer

# Registry of event types for deserialization
EVENT_REGISTRY: dict[str, type[DomainEvent]] = {
    "EmployeeCreated": EmployeeCreated,
    "EmployeeUpdated": EmployeeUpdated,
    "EmployeeDeleted": EmployeeDeleted,
    "EmployeeMerged": EmployeeMerged,
}

_SNAPSHOT_DATETIMES = ("created_at", "updated_at")


def _to_json(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: _to_json(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_json(item) for item in value]
    if isinstance(value, str):
        # StrEnum members serialize as their plain value
        return str(value)
    return value


def _parse_datetime(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class EmployeeEventSerializer(EventSerializer):
    """Serializer for the employee lifecycle events."""

    def supported_event_types(self) -> frozenset[str]:
        return frozenset(EVENT_REGISTRY)

    def serialize(self, event: Any) -> dict[str, Any]:
        """Convert an event to a JSON-serializable dictionary.

        The result carries a ``__type__`` key naming the event class.

        Raises:
            ValueError: If the event type is not supported
        """
        event_type = type(event).__name__
        if event_type not in EVENT_REGISTRY:
            raise ValueError(f"Unsupported event type: {event_type}")

        data = _to_json(asdict(event))
        data["__type__"] = event_type
        return data

    def deserialize(self, event_type: str, payload: dict[str, Any]) -> DomainEvent:
        """Reconstruct an event from its serialized form.

        Raises:
            ValueError: If the event type is not supported
        """
        event_class = EVENT_REGISTRY.get(event_type)
        if event_class is None:
            raise ValueError(f"Unsupported event type: {event_type}")

        data = {k: v for k, v in payload.items() if k not in ("__type__", "event_type")}

        snapshot = dict(data.pop("employee"))
        snapshot["secondary_emails"] = tuple(snapshot.get("secondary_emails", ()))
        for key in _SNAPSHOT_DATETIMES:
            snapshot[key] = _parse_datetime(snapshot.get(key))
        data["employee"] = EmployeeSnapshot(**snapshot)

        data["occurred_at"] = datetime.fromisoformat(data["occurred_at"])
        if "changed_fields" in data:
            data["changed_fields"] = tuple(data["changed_fields"])

        return event_class(**data)
