"""Observability probes for employee infrastructure adapters."""

from employees.infrastructure.observability.event_publisher_probe import (
    DefaultEventPublisherProbe,
    EventPublisherProbe,
)
from employees.infrastructure.observability.repository_probe import (
    DefaultEmployeeRepositoryProbe,
    EmployeeRepositoryProbe,
)

__all__ = [
    "DefaultEmployeeRepositoryProbe",
    "DefaultEventPublisherProbe",
    "EmployeeRepositoryProbe",
    "EventPublisherProbe",
]
