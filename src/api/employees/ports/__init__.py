"""Ports for the employee lifecycle context."""

from employees.ports.events import IEmployeeEventPublisher
from employees.ports.exceptions import (
    DuplicateEmailError,
    EventPublishError,
    StorageError,
)
from employees.ports.repositories import IEmployeeRepository

__all__ = [
    "DuplicateEmailError",
    "EventPublishError",
    "IEmployeeEventPublisher",
    "IEmployeeRepository",
    "StorageError",
]
