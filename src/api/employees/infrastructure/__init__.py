"""Infrastructure adapters for the employee lifecycle context."""

from employees.infrastructure.employee_repository import EmployeeRepository
from employees.infrastructure.outbox import (
    EmployeeEventSerializer,
    OutboxEmployeeEventPublisher,
)

__all__ = [
    "EmployeeEventSerializer",
    "EmployeeRepository",
    "OutboxEmployeeEventPublisher",
]
