"""Application layer for the employee lifecycle context."""

from employees.application.services import EmployeeService

__all__ = ["EmployeeService"]
