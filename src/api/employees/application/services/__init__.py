"""Application services for the employee lifecycle context."""

from employees.application.services.employee_service import EmployeeService

__all__ = ["EmployeeService"]
