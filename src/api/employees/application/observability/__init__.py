"""Observability probes for the employee application layer."""

from employees.application.observability.employee_service_probe import (
    DefaultEmployeeServiceProbe,
    EmployeeServiceProbe,
)

__all__ = ["DefaultEmployeeServiceProbe", "EmployeeServiceProbe"]
