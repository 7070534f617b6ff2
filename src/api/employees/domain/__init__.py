"""Domain layer for the employee lifecycle context."""

from employees.domain.aggregates import Employee
from employees.domain.value_objects import (
    ChangedField,
    EmployeeId,
    EmployeePage,
    EmployeeUpdate,
    ListFilter,
)

__all__ = [
    "ChangedField",
    "Employee",
    "EmployeeId",
    "EmployeePage",
    "EmployeeUpdate",
    "ListFilter",
]
