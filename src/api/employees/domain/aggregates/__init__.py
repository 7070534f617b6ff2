"""Aggregates for the employee lifecycle context."""

from employees.domain.aggregates.employee import Employee

__all__ = ["Employee"]
