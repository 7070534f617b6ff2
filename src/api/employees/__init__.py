"""Employees bounded context.

Owns the employee aggregate, its per-tenant email registry and the
lifecycle events emitted when employees are created, changed, removed
or merged.
"""
