"""Domain probe for tenant scope resolution.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to resolving the tenant and acting user
of an operation.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import Protocol

import structlog


class TenantScopeProbe(Protocol):
    """Domain probe for tenant scope resolution."""

    def scope_resolved(self, tenant_id: str, user_id: str) -> None:
        """Record that a tenant scope was resolved."""
        ...

    def tenant_missing(self, user_id: str | None) -> None:
        """Record that the tenant identity was absent from the request."""
        ...

    def user_missing(self, tenant_id: str) -> None:
        """Record that the user identity was absent from the request."""
        ...


class DefaultTenantScopeProbe:
    """Default implementation of TenantScopeProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def scope_resolved(self, tenant_id: str, user_id: str) -> None:
        self._logger.debug(
            "tenant_scope_resolved",
            tenant_id=tenant_id,
            user_id=user_id,
        )

    def tenant_missing(self, user_id: str | None) -> None:
        self._logger.warning("tenant_scope_tenant_missing", user_id=user_id)

    def user_missing(self, tenant_id: str) -> None:
        self._logger.warning("tenant_scope_user_missing", tenant_id=tenant_id)
