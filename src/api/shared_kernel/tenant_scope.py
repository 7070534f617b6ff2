"""Tenant scope resolution for employee operations.

Authentication happens upstream; by the time a call reaches the core the
caller's identity travels in a ``RequestContext``. This module turns that
context into a ``TenantScope`` exactly once per operation. It is the only
place that reads tenant or user identity, and it fails closed.
"""

from __future__ import annotations

from dataclasses import dataclass

from shared_kernel.observability.tenant_scope_probe import (
    DefaultTenantScopeProbe,
    TenantScopeProbe,
)


class UnauthorizedError(Exception):
    """Raised when the tenant or user identity is missing from the request.

    Carries a machine-readable reason so callers can map it to a
    transport-level 401 without parsing the message.
    """

    def __init__(self, reason: str, message: str) -> None:
        super().__init__(message)
        self.reason = reason


@dataclass(frozen=True)
class RequestContext:
    """Identity attached to an incoming call by the authentication layer.

    Attributes:
        tenant_id: Tenant claim of the authenticated caller, if any.
        user_id: Subject claim of the authenticated caller, if any.
    """

    tenant_id: str | None = None
    user_id: str | None = None


@dataclass(frozen=True)
class TenantScope:
    """Resolved (tenant, acting user) pair for a single operation.

    Attributes:
        tenant_id: The tenant every read and write is filtered by.
        user_id: The user recorded as the actor on emitted events.
    """

    tenant_id: str
    user_id: str


def resolve_tenant_scope(
    context: RequestContext | None,
    probe: TenantScopeProbe | None = None,
) -> TenantScope:
    """Resolve a TenantScope from the request context.

    Surrounding whitespace is ignored; a value that is absent or blank
    counts as missing.

    Args:
        context: Identity supplied by the authentication layer.
        probe: Optional domain probe for observability.

    Returns:
        The resolved TenantScope.

    Raises:
        UnauthorizedError: If the tenant or user identity is missing.
    """
    probe = probe or DefaultTenantScopeProbe()

    tenant_id = ((context.tenant_id if context else None) or "").strip()
    user_id = ((context.user_id if context else None) or "").strip()

    if not tenant_id:
        probe.tenant_missing(user_id=user_id or None)
        raise UnauthorizedError("TENANT_NOT_FOUND", "tenant not found in context")

    if not user_id:
        probe.user_missing(tenant_id=tenant_id)
        raise UnauthorizedError("USER_NOT_FOUND", "user not found in context")

    probe.scope_resolved(tenant_id=tenant_id, user_id=user_id)
    return TenantScope(tenant_id=tenant_id, user_id=user_id)
