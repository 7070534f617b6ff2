"""Observability probes for shared kernel components."""

from shared_kernel.observability.tenant_scope_probe import (
    DefaultTenantScopeProbe,
    TenantScopeProbe,
)

__all__ = ["DefaultTenantScopeProbe", "TenantScopeProbe"]
