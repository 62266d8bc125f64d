# ======================================================================
# PATH: apps/core/tenant/__init__.py
# ======================================================================
from .context import (
    get_current_tenant,
    reset_current_tenant,
    set_current_tenant,
)
from .exceptions import TenantResolutionError
from .resolver import resolve_tenant_from_request

__all__ = [
    "get_current_tenant",
    "set_current_tenant",
    "reset_current_tenant",
    "resolve_tenant_from_request",
    "TenantResolutionError",
]
