from .tenant import Tenant
from .user import User
from .tenant_membership import TenantMembership

__all__ = [
    "Tenant",
    "User",
    "TenantMembership",
]
