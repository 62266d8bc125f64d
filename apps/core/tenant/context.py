# ======================================================================
# PATH: apps/core/tenant/context.py
# ======================================================================
"""
요청 단위 현재 tenant (ContextVar).
TenantMiddleware 만 set/reset 한다. 나머지는 읽기만.
"""
from __future__ import annotations

from contextvars import ContextVar, Token
from typing import Optional

from apps.core.models import Tenant

_current_tenant: ContextVar[Optional[Tenant]] = ContextVar("current_tenant", default=None)


def set_current_tenant(tenant: Optional[Tenant]) -> Token:
    return _current_tenant.set(tenant)


def reset_current_tenant(token: Token) -> None:
    _current_tenant.reset(token)


def get_current_tenant() -> Optional[Tenant]:
    return _current_tenant.get()
