# PATH: apps/core/tenant/resolver.py
"""
요청 → Tenant 확정

우선순위:
  1) header (TENANT_HEADER_NAME, 기본 X-Tenant-Code)
  2) query param (?tenant=)
  3) settings.TENANT_DEFAULT_CODE
  4) 활성 tenant 가 정확히 1개면 자동 선택 (로컬/단일 학원 운영)
  5) bypass path 면 None
  그 외는 TenantResolutionError
"""
from __future__ import annotations

from typing import Optional

from django.conf import settings

from apps.core.models import Tenant
from apps.core.tenant.exceptions import TenantResolutionError

DEFAULT_BYPASS_PREFIXES = ("/admin/", "/api/v1/token/", "/api/v1/health/", "/swagger", "/redoc")


def _setting(name: str, default):
    value = getattr(settings, name, default)
    return default if value is None else value


def _clean(value) -> str:
    return str(value or "").strip()


def _lookup(code: str, *, from_default: bool = False) -> Tenant:
    tenant = Tenant.objects.filter(code=code).first()
    label = "Default tenant" if from_default else "Tenant"
    if tenant is None:
        raise TenantResolutionError(code="tenant_invalid", message=f"{label} '{code}' not found", http_status=404)
    if not tenant.is_active:
        raise TenantResolutionError(code="tenant_inactive", message=f"{label} '{code}' is inactive", http_status=403)
    return tenant


def _single_active_tenant() -> Optional[Tenant]:
    active = list(Tenant.objects.filter(is_active=True).order_by("id")[:2])
    return active[0] if len(active) == 1 else None


def is_bypass_path(path: str) -> bool:
    prefixes = _setting("TENANT_BYPASS_PATH_PREFIXES", DEFAULT_BYPASS_PREFIXES)
    return str(path or "/").startswith(tuple(prefixes))


def resolve_tenant_from_request(request) -> Optional[Tenant]:
    """
    Returns:
      Tenant, 또는 bypass path 에서만 None

    Raises:
      TenantResolutionError (tenant_invalid / tenant_inactive / tenant_missing / tenant_ambiguous)
    """
    header_name = _clean(_setting("TENANT_HEADER_NAME", "X-Tenant-Code")) or "X-Tenant-Code"

    code = _clean(request.headers.get(header_name))
    if code:
        return _lookup(code)

    code = _clean(request.GET.get(_clean(_setting("TENANT_QUERY_PARAM_NAME", "tenant")) or "tenant"))
    if code:
        return _lookup(code)

    code = _clean(_setting("TENANT_DEFAULT_CODE", ""))
    if code:
        return _lookup(code, from_default=True)

    tenant = _single_active_tenant()
    if tenant is not None:
        return tenant

    if is_bypass_path(getattr(request, "path", "")):
        return None

    if _setting("TENANT_STRICT", False):
        raise TenantResolutionError(
            code="tenant_missing",
            message=f"Tenant header '{header_name}' required",
            http_status=400,
        )
    raise TenantResolutionError(
        code="tenant_ambiguous",
        message=f"Tenant not resolved. Provide '{header_name}' header.",
        http_status=400,
    )
