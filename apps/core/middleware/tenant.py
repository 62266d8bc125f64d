# PATH: apps/core/middleware/tenant.py
from __future__ import annotations

import logging

from django.http import JsonResponse

from apps.core.tenant import (
    TenantResolutionError,
    reset_current_tenant,
    resolve_tenant_from_request,
    set_current_tenant,
)

logger = logging.getLogger(__name__)


class TenantMiddleware:
    """
    요청마다 Tenant 를 확정해 ContextVar + request.tenant 에 싣는다.

    - resolve 실패는 TenantResolutionError(code/http_status) → JSON 응답
    - bypass path 에서는 tenant 가 None 일 수 있음
    - 응답 후 ContextVar 원복 (스레드/코루틴 재사용 대비)
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        try:
            tenant = resolve_tenant_from_request(request)
        except TenantResolutionError as e:
            logger.info(
                "tenant resolution failed path=%s code=%s message=%s",
                getattr(request, "path", ""),
                e.code,
                e.message,
            )
            return JsonResponse(e.as_body(), status=e.http_status)

        request.tenant = tenant
        token = set_current_tenant(tenant)
        try:
            return self.get_response(request)
        finally:
            reset_current_tenant(token)
