# apps/api/common/middleware.py
# 뷰에서 미처리 예외 발생 시 500 JSON 반환.
# process_exception 응답은 CorsMiddleware를 거치지 않으므로 여기서 CORS 헤더 추가.
from __future__ import annotations

import logging

from django.conf import settings
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def _add_cors_headers_to_response(request, response):
    """브라우저가 500 응답도 읽을 수 있도록 Allow-Origin 을 직접 붙인다."""
    origin = (request.META.get("HTTP_ORIGIN") or "").strip()
    if not origin:
        return response

    if getattr(settings, "CORS_ALLOW_ALL_ORIGINS", False):
        response["Access-Control-Allow-Origin"] = origin
    elif origin in (getattr(settings, "CORS_ALLOWED_ORIGINS", []) or []):
        response["Access-Control-Allow-Origin"] = origin
        response["Vary"] = "Origin"
    else:
        return response

    if getattr(settings, "CORS_ALLOW_CREDENTIALS", False):
        response["Access-Control-Allow-Credentials"] = "true"
    return response


class UnhandledExceptionMiddleware:
    """
    미처리 예외를 500 JSON({"detail", "code"})으로 변환.
    DRF 가 처리하는 예외(APIException, 재시험 도메인 오류)는 여기까지 오지 않는다.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        logger.exception("Unhandled exception path=%s: %s", getattr(request, "path", ""), exception)
        body = {"detail": "서버 오류가 발생했습니다.", "code": "server_error"}
        if settings.DEBUG:
            body["error"] = str(exception)
        return _add_cors_headers_to_response(request, JsonResponse(body, status=500))
