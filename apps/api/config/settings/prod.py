# PATH: apps/api/config/settings/prod.py
from .base import *
import os

# ==================================================
# PROD MODE (외부 공개 API 서버 기준)
# ==================================================

DEBUG = False

SECRET_KEY = os.environ["DJANGO_SECRET_KEY"]

# ==================================================
# SECURITY
# ==================================================

SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
USE_X_FORWARDED_HOST = True

SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

# ==================================================
# ALLOWED HOSTS / CORS / CSRF
# ==================================================
# ⚠️ prod에서는 "*" 절대 금지

ALLOWED_HOSTS = [
    h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if h.strip()
]

CORS_ALLOW_ALL_ORIGINS = False
CORS_ALLOWED_ORIGINS = [
    o.strip() for o in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",") if o.strip()
]
CORS_ALLOW_CREDENTIALS = True

CSRF_TRUSTED_ORIGINS = list(CORS_ALLOWED_ORIGINS)

# ==================================================
# ✅ MULTI TENANT (PROD 운영 기준)
# ==================================================
# 운영에서는 tenant header를 강제하는 편이 안전하다.
TENANT_STRICT = True
TENANT_HEADER_NAME = os.environ.get("TENANT_HEADER_NAME", TENANT_HEADER_NAME)

# ✅ 운영 가드:
# - prod에서 TENANT_DEFAULT_CODE를 실수로 넣으면 “다중테넌트 사고”로 이어질 수 있음
# - 따라서 prod에서는 기본 tenant 자동선택을 금지한다.
TENANT_DEFAULT_CODE = os.environ.get("TENANT_DEFAULT_CODE", "")
if TENANT_DEFAULT_CODE:
    raise RuntimeError(
        "TENANT_DEFAULT_CODE must be EMPTY in prod. "
        "Provide X-Tenant-Code header explicitly for multi-tenant safety."
    )

# ==================================================
# MESSAGING
# ==================================================

# 운영에서 mock 발송은 명시적으로 켠 경우만
SOLAPI_MOCK = os.getenv("SOLAPI_MOCK", "").strip().lower() in ("1", "true", "yes")

# ==================================================
# STATIC
# ==================================================
# gunicorn + nginx + CDN 전제
# Django는 서빙 책임 없음

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.ManifestStaticFilesStorage"},
}

# ==================================================
# FINAL ASSERTIONS (운영 안정성)
# ==================================================

assert DEBUG is False, "prod.py must run with DEBUG=False"
