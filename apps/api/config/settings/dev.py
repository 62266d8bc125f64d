from .base import *

DEBUG = True
ALLOWED_HOSTS = ["*"]

# 로컬: 로그인 없이 단일 tenant 로 띄우는 경우가 많아 기본 code 허용
TENANT_DEFAULT_CODE = os.getenv("TENANT_DEFAULT_CODE", "")

# 개발 중 문자 발송은 기본 mock
SOLAPI_MOCK = os.getenv("SOLAPI_MOCK", "true").strip().lower() in ("1", "true", "yes")

LOGGING["loggers"]["academy"]["level"] = "DEBUG"
LOGGING["loggers"]["apps"]["level"] = "DEBUG"

# 🔴 base 설정 유지 + 인증 방식만 추가
REST_FRAMEWORK["DEFAULT_AUTHENTICATION_CLASSES"] = [
    "rest_framework.authentication.SessionAuthentication",
    "rest_framework_simplejwt.authentication.JWTAuthentication",
]
