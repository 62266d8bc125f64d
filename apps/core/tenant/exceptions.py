# ======================================================================
# PATH: apps/core/tenant/exceptions.py
# ======================================================================
from __future__ import annotations


class TenantResolutionError(Exception):
    """
    tenant 확정 실패. TenantMiddleware 가 as_body() + http_status 로 바로 응답한다.

    code:
      - tenant_missing   (400) strict 모드에서 header 누락
      - tenant_invalid   (404) 없는 code
      - tenant_inactive  (403) 비활성 tenant
      - tenant_ambiguous (400) 활성 tenant 가 여러 개인데 지정 없음
    """

    def __init__(self, *, code: str, message: str, http_status: int = 400):
        super().__init__(message)
        self.code = str(code)
        self.message = str(message)
        self.http_status = int(http_status)

    def as_body(self) -> dict:
        return {"detail": self.message, "code": self.code}
