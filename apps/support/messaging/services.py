# apps/support/messaging/services.py
"""
메시지 발송 서비스: Solapi(SMS/LMS) 연동

- API 키/시크릿: settings.SOLAPI_API_KEY / SOLAPI_API_SECRET (.env → os.getenv)
- 발신번호: 인자 sender → settings.SOLAPI_SENDER
- DEBUG 또는 SOLAPI_MOCK 이면 MockSolapiMessageService (로그만)

발송 결과는 dict 로만 돌려주고 저장하지 않는다.
"""

import logging
import re
from typing import Optional

from django.conf import settings

logger = logging.getLogger(__name__)

_NON_DIGIT = re.compile(r"\D+")


def normalize_phone(value: Optional[str]) -> str:
    """'010-1234-5678' → '01012345678'. 숫자가 없으면 ''."""
    return _NON_DIGIT.sub("", str(value or ""))


def _mask(phone: str) -> str:
    return (phone or "")[:4] + "****"


def _get_solapi_credentials() -> tuple[Optional[str], Optional[str]]:
    """Solapi API Key/Secret. 코드에 키 노출 금지."""
    key = getattr(settings, "SOLAPI_API_KEY", None)
    secret = getattr(settings, "SOLAPI_API_SECRET", None)
    return (key or None, secret or None)


def _is_mock_mode() -> bool:
    """DEBUG=True 또는 SOLAPI_MOCK=True 이면 실제 API 호출 없이 Mock 사용."""
    return bool(getattr(settings, "SOLAPI_MOCK", False) or getattr(settings, "DEBUG", False))


def get_solapi_client():
    """
    SolapiMessageService 인스턴스 반환.
    mock 모드면 MockSolapiMessageService, 키/시크릿이 없으면 None (발송 skip).
    """
    key, secret = _get_solapi_credentials()
    if _is_mock_mode():
        from apps.support.messaging.solapi_mock import MockSolapiMessageService
        return MockSolapiMessageService(api_key=key or "", api_secret=secret or "")
    if not key or not secret:
        return None

    from solapi import SolapiMessageService
    return SolapiMessageService(api_key=key, api_secret=secret)


def send_sms(
    to: str,
    text: str,
    sender: Optional[str] = None,
) -> dict:
    """
    SMS/LMS 즉시 발송 (Solapi).

    Args:
        to: 수신 번호 (하이픈 허용)
        text: 본문
        sender: 발신 번호 (미지정 시 SOLAPI_SENDER 사용)

    Returns:
        dict: {"status": "ok"|"error"|"skipped", "group_id"?, "reason"?}
    """
    client = get_solapi_client()
    if not client:
        logger.info("send_sms skipped: Solapi not configured")
        return {"status": "skipped", "reason": "solapi_not_configured"}

    sender = normalize_phone(sender) or normalize_phone(getattr(settings, "SOLAPI_SENDER", ""))
    if not sender:
        return {"status": "error", "reason": "sender_required"}

    to = normalize_phone(to)
    if not to or not (text or "").strip():
        return {"status": "error", "reason": "to_and_text_required"}

    from solapi.model import RequestMessage

    try:
        message = RequestMessage(from_=sender, to=to, text=text.strip())
        response = client.send(message)
    except Exception as e:
        # SDK 예외 종류가 다양함 (네트워크/잔액/검증). 호출자는 건별 성공/실패만 집계
        logger.exception("send_sms failed to=%s", _mask(to))
        return {"status": "error", "reason": str(e)[:500]}

    group_id = getattr(getattr(response, "group_info", None), "group_id", None)
    logger.info("send_sms ok to=%s group_id=%s", _mask(to), group_id)
    return {"status": "ok", "group_id": group_id}
