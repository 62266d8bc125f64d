"""
Mock Solapi: DEBUG=True / SOLAPI_MOCK=True 일 때 실제 API 호출 없이 발송될 JSON만 로깅.

실제 API를 쓰면 잔액이 차감되므로 개발/테스트 시에는 이 Mock을 사용.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


def _to_payload(obj: Any) -> Any:
    """RequestMessage(pydantic) / 리스트 / dict 를 로그용으로 변환."""
    if isinstance(obj, list):
        return [_to_payload(m) for m in obj]
    if hasattr(obj, "model_dump"):
        return obj.model_dump(exclude_none=True)
    if isinstance(obj, dict):
        return obj
    return {"raw": str(obj)}


class MockSolapiMessageService:
    """SolapiMessageService.send 와 같은 모양의 응답을 돌려주는 로그 전용 클라이언트."""

    def __init__(self, api_key: str = "", api_secret: str = ""):
        self.api_key = api_key
        self.api_secret = api_secret
        self.sent: list[Any] = []

    def send(
        self,
        messages: Union[list, Any],
        request_config: Optional[Any] = None,
    ) -> Any:
        if not isinstance(messages, list):
            messages = [messages]
        self.sent.extend(messages)

        payload = {
            "messages": _to_payload(messages),
            "request_config": _to_payload(request_config) if request_config else None,
        }
        logger.info(
            "[MockSolapi] 발송 스킵 (실제 API 미호출)\n%s",
            json.dumps(payload, indent=2, ensure_ascii=False, default=str),
        )
        return _MockSendResponse(group_id=f"mock-{uuid.uuid4().hex[:12]}", count=len(messages))


class _MockSendResponse:
    def __init__(self, group_id: str, count: int = 1):
        self.group_info = _MockGroupInfo(group_id=group_id, count=count)


class _MockGroupInfo:
    def __init__(self, group_id: str, count: int = 1):
        self.group_id = group_id
        self.count = _MockCount(registered_success=count, registered_failed=0, total=count)


class _MockCount:
    def __init__(self, registered_success: int = 1, registered_failed: int = 0, total: int = 1):
        self.registered_success = registered_success
        self.registered_failed = registered_failed
        self.total = total
