# PATH: apps/domains/retakes/services/notice_service.py
"""
재시험 안내 문자

템플릿 치환 → 수신번호 수집 → apps.support.messaging.services.send_sms 로 건별 발송.
발송 결과는 집계만 돌려주고 저장하지 않는다.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional, Sequence

from django.utils import timezone

from academy.domain.retakes.errors import RetakeInvalidInput
from apps.domains.retakes.models import RetakeAssignment
from apps.domains.retakes.selectors import retake_queryset
from apps.support.messaging.services import normalize_phone, send_sms

logger = logging.getLogger(__name__)

RECIPIENT_STUDENT = "student"
RECIPIENT_PARENT = "parent"
RECIPIENT_BOTH = "both"
RECIPIENT_TYPES = (RECIPIENT_STUDENT, RECIPIENT_PARENT, RECIPIENT_BOTH)

STATUS_LABELS = {
    RetakeAssignment.Status.PENDING: "예정",
    RetakeAssignment.Status.COMPLETED: "완료",
    RetakeAssignment.Status.ABSENT: "불참",
}


def format_korean_date(d: Optional[date]) -> str:
    if not d:
        return "미정"
    return f"{d.year}년 {d.month}월 {d.day}일"


def render_notice(template: str, retake: RetakeAssignment, *, today: date) -> str:
    exam = retake.exam
    replacements = {
        "{이름}": retake.student.name,
        "{수업명}": exam.lecture.title,
        "{시험명}": exam.title,
        "{회차}": str(exam.round),
        "{예정일}": format_korean_date(retake.scheduled_date),
        "{상태}": STATUS_LABELS.get(retake.status, "불참"),
        "{오늘날짜}": format_korean_date(today),
    }
    text = template
    for key, value in replacements.items():
        text = text.replace(key, value or "")
    return text


def _phones_for(retake: RetakeAssignment, recipient_type: str) -> list[str]:
    student = retake.student
    candidates = []
    if recipient_type in (RECIPIENT_STUDENT, RECIPIENT_BOTH):
        candidates.append(student.phone)
    if recipient_type in (RECIPIENT_PARENT, RECIPIENT_BOTH):
        candidates.append(student.parent_phone)
    return [p for p in (normalize_phone(c) for c in candidates) if p]


def send_retake_notice(
    tenant,
    *,
    retake_ids: Sequence[Any],
    recipient_type: str,
    template: str,
    today: Optional[date] = None,
) -> dict:
    """
    Returns:
        {"total": int, "success_count": int, "fail_count": int}
    """
    if not isinstance(retake_ids, (list, tuple)) or not retake_ids:
        raise RetakeInvalidInput("재시험 정보가 필요합니다.")
    if recipient_type not in RECIPIENT_TYPES:
        raise RetakeInvalidInput("올바른 수신자 유형이 아닙니다.")
    if not isinstance(template, str) or not template.strip():
        raise RetakeInvalidInput("메시지 내용을 입력해주세요.")
    try:
        ids = [int(x) for x in retake_ids]
    except (TypeError, ValueError):
        raise RetakeInvalidInput("재시험 ID 형식이 올바르지 않습니다.")

    retakes = list(retake_queryset(tenant).filter(id__in=ids))
    if not retakes:
        raise RetakeInvalidInput("유효한 재시험 정보가 없습니다.")

    today = today or timezone.localdate()
    outbox: list[tuple[str, str]] = []
    for retake in retakes:
        text = render_notice(template, retake, today=today)
        for phone in _phones_for(retake, recipient_type):
            outbox.append((phone, text))

    if not outbox:
        raise RetakeInvalidInput("발송 가능한 전화번호가 없습니다.")

    sender = getattr(tenant, "messaging_sender", "") or None
    success = 0
    for phone, text in outbox:
        result = send_sms(phone, text, sender=sender)
        if result.get("status") == "ok":
            success += 1

    summary = {"total": len(outbox), "success_count": success, "fail_count": len(outbox) - success}
    logger.info(
        "[retake] notice sent tenant=%s retakes=%s recipient=%s total=%s ok=%s",
        tenant.id,
        len(retakes),
        recipient_type,
        summary["total"],
        summary["success_count"],
    )
    return summary
