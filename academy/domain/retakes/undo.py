"""
재시험 이력 되돌리기 규칙: 순수 파이썬

가장 최근 이력 1건만 되돌릴 수 있다.
여기서는 "이 이력을 되돌리면 assignment 의 어떤 필드가 어떤 값이 되는가"만 계산한다.
최신 여부 검증/락/삭제는 use case 와 어댑터 담당.
"""
from __future__ import annotations

from typing import Any

from academy.domain.retakes.entities import (
    RetakeAction,
    RetakeAssignment,
    RetakeHistoryEntry,
    RetakeStatus,
)
from academy.domain.retakes.errors import RetakeInvalidState


def ensure_latest(latest: RetakeHistoryEntry, history_id: int) -> None:
    if int(latest.id) != int(history_id):
        raise RetakeInvalidState("가장 최근 이력만 되돌릴 수 있습니다.", code="not_latest")


def build_reversal_patch(assignment: RetakeAssignment, entry: RetakeHistoryEntry) -> dict[str, Any]:
    """
    이력 1건의 역방향 패치.

    - postpone / date_edit : scheduled_date = previous_date
      (postpone 만) postpone_count - 1 (0 하한), previous_status 가 있으면 복원
    - absent   : status = pending, absent_count - 1 (0 하한)
    - complete : status = pending (완료일로 덮인 scheduled_date 는 복원하지 않음)
    - status_change / management_status_change : previous 값 필수
    - assign   : 되돌리기 대상 아님 (재시험 삭제로 처리)
    """
    action = entry.action_type
    patch: dict[str, Any] = {}

    if action in (RetakeAction.POSTPONE, RetakeAction.DATE_EDIT):
        # previous_date 가 None 이면 미지정으로 되돌림
        patch["scheduled_date"] = entry.previous_date
        if action == RetakeAction.POSTPONE:
            patch["postpone_count"] = max(0, int(assignment.postpone_count) - 1)
            if entry.previous_status:
                patch["status"] = RetakeStatus(entry.previous_status)

    elif action == RetakeAction.ABSENT:
        patch["status"] = RetakeStatus.PENDING
        patch["absent_count"] = max(0, int(assignment.absent_count) - 1)

    elif action == RetakeAction.COMPLETE:
        patch["status"] = RetakeStatus.PENDING

    elif action == RetakeAction.STATUS_CHANGE:
        if not entry.previous_status:
            raise RetakeInvalidState(
                "이전 상태 정보가 없어 되돌릴 수 없습니다.",
                code="missing_previous_status",
            )
        patch["status"] = RetakeStatus(entry.previous_status)

    elif action == RetakeAction.MANAGEMENT_STATUS_CHANGE:
        if not entry.previous_management_status:
            raise RetakeInvalidState(
                "이전 관리 상태 정보가 없어 되돌릴 수 없습니다.",
                code="missing_previous_management_status",
            )
        patch["management_status"] = entry.previous_management_status

    elif action == RetakeAction.ASSIGN:
        raise RetakeInvalidState(
            "재시험 할당은 되돌릴 수 없습니다. 재시험을 삭제해주세요.",
            code="not_undoable",
        )

    if not patch:
        raise RetakeInvalidState("되돌릴 수 있는 데이터가 없습니다.", code="nothing_to_undo")
    return patch
