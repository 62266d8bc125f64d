"""
재시험 이력 되돌리기 Use Case

1) assignment 행 락 (tenant 범위): 없으면 NotFound
2) 같은 트랜잭션 안에서 최신 이력 재조회
   모든 append 가 같은 행 락을 먼저 잡으므로, 락을 쥔 동안 "최신" 은 바뀌지 않는다.
3) 요청 history_id 가 최신이 아니면 InvalidState
4) 역방향 패치 계산 → assignment 저장 + 이력 삭제 (한 트랜잭션)
"""
from __future__ import annotations

import logging

from academy.application.ports.unit_of_work import UnitOfWork
from academy.application.use_cases.retakes.lifecycle import Actor
from academy.domain.retakes.entities import RetakeAssignment
from academy.domain.retakes.errors import RetakeNotFound
from academy.domain.retakes.undo import build_reversal_patch, ensure_latest

logger = logging.getLogger(__name__)


def undo_retake_history(
    uow: UnitOfWork,
    actor: Actor,
    retake_id: int,
    history_id: int,
) -> RetakeAssignment:
    with uow:
        assignment = uow.retakes.get_for_update(actor.tenant_id, retake_id)
        if assignment is None:
            raise RetakeNotFound("재시험을 찾을 수 없습니다.")

        latest = uow.retake_history.latest(assignment.id)
        if latest is None:
            raise RetakeNotFound("이력을 찾을 수 없습니다.")
        ensure_latest(latest, history_id)

        patch = build_reversal_patch(assignment, latest)
        assignment.apply_patch(patch)
        uow.retakes.save(assignment)
        uow.retake_history.delete(latest.id)

    logger.info(
        "[retake] action=undo retake_id=%s history_id=%s undone=%s tenant=%s user=%s fields=%s",
        assignment.id,
        latest.id,
        latest.action_type.value,
        actor.tenant_id,
        actor.user_id,
        sorted(patch.keys()),
    )
    return assignment
