"""
재시험 상태 전이 Use Case: 도메인/포트만 사용 (Django 미사용)

각 연산 = UoW 1개:
  assignment 행 락 → 검증 → assignment 저장 → 이력 1건 append
둘 다 반영되거나 둘 다 롤백된다.
동일 assignment 에 대한 동시 요청은 행 락(get_for_update)으로 직렬화되므로
카운터/이력 sequence 가 같은 스냅샷에서 두 번 계산되지 않는다.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Optional, Sequence

from academy.application.ports.unit_of_work import UnitOfWork
from academy.domain.retakes.entities import HistoryDraft, RetakeAssignment, RetakeHistoryEntry, RetakeStatus
from academy.domain.retakes.errors import RetakeConflict, RetakeInvalidInput, RetakeNotFound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Actor:
    """인증 계층이 확정한 호출자. 이 계층은 그대로 신뢰한다."""
    tenant_id: int
    user_id: Optional[int] = None
    role: str = ""


def _log_transition(action: str, assignment: RetakeAssignment, actor: Actor) -> None:
    logger.info(
        "[retake] action=%s retake_id=%s tenant=%s user=%s status=%s date=%s",
        action,
        assignment.id,
        actor.tenant_id,
        actor.user_id,
        getattr(assignment.status, "value", assignment.status),
        assignment.scheduled_date,
    )


def _transition(
    uow: UnitOfWork,
    actor: Actor,
    retake_id: int,
    mutate: Callable[[RetakeAssignment, UnitOfWork], HistoryDraft],
) -> RetakeAssignment:
    with uow:
        assignment = uow.retakes.get_for_update(actor.tenant_id, retake_id)
        if assignment is None:
            raise RetakeNotFound("재시험을 찾을 수 없습니다.")
        draft = mutate(assignment, uow)
        uow.retake_history.append(assignment, draft, performed_by_id=actor.user_id)
        uow.retakes.save(assignment)
    _log_transition(draft.action_type.value, assignment, actor)
    return assignment


# ---------------------------------------------------------------------------
# assign
# ---------------------------------------------------------------------------


def assign_retakes(
    uow: UnitOfWork,
    actor: Actor,
    *,
    exam_id: Any,
    student_ids: Sequence[Any],
    scheduled_date: Optional[date],
    management_status: str = "",
) -> list[RetakeAssignment]:
    """
    학생별 재시험 일괄 생성 (pending, 카운터 0) + assign 이력 각 1건.
    이미 있는 (exam, student) 쌍이 하나라도 있으면 전체 거부 (병합하지 않음).
    """
    if not exam_id or not scheduled_date or not isinstance(student_ids, (list, tuple)) or not student_ids:
        raise RetakeInvalidInput("필수 정보를 입력해주세요.")
    try:
        exam_id = int(exam_id)
        unique_ids = [int(s) for s in dict.fromkeys(student_ids)]
    except (TypeError, ValueError):
        raise RetakeInvalidInput("시험/학생 ID 형식이 올바르지 않습니다.")

    with uow:
        if not uow.retakes.exam_exists(actor.tenant_id, exam_id):
            raise RetakeNotFound("시험을 찾을 수 없습니다.")

        found = uow.retakes.existing_student_ids(actor.tenant_id, unique_ids)
        if len(found) != len(unique_ids):
            raise RetakeNotFound("일부 학생을 찾을 수 없습니다.")

        duplicated = uow.retakes.assigned_student_ids(exam_id, unique_ids)
        if duplicated:
            raise RetakeConflict("이미 재시험이 할당된 학생이 있습니다.")

        # 기본값(settings) 으로 들어온 라벨도 현재 카탈로그에 있어야 한다
        label = str(management_status or "").strip()
        if label and label not in uow.management_statuses.list_names(actor.tenant_id):
            raise RetakeInvalidInput("유효하지 않은 관리 상태입니다.")

        created = uow.retakes.create_many(
            [
                RetakeAssignment(
                    id=None,
                    exam_id=exam_id,
                    student_id=sid,
                    status=RetakeStatus.PENDING,
                    management_status=label,
                    scheduled_date=scheduled_date,
                    tenant_id=actor.tenant_id,
                )
                for sid in unique_ids
            ]
        )
        for assignment in created:
            uow.retake_history.append(assignment, assignment.assigned(), performed_by_id=actor.user_id)
            uow.retakes.save(assignment)

    logger.info(
        "[retake] action=assign exam_id=%s count=%s tenant=%s user=%s date=%s",
        exam_id,
        len(created),
        actor.tenant_id,
        actor.user_id,
        scheduled_date,
    )
    return created


# ---------------------------------------------------------------------------
# 단건 전이
# ---------------------------------------------------------------------------


def postpone_retake(
    uow: UnitOfWork,
    actor: Actor,
    retake_id: int,
    *,
    new_date: Optional[date],
    note: Optional[str] = None,
) -> RetakeAssignment:
    if not new_date:
        raise RetakeInvalidInput("새로운 날짜를 입력해주세요.")
    return _transition(uow, actor, retake_id, lambda a, _: a.postpone(new_date, note))


def mark_retake_absent(
    uow: UnitOfWork,
    actor: Actor,
    retake_id: int,
    *,
    note: Optional[str] = None,
) -> RetakeAssignment:
    return _transition(uow, actor, retake_id, lambda a, _: a.mark_absent(note))


def complete_retake(
    uow: UnitOfWork,
    actor: Actor,
    retake_id: int,
    *,
    today: date,
    note: Optional[str] = None,
) -> RetakeAssignment:
    return _transition(uow, actor, retake_id, lambda a, _: a.complete(today, note))


def edit_retake_date(
    uow: UnitOfWork,
    actor: Actor,
    retake_id: int,
    *,
    new_date: Optional[date],
) -> RetakeAssignment:
    if not new_date:
        raise RetakeInvalidInput("새로운 날짜를 입력해주세요.")
    return _transition(uow, actor, retake_id, lambda a, _: a.edit_date(new_date))


def change_retake_status(
    uow: UnitOfWork,
    actor: Actor,
    retake_id: int,
    *,
    status: Any,
    note: Optional[str] = None,
) -> RetakeAssignment:
    return _transition(uow, actor, retake_id, lambda a, _: a.change_status(status, note))


def change_retake_management_status(
    uow: UnitOfWork,
    actor: Actor,
    retake_id: int,
    *,
    management_status: Any,
) -> RetakeAssignment:
    def _mutate(assignment: RetakeAssignment, u: UnitOfWork) -> HistoryDraft:
        allowed = u.management_statuses.list_names(actor.tenant_id)
        return assignment.change_management_status(management_status, allowed)

    return _transition(uow, actor, retake_id, _mutate)


# ---------------------------------------------------------------------------
# 비전이 연산 (이력 없음)
# ---------------------------------------------------------------------------


def update_retake_note(
    uow: UnitOfWork,
    actor: Actor,
    retake_id: int,
    *,
    note: Optional[str],
) -> RetakeAssignment:
    """메모는 상태 전이와 독립. 이력을 남기지 않는다."""
    with uow:
        assignment = uow.retakes.get_for_update(actor.tenant_id, retake_id)
        if assignment is None:
            raise RetakeNotFound("재시험을 찾을 수 없습니다.")
        assignment.update_note(note)
        uow.retakes.save(assignment)
    return assignment


def delete_retake(uow: UnitOfWork, actor: Actor, retake_id: int) -> None:
    """재시험 삭제. 이력은 cascade 로 함께 삭제된다."""
    with uow:
        if not uow.retakes.delete(actor.tenant_id, retake_id):
            raise RetakeNotFound("재시험을 찾을 수 없습니다.")
    logger.info(
        "[retake] action=delete retake_id=%s tenant=%s user=%s",
        retake_id,
        actor.tenant_id,
        actor.user_id,
    )


def list_retake_history(uow: UnitOfWork, actor: Actor, retake_id: int) -> list[RetakeHistoryEntry]:
    """assignment 1건의 이력, 최신순."""
    assignment = uow.retakes.get(actor.tenant_id, retake_id)
    if assignment is None:
        raise RetakeNotFound("재시험을 찾을 수 없습니다.")
    return uow.retake_history.list_for_assignment(assignment.id)
