"""
Retake Repository: Django ORM 구현 (메서드 내부에서만 apps.domains.retakes import)

테넌트 범위: exam → lecture → tenant 와 student → tenant 가 모두 호출자 테넌트여야 한다.
다른 테넌트의 행은 "없음" 과 동일하게 취급한다.
"""
from __future__ import annotations

from typing import Optional, Sequence

from academy.domain.retakes.entities import (
    HistoryDraft,
    RetakeAction,
    RetakeAssignment,
    RetakeHistoryEntry,
    RetakeStatus,
)
from academy.domain.retakes.errors import RetakeConflict


def _value(v):
    return getattr(v, "value", v)


def _assignment_to_entity(m, tenant_id: Optional[int] = None) -> Optional[RetakeAssignment]:
    if m is None:
        return None
    return RetakeAssignment(
        id=m.id,
        exam_id=m.exam_id,
        student_id=m.student_id,
        status=RetakeStatus(m.status) if m.status else RetakeStatus.PENDING,
        management_status=m.management_status or "",
        scheduled_date=m.scheduled_date,
        postpone_count=int(m.postpone_count or 0),
        absent_count=int(m.absent_count or 0),
        note=m.note,
        history_seq=int(m.history_seq or 0),
        tenant_id=tenant_id,
    )


def _history_to_entity(m) -> Optional[RetakeHistoryEntry]:
    if m is None:
        return None
    return RetakeHistoryEntry(
        id=m.id,
        retake_assignment_id=m.retake_assignment_id,
        sequence=int(m.sequence),
        action_type=RetakeAction(m.action_type),
        previous_date=m.previous_date,
        new_date=m.new_date,
        previous_status=RetakeStatus(m.previous_status) if m.previous_status else None,
        new_status=RetakeStatus(m.new_status) if m.new_status else None,
        previous_management_status=m.previous_management_status,
        new_management_status=m.new_management_status,
        note=m.note,
        performed_by_id=m.performed_by_id,
        created_at=m.created_at,
    )


def _scoped(qs, tenant_id: int):
    return qs.filter(exam__lecture__tenant_id=tenant_id, student__tenant_id=tenant_id)


class DjangoRetakeAssignmentRepository:
    """RetakeAssignmentRepository 구현."""

    def get(self, tenant_id: int, retake_id: int) -> Optional[RetakeAssignment]:
        from apps.domains.retakes.models import RetakeAssignment as RetakeAssignmentModel
        m = _scoped(RetakeAssignmentModel.objects.all(), tenant_id).filter(id=retake_id).first()
        return _assignment_to_entity(m, tenant_id)

    def get_for_update(self, tenant_id: int, retake_id: int) -> Optional[RetakeAssignment]:
        """호출자가 이미 UoW 트랜잭션 내에 있어야 함 (select_for_update 락 유지)."""
        from apps.domains.retakes.models import RetakeAssignment as RetakeAssignmentModel
        # join 된 exam/lecture/student 행까지 잠그지 않도록 of=("self",)
        qs = RetakeAssignmentModel.objects.select_for_update(of=("self",))
        m = _scoped(qs, tenant_id).filter(id=retake_id).first()
        return _assignment_to_entity(m, tenant_id)

    def exam_exists(self, tenant_id: int, exam_id: int) -> bool:
        from apps.domains.exams.models import Exam
        return Exam.objects.filter(id=exam_id, lecture__tenant_id=tenant_id).exists()

    def existing_student_ids(self, tenant_id: int, student_ids: Sequence[int]) -> set[int]:
        from apps.domains.students.models import Student
        return set(
            Student.objects.filter(tenant_id=tenant_id, id__in=list(student_ids)).values_list("id", flat=True)
        )

    def assigned_student_ids(self, exam_id: int, student_ids: Sequence[int]) -> set[int]:
        from apps.domains.retakes.models import RetakeAssignment as RetakeAssignmentModel
        return set(
            RetakeAssignmentModel.objects.filter(
                exam_id=exam_id, student_id__in=list(student_ids)
            ).values_list("student_id", flat=True)
        )

    def create_many(self, assignments: Sequence[RetakeAssignment]) -> list[RetakeAssignment]:
        from django.db import IntegrityError, transaction
        from apps.domains.retakes.models import RetakeAssignment as RetakeAssignmentModel

        created: list[RetakeAssignment] = []
        try:
            # savepoint: 유니크 위반 시 바깥 트랜잭션은 계속 사용할 수 있어야 함
            with transaction.atomic():
                for a in assignments:
                    m = RetakeAssignmentModel.objects.create(
                        exam_id=a.exam_id,
                        student_id=a.student_id,
                        status=_value(a.status),
                        management_status=a.management_status or "",
                        scheduled_date=a.scheduled_date,
                        postpone_count=a.postpone_count,
                        absent_count=a.absent_count,
                        note=a.note,
                        history_seq=a.history_seq,
                    )
                    created.append(_assignment_to_entity(m, a.tenant_id))
        except IntegrityError:
            raise RetakeConflict("이미 재시험이 할당된 학생이 있습니다.")
        return created

    def save(self, assignment: RetakeAssignment) -> None:
        from django.utils import timezone
        from apps.domains.retakes.models import RetakeAssignment as RetakeAssignmentModel

        if not assignment.changed_fields:
            return
        fields = {name: _value(getattr(assignment, name)) for name in sorted(assignment.changed_fields)}
        fields["updated_at"] = timezone.now()
        RetakeAssignmentModel.objects.filter(id=assignment.id).update(**fields)
        assignment.changed_fields.clear()

    def delete(self, tenant_id: int, retake_id: int) -> bool:
        from apps.domains.retakes.models import RetakeAssignment as RetakeAssignmentModel
        m = _scoped(RetakeAssignmentModel.objects.all(), tenant_id).filter(id=retake_id).first()
        if m is None:
            return False
        m.delete()
        return True


class DjangoRetakeHistoryRepository:
    """RetakeHistoryRepository 구현. insert 와 undo 삭제만 존재."""

    def append(
        self,
        assignment: RetakeAssignment,
        draft: HistoryDraft,
        performed_by_id: Optional[int] = None,
    ) -> RetakeHistoryEntry:
        from apps.domains.retakes.models import RetakeHistory

        m = RetakeHistory.objects.create(
            retake_assignment_id=assignment.id,
            sequence=assignment.next_sequence(),
            action_type=_value(draft.action_type),
            previous_date=draft.previous_date,
            new_date=draft.new_date,
            previous_status=_value(draft.previous_status),
            new_status=_value(draft.new_status),
            previous_management_status=draft.previous_management_status,
            new_management_status=draft.new_management_status,
            note=draft.note,
            performed_by_id=performed_by_id,
        )
        return _history_to_entity(m)

    def latest(self, retake_id: int) -> Optional[RetakeHistoryEntry]:
        from apps.domains.retakes.models import RetakeHistory
        m = RetakeHistory.objects.filter(retake_assignment_id=retake_id).order_by("-sequence").first()
        return _history_to_entity(m)

    def list_for_assignment(self, retake_id: int) -> list[RetakeHistoryEntry]:
        from apps.domains.retakes.models import RetakeHistory
        qs = RetakeHistory.objects.filter(retake_assignment_id=retake_id).order_by("-sequence")
        return [_history_to_entity(m) for m in qs]

    def delete(self, history_id: int) -> None:
        from apps.domains.retakes.models import RetakeHistory
        RetakeHistory.objects.filter(id=history_id).delete()


class DjangoManagementStatusCatalog:
    """ManagementStatusCatalog 구현."""

    def list_names(self, tenant_id: int) -> set[str]:
        from apps.domains.retakes.services.management_status_service import ManagementStatusService
        return ManagementStatusService(tenant_id).names()
