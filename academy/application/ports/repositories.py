"""
Repository 포트: 영속화 추상화 (Django/ORM 미사용)
"""
from __future__ import annotations

from abc import abstractmethod
from typing import Optional, Protocol, Sequence

from academy.domain.retakes.entities import HistoryDraft, RetakeAssignment, RetakeHistoryEntry


# ---------------------------------------------------------------------------
# Retake
# ---------------------------------------------------------------------------


class RetakeAssignmentRepository(Protocol):
    """
    재시험 과제 영속화. 모든 조회는 tenant 범위 필터
    (exam → lecture → tenant, student → tenant 모두 일치해야 함).
    """

    @abstractmethod
    def get(self, tenant_id: int, retake_id: int) -> Optional[RetakeAssignment]:
        """락 없음. 없거나 다른 테넌트면 None."""
        ...

    @abstractmethod
    def get_for_update(self, tenant_id: int, retake_id: int) -> Optional[RetakeAssignment]:
        """조회 + row lock. 호출자는 UoW 트랜잭션 안에 있어야 함."""
        ...

    @abstractmethod
    def exam_exists(self, tenant_id: int, exam_id: int) -> bool:
        ...

    @abstractmethod
    def existing_student_ids(self, tenant_id: int, student_ids: Sequence[int]) -> set[int]:
        """tenant 에 속한 학생 id 만 반환."""
        ...

    @abstractmethod
    def assigned_student_ids(self, exam_id: int, student_ids: Sequence[int]) -> set[int]:
        """이미 해당 시험 재시험이 있는 학생 id."""
        ...

    @abstractmethod
    def create_many(self, assignments: Sequence[RetakeAssignment]) -> list[RetakeAssignment]:
        """일괄 생성. (exam, student) 유니크 위반 시 RetakeConflict."""
        ...

    @abstractmethod
    def save(self, assignment: RetakeAssignment) -> None:
        """changed_fields 만 update."""
        ...

    @abstractmethod
    def delete(self, tenant_id: int, retake_id: int) -> bool:
        ...


class RetakeHistoryRepository(Protocol):
    """Append-only 이력. insert / 최신 1건 삭제(undo) 외의 쓰기 경로 없음."""

    @abstractmethod
    def append(
        self,
        assignment: RetakeAssignment,
        draft: HistoryDraft,
        performed_by_id: Optional[int] = None,
    ) -> RetakeHistoryEntry:
        """assignment.next_sequence() 로 순번 발급 후 insert. assignment 행 락 하에서만 호출."""
        ...

    @abstractmethod
    def latest(self, retake_id: int) -> Optional[RetakeHistoryEntry]:
        ...

    @abstractmethod
    def list_for_assignment(self, retake_id: int) -> list[RetakeHistoryEntry]:
        """최신순."""
        ...

    @abstractmethod
    def delete(self, history_id: int) -> None:
        ...


class ManagementStatusCatalog(Protocol):
    """테넌트별 관리 상태 라벨 목록 (이름으로만 참조)."""

    @abstractmethod
    def list_names(self, tenant_id: int) -> set[str]:
        ...
