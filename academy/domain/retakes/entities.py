"""
재시험 도메인 엔티티: 순수 파이썬 (Django/ORM 미사용)

상태 전이 규칙은 엔티티 메서드로 표현.
각 전이 메서드는 assignment 를 직접 변경하고, 이력(ledger)에 남길 HistoryDraft 를 반환한다.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable, Optional

from academy.domain.retakes.errors import RetakeInvalidInput


class RetakeStatus(str, Enum):
    """apps.domains.retakes.models.RetakeAssignment.Status choices와 동기화."""
    PENDING = "pending"
    COMPLETED = "completed"
    ABSENT = "absent"


class RetakeAction(str, Enum):
    """apps.domains.retakes.models.RetakeHistory.ActionType choices와 동기화."""
    ASSIGN = "assign"
    POSTPONE = "postpone"
    ABSENT = "absent"
    COMPLETE = "complete"
    STATUS_CHANGE = "status_change"
    MANAGEMENT_STATUS_CHANGE = "management_status_change"
    DATE_EDIT = "date_edit"


# undo 패치로 되돌릴 수 있는 assignment 필드
PATCHABLE_FIELDS = (
    "status",
    "management_status",
    "scheduled_date",
    "postpone_count",
    "absent_count",
)


def parse_status(value: Any) -> RetakeStatus:
    raw = str(value or "").strip().lower()
    try:
        return RetakeStatus(raw)
    except ValueError:
        raise RetakeInvalidInput(f"유효하지 않은 상태입니다: {value!r}")


@dataclass
class HistoryDraft:
    """아직 저장되지 않은 이력 1건. 저장은 HistoryRepository.append 가 수행."""
    action_type: RetakeAction
    previous_date: Optional[date] = None
    new_date: Optional[date] = None
    previous_status: Optional[RetakeStatus] = None
    new_status: Optional[RetakeStatus] = None
    previous_management_status: Optional[str] = None
    new_management_status: Optional[str] = None
    note: Optional[str] = None


@dataclass
class RetakeHistoryEntry:
    id: int
    retake_assignment_id: int
    sequence: int
    action_type: RetakeAction
    previous_date: Optional[date] = None
    new_date: Optional[date] = None
    previous_status: Optional[RetakeStatus] = None
    new_status: Optional[RetakeStatus] = None
    previous_management_status: Optional[str] = None
    new_management_status: Optional[str] = None
    note: Optional[str] = None
    performed_by_id: Optional[int] = None
    created_at: Optional[datetime] = None


def _clean_note(note: Optional[str]) -> Optional[str]:
    if note is None:
        return None
    s = str(note).strip()
    return s or None


@dataclass
class RetakeAssignment:
    """
    학생 × 시험 단위 재시험 과제.

    postpone_count / absent_count 는 전이 메서드와 undo 패치로만 변경한다.
    history_seq 는 마지막으로 발급한 이력 sequence (assignment 행 락 하에서만 증가).
    """
    id: Optional[int]
    exam_id: int
    student_id: int
    status: RetakeStatus = RetakeStatus.PENDING
    management_status: str = ""
    scheduled_date: Optional[date] = None
    postpone_count: int = 0
    absent_count: int = 0
    note: Optional[str] = None
    history_seq: int = 0
    tenant_id: Optional[int] = None
    changed_fields: set[str] = field(default_factory=set, repr=False, compare=False)

    # ------------------------------------------------------------------
    # 내부 helper
    # ------------------------------------------------------------------

    def _set(self, name: str, value: Any) -> None:
        setattr(self, name, value)
        self.changed_fields.add(name)

    def next_sequence(self) -> int:
        self._set("history_seq", int(self.history_seq or 0) + 1)
        return self.history_seq

    def snapshot(self) -> dict[str, Any]:
        """테스트/로그용: 변경 가능한 필드 전부."""
        return {
            "status": self.status,
            "management_status": self.management_status,
            "scheduled_date": self.scheduled_date,
            "postpone_count": self.postpone_count,
            "absent_count": self.absent_count,
            "note": self.note,
        }

    # ------------------------------------------------------------------
    # 전이
    # ------------------------------------------------------------------

    def assigned(self) -> HistoryDraft:
        """생성 직후 assign 이력."""
        return HistoryDraft(
            action_type=RetakeAction.ASSIGN,
            new_date=self.scheduled_date,
            new_status=self.status,
        )

    def postpone(self, new_date: Optional[date], note: Optional[str] = None) -> HistoryDraft:
        """
        연기: 새 날짜 + pending 으로 재설정 + postpone_count += 1.
        completed/absent 상태여도 pending 으로 덮어쓴다 (재일정 우선).
        """
        if not new_date:
            raise RetakeInvalidInput("새로운 날짜를 입력해주세요.")
        draft = HistoryDraft(
            action_type=RetakeAction.POSTPONE,
            previous_date=self.scheduled_date,
            new_date=new_date,
            previous_status=self.status,
            new_status=RetakeStatus.PENDING,
            note=_clean_note(note),
        )
        self._set("scheduled_date", new_date)
        self._set("status", RetakeStatus.PENDING)
        self._set("postpone_count", int(self.postpone_count) + 1)
        return draft

    def mark_absent(self, note: Optional[str] = None) -> HistoryDraft:
        draft = HistoryDraft(
            action_type=RetakeAction.ABSENT,
            previous_date=self.scheduled_date,
            previous_status=self.status,
            new_status=RetakeStatus.ABSENT,
            note=_clean_note(note),
        )
        self._set("status", RetakeStatus.ABSENT)
        self._set("absent_count", int(self.absent_count) + 1)
        return draft

    def complete(self, today: date, note: Optional[str] = None) -> HistoryDraft:
        """완료: scheduled_date 를 실제 응시일(today)로 덮어쓴다."""
        draft = HistoryDraft(
            action_type=RetakeAction.COMPLETE,
            previous_date=self.scheduled_date,
            new_date=today,
            previous_status=self.status,
            new_status=RetakeStatus.COMPLETED,
            note=_clean_note(note),
        )
        self._set("status", RetakeStatus.COMPLETED)
        self._set("scheduled_date", today)
        return draft

    def edit_date(self, new_date: Optional[date]) -> HistoryDraft:
        """
        날짜 정정: postpone_count / status 는 건드리지 않는다.
        같은 날짜로의 수정은 중복 제출로 보고 거부.
        """
        if not new_date:
            raise RetakeInvalidInput("새로운 날짜를 입력해주세요.")
        if new_date == self.scheduled_date:
            raise RetakeInvalidInput("날짜가 변경되지 않았습니다.", code="date_unchanged")
        draft = HistoryDraft(
            action_type=RetakeAction.DATE_EDIT,
            previous_date=self.scheduled_date,
            new_date=new_date,
        )
        self._set("scheduled_date", new_date)
        return draft

    def change_status(self, status: Any, note: Optional[str] = None) -> HistoryDraft:
        """명시적 상태 변경: 전이표 없이 enum 검증만."""
        new_status = parse_status(status)
        draft = HistoryDraft(
            action_type=RetakeAction.STATUS_CHANGE,
            previous_status=self.status,
            new_status=new_status,
            note=_clean_note(note),
        )
        self._set("status", new_status)
        return draft

    def change_management_status(self, name: Any, allowed: Iterable[str]) -> HistoryDraft:
        label = str(name or "").strip()
        if not label or label not in set(allowed):
            raise RetakeInvalidInput("유효하지 않은 관리 상태입니다.")
        draft = HistoryDraft(
            action_type=RetakeAction.MANAGEMENT_STATUS_CHANGE,
            previous_management_status=self.management_status or None,
            new_management_status=label,
        )
        self._set("management_status", label)
        return draft

    def update_note(self, note: Optional[str]) -> None:
        """메모만 수정. 상태 전이가 아니므로 이력을 남기지 않는다."""
        self._set("note", _clean_note(note))

    # ------------------------------------------------------------------
    # undo
    # ------------------------------------------------------------------

    def apply_patch(self, patch: dict[str, Any]) -> None:
        for name, value in patch.items():
            if name not in PATCHABLE_FIELDS:
                raise ValueError(f"field not patchable: {name}")
            self._set(name, value)
