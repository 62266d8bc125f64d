"""RetakeAssignment 전이 메서드 (순수 도메인)."""
from datetime import date

import pytest

from academy.domain.retakes.entities import (
    RetakeAction,
    RetakeAssignment,
    RetakeStatus,
    parse_status,
)
from academy.domain.retakes.errors import RetakeInvalidInput


def make_assignment(**overrides) -> RetakeAssignment:
    fields = dict(
        id=1,
        exam_id=10,
        student_id=20,
        status=RetakeStatus.PENDING,
        management_status="재시 안내 예정",
        scheduled_date=date(2025, 3, 1),
    )
    fields.update(overrides)
    return RetakeAssignment(**fields)


class TestPostpone:
    def test_sets_date_and_increments_counter(self) -> None:
        a = make_assignment()

        draft = a.postpone(date(2025, 3, 8), note=" student sick ")

        assert a.scheduled_date == date(2025, 3, 8)
        assert a.status == RetakeStatus.PENDING
        assert a.postpone_count == 1
        assert draft.action_type == RetakeAction.POSTPONE
        assert draft.previous_date == date(2025, 3, 1)
        assert draft.new_date == date(2025, 3, 8)
        assert draft.new_status == RetakeStatus.PENDING
        assert draft.note == "student sick"

    def test_resets_completed_to_pending(self) -> None:
        a = make_assignment(status=RetakeStatus.COMPLETED)

        draft = a.postpone(date(2025, 3, 8))

        assert a.status == RetakeStatus.PENDING
        assert draft.previous_status == RetakeStatus.COMPLETED

    def test_requires_new_date(self) -> None:
        a = make_assignment()

        with pytest.raises(RetakeInvalidInput):
            a.postpone(None)

        assert a.postpone_count == 0
        assert a.changed_fields == set()


class TestMarkAbsent:
    def test_sets_absent_and_increments_counter(self) -> None:
        a = make_assignment()

        draft = a.mark_absent()

        assert a.status == RetakeStatus.ABSENT
        assert a.absent_count == 1
        assert a.scheduled_date == date(2025, 3, 1)
        assert draft.action_type == RetakeAction.ABSENT
        assert draft.previous_date == date(2025, 3, 1)
        assert draft.note is None


class TestComplete:
    def test_overwrites_scheduled_date_with_today(self) -> None:
        a = make_assignment()

        draft = a.complete(date(2025, 3, 5), note="done")

        assert a.status == RetakeStatus.COMPLETED
        assert a.scheduled_date == date(2025, 3, 5)
        assert draft.previous_date == date(2025, 3, 1)
        assert draft.new_date == date(2025, 3, 5)
        assert draft.new_status == RetakeStatus.COMPLETED


class TestEditDate:
    def test_changes_date_only(self) -> None:
        a = make_assignment(status=RetakeStatus.ABSENT, postpone_count=2)

        draft = a.edit_date(date(2025, 3, 2))

        assert a.scheduled_date == date(2025, 3, 2)
        assert a.status == RetakeStatus.ABSENT
        assert a.postpone_count == 2
        assert draft.action_type == RetakeAction.DATE_EDIT
        assert a.changed_fields == {"scheduled_date"}

    def test_rejects_same_date(self) -> None:
        a = make_assignment()

        with pytest.raises(RetakeInvalidInput) as exc:
            a.edit_date(date(2025, 3, 1))

        assert exc.value.code == "date_unchanged"

    def test_from_unscheduled(self) -> None:
        a = make_assignment(scheduled_date=None)

        draft = a.edit_date(date(2025, 4, 1))

        assert draft.previous_date is None
        assert a.scheduled_date == date(2025, 4, 1)


class TestChangeStatus:
    @pytest.mark.parametrize("target", ["pending", "completed", "absent", "COMPLETED"])
    def test_any_status_reachable(self, target) -> None:
        a = make_assignment(status=RetakeStatus.ABSENT)

        draft = a.change_status(target)

        assert a.status == RetakeStatus(target.lower())
        assert draft.previous_status == RetakeStatus.ABSENT

    def test_counters_untouched(self) -> None:
        a = make_assignment(postpone_count=1, absent_count=1)

        a.change_status("completed")

        assert (a.postpone_count, a.absent_count) == (1, 1)

    def test_rejects_unknown_status(self) -> None:
        with pytest.raises(RetakeInvalidInput):
            make_assignment().change_status("cancelled")


class TestChangeManagementStatus:
    def test_accepts_catalog_member(self) -> None:
        a = make_assignment()

        draft = a.change_management_status("재시 안내 완료", {"재시 안내 예정", "재시 안내 완료"})

        assert a.management_status == "재시 안내 완료"
        assert draft.previous_management_status == "재시 안내 예정"
        assert draft.new_management_status == "재시 안내 완료"

    @pytest.mark.parametrize("label", ["", "   ", None, "없는 상태"])
    def test_rejects_non_member(self, label) -> None:
        a = make_assignment()

        with pytest.raises(RetakeInvalidInput):
            a.change_management_status(label, {"재시 안내 예정"})

        assert a.management_status == "재시 안내 예정"


class TestMisc:
    def test_next_sequence_is_strictly_increasing(self) -> None:
        a = make_assignment()

        assert [a.next_sequence() for _ in range(3)] == [1, 2, 3]
        assert "history_seq" in a.changed_fields

    def test_update_note_is_not_a_transition(self) -> None:
        a = make_assignment()

        a.update_note("  보강 희망  ")

        assert a.note == "보강 희망"
        assert a.changed_fields == {"note"}

    def test_apply_patch_rejects_unknown_field(self) -> None:
        with pytest.raises(ValueError):
            make_assignment().apply_patch({"exam_id": 3})

    def test_parse_status(self) -> None:
        assert parse_status(" Absent ") == RetakeStatus.ABSENT
        with pytest.raises(RetakeInvalidInput):
            parse_status(None)
