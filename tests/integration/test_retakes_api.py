"""
/api/v1/retakes/ HTTP 계층: 권한, tenant 범위, 오류 본문 형식.
"""
from datetime import date

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from apps.domains.retakes.models import ManagementStatus, RetakeAssignment, RetakeHistory

pytestmark = pytest.mark.django_db

BASE = "/api/v1/retakes/"


def url(*parts) -> str:
    return BASE + "".join(f"{p}/" for p in parts)


def latest_history_id(retake) -> int:
    return RetakeHistory.objects.filter(retake_assignment=retake).order_by("-sequence").first().id


class TestAssignEndpoint:
    def test_assign_creates_pending_retakes(self, api_client, exam, student, other_student):
        resp = api_client.post(
            BASE,
            {"exam_id": exam.id, "student_ids": [student.id, other_student.id], "scheduled_date": "2025-03-01"},
            format="json",
        )

        assert resp.status_code == 201
        body = resp.json()
        assert len(body) == 2
        assert {r["status"] for r in body} == {"pending"}
        assert {r["management_status"] for r in body} == {"재시 안내 예정"}
        assert body[0]["exam"]["round"] == 3
        assert RetakeHistory.objects.filter(action_type="assign").count() == 2

    def test_duplicate_is_409(self, api_client, retake, exam, student):
        resp = api_client.post(
            BASE,
            {"exam_id": exam.id, "student_ids": [student.id], "scheduled_date": "2025-04-01"},
            format="json",
        )

        assert resp.status_code == 409
        assert resp.json()["code"] == "conflict"

    def test_missing_date_is_invalid_input(self, api_client, exam, student):
        resp = api_client.post(BASE, {"exam_id": exam.id, "student_ids": [student.id]}, format="json")

        assert resp.status_code == 400
        body = resp.json()
        assert body["code"] == "invalid_input"
        assert "scheduled_date" in body["errors"]

    def test_foreign_exam_is_404(self, api_client, foreign_exam, student):
        resp = api_client.post(
            BASE,
            {"exam_id": foreign_exam.id, "student_ids": [student.id], "scheduled_date": "2025-03-01"},
            format="json",
        )

        assert resp.status_code == 404
        assert resp.json() == {"detail": "시험을 찾을 수 없습니다.", "code": "not_found"}

    def test_label_outside_catalog_is_400(self, api_client, exam, student):
        resp = api_client.post(
            BASE,
            {
                "exam_id": exam.id,
                "student_ids": [student.id],
                "scheduled_date": "2025-03-01",
                "management_status": "NOT-IN-CATALOG",
            },
            format="json",
        )

        assert resp.status_code == 400
        assert resp.json() == {"detail": "유효하지 않은 관리 상태입니다.", "code": "invalid_input"}
        assert not RetakeAssignment.objects.exists()

    def test_explicit_catalog_label_is_kept(self, api_client, exam, student):
        resp = api_client.post(
            BASE,
            {
                "exam_id": exam.id,
                "student_ids": [student.id],
                "scheduled_date": "2025-03-01",
                "management_status": "재시 안내 완료",
            },
            format="json",
        )

        assert resp.status_code == 201
        assert resp.json()[0]["management_status"] == "재시 안내 완료"

    def test_deleted_default_label_is_400(self, api_client, tenant, exam, student):
        ManagementStatus.objects.filter(tenant=tenant, name="재시 안내 예정").delete()

        resp = api_client.post(
            BASE,
            {"exam_id": exam.id, "student_ids": [student.id], "scheduled_date": "2025-03-01"},
            format="json",
        )

        assert resp.status_code == 400
        assert resp.json()["code"] == "invalid_input"
        assert not RetakeAssignment.objects.exists()


class TestListAndDetail:
    def test_list_filters_and_orders(self, api_client, retake, actor, exam, other_student):
        later = RetakeAssignment.objects.create(
            exam=exam, student=other_student, scheduled_date=date(2025, 3, 20), management_status="재시 안내 예정"
        )

        resp = api_client.get(BASE)
        assert resp.status_code == 200
        assert [r["id"] for r in resp.json()["results"]] == [retake.id, later.id]

        resp = api_client.get(BASE, {"date_from": "2025-03-10"})
        assert [r["id"] for r in resp.json()["results"]] == [later.id]

        resp = api_client.get(BASE, {"student": other_student.id, "status": "pending"})
        assert [r["id"] for r in resp.json()["results"]] == [later.id]

        resp = api_client.get(BASE, {"lecture": exam.lecture_id, "date_to": "2025-03-01"})
        assert [r["id"] for r in resp.json()["results"]] == [retake.id]

    def test_unscheduled_sorts_last(self, api_client, retake, exam, other_student):
        unscheduled = RetakeAssignment.objects.create(exam=exam, student=other_student)

        ids = [r["id"] for r in api_client.get(BASE).json()["results"]]

        assert ids == [retake.id, unscheduled.id]

    def test_student_sees_only_own(self, student_client, retake, exam, other_student):
        RetakeAssignment.objects.create(exam=exam, student=other_student, scheduled_date=date(2025, 3, 2))

        resp = student_client.get(BASE)

        assert resp.status_code == 200
        assert [r["id"] for r in resp.json()["results"]] == [retake.id]

    def test_detail(self, api_client, retake):
        resp = api_client.get(url(retake.id))

        assert resp.status_code == 200
        body = resp.json()
        assert body["student"]["name"] == "이학생"
        assert body["exam"]["lecture_title"] == "고2 수학"

    def test_other_tenant_gets_404(self, retake, other_tenant):
        from apps.core.models import TenantMembership, User
        outsider = User.objects.create_user(username="outsider", password="pw-1234", tenant=other_tenant)
        TenantMembership.objects.create(tenant=other_tenant, user=outsider, role="owner")
        client = APIClient()
        client.force_authenticate(user=outsider)
        client.credentials(HTTP_X_TENANT_CODE=other_tenant.code)

        assert client.get(url(retake.id)).status_code == 404
        resp = client.patch(url(retake.id, "absent"), {}, format="json")
        assert resp.status_code == 404
        assert resp.json()["code"] == "not_found"


class TestTransitionsEndpoint:
    def test_postpone(self, api_client, retake):
        resp = api_client.patch(url(retake.id, "postpone"), {"new_date": "2025-03-08", "note": "아픔"}, format="json")

        assert resp.status_code == 200
        body = resp.json()
        assert body["scheduled_date"] == "2025-03-08"
        assert body["postpone_count"] == 1

    def test_postpone_requires_date(self, api_client, retake):
        resp = api_client.patch(url(retake.id, "postpone"), {"note": "x"}, format="json")

        assert resp.status_code == 400
        assert resp.json()["code"] == "invalid_input"

    def test_absent_and_complete(self, api_client, retake):
        resp = api_client.patch(url(retake.id, "absent"), {}, format="json")
        assert resp.json()["status"] == "absent"
        assert resp.json()["absent_count"] == 1

        resp = api_client.patch(url(retake.id, "complete"), {"note": "응시"}, format="json")
        assert resp.json()["status"] == "completed"
        assert resp.json()["scheduled_date"] == timezone.localdate().isoformat()

    def test_edit_date_same_day_is_rejected(self, api_client, retake):
        resp = api_client.patch(url(retake.id, "edit-date"), {"new_date": "2025-03-01"}, format="json")

        assert resp.status_code == 400
        assert resp.json()["code"] == "date_unchanged"

    def test_change_status(self, api_client, retake):
        resp = api_client.patch(url(retake.id, "status"), {"status": "completed"}, format="json")

        assert resp.status_code == 200
        assert resp.json()["status"] == "completed"

    def test_change_status_rejects_unknown(self, api_client, retake):
        resp = api_client.patch(url(retake.id, "status"), {"status": "cancelled"}, format="json")

        assert resp.status_code == 400

    def test_management_status(self, api_client, retake):
        resp = api_client.patch(
            url(retake.id, "management-status"), {"management_status": "재시 안내 완료"}, format="json"
        )
        assert resp.status_code == 200
        assert resp.json()["management_status"] == "재시 안내 완료"

        resp = api_client.patch(url(retake.id, "management-status"), {"management_status": "없음"}, format="json")
        assert resp.status_code == 400
        assert resp.json()["code"] == "invalid_input"

    def test_student_cannot_transition(self, student_client, retake):
        resp = student_client.patch(url(retake.id, "complete"), {}, format="json")

        assert resp.status_code == 403
        retake.refresh_from_db()
        assert retake.status == "pending"


class TestNoteAndDelete:
    def test_note_patch_writes_no_history(self, api_client, retake):
        resp = api_client.patch(url(retake.id), {"note": "보강 희망"}, format="json")

        assert resp.status_code == 200
        assert resp.json()["note"] == "보강 희망"
        assert RetakeHistory.objects.filter(retake_assignment=retake).count() == 1

    def test_delete_cascades_history(self, api_client, retake):
        api_client.patch(url(retake.id, "absent"), {}, format="json")

        resp = api_client.delete(url(retake.id))

        assert resp.status_code == 204
        assert not RetakeAssignment.objects.filter(id=retake.id).exists()
        assert not RetakeHistory.objects.exists()


class TestHistoryEndpoints:
    def test_history_newest_first(self, api_client, retake, staff_user):
        api_client.patch(url(retake.id, "postpone"), {"new_date": "2025-03-08"}, format="json")

        resp = api_client.get(url(retake.id, "history"))

        assert resp.status_code == 200
        rows = resp.json()
        assert [r["action_type"] for r in rows] == ["postpone", "assign"]
        assert rows[0]["performed_by_name"] == "김선생"

    def test_undo_latest(self, api_client, retake):
        api_client.patch(url(retake.id, "absent"), {}, format="json")

        resp = api_client.post(url(retake.id, "history", latest_history_id(retake), "undo"))

        assert resp.status_code == 200
        assert resp.json()["status"] == "pending"
        assert resp.json()["absent_count"] == 0

    def test_undo_stale_is_rejected(self, api_client, retake):
        api_client.patch(url(retake.id, "postpone"), {"new_date": "2025-03-08"}, format="json")
        stale = latest_history_id(retake)
        api_client.patch(url(retake.id, "absent"), {}, format="json")

        resp = api_client.post(url(retake.id, "history", stale, "undo"))

        assert resp.status_code == 400
        assert resp.json()["code"] == "not_latest"

    def test_undo_assign_is_rejected(self, api_client, retake):
        resp = api_client.post(url(retake.id, "history", latest_history_id(retake), "undo"))

        assert resp.status_code == 400
        assert resp.json()["code"] == "not_undoable"

    def test_feed(self, api_client, retake, settings):
        settings.RETAKE_HISTORY_FEED_LIMIT = 2
        api_client.patch(url(retake.id, "postpone"), {"new_date": "2025-03-08"}, format="json")
        api_client.patch(url(retake.id, "absent"), {}, format="json")

        resp = api_client.get(url("history"))

        assert resp.status_code == 200
        rows = resp.json()
        assert [r["action_type"] for r in rows] == ["absent", "postpone"]
        assert rows[0]["student_name"] == "이학생"
        assert rows[0]["exam_title"] == "주간 테스트"
        assert rows[0]["lecture_title"] == "고2 수학"

    def test_feed_requires_staff(self, student_client, retake):
        assert student_client.get(url("history")).status_code == 403
