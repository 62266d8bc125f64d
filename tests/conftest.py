"""
공용 fixture: tenant / 사용자 / 참조 데이터 / API client.

DB 가 필요한 fixture 는 모두 pytest-django 의 db fixture 를 거친다.
"""
from datetime import date

import pytest
from rest_framework.test import APIClient

from academy.application.use_cases.retakes import Actor


@pytest.fixture
def tenant(db):
    from apps.core.models import Tenant
    return Tenant.objects.create(name="한빛 학원", code="hanbit", messaging_sender="0212345678")


@pytest.fixture
def other_tenant(db):
    from apps.core.models import Tenant
    return Tenant.objects.create(name="다른 학원", code="other")


def _member(tenant, username, role, **extra):
    from apps.core.models import TenantMembership, User
    user = User.objects.create_user(username=username, password="pw-1234", tenant=tenant, **extra)
    TenantMembership.objects.create(tenant=tenant, user=user, role=role)
    return user


@pytest.fixture
def staff_user(tenant):
    return _member(tenant, "teacher-kim", "teacher", name="김선생")


@pytest.fixture
def student_user(tenant):
    return _member(tenant, "student-lee", "student", name="이학생")


@pytest.fixture
def lecture(tenant):
    from apps.domains.lectures.models import Lecture
    return Lecture.objects.create(tenant=tenant, title="고2 수학", subject="수학")


@pytest.fixture
def exam(lecture):
    from apps.domains.exams.models import Exam
    return Exam.objects.create(lecture=lecture, title="주간 테스트", round=3, exam_date=date(2025, 2, 25))


@pytest.fixture
def student(tenant, student_user):
    from apps.domains.students.models import Student
    return Student.objects.create(
        tenant=tenant,
        user=student_user,
        name="이학생",
        phone="010-1111-2222",
        parent_phone="010-3333-4444",
        school="한빛고",
    )


@pytest.fixture
def other_student(tenant):
    from apps.domains.students.models import Student
    return Student.objects.create(tenant=tenant, name="박학생", phone="01055556666")


@pytest.fixture
def foreign_exam(other_tenant):
    from apps.domains.exams.models import Exam
    from apps.domains.lectures.models import Lecture
    lecture = Lecture.objects.create(tenant=other_tenant, title="다른 학원 강의")
    return Exam.objects.create(lecture=lecture, title="다른 시험")


@pytest.fixture
def foreign_student(other_tenant):
    from apps.domains.students.models import Student
    return Student.objects.create(tenant=other_tenant, name="외부학생", phone="01099990000")


@pytest.fixture
def actor(tenant, staff_user):
    return Actor(tenant_id=tenant.id, user_id=staff_user.id, role="teacher")


@pytest.fixture
def api_client(tenant, staff_user):
    client = APIClient()
    client.force_authenticate(user=staff_user)
    client.credentials(HTTP_X_TENANT_CODE=tenant.code)
    return client


@pytest.fixture
def student_client(tenant, student_user):
    client = APIClient()
    client.force_authenticate(user=student_user)
    client.credentials(HTTP_X_TENANT_CODE=tenant.code)
    return client


@pytest.fixture
def retake(actor, exam, student):
    """2025-03-01 예정 재시험 1건 (assign 이력 포함)."""
    from academy.adapters.db.django.uow import DjangoUnitOfWork
    from academy.application.use_cases.retakes import assign_retakes
    from apps.domains.retakes.models import RetakeAssignment

    (created,) = assign_retakes(
        DjangoUnitOfWork(),
        actor,
        exam_id=exam.id,
        student_ids=[student.id],
        scheduled_date=date(2025, 3, 1),
        management_status="재시 안내 예정",
    )
    return RetakeAssignment.objects.get(id=created.id)
