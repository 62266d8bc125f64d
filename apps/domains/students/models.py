from django.conf import settings
from django.db import models

from apps.api.common.models import TimestampModel


class Student(TimestampModel):
    tenant = models.ForeignKey(
        "core.Tenant",
        on_delete=models.CASCADE,
        related_name="students",
        db_index=True,
    )

    # =========================
    # 🔐 로그인 사용자 연결
    # =========================
    # 학생 본인 조회(내 재시험 목록) 시 request.user → student_profile
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="student_profile",
        help_text="학생이 로그인 계정을 가지는 경우 연결",
    )

    # =========================
    # 기본 정보
    # =========================
    name = models.CharField(max_length=50)

    # 중/고 공통 학년 (1~3)
    grade = models.PositiveSmallIntegerField(
        choices=[(1, "1"), (2, "2"), (3, "3")],
        null=True,
        blank=True,
    )

    school = models.CharField(max_length=100, null=True, blank=True)

    # 재시험 안내 문자 수신번호 (recipient_type=student / parent)
    phone = models.CharField(max_length=20, null=True, blank=True)
    parent_phone = models.CharField(max_length=20, null=True, blank=True)

    class Meta:
        ordering = ["-id"]

    def __str__(self):
        return self.name
