# PATH: apps/core/models/tenant_membership.py
from __future__ import annotations

from typing import Optional

from django.conf import settings
from django.db import models

from apps.core.models.tenant import Tenant


class TenantMembership(models.Model):
    """
    User ↔ Tenant 소속 + 역할.

    권한 판단은 항상 (request.tenant, request.user) 의 활성 membership 으로 한다.
    User.tenant 는 계정 생성 위치일 뿐 권한 근거가 아니다.
    """

    ROLE_CHOICES = [
        ("owner", "Owner"),
        ("admin", "Admin"),
        ("teacher", "Teacher"),
        ("staff", "Staff"),
        ("student", "Student"),
    ]

    # 재시험 전이/되돌리기/관리상태 설정이 허용되는 운영 역할
    STAFF_ROLES = frozenset({"owner", "admin", "teacher", "staff"})

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="tenant_memberships",
    )
    tenant = models.ForeignKey(
        Tenant,
        on_delete=models.CASCADE,
        related_name="memberships",
    )

    role = models.CharField(max_length=20, choices=ROLE_CHOICES)
    is_active = models.BooleanField(default=True)

    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "core"
        unique_together = ("user", "tenant")
        indexes = [
            models.Index(fields=["tenant", "user"], name="core_membership_tenant_user_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.user} @ {self.tenant} ({self.role})"

    @classmethod
    def role_of(cls, *, tenant: Optional[Tenant], user) -> Optional[str]:
        """활성 membership 의 role. 없으면 None."""
        if tenant is None or user is None or not getattr(user, "is_authenticated", False):
            return None
        return (
            cls.objects.filter(tenant=tenant, user=user, is_active=True)
            .values_list("role", flat=True)
            .first()
        )

    @classmethod
    def is_staff_of(cls, *, tenant: Optional[Tenant], user) -> bool:
        return cls.role_of(tenant=tenant, user=user) in cls.STAFF_ROLES
