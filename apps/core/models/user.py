# PATH: apps/core/models/user.py
from django.contrib.auth.models import AbstractUser, Group, Permission
from django.db import models

from apps.core.models.tenant import Tenant


class User(AbstractUser):
    """
    AUTH_USER_MODEL = core.User

    - tenant: 계정을 만든 학원 (운영 superuser 는 null). 권한은 TenantMembership 으로 판단
    - name: 이력의 "처리자" 표시 이름 (없으면 username)
    - 학생 계정은 students.Student.user 로 연결되어 본인 재시험만 조회
    """

    tenant = models.ForeignKey(
        Tenant,
        on_delete=models.CASCADE,
        related_name="users",
        null=True,
        blank=True,
        db_index=True,
    )

    name = models.CharField(max_length=50, blank=True, null=True)
    phone = models.CharField(max_length=20, blank=True, null=True)

    # reverse accessor 이름을 core_users 로 고정 (migration 과 일치)
    groups = models.ManyToManyField(Group, related_name="core_users", blank=True)
    user_permissions = models.ManyToManyField(Permission, related_name="core_users", blank=True)

    class Meta:
        app_label = "core"
        db_table = "accounts_user"
        ordering = ["-id"]

    def __str__(self):
        return self.name or self.username
