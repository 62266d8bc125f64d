# PATH: apps/core/models/tenant.py
from django.db import models


class Tenant(models.Model):
    """
    학원 1곳 = Tenant 1개.

    재시험/시험/학생은 모두 tenant 범위 안에서만 조회된다.
    요청의 tenant 는 X-Tenant-Code(code) 로 확정 (apps.core.tenant.resolver).
    """

    name = models.CharField(max_length=255)
    code = models.CharField(max_length=50, unique=True)
    is_active = models.BooleanField(default=True)

    # 재시험 안내 문자 발신번호 (솔라피에 등록된 번호, 숫자만)
    messaging_sender = models.CharField(max_length=20, blank=True, default="")

    class Meta:
        app_label = "core"
        verbose_name = "Tenant"
        verbose_name_plural = "Tenants"

    def __str__(self):
        return f"{self.name} ({self.code})"
