"""Tenant 생성 시 관리 상태 기본 라벨 시드."""
from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from apps.core.models import Tenant
from apps.domains.retakes.services.management_status_service import ManagementStatusService


@receiver(post_save, sender=Tenant)
def seed_tenant_management_statuses(sender, instance: Tenant, created: bool, **kwargs):
    if not created:
        return
    with transaction.atomic():
        ManagementStatusService(instance.id).ensure_seeded()
