# PATH: apps/domains/retakes/management/commands/seed_management_statuses.py
"""
기본 관리 상태 카탈로그 채우기.

신규 tenant 는 생성 시 자동으로 채워진다. 그 이전에 만들어진 tenant 를 채울 때 사용.
이미 항목이 있는 tenant 는 건드리지 않는다.

사용:
  python manage.py seed_management_statuses --tenant=hanbit
  python manage.py seed_management_statuses          # 활성 tenant 전체
"""
from django.core.management.base import BaseCommand

from apps.core.management.commands.set_tenant_sender import get_tenant_by_code_or_id
from apps.core.models import Tenant
from apps.domains.retakes.models import ManagementStatus
from apps.domains.retakes.services import ManagementStatusService


class Command(BaseCommand):
    help = "Seed the default retake management statuses for tenants without a catalog."

    def add_arguments(self, parser):
        parser.add_argument("--tenant", type=str, default=None, help="Tenant code or id (생략 시 활성 tenant 전체)")

    def handle(self, *args, **options):
        if options.get("tenant"):
            tenants = [get_tenant_by_code_or_id(options["tenant"])]
        else:
            tenants = list(Tenant.objects.filter(is_active=True).order_by("id"))

        for tenant in tenants:
            existed = ManagementStatus.objects.filter(tenant=tenant).exists()
            ManagementStatusService(tenant.id).ensure_seeded()
            if existed:
                self.stdout.write(f"Tenant {tenant.code}: catalog exists, skipped")
            else:
                self.stdout.write(self.style.SUCCESS(f"Tenant {tenant.code}: seeded"))
