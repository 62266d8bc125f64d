# PATH: apps/core/management/commands/set_tenant_sender.py
"""
테넌트별 발신번호(messaging_sender) 설정. 재시험 안내 문자의 발신번호로 쓰인다.

사용:
  python manage.py set_tenant_sender --tenant=hanbit --sender=0212345678
  python manage.py set_tenant_sender --tenant=1 --sender=01031217466
"""
from django.core.management.base import BaseCommand, CommandError

from apps.core.models import Tenant
from apps.support.messaging.services import normalize_phone


def get_tenant_by_code_or_id(value: str) -> Tenant:
    value = str(value or "").strip()
    qs = Tenant.objects.filter(id=int(value)) if value.isdigit() else Tenant.objects.filter(code=value)
    tenant = qs.first()
    if tenant is None:
        raise CommandError(f"Tenant '{value}' not found.")
    return tenant


class Command(BaseCommand):
    help = "Set Tenant.messaging_sender for retake notice SMS."

    def add_arguments(self, parser):
        parser.add_argument("--tenant", type=str, required=True, help="Tenant code or id (e.g. hanbit, 1)")
        parser.add_argument("--sender", type=str, required=True, help="발신번호 (예: 01031217466)")

    def handle(self, *args, **options):
        sender = normalize_phone(options["sender"])
        if len(sender) < 10:
            raise CommandError("올바른 발신번호를 입력하세요 (예: 01031217466)")

        tenant = get_tenant_by_code_or_id(options["tenant"])
        old = (tenant.messaging_sender or "").strip()
        tenant.messaging_sender = sender
        tenant.save(update_fields=["messaging_sender"])
        self.stdout.write(
            self.style.SUCCESS(f"Tenant {tenant.code} (id={tenant.id}): messaging_sender {old or '(empty)'} -> {sender}")
        )
