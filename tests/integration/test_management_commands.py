"""
운영 명령: set_tenant_sender / seed_management_statuses.
"""
from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from apps.domains.retakes.models import ManagementStatus

pytestmark = pytest.mark.django_db


class TestSetTenantSender:
    def test_sets_sender_by_code(self, tenant):
        out = StringIO()

        call_command("set_tenant_sender", "--tenant=hanbit", "--sender=010-3121-7466", stdout=out)

        tenant.refresh_from_db()
        assert tenant.messaging_sender == "01031217466"
        assert "0212345678 -> 01031217466" in out.getvalue()

    def test_sets_sender_by_id(self, tenant):
        call_command("set_tenant_sender", f"--tenant={tenant.id}", "--sender=0299998888", stdout=StringIO())

        tenant.refresh_from_db()
        assert tenant.messaging_sender == "0299998888"

    def test_rejects_short_sender(self, tenant):
        with pytest.raises(CommandError):
            call_command("set_tenant_sender", "--tenant=hanbit", "--sender=1234")

    def test_unknown_tenant(self, db):
        with pytest.raises(CommandError):
            call_command("set_tenant_sender", "--tenant=nope", "--sender=01031217466")


class TestSeedManagementStatuses:
    def test_new_tenant_is_already_seeded(self, tenant):
        out = StringIO()

        call_command("seed_management_statuses", "--tenant=hanbit", stdout=out)

        assert ManagementStatus.objects.filter(tenant=tenant).count() == 9
        assert "skipped" in out.getvalue()

    def test_seeds_every_active_tenant(self, tenant, other_tenant):
        # 시드 이전에 만들어진 tenant
        ManagementStatus.objects.all().delete()

        call_command("seed_management_statuses", stdout=StringIO())

        assert ManagementStatus.objects.filter(tenant=tenant).count() == 9
        assert ManagementStatus.objects.filter(tenant=other_tenant).count() == 9

    def test_existing_catalog_is_untouched(self, tenant):
        ManagementStatus.objects.filter(tenant=tenant).delete()
        ManagementStatus.objects.create(tenant=tenant, name="자체 상태", color="info", display_order=1)
        out = StringIO()

        call_command("seed_management_statuses", "--tenant=hanbit", stdout=out)

        assert list(ManagementStatus.objects.filter(tenant=tenant).values_list("name", flat=True)) == ["자체 상태"]
        assert "skipped" in out.getvalue()
