"""
TenantMiddleware / health: tenant 확정 실패 응답 형식.
"""
import pytest

from apps.core.tenant import get_current_tenant

pytestmark = pytest.mark.django_db


class TestTenantResolution:
    def test_unknown_code_is_404(self, api_client):
        api_client.credentials(HTTP_X_TENANT_CODE="nope")

        resp = api_client.get("/api/v1/retakes/")

        assert resp.status_code == 404
        assert resp.json()["code"] == "tenant_invalid"

    def test_inactive_tenant_is_403(self, api_client, tenant):
        tenant.is_active = False
        tenant.save(update_fields=["is_active"])

        resp = api_client.get("/api/v1/retakes/")

        assert resp.status_code == 403
        assert resp.json()["code"] == "tenant_inactive"

    def test_missing_header_with_many_tenants(self, api_client, other_tenant):
        api_client.credentials()

        resp = api_client.get("/api/v1/retakes/")

        assert resp.status_code == 400
        assert resp.json()["code"] == "tenant_missing"

    def test_query_param(self, api_client, tenant):
        api_client.credentials()

        resp = api_client.get("/api/v1/retakes/", {"tenant": tenant.code})

        assert resp.status_code == 200

    def test_context_is_reset_after_request(self, api_client):
        api_client.get("/api/v1/retakes/")

        assert get_current_tenant() is None


class TestHealth:
    def test_health_needs_no_tenant(self, client, tenant, other_tenant):
        resp = client.get("/api/v1/health/")

        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"
