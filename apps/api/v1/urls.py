# apps/api/v1/urls.py
from django.urls import path, include

from apps.api.common.views import health_check

urlpatterns = [
    # =========================
    # Health
    # =========================
    path("health/", health_check, name="health-check"),

    # =========================
    # Domain APIs
    # =========================
    path("retakes/", include("apps.domains.retakes.urls")),
]
