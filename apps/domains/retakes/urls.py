# PATH: apps/domains/retakes/urls.py

from rest_framework.routers import SimpleRouter

from .views import ManagementStatusViewSet, RetakeViewSet

router = SimpleRouter()
# 카탈로그를 먼저 등록 (retake 상세 경로보다 우선)
router.register("management-statuses", ManagementStatusViewSet, basename="retake-management-status")
router.register("", RetakeViewSet, basename="retake")

urlpatterns = router.urls
