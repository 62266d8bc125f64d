from django.apps import AppConfig


class LecturesConfig(AppConfig):
    """강의(수업) 참조 데이터. 재시험 목록의 "수업" 필터 기준."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.domains.lectures"
    label = "lectures"
    verbose_name = "강의"
