from django.apps import AppConfig


class RetakesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.domains.retakes"
    label = "retakes"

    def ready(self):
        import apps.domains.retakes.signals  # noqa: F401
