from django.apps import AppConfig


class IamConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "sm_core.iam"

    def ready(self) -> None:
        # import here so app loading doesn't break tooling
        from sm_core.iam import openapi  # noqa: F401
