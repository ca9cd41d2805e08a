from django.apps import AppConfig


class CommonConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "sm_core.common"

    def ready(self) -> None:
        from sm_core.common.logging import install_record_factory

        install_record_factory()
