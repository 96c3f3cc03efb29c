from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class DevicesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "hrm.devices"
    verbose_name = _("HRM devices")

    def ready(self):
        import hrm.devices.schema  # noqa: F401, PLC0415
        import hrm.devices.signals  # noqa: F401, PLC0415
