from django.conf import settings
from drf_spectacular.extensions import OpenApiAuthenticationExtension


class HrmDeviceAPIKeyScheme(OpenApiAuthenticationExtension):
    target_class = "hrm.devices.authentication.HrmDeviceAPIKeyAuthentication"
    name = "deviceApiKey"

    def get_security_definition(self, auto_schema):
        return {
            "type": "apiKey",
            "in": "header",
            "name": getattr(settings, "HRM_DEVICE_API_KEY_HEADER", "X-Device-Key"),
        }
