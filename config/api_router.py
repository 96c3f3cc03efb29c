from django.conf import settings
from django.urls import path
from rest_framework.routers import DefaultRouter
from rest_framework.routers import SimpleRouter

from hrm.devices.api.views import DeviceIdentityView
from hrm.devices.api.views import HrmDeviceViewSet

router = DefaultRouter() if settings.DEBUG else SimpleRouter()

router.register("hrm-devices", HrmDeviceViewSet, basename="hrm-devices")


app_name = "api"
urlpatterns = [
    # Device-facing endpoint, authenticated by API key rather than JWT.
    path("devices/me/", DeviceIdentityView.as_view(), name="device-identity"),
    *router.urls,
]
