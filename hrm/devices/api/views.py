from drf_spectacular.utils import OpenApiParameter
from drf_spectacular.utils import OpenApiTypes
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAdminUser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from hrm.devices.authentication import HrmDeviceAPIKeyAuthentication
from hrm.devices.models import HrmDevice

from .serializers import DeviceIdentitySerializer
from .serializers import HrmDeviceSerializer

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@extend_schema_view(
    list=extend_schema(
        tags=["HRM Devices"],
        parameters=[
            OpenApiParameter("organization", OpenApiTypes.INT, required=False),
            OpenApiParameter("active", OpenApiTypes.BOOL, required=False),
        ],
    ),
    retrieve=extend_schema(tags=["HRM Devices"]),
    create=extend_schema(tags=["HRM Devices"]),
    update=extend_schema(tags=["HRM Devices"]),
    partial_update=extend_schema(tags=["HRM Devices"]),
    destroy=extend_schema(tags=["HRM Devices"]),
)
class HrmDeviceViewSet(viewsets.ModelViewSet):
    """Staff management of HRM devices.

    The API key is generated on create and only changes via ``rotate-key``.
    """

    serializer_class = HrmDeviceSerializer
    permission_classes = [IsAuthenticated, IsAdminUser]
    queryset = HrmDevice.objects.select_related("organization")

    def get_queryset(self):
        qs = super().get_queryset()
        params = self.request.query_params

        org = params.get("organization")
        if org and str(org).isdigit():
            qs = qs.filter(organization_id=int(org))

        active = str(params.get("active", "")).strip().lower()
        if active in _TRUTHY:
            qs = qs.filter(active=True)
        elif active in _FALSY:
            qs = qs.filter(active=False)
        return qs

    @extend_schema(tags=["HRM Devices"], request=None, responses=HrmDeviceSerializer)
    @action(detail=True, methods=["post"], url_path="rotate-key")
    def rotate_key(self, request, pk=None):
        device = self.get_object()
        device.rotate_api_key()
        return Response(self.get_serializer(device).data)


class DeviceIdentityView(APIView):
    """Lets a device verify its API key and read its own registration."""

    authentication_classes = [HrmDeviceAPIKeyAuthentication]
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["HRM Devices"], responses=DeviceIdentitySerializer)
    def get(self, request):
        return Response(DeviceIdentitySerializer(request.auth).data)
