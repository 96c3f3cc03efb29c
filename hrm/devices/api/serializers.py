from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from hrm.devices.models import HrmDevice


class HrmDeviceSerializer(serializers.ModelSerializer):
    allowed_ips = serializers.ListField(
        child=serializers.CharField(max_length=64),
        required=False,
        allow_empty=True,
    )

    class Meta:
        model = HrmDevice
        fields = [
            "id",
            "organization",
            "name",
            "api_key",
            "active",
            "allowed_ips",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["api_key", "created_at", "updated_at"]

    def validate_allowed_ips(self, value):
        probe = HrmDevice(allowed_ips=[v.strip() for v in value])
        try:
            probe.clean()
        except DjangoValidationError as exc:
            raise serializers.ValidationError(exc.message_dict["allowed_ips"]) from exc
        return probe.allowed_ips


class DeviceIdentitySerializer(serializers.ModelSerializer):
    """What an authenticated device may learn about itself."""

    organization_name = serializers.CharField(
        source="organization.name",
        read_only=True,
    )

    class Meta:
        model = HrmDevice
        fields = ["id", "organization", "organization_name", "name", "active"]
        read_only_fields = fields
