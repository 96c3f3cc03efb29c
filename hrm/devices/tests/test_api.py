import pytest
from rest_framework import status
from rest_framework.test import APIClient

from hrm.devices.models import HrmDevice
from tests.factories import create_device
from tests.factories import create_organization
from tests.factories import create_user

LIST_URL = "/api/v1/hrm-devices/"


def detail_url(pk: int) -> str:
    return f"{LIST_URL}{pk}/"


@pytest.mark.django_db
class TestHrmDeviceViewSet:
    def test_requires_authentication(self):
        res = APIClient().get(LIST_URL)
        assert res.status_code == status.HTTP_401_UNAUTHORIZED

    def test_non_staff_is_forbidden(self):
        client = APIClient()
        client.force_authenticate(user=create_user("clerk"))
        res = client.get(LIST_URL)
        assert res.status_code == status.HTTP_403_FORBIDDEN

    def test_create_generates_api_key(self, staff_client, organization):
        res = staff_client.post(
            LIST_URL,
            {
                "organization": organization.pk,
                "name": "Reception",
                "allowed_ips": ["10.0.0.0/24"],
                "api_key": "client-chosen",
            },
            format="json",
        )
        assert res.status_code == status.HTTP_201_CREATED
        assert res.data["active"] is True
        assert res.data["allowed_ips"] == ["10.0.0.0/24"]
        assert res.data["api_key"] != "client-chosen"
        device = HrmDevice.objects.get(pk=res.data["id"])
        assert device.api_key == res.data["api_key"]

    def test_create_requires_name_and_organization(self, staff_client):
        res = staff_client.post(LIST_URL, {}, format="json")
        assert res.status_code == status.HTTP_400_BAD_REQUEST
        assert "name" in res.data
        assert "organization" in res.data

    def test_create_rejects_invalid_allowed_ips(self, staff_client, organization):
        res = staff_client.post(
            LIST_URL,
            {
                "organization": organization.pk,
                "name": "Reception",
                "allowed_ips": ["300.1.1.1"],
            },
            format="json",
        )
        assert res.status_code == status.HTTP_400_BAD_REQUEST
        assert "allowed_ips" in res.data

    def test_list_filters(self, staff_client, organization):
        other_org = create_organization("Globex")
        on = create_device(organization, name="on")
        off = create_device(organization, name="off", active=False)
        elsewhere = create_device(other_org, name="elsewhere")

        res = staff_client.get(LIST_URL, {"organization": organization.pk})
        assert {row["id"] for row in res.data} == {on.pk, off.pk}

        res = staff_client.get(LIST_URL, {"active": "false"})
        assert [row["id"] for row in res.data] == [off.pk]

        res = staff_client.get(LIST_URL, {"active": "true"})
        assert {row["id"] for row in res.data} == {on.pk, elsewhere.pk}

    def test_partial_update_toggles_active(self, staff_client, device):
        res = staff_client.patch(
            detail_url(device.pk),
            {"active": False, "allowed_ips": ["192.168.1.10"]},
            format="json",
        )
        assert res.status_code == status.HTTP_200_OK
        device.refresh_from_db()
        assert device.active is False
        assert device.allowed_ips == ["192.168.1.10"]

    def test_api_key_is_read_only_on_update(self, staff_client, device):
        old_key = device.api_key
        res = staff_client.patch(
            detail_url(device.pk),
            {"api_key": "hijacked"},
            format="json",
        )
        assert res.status_code == status.HTTP_200_OK
        device.refresh_from_db()
        assert device.api_key == old_key

    def test_rotate_key(self, staff_client, device):
        old_key = device.api_key
        res = staff_client.post(f"{detail_url(device.pk)}rotate-key/")
        assert res.status_code == status.HTTP_200_OK
        device.refresh_from_db()
        assert device.api_key != old_key
        assert res.data["api_key"] == device.api_key

    def test_destroy(self, staff_client, device):
        res = staff_client.delete(detail_url(device.pk))
        assert res.status_code == status.HTTP_204_NO_CONTENT
        assert not HrmDevice.objects.filter(pk=device.pk).exists()
