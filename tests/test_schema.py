import pytest
from rest_framework import status

from config.schema import assign_group_tag
from config.schema import group_tags


def test_assign_group_tag():
    assert assign_group_tag("/api/v1/hrm-devices/{id}/rotate-key/") == "HRM Devices"
    assert assign_group_tag("/api/v1/devices/me/") == "Device Access"
    assert assign_group_tag("/health/") is None


def test_group_tags_overrides_operation_tags():
    result = {
        "paths": {
            "/api/v1/devices/me/": {
                "get": {"tags": ["api"]},
                "parameters": [],
            },
        },
    }
    out = group_tags(result)
    assert out["paths"]["/api/v1/devices/me/"]["get"]["tags"] == ["Device Access"]
    assert {t["name"] for t in out["tags"]} >= {"HRM Devices", "Device Access"}


@pytest.mark.django_db
def test_schema_endpoint_is_staff_only(client, staff_client):
    assert client.get("/api/v1/schema/").status_code in {
        status.HTTP_401_UNAUTHORIZED,
        status.HTTP_403_FORBIDDEN,
    }
    res = staff_client.get("/api/v1/schema/", {"format": "json"})
    assert res.status_code == status.HTTP_200_OK
    assert b"deviceApiKey" in res.content
    assert b"/api/v1/hrm-devices/" in res.content
