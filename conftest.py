import pytest
from rest_framework.test import APIClient

from hrm.realtime import handle
from tests.factories import create_device
from tests.factories import create_organization
from tests.factories import create_user


@pytest.fixture(autouse=True)
def _reset_realtime_handle(monkeypatch):
    # The handle is process-global; isolate every test from the others.
    monkeypatch.setattr(handle, "_server", None)
    monkeypatch.setattr(handle, "_failure_count", 0)


@pytest.fixture
def organization(db):
    return create_organization("Acme Corp")


@pytest.fixture
def device(organization):
    return create_device(organization, name="Front door scanner")


@pytest.fixture
def staff_client(db):
    client = APIClient()
    client.force_authenticate(user=create_user("admin", is_staff=True))
    return client
