import pytest

from hrm.realtime import handle
from hrm.realtime.events.devices import DEVICE_CREATED
from hrm.realtime.events.devices import DEVICE_DELETED
from hrm.realtime.events.devices import DEVICE_UPDATED
from hrm.realtime.events.devices import build_device_payload
from tests.factories import create_device


class RecordingServer:
    def __init__(self):
        self.calls = []

    def emit(self, event, payload):
        self.calls.append((event, payload))


@pytest.fixture
def server():
    server = RecordingServer()
    handle.set_server(server)
    return server


@pytest.mark.django_db
def test_payload_never_contains_api_key(device):
    payload = build_device_payload(device)
    assert payload == {
        "id": device.pk,
        "organization": device.organization_id,
        "name": device.name,
        "active": True,
    }
    assert device.api_key not in payload.values()


@pytest.mark.django_db
def test_create_broadcasts_after_commit(
    server,
    organization,
    django_capture_on_commit_callbacks,
):
    with django_capture_on_commit_callbacks(execute=False) as callbacks:
        device = create_device(organization, name="Gate")
    # Nothing is sent until the transaction commits.
    assert server.calls == []

    for callback in callbacks:
        callback()
    assert server.calls == [(DEVICE_CREATED, build_device_payload(device))]


@pytest.mark.django_db
def test_update_broadcasts(server, device, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True):
        device.active = False
        device.save()
    event, payload = server.calls[-1]
    assert event == DEVICE_UPDATED
    assert payload["id"] == device.pk
    assert payload["active"] is False


@pytest.mark.django_db
def test_delete_broadcasts_original_id(
    server,
    device,
    django_capture_on_commit_callbacks,
):
    pk = device.pk
    with django_capture_on_commit_callbacks(execute=True):
        device.delete()
    event, payload = server.calls[-1]
    assert event == DEVICE_DELETED
    assert payload["id"] == pk


@pytest.mark.django_db
def test_save_without_server_is_silent(organization, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True):
        create_device(organization)
    assert handle.broadcast_failure_count() == 0


@pytest.mark.django_db
def test_failing_server_does_not_break_save(
    organization,
    django_capture_on_commit_callbacks,
):
    class BrokenServer:
        def emit(self, event, payload):
            msg = "socket closed"
            raise ConnectionError(msg)

    handle.set_server(BrokenServer())
    with django_capture_on_commit_callbacks(execute=True):
        device = create_device(organization)
    assert device.pk is not None
    assert handle.broadcast_failure_count() == 1


@pytest.mark.django_db
def test_each_save_broadcasts_its_own_state(
    server,
    organization,
    django_capture_on_commit_callbacks,
):
    with django_capture_on_commit_callbacks(execute=False) as callbacks:
        device = create_device(organization, name="Gate")
        device.name = "Lobby"
        device.save()

    for callback in callbacks:
        callback()
    assert [event for event, _ in server.calls] == [DEVICE_CREATED, DEVICE_UPDATED]
    assert server.calls[0][1]["name"] == "Gate"
    assert server.calls[1][1]["name"] == "Lobby"


@pytest.mark.django_db
def test_later_changes_do_not_leak_into_pending_broadcast(
    server,
    device,
    django_capture_on_commit_callbacks,
):
    with django_capture_on_commit_callbacks(execute=False) as callbacks:
        device.active = False
        device.save()
    # Unsaved edit made before the transaction commits.
    device.name = "Renamed"

    for callback in callbacks:
        callback()
    event, payload = server.calls[-1]
    assert event == DEVICE_UPDATED
    assert payload["name"] != "Renamed"
    assert payload["active"] is False
