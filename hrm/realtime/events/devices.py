from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any

if TYPE_CHECKING:  # import for type checking only
    from hrm.devices.models import HrmDevice

DEVICE_CREATED = "hrm_device.created"
DEVICE_UPDATED = "hrm_device.updated"
DEVICE_DELETED = "hrm_device.deleted"


def build_device_payload(device: HrmDevice, *, pk: int | None = None) -> dict[str, Any]:
    # The API key is a credential and never leaves the server.
    return {
        "id": pk if pk is not None else device.pk,
        "organization": device.organization_id,
        "name": device.name,
        "active": device.active,
    }


def device_saved_message(device: HrmDevice, *, created: bool) -> tuple[str, dict[str, Any]]:
    event = DEVICE_CREATED if created else DEVICE_UPDATED
    return event, build_device_payload(device)


def device_deleted_message(device: HrmDevice, *, pk: int) -> tuple[str, dict[str, Any]]:
    return DEVICE_DELETED, build_device_payload(device, pk=pk)
