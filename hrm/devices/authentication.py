from __future__ import annotations

import ipaddress
import logging

from django.conf import settings
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed

from hrm.devices.models import HrmDevice

logger = logging.getLogger(__name__)


def _trusted_proxies() -> list:
    networks = []
    for entry in getattr(settings, "HRM_DEVICE_TRUSTED_PROXIES", []) or []:
        try:
            networks.append(ipaddress.ip_network(str(entry).strip(), strict=False))
        except ValueError:
            logger.warning("Ignoring invalid trusted proxy entry %r", entry)
    return networks


def _is_trusted(ip: str, networks: list) -> bool:
    try:
        addr = ipaddress.ip_address(ip)
    except ValueError:
        return False
    return any(addr in net for net in networks)


def get_remote_ip(request) -> str | None:
    """Remote client IP for allow-list checks.

    Forwarding headers are only honoured when the direct peer (`REMOTE_ADDR`)
    is listed in `HRM_DEVICE_TRUSTED_PROXIES`. `X-Forwarded-For` is walked from
    the nearest hop back, skipping trusted proxies; `X-Real-IP` is the
    fallback.
    """
    meta = getattr(request, "META", {}) or {}
    remote_addr = str(meta.get("REMOTE_ADDR") or "").strip() or None
    trusted = _trusted_proxies()
    if remote_addr is None or not _is_trusted(remote_addr, trusted):
        return remote_addr

    xff = meta.get("HTTP_X_FORWARDED_FOR")
    if xff:
        # XFF format: client, proxy1, proxy2
        hops = [hop.strip() for hop in str(xff).split(",") if hop.strip()]
        for hop in reversed(hops):
            if not _is_trusted(hop, trusted):
                return hop
        return hops[0] if hops else remote_addr
    real_ip = str(meta.get("HTTP_X_REAL_IP") or "").strip()
    return real_ip or remote_addr


class DeviceUser:
    """Request principal for a device authenticated by API key."""

    is_authenticated = True
    is_anonymous = False
    is_staff = False

    def __init__(self, device: HrmDevice):
        self.device = device

    def __str__(self) -> str:  # pragma: no cover - simple repr
        return f"device:{self.device.pk}"


class HrmDeviceAPIKeyAuthentication(BaseAuthentication):
    """Authenticate HRM devices by the API key header.

    Returns None when no key is sent so other authenticators may run.
    """

    def _header_name(self) -> str:
        return getattr(settings, "HRM_DEVICE_API_KEY_HEADER", "X-Device-Key")

    def authenticate(self, request):
        api_key = request.headers.get(self._header_name())
        if not api_key:
            return None

        device = (
            HrmDevice.objects.select_related("organization")
            .filter(api_key=api_key.strip())
            .first()
        )
        if device is None:
            msg = "Invalid device API key."
            raise AuthenticationFailed(msg)
        if not device.active:
            msg = "Device is inactive."
            raise AuthenticationFailed(msg)

        remote_ip = get_remote_ip(request)
        if not device.is_ip_allowed(remote_ip):
            logger.warning(
                "Device %s rejected from disallowed IP %s",
                device.pk,
                remote_ip,
            )
            msg = "Request IP is not allowed for this device."
            raise AuthenticationFailed(msg)

        return (DeviceUser(device), device)

    def authenticate_header(self, request):
        return self._header_name()
