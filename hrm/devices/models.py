import ipaddress
import secrets

from django.core.exceptions import ValidationError
from django.db import models

API_KEY_PREFIX = "hrm_"


def generate_api_key() -> str:
    return f"{API_KEY_PREFIX}{secrets.token_urlsafe(32)}"


def _parse_network(value: str):
    """Parse an allow-list entry as a single address or a CIDR network."""
    return ipaddress.ip_network(str(value).strip(), strict=False)


class HrmDeviceQuerySet(models.QuerySet):
    def active(self):
        return self.filter(active=True)

    def for_organization(self, organization):
        return self.filter(organization=organization)


class HrmDevice(models.Model):
    """Attendance/reporting device registered to an organization.

    Devices authenticate against the API with ``api_key``. When
    ``allowed_ips`` is non-empty, requests must also originate from one of the
    listed addresses or CIDR ranges.
    """

    organization = models.ForeignKey(
        "org.Organization",
        on_delete=models.PROTECT,
        related_name="hrm_devices",
        db_index=True,
    )
    name = models.CharField(max_length=150)
    api_key = models.CharField(max_length=128, unique=True, db_index=True)
    active = models.BooleanField(default=True)
    allowed_ips = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = HrmDeviceQuerySet.as_manager()

    class Meta:
        ordering = ["organization_id", "name"]
        verbose_name = "HRM device"

    def __str__(self) -> str:  # pragma: no cover - simple repr
        return f"HrmDevice({self.name}@{self.organization_id})"

    def save(self, *args, **kwargs):
        if not self.api_key:
            self.api_key = generate_api_key()
        super().save(*args, **kwargs)

    def clean(self):
        if not isinstance(self.allowed_ips, list):
            raise ValidationError({"allowed_ips": "Must be a list of IPs or CIDRs."})
        invalid = []
        for entry in self.allowed_ips:
            try:
                _parse_network(entry)
            except ValueError:
                invalid.append(str(entry))
        if invalid:
            msg = f"Invalid IP or CIDR: {', '.join(invalid)}"
            raise ValidationError({"allowed_ips": msg})

    def is_ip_allowed(self, remote_ip: str | None) -> bool:
        """Return True if remote_ip may use this device's key."""
        # An empty allow-list places no restriction on the caller.
        if not self.allowed_ips:
            return True
        if not remote_ip:
            return False
        try:
            addr = ipaddress.ip_address(str(remote_ip).strip())
        except ValueError:
            return False
        for entry in self.allowed_ips:
            try:
                network = _parse_network(entry)
            except ValueError:
                continue
            if addr in network:
                return True
        return False

    def rotate_api_key(self) -> str:
        self.api_key = generate_api_key()
        self.save(update_fields=["api_key", "updated_at"])
        return self.api_key
