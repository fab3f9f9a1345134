"""Device inventory: row model and the `devices` table repository."""

from .models import Device, DeviceStatus
from .repository import DeviceRepository

__all__ = ["Device", "DeviceRepository", "DeviceStatus"]
