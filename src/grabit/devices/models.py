"""Device row model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


class DeviceStatus(str, Enum):
    """Availability of a device. New rows start AVAILABLE."""

    AVAILABLE = "AVAILABLE"
    BUSY = "BUSY"


@dataclass(frozen=True)
class Device:
    """One row of the `devices` table."""

    device_id: int
    name: str
    type: str
    status: DeviceStatus

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Device:
        """Build a Device from a dict-like database row.

        Raises:
            KeyError: If a column is missing.
            ValueError: If status is not AVAILABLE or BUSY.
        """
        return cls(
            device_id=int(row["device_id"]),
            name=row["name"],
            type=row["type"],
            status=DeviceStatus(row["status"]),
        )

    def __str__(self) -> str:
        return f"{self.device_id}: {self.name} ({self.type}) {self.status.value}"
