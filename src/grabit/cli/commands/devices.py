"""CLI commands for the device inventory."""

from collections.abc import Callable
from typing import Annotated, Any

import typer

from ..base import BaseCLI
from ...devices import DeviceRepository

devices_app = typer.Typer(help="Device inventory commands.")


class DevicesCLI(BaseCLI):
    """CLI helpers wrapping DeviceRepository operations."""

    def __init__(self, make_repository: Callable[[], DeviceRepository] = DeviceRepository) -> None:
        super().__init__("devices")
        self.make_repository = make_repository

    def ping(self) -> dict[str, Any]:
        return self.handle_cli_operation(operation="devices ping", op_callable=self._ping)

    def add(self, name: str, device_type: str) -> dict[str, Any]:
        return self.handle_cli_operation(
            operation="devices add",
            op_callable=lambda: self._add(name, device_type),
        )

    def reserve(self, device_id: int) -> dict[str, Any]:
        return self.handle_cli_operation(
            operation="devices reserve",
            op_callable=lambda: self._changed(
                self.make_repository().update(device_id),
                f"Device {device_id} marked BUSY",
                f"No device with id {device_id}",
            ),
        )

    def remove(self, device_id: int) -> dict[str, Any]:
        return self.handle_cli_operation(
            operation="devices remove",
            op_callable=lambda: self._changed(
                self.make_repository().delete(device_id),
                f"Device {device_id} removed",
                f"No device with id {device_id}",
            ),
        )

    def list_devices(self) -> dict[str, Any]:
        return self.handle_cli_operation(
            operation="devices list",
            op_callable=lambda: self._listing(self.make_repository().select()),
        )

    def count(self) -> dict[str, Any]:
        return self.handle_cli_operation(
            operation="devices count",
            op_callable=lambda: {"success": True, "total": self.make_repository().count()},
        )

    def _ping(self) -> dict[str, Any]:
        """Open and close one connection, mirroring a connectivity check."""
        repo = self.make_repository()
        opened = repo.open_connection()
        closed = repo.close_connection() if opened else False
        return {"success": opened and closed}

    def _add(self, name: str, device_type: str) -> dict[str, Any]:
        device_id = self.make_repository().insert(name, device_type)
        if device_id is None:
            return {"success": False, "message": "Device was not added"}
        return {"success": True, "message": f"Added device {device_id}"}

    @staticmethod
    def _changed(rowcount: int, ok: str, missing: str) -> dict[str, Any]:
        if rowcount > 0:
            return {"success": True, "message": ok}
        return {"success": False, "message": missing}

    @staticmethod
    def _listing(lines: list[str]) -> dict[str, Any]:
        return {"success": True, "total": len(lines), "items": lines}


cli = DevicesCLI()


def _exit_on_failure(result: dict[str, Any]) -> None:
    if not result.get("success"):
        raise typer.Exit(1)


@devices_app.command("ping")
def ping_command() -> None:
    """Open and close a connection to check connectivity and credentials."""
    _exit_on_failure(cli.ping())


@devices_app.command("add")
def add_command(
    name: Annotated[str, typer.Argument(help="Device name")],
    device_type: Annotated[str, typer.Argument(metavar="TYPE", help="Device type")],
) -> None:
    """Add a device; new devices start AVAILABLE."""
    _exit_on_failure(cli.add(name, device_type))


@devices_app.command("reserve")
def reserve_command(
    device_id: Annotated[int, typer.Argument(help="Device id")],
) -> None:
    """Mark a device BUSY."""
    _exit_on_failure(cli.reserve(device_id))


@devices_app.command("remove")
def remove_command(
    device_id: Annotated[int, typer.Argument(help="Device id")],
) -> None:
    """Delete a device."""
    _exit_on_failure(cli.remove(device_id))


@devices_app.command("list")
def list_command() -> None:
    """List all devices ordered by id."""
    cli.list_devices()


@devices_app.command("count")
def count_command() -> None:
    """Print the number of devices."""
    cli.count()


app = devices_app
