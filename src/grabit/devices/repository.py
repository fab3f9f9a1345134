"""Repository for the `devices` table.

Each public operation opens a fresh connection, runs one statement in a
commit/rollback scope, and closes the connection again. Failures are
recorded in the event log and turned into a failure value; nothing
raises out of the public surface.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

import pymysql

from .. import global_config as g
from ..database import crud
from ..database.config import DatabaseConfig
from ..database.connection import ConnectFn, get_connection, transaction
from ..database.errors import (
    AuthenticationError,
    DatabaseError,
    ServerUnreachableError,
)
from ..utils.event_log import EventLog
from .models import Device, DeviceStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")

MSG_CONNECTED = "Connected to DB"
MSG_DISCONNECTED = "Disconnected from DB"
MSG_UNREACHABLE = "Cannot connect to Server"
MSG_BAD_CREDENTIALS = "Invalid username/password. Please try again"
MSG_CONNECT_UNEXPECTED = "An unexpected error occurred while connecting to the database."
MSG_CLOSE_ERROR = "An error occurred while closing the connection."
MSG_CLOSE_UNEXPECTED = "An unexpected error occurred while closing the connection."
MSG_STATEMENT_ERROR = "An error occurred while executing the statement."


class DeviceRepository:
    """Insert, update, delete, select, and count devices."""

    def __init__(
        self,
        config: DatabaseConfig | None = None,
        *,
        connect: ConnectFn | None = None,
        event_log: EventLog | None = None,
    ) -> None:
        """Create a repository.

        Args:
            config: Connection settings. Defaults to `DatabaseConfig.from_env()`.
            connect: Callable used to open connections. Defaults to
                `pymysql.connect`.
            event_log: Event sink. Defaults to `error_log.txt` in the
                working directory, echoed to stdout.

        Raises:
            ConfigError: If config is omitted and a GRABIT_DB_* setting is
                malformed.
        """
        self.config = config or DatabaseConfig.from_env()
        self.table = g.DEVICES_TABLE
        self._connect = connect
        self._events = event_log or EventLog()
        self._connection: Any | None = None

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    def open_connection(self) -> bool:
        """Open a fresh connection to the store.

        A connection still held from an earlier call is closed first.

        Returns:
            True if the connection is open, False otherwise.

        Side Effects:
            - Records "Connected to DB" or a categorized failure in the event log.
        """
        if self._connection is not None:
            self.close_connection()

        try:
            self._connection = get_connection(self.config, connect=self._connect)
        except ServerUnreachableError as exc:
            self._events.record(MSG_UNREACHABLE, exc)
        except AuthenticationError as exc:
            self._events.record(MSG_BAD_CREDENTIALS, exc)
        except Exception as exc:  # noqa: BLE001
            self._events.record(MSG_CONNECT_UNEXPECTED, exc)
        else:
            self._events.record(MSG_CONNECTED)
            return True

        self._connection = None
        return False

    def close_connection(self) -> bool:
        """Close the connection opened by `open_connection`.

        Closing twice (or without opening) is reported, not raised.

        Returns:
            True if the connection was closed, False otherwise.

        Side Effects:
            - Records "Disconnected from DB" or the close failure in the event log.
        """
        conn = self._connection
        self._connection = None
        if conn is None:
            self._events.record(MSG_CLOSE_ERROR, DatabaseError("Connection is not open"))
            return False

        try:
            conn.close()
        except pymysql.MySQLError as exc:
            self._events.record(MSG_CLOSE_ERROR, exc)
        except Exception as exc:  # noqa: BLE001
            self._events.record(MSG_CLOSE_UNEXPECTED, exc)
        else:
            self._events.record(MSG_DISCONNECTED)
            return True

        return False

    def insert(self, name: str, device_type: str) -> int | None:
        """Add a device with status AVAILABLE.

        Returns:
            The generated device_id, or None if nothing was inserted.
        """
        values = {"name": name, "type": device_type, "status": DeviceStatus.AVAILABLE.value}
        return self._run(
            "insert",
            lambda conn: crud.insert(conn, self.table, values),
            default=None,
        )

    def update(self, device_id: int) -> int:
        """Mark a device BUSY.

        Returns:
            Number of rows changed (0 if the id is unknown or the call failed).
        """
        return self._run(
            "update",
            lambda conn: crud.update(
                conn,
                self.table,
                {"device_id": device_id},
                {"status": DeviceStatus.BUSY.value},
            ),
            default=0,
        )

    def delete(self, device_id: int) -> int:
        """Remove a device.

        Returns:
            Number of rows removed (0 if the id is unknown or the call failed).
        """
        return self._run(
            "delete",
            lambda conn: crud.delete(conn, self.table, {"device_id": device_id}),
            default=0,
        )

    def select_devices(self) -> list[Device]:
        """Return every device ordered by id (empty if the store is unreachable)."""
        return self._run(
            "select",
            lambda conn: [
                Device.from_row(row)
                for row in crud.select(conn, self.table, order_by="device_id")
            ],
            default=[],
        )

    def select(self) -> list[str]:
        """Return every device as a display line, ordered by id."""
        return [str(device) for device in self.select_devices()]

    def count(self) -> int:
        """Return the number of devices (0 if the store is unreachable)."""
        return self._run("count", lambda conn: crud.count(conn, self.table), default=0)

    def _run(self, operation: str, statement: Callable[[Any], T], *, default: T) -> T:
        """Open, run one statement in a transaction, and close.

        Args:
            operation: Name used in debug logs.
            statement: Callable receiving the open connection.
            default: Value returned when the connection cannot be opened or
                the statement fails.

        Returns:
            The statement's result, or default.
        """
        if not self.open_connection():
            logger.debug("Skipping %s: no connection", operation)
            return default

        result = default
        try:
            with transaction(existing_connection=self._connection) as conn:
                value = statement(conn)
            result = value
        except Exception as exc:  # noqa: BLE001
            self._events.record(MSG_STATEMENT_ERROR, exc)
        finally:
            self.close_connection()

        logger.debug("%s on %s -> %r", operation, self.table, result)
        return result
