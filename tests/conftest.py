from __future__ import annotations

import sqlite3
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pymysql
import pytest

from grabit.database.config import DatabaseConfig
from grabit.devices import DeviceRepository
from grabit.utils.event_log import EventLog

# SQLite stand-in for the MySQL `devices` table (AUTO_INCREMENT/ENUM are MySQL-only).
SQLITE_DEVICES_SCHEMA = """
CREATE TABLE IF NOT EXISTS devices (
    device_id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    type TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'AVAILABLE' CHECK (status IN ('AVAILABLE', 'BUSY'))
);
"""


class SqliteCursor:
    """Cursor exposing the slice of the PyMySQL DictCursor API the project uses."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._cursor = conn.cursor()

    def __enter__(self) -> SqliteCursor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def execute(self, sql: str, params: tuple | None = None) -> int:
        try:
            self._cursor.execute(sql.replace("%s", "?"), tuple(params or ()))
        except sqlite3.IntegrityError as exc:
            raise pymysql.err.IntegrityError(1452, str(exc)) from exc
        except sqlite3.Error as exc:
            raise pymysql.err.ProgrammingError(1146, str(exc)) from exc
        return self._cursor.rowcount

    def fetchone(self) -> dict[str, Any] | None:
        row = self._cursor.fetchone()
        return dict(row) if row is not None else None

    def fetchall(self) -> list[dict[str, Any]]:
        return [dict(row) for row in self._cursor.fetchall()]

    @property
    def rowcount(self) -> int:
        return self._cursor.rowcount

    @property
    def lastrowid(self) -> int | None:
        return self._cursor.lastrowid

    def close(self) -> None:
        self._cursor.close()


class SqliteConnection:
    """Connection with PyMySQL's close/commit/rollback behavior over a SQLite file."""

    def __init__(self, path: Path) -> None:
        self._conn = sqlite3.connect(path)
        self._conn.row_factory = sqlite3.Row
        self.closed = False
        self.commits = 0
        self.rollbacks = 0

    def cursor(self) -> SqliteCursor:
        if self.closed:
            raise pymysql.err.InterfaceError(0, "")
        return SqliteCursor(self._conn)

    def commit(self) -> None:
        self.commits += 1
        self._conn.commit()

    def rollback(self) -> None:
        self.rollbacks += 1
        self._conn.rollback()

    def close(self) -> None:
        if self.closed:
            raise pymysql.err.Error("Already closed")
        self._conn.close()
        self.closed = True


@pytest.fixture(autouse=True)
def app_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Forces test mode and clears connection settings inherited from the shell.
    Automatically applied to all tests.
    """
    monkeypatch.setenv("APP_ENV", "test")
    for key in (
        "GRABIT_DB_HOST",
        "GRABIT_DB_PORT",
        "GRABIT_DB_NAME",
        "GRABIT_DB_USER",
        "GRABIT_DB_PASSWORD",
        "GRABIT_DB_PASSWORD_FILE",
        "GRABIT_DB_CONNECT_TIMEOUT",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """
    A dedicated temp root directory for each test.
    All filesystem writes in tests should be under this root (or tmp_path directly).
    """
    root = tmp_path / "proj"
    (root / "data" / "out").mkdir(parents=True)
    return root


@pytest.fixture(autouse=True)
def chdir_to_project_root(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Automatically change working directory to project_root for all tests.
    This keeps `error_log.txt` inside the temp directory.
    """
    monkeypatch.chdir(project_root)


@pytest.fixture
def sqlite_path(project_root: Path) -> Path:
    """
    On-disk SQLite DB under the temp project root (more realistic than :memory:).
    """
    return project_root / "data" / "out" / "test.sqlite"


@pytest.fixture
def device_db(sqlite_path: Path, project_root: Path) -> Path:
    """SQLite file with an empty `devices` table."""
    try:
        sqlite_path.resolve().relative_to(project_root.resolve())
    except ValueError:
        raise AssertionError(
            f"SQLite path {sqlite_path} is not under project_root {project_root}. "
            "This prevents accidental writes to real databases."
        )

    conn = sqlite3.connect(sqlite_path)
    try:
        conn.executescript(SQLITE_DEVICES_SCHEMA)
        conn.commit()
    finally:
        conn.close()
    return sqlite_path


@pytest.fixture
def db_conn(device_db: Path) -> Iterator[sqlite3.Connection]:
    """A direct SQLite connection for asserting on stored rows."""
    conn = sqlite3.connect(device_db)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def sqlite_connect(device_db: Path) -> Callable[..., SqliteConnection]:
    """`connect` replacement that opens SqliteConnections and records each call."""
    calls: list[dict[str, Any]] = []
    connections: list[SqliteConnection] = []

    def connect(**kwargs: Any) -> SqliteConnection:
        calls.append(kwargs)
        conn = SqliteConnection(device_db)
        connections.append(conn)
        return conn

    connect.calls = calls  # type: ignore[attr-defined]
    connect.connections = connections  # type: ignore[attr-defined]
    return connect


@pytest.fixture
def failing_connect() -> Callable[[Exception], Callable[..., Any]]:
    """Factory for `connect` replacements that always raise the given error."""

    def make(error: Exception) -> Callable[..., Any]:
        def connect(**kwargs: Any) -> Any:
            raise error

        return connect

    return make


@pytest.fixture
def db_config() -> DatabaseConfig:
    return DatabaseConfig(password="test-secret")


@pytest.fixture
def error_log_path(project_root: Path) -> Path:
    return project_root / "error_log.txt"


@pytest.fixture
def repo(
    db_config: DatabaseConfig,
    sqlite_connect: Callable[..., SqliteConnection],
    error_log_path: Path,
) -> DeviceRepository:
    return DeviceRepository(
        db_config,
        connect=sqlite_connect,
        event_log=EventLog(error_log_path),
    )
