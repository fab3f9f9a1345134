"""Tests for the Typer CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pymysql
import pytest
from typer.testing import CliRunner

from grabit.cli.commands import db as db_commands
from grabit.cli.commands import devices as device_commands
from grabit.cli.main import app
from grabit.database import ConnectionFailedError
from grabit.database.config import DatabaseConfig
from grabit.devices import DeviceRepository
from grabit.utils.event_log import EventLog

runner = CliRunner()


@pytest.fixture
def use_repo(monkeypatch: pytest.MonkeyPatch, repo: DeviceRepository) -> DeviceRepository:
    """Route CLI commands to the SQLite-backed repository."""
    monkeypatch.setattr(device_commands.cli, "make_repository", lambda: repo)
    return repo


@pytest.fixture
def unreachable_repo(
    monkeypatch: pytest.MonkeyPatch, failing_connect: Any, error_log_path: Path
) -> DeviceRepository:
    repo = DeviceRepository(
        DatabaseConfig(),
        connect=failing_connect(pymysql.err.OperationalError(2003, "Can't connect")),
        event_log=EventLog(error_log_path),
    )
    monkeypatch.setattr(device_commands.cli, "make_repository", lambda: repo)
    return repo


@pytest.mark.integration
def test_add_list_reserve_remove_count(use_repo: DeviceRepository) -> None:
    result = runner.invoke(app, ["devices", "add", "Zebra TC52", "scanner"])
    assert result.exit_code == 0, result.output
    assert "Added device 1" in result.output

    runner.invoke(app, ["devices", "add", "HP LaserJet", "printer"])

    result = runner.invoke(app, ["devices", "reserve", "2"])
    assert result.exit_code == 0
    assert "Device 2 marked BUSY" in result.output

    result = runner.invoke(app, ["devices", "list"])
    assert "1: Zebra TC52 (scanner) AVAILABLE" in result.output
    assert "2: HP LaserJet (printer) BUSY" in result.output

    result = runner.invoke(app, ["devices", "remove", "1"])
    assert result.exit_code == 0

    result = runner.invoke(app, ["devices", "count"])
    assert "total: 1" in result.output


@pytest.mark.integration
def test_reserve_unknown_device_exits_nonzero(use_repo: DeviceRepository) -> None:
    result = runner.invoke(app, ["devices", "reserve", "42"])

    assert result.exit_code == 1
    assert "No device with id 42" in result.output


@pytest.mark.integration
def test_ping_succeeds(use_repo: DeviceRepository) -> None:
    result = runner.invoke(app, ["devices", "ping"])

    assert result.exit_code == 0
    assert "Connected to DB" in result.output
    assert "Disconnected from DB" in result.output


@pytest.mark.unit
def test_ping_fails_when_unreachable(unreachable_repo: DeviceRepository) -> None:
    result = runner.invoke(app, ["devices", "ping"])

    assert result.exit_code == 1
    assert "Cannot connect to Server" in result.output


@pytest.mark.unit
def test_add_fails_when_unreachable(unreachable_repo: DeviceRepository) -> None:
    result = runner.invoke(app, ["devices", "add", "x", "y"])

    assert result.exit_code == 1
    assert "Device was not added" in result.output


@pytest.mark.unit
def test_db_init_reports_connection_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def refuse(*args: Any, **kwargs: Any) -> int:
        raise ConnectionFailedError("Can't connect")

    monkeypatch.setattr(db_commands, "initialize_database", refuse)

    result = runner.invoke(app, ["db", "init"])

    assert result.exit_code == 1
    assert "db init failed: Can't connect" in result.output


@pytest.mark.unit
def test_db_init_success(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(db_commands, "initialize_database", lambda config: 1)

    result = runner.invoke(app, ["db", "init"])

    assert result.exit_code == 0
    assert "Applied 1 statement(s) to grabitdb" in result.output
