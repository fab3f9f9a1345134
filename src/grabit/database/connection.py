"""Database connection helpers.

This module provides a small, synchronous API for obtaining PyMySQL
connections to the device store. Connections are short-lived: callers
open one per operation and close it when done.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable, Iterator
from typing import Any

import pymysql
import pymysql.cursors

from .config import DatabaseConfig
from .errors import from_mysql_error

logger = logging.getLogger(__name__)

ConnectFn = Callable[..., Any]


def _configure_kwargs(config: DatabaseConfig) -> dict[str, Any]:
    """Return connect() arguments with the project's standard settings.

    Rows come back as dicts (DictCursor) and autocommit is off so that
    `transaction` owns commit/rollback.

    Args:
        config: Connection settings.

    Returns:
        Keyword arguments for the connect callable.
    """
    kwargs = config.connect_kwargs()
    kwargs["cursorclass"] = pymysql.cursors.DictCursor
    kwargs["charset"] = "utf8mb4"
    kwargs["autocommit"] = False
    return kwargs


def get_connection(
    config: DatabaseConfig | None = None,
    *,
    connect: ConnectFn | None = None,
) -> pymysql.connections.Connection:
    """Return a configured connection to the device store.

    Args:
        config: Connection settings. Defaults to `DatabaseConfig.from_env()`.
        connect: Callable used to open the connection. Defaults to
            `pymysql.connect`.

    Returns:
        Open connection ready for use.

    Raises:
        ServerUnreachableError: If the server cannot be reached.
        AuthenticationError: If the user/password is rejected.
        DatabaseError: For any other driver error.

    Logs:
        - DEBUG: "Opening MySQL connection to {host}:{port}/{database}".
    """
    resolved = config or DatabaseConfig.from_env()
    opener = connect or pymysql.connect

    logger.debug(
        "Opening MySQL connection to %s:%s/%s",
        resolved.host,
        resolved.port,
        resolved.database,
    )
    try:
        return opener(**_configure_kwargs(resolved))
    except pymysql.MySQLError as exc:
        raise from_mysql_error(exc) from exc


@contextlib.contextmanager
def transaction(
    config: DatabaseConfig | None = None,
    existing_connection: Any | None = None,
    *,
    connect: ConnectFn | None = None,
) -> Iterator[Any]:
    """Context manager for a transactional connection block.

    Manages transaction boundaries (commit on success, rollback on error).
    If an existing connection is provided, it is reused and not closed.
    Otherwise, creates and closes a new connection.

    Args:
        config: Connection settings (only used if existing_connection is None).
        existing_connection: Existing connection to reuse. If None, creates
            a new connection that will be closed on exit.
        connect: Callable used to open a new connection.

    Yields:
        Connection ready for database operations.

    Logs:
        - DEBUG: "Beginning transaction" at start
        - DEBUG: "Transaction committed" on success
        - ERROR: "Transaction rolled back due to error" on failure
        - DEBUG: "Connection closed" when closing owned connection.
    """
    owns_connection = existing_connection is None
    conn = existing_connection or get_connection(config, connect=connect)

    try:
        logger.debug("Beginning transaction")
        yield conn
        conn.commit()
        logger.debug("Transaction committed")
    except Exception:
        logger.exception("Transaction rolled back due to error")
        conn.rollback()
        raise
    finally:
        if owns_connection:
            conn.close()
            logger.debug("Connection closed")


def execute_script(conn: Any, sql: str, *, description: str) -> int:
    """Execute a multi-statement SQL script with logging.

    PyMySQL runs one statement per `execute` call, so the script is split
    on semicolons. Comment-only chunks are skipped.

    Args:
        conn: Database connection to execute script on.
        sql: Multi-statement SQL script to execute.
        description: Human-readable description for logging purposes.

    Returns:
        Number of statements executed.

    Raises:
        DatabaseError: If a statement fails.

    Logs:
        - INFO: "Executing SQL script: {description}" before execution.
        - ERROR: "Failed while executing SQL script: {description}" with
            exception details on failure.
    """
    logger.info("Executing SQL script: %s", description)
    statements = split_statements(sql)
    try:
        with conn.cursor() as cursor:
            for statement in statements:
                cursor.execute(statement)
    except pymysql.MySQLError as exc:
        logger.exception("Failed while executing SQL script: %s", description)
        raise from_mysql_error(exc) from exc
    return len(statements)


def split_statements(sql: str) -> list[str]:
    """Split a script into statements, dropping `--` comment lines."""
    lines = [line for line in sql.splitlines() if not line.strip().startswith("--")]
    chunks = "\n".join(lines).split(";")
    return [chunk.strip() for chunk in chunks if chunk.strip()]
