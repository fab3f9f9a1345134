"""Basic query execution helpers.

These wrap low-level PyMySQL cursor operations with logging and typed
return shapes used by higher-level CRUD helpers. Statements use the
driver's `%s` placeholders; values are always passed as parameters.
"""

from __future__ import annotations

import logging
from typing import Any

import pymysql

logger = logging.getLogger(__name__)


def _execute(cursor: Any, sql: str, params: tuple | dict | None) -> None:
    """Execute SQL on a cursor, logging the outcome.

    Raises:
        pymysql.MySQLError: If query execution fails.

    Logs:
        - DEBUG: "Executed query: {sql[:80]}" on success.
        - ERROR: "Query execution failed: {exc}" with exception details on failure.
    """
    try:
        cursor.execute(sql, params or None)
        logger.debug("Executed query: %s", sql[:80])
    except pymysql.MySQLError as exc:
        logger.exception("Query execution failed: %s", exc)
        raise


def fetch_one(
    conn: Any,
    sql: str,
    params: tuple | dict | None = None,
) -> dict[str, Any] | None:
    """Execute query and return single row as dict, or None if no results.

    Args:
        conn: Database connection.
        sql: SQL query string.
        params: Query parameters (tuple or dict). Defaults to none.

    Returns:
        Dictionary with column names as keys, or None if no row found.

    Raises:
        pymysql.MySQLError: If query execution fails.
    """
    with conn.cursor() as cursor:
        _execute(cursor, sql, params)
        row = cursor.fetchone()
    if row is None:
        return None
    return dict(row)


def fetch_all(
    conn: Any,
    sql: str,
    params: tuple | dict | None = None,
) -> list[dict[str, Any]]:
    """Execute query and return all rows as list of dicts.

    Args:
        conn: Database connection.
        sql: SQL query string.
        params: Query parameters (tuple or dict). Defaults to none.

    Returns:
        List of dictionaries, one per row. Empty list if no rows match.

    Raises:
        pymysql.MySQLError: If query execution fails.
    """
    with conn.cursor() as cursor:
        _execute(cursor, sql, params)
        rows = cursor.fetchall()
    return [dict(row) for row in rows]


def execute_update(
    conn: Any,
    sql: str,
    params: tuple | dict | None = None,
) -> int:
    """Execute UPDATE/DELETE and return number of affected rows.

    Args:
        conn: Database connection.
        sql: SQL statement.
        params: Query parameters (tuple or dict). Defaults to none.

    Returns:
        Number of rows affected by the operation.

    Raises:
        pymysql.MySQLError: If statement execution fails.

    Logs:
        - DEBUG: "Update affected {rowcount} rows" on success.
    """
    with conn.cursor() as cursor:
        _execute(cursor, sql, params)
        rowcount = cursor.rowcount
    logger.debug("Update affected %s rows", rowcount)
    return rowcount


def execute_insert(
    conn: Any,
    sql: str,
    params: tuple | dict | None = None,
) -> int:
    """Execute an INSERT and return the generated primary key.

    Raises:
        pymysql.MySQLError: If statement execution fails.
    """
    with conn.cursor() as cursor:
        _execute(cursor, sql, params)
        last_id = cursor.lastrowid
    logger.debug("Inserted row id %s", last_id)
    return last_id
