"""Generic CRUD helpers built on top of the low-level query helpers.

These functions operate on table names and dict-like row data and are
intended to stay low-level and generic. They do *not* open or close
connections; callers are responsible for providing a connection and
managing transaction boundaries.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import pymysql

from . import queries
from .errors import from_mysql_error

logger = logging.getLogger(__name__)


def _validate_identifier(name: str) -> None:
    """Validate SQL identifier to prevent injection.

    Checks that identifier contains only alphanumeric characters and
    underscores. This is a basic safeguard, not comprehensive protection.

    Args:
        name: SQL identifier (table or column name) to validate.

    Raises:
        ValueError: If identifier contains unsafe characters.
    """
    if not name.replace("_", "").isalnum():
        msg = f"Unsafe SQL identifier: {name!r}"
        raise ValueError(msg)


def _where(filters: Mapping[str, Any], params: list[Any]) -> str:
    """Build an AND-ed equality WHERE body, appending values to params."""
    clauses: list[str] = []
    for col, value in filters.items():
        _validate_identifier(col)
        clauses.append(f"{col} = %s")
        params.append(value)
    return " AND ".join(clauses)


def insert(
    conn: Any,
    table: str,
    data: Mapping[str, Any],
) -> int:
    """Insert a single record into table and return its generated id.

    Args:
        conn: Database connection (caller manages transaction).
        table: Table name to insert into.
        data: Column name to value mapping for the new record.

    Returns:
        Auto-increment id of the inserted row.

    Raises:
        ValueError: If table or column names are invalid.
        IntegrityError: If constraint violation occurs.
        DatabaseError: If database operation fails.

    Logs:
        - DEBUG: "Inserted record into {table}" on success.
    """
    _validate_identifier(table)
    payload = dict(data)
    for col in payload:
        _validate_identifier(col)

    columns = ", ".join(payload.keys())
    placeholders = ", ".join("%s" for _ in payload)
    sql = f"INSERT INTO {table} ({columns}) VALUES ({placeholders})"  # noqa: S608

    try:
        row_id = queries.execute_insert(conn, sql, tuple(payload.values()))
    except pymysql.MySQLError as exc:
        raise from_mysql_error(exc) from exc
    logger.debug("Inserted record into %s", table)
    return row_id


def select(conn: Any, table: str, *, order_by: str | None = None) -> list[dict[str, Any]]:
    """Select every row from table.

    Args:
        conn: Database connection.
        table: Table name to query.
        order_by: Column name to sort by (optional).

    Returns:
        List of dictionaries, one per row, with column names as keys.

    Raises:
        ValueError: If table or order_by are invalid.
        DatabaseError: If database operation fails.
    """
    _validate_identifier(table)

    sql = f"SELECT * FROM {table}"  # noqa: S608
    if order_by:
        _validate_identifier(order_by)
        sql += f" ORDER BY {order_by}"

    try:
        return queries.fetch_all(conn, sql)
    except pymysql.MySQLError as exc:
        raise from_mysql_error(exc) from exc


def count(conn: Any, table: str) -> int:
    """Return the number of rows in table.

    Raises:
        ValueError: If table is invalid.
        DatabaseError: If database operation fails.
    """
    _validate_identifier(table)
    sql = f"SELECT COUNT(*) AS total FROM {table}"  # noqa: S608

    try:
        row = queries.fetch_one(conn, sql)
    except pymysql.MySQLError as exc:
        raise from_mysql_error(exc) from exc
    return int(row["total"]) if row else 0


def update(
    conn: Any,
    table: str,
    filters: Mapping[str, Any],
    values: Mapping[str, Any],
) -> int:
    """Update rows in table matching filters with values.

    Requires at least one filter to prevent accidental full-table updates.

    Args:
        conn: Database connection (caller manages transaction).
        table: Table name to update.
        filters: Column name to value mapping for WHERE clauses. Must not
            be empty.
        values: Column name to value mapping for SET clauses.

    Returns:
        Number of rows affected by the update.

    Raises:
        ValueError: If table/column names are invalid or filters is empty.
        DatabaseError: If database operation fails.
    """
    _validate_identifier(table)
    if not filters:
        msg = "Refusing to perform UPDATE with no filters"
        raise ValueError(msg)

    set_clauses: list[str] = []
    params: list[Any] = []
    for col, value in values.items():
        _validate_identifier(col)
        set_clauses.append(f"{col} = %s")
        params.append(value)

    sql = f"UPDATE {table} SET " + ", ".join(set_clauses)  # noqa: S608
    sql += " WHERE " + _where(filters, params)

    try:
        return queries.execute_update(conn, sql, tuple(params))
    except pymysql.MySQLError as exc:
        raise from_mysql_error(exc) from exc


def delete(
    conn: Any,
    table: str,
    filters: Mapping[str, Any],
) -> int:
    """Delete rows in table matching filters.

    Requires at least one filter to prevent accidental full-table deletes.

    Args:
        conn: Database connection (caller manages transaction).
        table: Table name to delete from.
        filters: Column name to value mapping for WHERE clauses. Must not
            be empty.

    Returns:
        Number of rows deleted.

    Raises:
        ValueError: If table/column names are invalid or filters is empty.
        DatabaseError: If database operation fails.
    """
    _validate_identifier(table)
    if not filters:
        msg = "Refusing to perform DELETE with no filters"
        raise ValueError(msg)

    params: list[Any] = []
    sql = f"DELETE FROM {table} WHERE " + _where(filters, params)  # noqa: S608

    try:
        return queries.execute_update(conn, sql, tuple(params))
    except pymysql.MySQLError as exc:
        raise from_mysql_error(exc) from exc
