"""Database initialization using the packaged schema SQL file.

Creates the `devices` table (if missing) by executing `sql/schema.sql`.
There is no versioning: the schema file is idempotent and can be re-run.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .. import global_config as g

from .config import DatabaseConfig
from .connection import ConnectFn, execute_script, transaction

logger = logging.getLogger(__name__)


def _schema_path() -> Path:
    """Return path to schema.sql file."""
    return g.SQL_DIR / "schema.sql"


def initialize_database(
    config: DatabaseConfig | None = None,
    *,
    connect: ConnectFn | None = None,
    schema_file: Path | None = None,
) -> int:
    """Initialize the database using `schema.sql`.

    Safe to run on a new database or re-run on an existing one.

    Args:
        config: Connection settings. Defaults to `DatabaseConfig.from_env()`.
        connect: Callable used to open the connection.
        schema_file: Override for the schema path (defaults to the packaged file).

    Returns:
        Number of statements executed.

    Raises:
        FileNotFoundError: If schema.sql doesn't exist.
        ConnectionFailedError: If the server cannot be reached or rejects
            the credentials.
        DatabaseError: If SQL execution fails.

    Logs:
        - INFO: "Initializing database {database}" at start.
        - INFO: "Database initialization complete ({n} statement(s))" on success.
    """
    resolved_schema = schema_file or _schema_path()
    if not resolved_schema.exists():
        msg = f"Schema file not found: {resolved_schema}"
        raise FileNotFoundError(msg)

    resolved = config or DatabaseConfig.from_env()
    logger.info("Initializing database %s", resolved.database)
    schema_sql = resolved_schema.read_text(encoding="utf-8")

    with transaction(resolved, connect=connect) as conn:
        executed = execute_script(conn, schema_sql, description=resolved_schema.name)

    logger.info("Database initialization complete (%d statement(s))", executed)
    return executed
