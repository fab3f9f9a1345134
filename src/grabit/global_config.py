"""Global, project-wide configuration constants.

This module intentionally contains **no business logic** – only simple,
shared filesystem anchors and cross-cutting constants that many modules
can import.

Connection settings are not defined here; see `grabit.database.config`.
"""

from pathlib import Path

# Core roots
PACKAGE_ROOT: Path = Path(__file__).resolve().parent
# From src/grabit/global_config.py, go up two levels: src/grabit -> src -> repo root
PROJECT_ROOT: Path = PACKAGE_ROOT.parent.parent

# SQL directory (shipped inside the package so installed copies can find it)
SQL_DIR: Path = PACKAGE_ROOT / "sql"

# Local secrets (never committed)
SECRETS_DIR: Path = PROJECT_ROOT / ".secrets"
DB_PASSWORD_FILENAME = "db_password"

# Event log, relative to the current working directory
ERROR_LOG_FILENAME = "error_log.txt"

# Environment variable prefix for connection settings
ENV_PREFIX = "GRABIT_DB_"

# Table names
DEVICES_TABLE = "devices"
