"""Connection settings for the MySQL store.

Settings are injected as a `DatabaseConfig` instead of being hard-coded.
`DatabaseConfig.from_env` builds one from `GRABIT_DB_*` environment
variables, reading the password from the environment or a local secrets
file so it never has to appear in code.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .. import global_config as g

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 3306
DEFAULT_DATABASE = "grabitdb"
DEFAULT_USER = "root"
DEFAULT_CONNECT_TIMEOUT = 10


class ConfigError(ValueError):
    """Raised when a configuration value cannot be parsed."""


@dataclass(frozen=True)
class DatabaseConfig:
    """Parameters needed to open a connection to the device store."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    database: str = DEFAULT_DATABASE
    user: str = DEFAULT_USER
    password: str = field(default="", repr=False)
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT

    def connect_kwargs(self) -> dict[str, Any]:
        """Return keyword arguments for `pymysql.connect`."""
        return {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
            "database": self.database,
            "connect_timeout": self.connect_timeout,
        }

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        secrets_dir: Path | None = None,
    ) -> DatabaseConfig:
        """Build a config from `GRABIT_DB_*` environment variables.

        Unset variables fall back to the defaults (localhost:3306, database
        `grabitdb`, user `root`). The password is taken from
        `GRABIT_DB_PASSWORD`, then from the file named by
        `GRABIT_DB_PASSWORD_FILE`, then from `<secrets_dir>/db_password`.

        Args:
            environ: Mapping to read from. Defaults to `os.environ`.
            secrets_dir: Directory holding the `db_password` file. Defaults
                to `global_config.SECRETS_DIR`.

        Returns:
            Populated DatabaseConfig.

        Raises:
            ConfigError: If the port or timeout is not an integer.

        Logs:
            - WARNING: "No database password configured" when no secret is found.
        """
        env = os.environ if environ is None else environ
        prefix = g.ENV_PREFIX

        return cls(
            host=env.get(f"{prefix}HOST", DEFAULT_HOST),
            port=_parse_int(env, f"{prefix}PORT", DEFAULT_PORT),
            database=env.get(f"{prefix}NAME", DEFAULT_DATABASE),
            user=env.get(f"{prefix}USER", DEFAULT_USER),
            password=_resolve_password(env, secrets_dir or g.SECRETS_DIR),
            connect_timeout=_parse_int(
                env, f"{prefix}CONNECT_TIMEOUT", DEFAULT_CONNECT_TIMEOUT
            ),
        )


def _parse_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        msg = f"{key} must be an integer, got {raw!r}"
        raise ConfigError(msg) from exc


def _resolve_password(env: Mapping[str, str], secrets_dir: Path) -> str:
    """Return the database secret from env, a named file, or the secrets dir."""
    prefix = g.ENV_PREFIX
    password = env.get(f"{prefix}PASSWORD")
    if password is not None:
        return password

    password_file = env.get(f"{prefix}PASSWORD_FILE")
    candidate = Path(password_file) if password_file else secrets_dir / g.DB_PASSWORD_FILENAME
    if candidate.is_file():
        logger.debug("Reading database password from %s", candidate)
        return candidate.read_text(encoding="utf-8").strip()

    logger.warning("No database password configured; using an empty password")
    return ""
