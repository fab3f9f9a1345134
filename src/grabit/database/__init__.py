"""Public interface for the database package.

This module exposes the main primitives needed by the rest of the
project: configuration, connection helpers, the initialization
entrypoint, error types, and generic CRUD utilities.
"""

from .config import ConfigError, DatabaseConfig
from .connection import get_connection, transaction
from .crud import count, delete, insert, select, update
from .errors import (
    AuthenticationError,
    ConnectionFailedError,
    DatabaseError,
    IntegrityError,
    ServerUnreachableError,
)
from .init import initialize_database

__all__ = [
    "ConfigError",
    "DatabaseConfig",
    "get_connection",
    "transaction",
    "initialize_database",
    "DatabaseError",
    "IntegrityError",
    "ConnectionFailedError",
    "ServerUnreachableError",
    "AuthenticationError",
    "insert",
    "select",
    "count",
    "update",
    "delete",
]
