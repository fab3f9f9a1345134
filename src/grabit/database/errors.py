"""Database-specific exception types for the project."""

from __future__ import annotations

import pymysql
from pymysql.constants import CR, ER

# Client-side codes PyMySQL raises when the server cannot be reached or drops.
UNREACHABLE_CODES = frozenset(
    {
        CR.CR_CONNECTION_ERROR,
        CR.CR_CONN_HOST_ERROR,
        CR.CR_UNKNOWN_HOST,
        CR.CR_SERVER_GONE_ERROR,
        CR.CR_SERVER_LOST,
    }
)


class DatabaseError(Exception):
    """Base exception for database-related errors."""


class IntegrityError(DatabaseError):
    """Raised when a constraint violation occurs."""


class ConnectionFailedError(DatabaseError):
    """Raised when a connection to the server cannot be established."""


class ServerUnreachableError(ConnectionFailedError):
    """Raised when the server host/port cannot be reached."""


class AuthenticationError(ConnectionFailedError):
    """Raised when the server rejects the configured user or password."""


def error_code(error: BaseException) -> int | None:
    """Return the MySQL error number carried by a PyMySQL exception.

    PyMySQL stores the code as the first positional argument, e.g.
    ``OperationalError(2003, "Can't connect to MySQL server ...")``.

    Args:
        error: Exception raised by PyMySQL (or anything else).

    Returns:
        Integer error code, or None when the exception carries none.
    """
    if error.args and isinstance(error.args[0], int):
        return error.args[0]
    return None


def from_mysql_error(error: pymysql.MySQLError) -> DatabaseError:
    """Map a raw PyMySQL error to a project-level DatabaseError.

    Server-unreachable client codes map to ServerUnreachableError, access
    denied (1045) maps to AuthenticationError, constraint violations map to
    IntegrityError, and all others to DatabaseError.

    Args:
        error: PyMySQL exception to convert.

    Returns:
        DatabaseError subclass instance with the original message.
    """
    code = error_code(error)
    if code in UNREACHABLE_CODES:
        return ServerUnreachableError(str(error))
    if code == ER.ACCESS_DENIED_ERROR:
        return AuthenticationError(str(error))
    if isinstance(error, pymysql.err.IntegrityError):
        return IntegrityError(str(error))
    return DatabaseError(str(error))
