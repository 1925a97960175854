# src/sqlbridge/backend/impl/mysql/errors.py
"""Classification of MySQL driver errors into portable categories."""
import re
from enum import Enum
from typing import Optional, Pattern, Tuple, Union

import pymysql.err
from mysql.connector import errors as connector_errors

from sqlbridge.backend.errors import (
    ConnectionError,
    DatabaseError,
    DeadlockError,
    IntegrityError,
    OperationalError,
    QueryError,
)


class ConnectionErrorCategory(Enum):
    CANNOT_CONNECT_CHECK_HOST_AND_PORT = "cannot-connect-check-host-and-port"
    DATABASE_NAME_INCORRECT = "database-name-incorrect"
    USERNAME_OR_PASSWORD_INCORRECT = "username-or-password-incorrect"
    INVALID_HOSTNAME = "invalid-hostname"

    @property
    def message(self) -> str:
        return CONNECTION_ERROR_MESSAGES[self]


CONNECTION_ERROR_MESSAGES = {
    ConnectionErrorCategory.CANNOT_CONNECT_CHECK_HOST_AND_PORT:
        "Hmm, we couldn't connect to the database. Make sure your host and port settings are correct",
    ConnectionErrorCategory.DATABASE_NAME_INCORRECT:
        "Looks like the database name is incorrect.",
    ConnectionErrorCategory.USERNAME_OR_PASSWORD_INCORRECT:
        "Looks like the username or password is incorrect.",
    ConnectionErrorCategory.INVALID_HOSTNAME:
        "It looks like your host is invalid. Please double-check it and try again.",
}

# Ordered, first match wins; every pattern must match the whole message
CONNECTION_ERROR_PATTERNS: Tuple[Tuple[Pattern, ConnectionErrorCategory], ...] = (
    (re.compile(r"Communications link failure\s+The last packet sent successfully to the server was 0 milliseconds "
                r"ago\. The driver has not received any packets from the server\."),
     ConnectionErrorCategory.CANNOT_CONNECT_CHECK_HOST_AND_PORT),
    (re.compile(r"Can't connect to (?:MySQL |MariaDB )?server on .*", re.DOTALL),
     ConnectionErrorCategory.CANNOT_CONNECT_CHECK_HOST_AND_PORT),
    (re.compile(r"Unknown database .*", re.DOTALL),
     ConnectionErrorCategory.DATABASE_NAME_INCORRECT),
    (re.compile(r"Access denied for user.*", re.DOTALL),
     ConnectionErrorCategory.USERNAME_OR_PASSWORD_INCORRECT),
    (re.compile(r"Must specify port after ':' in connection string"),
     ConnectionErrorCategory.INVALID_HOSTNAME),
    (re.compile(r"Unknown (?:MySQL )?server host .*", re.DOTALL),
     ConnectionErrorCategory.INVALID_HOSTNAME),
)

# Server and client error numbers
ER_DBACCESS_DENIED = 1044
ER_ACCESS_DENIED = 1045
ER_BAD_DB = 1049
ER_DUP_ENTRY = 1062
ER_LOCK_WAIT_TIMEOUT = 1205
ER_LOCK_DEADLOCK = 1213
ER_NO_REFERENCED_ROW = 1452
CR_CONN_HOST_ERROR = 2003
CR_UNKNOWN_HOST = 2005
CR_SERVER_LOST = 2013

CONNECTION_ERRNOS = frozenset({
    ER_DBACCESS_DENIED, ER_ACCESS_DENIED, ER_BAD_DB, CR_CONN_HOST_ERROR, CR_UNKNOWN_HOST, CR_SERVER_LOST,
})


def classify_connection_error(message: str) -> Union[ConnectionErrorCategory, str]:
    """Classify a raw connection error message.

    Returns:
        The matching category, or the message unchanged when no pattern matches
    """
    for pattern, category in CONNECTION_ERROR_PATTERNS:
        if pattern.fullmatch(message):
            return category
    return message


def humanize_connection_error(message: str) -> str:
    """Replace a raw connection error message with a user-facing explanation."""
    result = classify_connection_error(message)
    if isinstance(result, ConnectionErrorCategory):
        return result.message
    return result


def _error_details(error: Exception) -> Tuple[Optional[int], str]:
    """Extract (errno, message) from a mysql-connector or PyMySQL exception."""
    if isinstance(error, connector_errors.Error):
        return error.errno, error.msg or str(error)
    if isinstance(error, pymysql.err.MySQLError) and len(error.args) >= 2 and isinstance(error.args[0], int):
        return error.args[0], str(error.args[1])
    return None, str(error)


def translate_driver_error(error: Exception) -> DatabaseError:
    """Map a driver exception onto the portable error hierarchy.

    The returned exception is meant to be raised by the caller, chained to the
    original driver error.
    """
    errno, message = _error_details(error)

    if errno in CONNECTION_ERRNOS or isinstance(error, (connector_errors.InterfaceError, pymysql.err.InterfaceError)):
        result = classify_connection_error(message)
        category = result if isinstance(result, ConnectionErrorCategory) else None
        text = category.message if category else message
        return ConnectionError(f"Failed to connect to MySQL: {text}", category=category, raw_message=message)

    if errno in (ER_LOCK_DEADLOCK, ER_LOCK_WAIT_TIMEOUT):
        return DeadlockError(f"MySQL deadlock detected: {message}")
    if errno == ER_DUP_ENTRY:
        return IntegrityError(f"Unique constraint violation: {message}")
    if errno == ER_NO_REFERENCED_ROW:
        return IntegrityError(f"Foreign key constraint violation: {message}")
    if isinstance(error, (connector_errors.IntegrityError, pymysql.err.IntegrityError)):
        return IntegrityError(f"MySQL integrity error: {message}")
    if isinstance(error, (connector_errors.OperationalError, pymysql.err.OperationalError)):
        return OperationalError(f"MySQL operational error: {message}")
    if isinstance(error, (connector_errors.ProgrammingError, pymysql.err.ProgrammingError)):
        return QueryError(f"MySQL query error: {message}")
    if isinstance(error, (connector_errors.DatabaseError, pymysql.err.DatabaseError)):
        return DatabaseError(f"MySQL database error: {message}")
    return QueryError(f"MySQL query error: {message}")
