# src/sqlbridge/backend/impl/mysql/__init__.py
"""
MySQL dialect adapter for the generic query engine.

This module provides the MySQL-family (MySQL, MariaDB) implementation of the
engine's dialect contracts:
- Native column type mapping onto portable types
- Connection descriptor construction from user-supplied options
- Date bucketing and interval arithmetic as MySQL expressions
- Time zone normalization of temporal parameters and results
- Translation of raw driver errors into user-facing messages
- Static capability table (excluded schemas, unsupported features)

Architecture:
- MySQLDialect: Expression translation and type mapping, stateless and shared
- MySQLTemporalNormalizer: Per-connection snapshot of the results time zone
- build_connection_descriptor: Pure function from options to connect arguments
- Independent from any driver at import time except for error classification
"""

__version__ = "1.0.0"

from .capabilities import (
    CONNECTION_PROPERTIES,
    MYSQL_CAPABILITIES,
    check_server_version,
    parse_server_version,
)
from .config import MySQLConnectionConfig
from .connection import (
    ConnectionDescriptor,
    DriverType,
    build_connection_descriptor,
)
from .dialect import MySQLDialect, MySQLSQLBuilder
from .errors import (
    ConnectionErrorCategory,
    classify_connection_error,
    humanize_connection_error,
    translate_driver_error,
)
from .temporal import MySQLTemporalNormalizer
from .types import (
    MySQLTypes,
    MYSQL_TYPE_MAPPINGS,
    map_native_type,
    resolve_column_type,
    storage_kind_for,
)


__all__ = [
    # Dialect
    'MySQLDialect',
    'MySQLSQLBuilder',

    # Configuration
    'MySQLConnectionConfig',

    # Connection
    'ConnectionDescriptor',
    'DriverType',
    'build_connection_descriptor',

    # Capabilities
    'MYSQL_CAPABILITIES',
    'CONNECTION_PROPERTIES',
    'parse_server_version',
    'check_server_version',

    # Errors
    'ConnectionErrorCategory',
    'classify_connection_error',
    'humanize_connection_error',
    'translate_driver_error',

    # Temporal
    'MySQLTemporalNormalizer',

    # Types
    'MySQLTypes',
    'MYSQL_TYPE_MAPPINGS',
    'map_native_type',
    'resolve_column_type',
    'storage_kind_for',
]
