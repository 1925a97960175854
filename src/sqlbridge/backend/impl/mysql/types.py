# src/sqlbridge/backend/impl/mysql/types.py
import logging
import re
from typing import Dict, Optional

from sqlbridge.backend.typing import PortableType, StorageKind

logger = logging.getLogger(__name__)


class MySQLTypes:
    """MySQL native type names as reported by schema introspection"""
    TINYINT = "TINYINT"
    SMALLINT = "SMALLINT"
    MEDIUMINT = "MEDIUMINT"
    INT = "INT"
    INTEGER = "INTEGER"
    BIGINT = "BIGINT"
    HUGEINT = "HUGEINT"
    FLOAT = "FLOAT"
    DOUBLE = "DOUBLE"
    REAL = "REAL"
    DECIMAL = "DECIMAL"
    DEC = "DEC"
    NUMERIC = "NUMERIC"
    CHAR = "CHAR"
    VARCHAR = "VARCHAR"
    STRING = "STRING"
    CHARACTER = "CHARACTER"
    CLOB = "CLOB"
    TEXT = "TEXT"
    TINYTEXT = "TINYTEXT"
    MEDIUMTEXT = "MEDIUMTEXT"
    LONGTEXT = "LONGTEXT"
    BOOLEAN = "BOOLEAN"
    BOOL = "BOOL"
    BIT = "BIT"
    BINARY = "BINARY"
    VARBINARY = "VARBINARY"
    BLOB = "BLOB"
    TINYBLOB = "TINYBLOB"
    MEDIUMBLOB = "MEDIUMBLOB"
    LONGBLOB = "LONGBLOB"
    DATE = "DATE"
    TIME = "TIME"
    DATETIME = "DATETIME"
    # Stored normalized to UTC, returned in the session time zone
    TIMESTAMP = "TIMESTAMP"
    YEAR = "YEAR"
    ENUM = "ENUM"
    SET = "SET"


# Native type name -> portable type, keyed by upper-case name
MYSQL_TYPE_MAPPINGS: Dict[str, PortableType] = {
    MySQLTypes.TINYINT: PortableType.INTEGER,
    MySQLTypes.SMALLINT: PortableType.INTEGER,
    MySQLTypes.MEDIUMINT: PortableType.INTEGER,
    MySQLTypes.INT: PortableType.INTEGER,
    MySQLTypes.INTEGER: PortableType.INTEGER,
    MySQLTypes.BIGINT: PortableType.BIG_INTEGER,
    MySQLTypes.HUGEINT: PortableType.BIG_INTEGER,
    MySQLTypes.FLOAT: PortableType.FLOAT,
    MySQLTypes.DOUBLE: PortableType.FLOAT,
    MySQLTypes.REAL: PortableType.FLOAT,
    MySQLTypes.DECIMAL: PortableType.DECIMAL,
    MySQLTypes.DEC: PortableType.DECIMAL,
    MySQLTypes.NUMERIC: PortableType.DECIMAL,
    MySQLTypes.CHAR: PortableType.TEXT,
    MySQLTypes.VARCHAR: PortableType.TEXT,
    MySQLTypes.STRING: PortableType.TEXT,
    MySQLTypes.CHARACTER: PortableType.TEXT,
    MySQLTypes.CLOB: PortableType.TEXT,
    MySQLTypes.TEXT: PortableType.TEXT,
    MySQLTypes.TINYTEXT: PortableType.TEXT,
    MySQLTypes.MEDIUMTEXT: PortableType.TEXT,
    MySQLTypes.LONGTEXT: PortableType.TEXT,
    MySQLTypes.BOOLEAN: PortableType.BOOLEAN,
    MySQLTypes.BOOL: PortableType.BOOLEAN,
    MySQLTypes.BIT: PortableType.BOOLEAN,
    MySQLTypes.BINARY: PortableType.BINARY,
    MySQLTypes.VARBINARY: PortableType.BINARY,
    MySQLTypes.BLOB: PortableType.BINARY,
    MySQLTypes.TINYBLOB: PortableType.BINARY,
    MySQLTypes.MEDIUMBLOB: PortableType.BINARY,
    MySQLTypes.LONGBLOB: PortableType.BINARY,
    MySQLTypes.DATE: PortableType.DATE,
    MySQLTypes.TIME: PortableType.TIME,
    MySQLTypes.DATETIME: PortableType.DATETIME,
    MySQLTypes.TIMESTAMP: PortableType.DATETIME_WITH_LOCAL_TZ,
    MySQLTypes.YEAR: PortableType.INTEGER,
    MySQLTypes.ENUM: PortableType.UNKNOWN,
    MySQLTypes.SET: PortableType.UNKNOWN,
}

_UNSIGNED_SUFFIX = re.compile(r'\sUNSIGNED$')
_TYPE_PARAMETERS = re.compile(r'\s*\(.*\)$')


def normalize_native_type(native_type_name: str) -> str:
    """Strip the ``UNSIGNED`` marker and any size/precision list, then upper-case.

    The ``UNSIGNED`` marker is matched case-sensitively, exactly as the server
    reports it.
    """
    name = _UNSIGNED_SUFFIX.sub('', native_type_name.strip())
    name = _TYPE_PARAMETERS.sub('', name)
    return name.upper()


def map_native_type(native_type_name: str) -> Optional[PortableType]:
    """Map a MySQL native column type name to its portable type.

    Args:
        native_type_name: Type name from schema introspection, e.g. ``"int UNSIGNED"``

    Returns:
        Optional[PortableType]: The portable type, or None when the name is unmapped
    """
    return MYSQL_TYPE_MAPPINGS.get(normalize_native_type(native_type_name))


def resolve_column_type(native_type_name: str) -> PortableType:
    """Schema-sync variant of map_native_type: unmapped names degrade to UNKNOWN."""
    portable = map_native_type(native_type_name)
    if portable is None:
        logger.warning(f"Unmapped MySQL column type '{native_type_name}', treating it as {PortableType.UNKNOWN.value}")
        return PortableType.UNKNOWN
    return portable


def storage_kind_for(native_type_name: str) -> StorageKind:
    """Storage semantics selected by the declared column type name.

    Only a column declared exactly ``TIMESTAMP`` is stored as UTC; every other
    temporal type (``DATETIME`` in particular) holds local wall-clock values.
    """
    if native_type_name == MySQLTypes.TIMESTAMP:
        return StorageKind.ZONED_UTC
    return StorageKind.LOCAL
