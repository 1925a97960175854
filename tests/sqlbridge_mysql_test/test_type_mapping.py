# tests/sqlbridge_mysql_test/test_type_mapping.py
import logging

import pytest

from sqlbridge.backend.typing import PortableType, StorageKind
from sqlbridge.backend.impl.mysql import MySQLDialect
from sqlbridge.backend.impl.mysql.types import (
    MYSQL_TYPE_MAPPINGS,
    map_native_type,
    normalize_native_type,
    resolve_column_type,
    storage_kind_for,
)


@pytest.mark.parametrize("native_type,expected", [
    ("TINYINT", PortableType.INTEGER),
    ("SMALLINT", PortableType.INTEGER),
    ("MEDIUMINT", PortableType.INTEGER),
    ("INT", PortableType.INTEGER),
    ("INTEGER", PortableType.INTEGER),
    ("YEAR", PortableType.INTEGER),
    ("BIGINT", PortableType.BIG_INTEGER),
    ("HUGEINT", PortableType.BIG_INTEGER),
    ("FLOAT", PortableType.FLOAT),
    ("DOUBLE", PortableType.FLOAT),
    ("REAL", PortableType.FLOAT),
    ("DECIMAL", PortableType.DECIMAL),
    ("DEC", PortableType.DECIMAL),
    ("NUMERIC", PortableType.DECIMAL),
    ("CHAR", PortableType.TEXT),
    ("VARCHAR", PortableType.TEXT),
    ("STRING", PortableType.TEXT),
    ("CHARACTER", PortableType.TEXT),
    ("CLOB", PortableType.TEXT),
    ("TEXT", PortableType.TEXT),
    ("LONGTEXT", PortableType.TEXT),
    ("BOOLEAN", PortableType.BOOLEAN),
    ("BOOL", PortableType.BOOLEAN),
    ("BIT", PortableType.BOOLEAN),
    ("DATE", PortableType.DATE),
    ("TIME", PortableType.TIME),
    ("DATETIME", PortableType.DATETIME),
    ("TIMESTAMP", PortableType.DATETIME_WITH_LOCAL_TZ),
    ("BLOB", PortableType.BINARY),
    ("VARBINARY", PortableType.BINARY),
])
def test_map_native_type(native_type, expected):
    """Test that every documented native type maps to its portable type"""
    assert map_native_type(native_type) == expected


@pytest.mark.parametrize("native_type,expected", [
    ("INT UNSIGNED", PortableType.INTEGER),
    ("BIGINT UNSIGNED", PortableType.BIG_INTEGER),
    ("DECIMAL UNSIGNED", PortableType.DECIMAL),
])
def test_unsigned_marker_is_ignored(native_type, expected):
    assert map_native_type(native_type) == expected


def test_unsigned_marker_is_case_sensitive():
    """Only the upper-case marker reported by the server is stripped"""
    assert map_native_type("INT unsigned") is None


@pytest.mark.parametrize("native_type,expected", [
    ("varchar", PortableType.TEXT),
    ("Timestamp", PortableType.DATETIME_WITH_LOCAL_TZ),
    ("VARCHAR(255)", PortableType.TEXT),
    ("DECIMAL(10,2)", PortableType.DECIMAL),
    ("int(11) UNSIGNED", PortableType.INTEGER),
    ("  DATETIME  ", PortableType.DATETIME),
])
def test_type_names_are_normalized(native_type, expected):
    assert map_native_type(native_type) == expected


def test_normalize_native_type():
    assert normalize_native_type("int(10) UNSIGNED") == "INT"
    assert normalize_native_type("varchar(64)") == "VARCHAR"


@pytest.mark.parametrize("native_type", ["GEOMETRY", "JSON", "POINT", ""])
def test_unmapped_types_return_none(native_type):
    assert map_native_type(native_type) is None


def test_resolve_column_type_degrades_to_unknown(caplog):
    """Schema sync treats unmapped types as UNKNOWN and logs a warning"""
    with caplog.at_level(logging.WARNING, logger="sqlbridge.backend.impl.mysql.types"):
        assert resolve_column_type("GEOMETRY") == PortableType.UNKNOWN
    assert "GEOMETRY" in caplog.text


def test_resolve_column_type_mapped():
    assert resolve_column_type("INT UNSIGNED") == PortableType.INTEGER


def test_enum_and_set_are_unknown():
    assert map_native_type("ENUM") == PortableType.UNKNOWN
    assert map_native_type("SET") == PortableType.UNKNOWN


def test_mapping_keys_are_upper_case():
    assert all(key == key.upper() for key in MYSQL_TYPE_MAPPINGS)


class TestStorageKind:
    def test_timestamp_is_zoned_utc(self):
        assert storage_kind_for("TIMESTAMP") == StorageKind.ZONED_UTC

    @pytest.mark.parametrize("native_type", ["DATETIME", "DATE", "TIME", "VARCHAR"])
    def test_other_types_are_local(self, native_type):
        assert storage_kind_for(native_type) == StorageKind.LOCAL

    def test_match_is_exact(self):
        """Storage kind follows the declared name exactly, never the value"""
        assert storage_kind_for("timestamp") == StorageKind.LOCAL
        assert storage_kind_for("TIMESTAMP(6)") == StorageKind.LOCAL

    def test_dialect_delegates(self):
        dialect = MySQLDialect()
        assert dialect.storage_kind("TIMESTAMP") == StorageKind.ZONED_UTC
        assert dialect.map_native_type("INT UNSIGNED") == PortableType.INTEGER
        assert dialect.map_native_type("GEOMETRY") is None
