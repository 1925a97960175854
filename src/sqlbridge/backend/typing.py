# src/sqlbridge/backend/typing.py
"""Portable type tags and enumerations shared between the engine and backends."""

from enum import Enum


class PortableType(Enum):
    """Backend-agnostic column type tag used by the engine for semantic query building."""
    INTEGER = "Integer"
    BIG_INTEGER = "BigInteger"
    FLOAT = "Float"
    DECIMAL = "Decimal"
    TEXT = "Text"
    BOOLEAN = "Boolean"
    DATE = "Date"
    TIME = "Time"
    DATETIME = "DateTime"
    DATETIME_WITH_LOCAL_TZ = "DateTimeWithLocalTZ"
    BINARY = "Binary"
    UNKNOWN = "Unknown"


class StorageKind(Enum):
    """How a backend stores temporal column values.

    LOCAL columns hold naive wall-clock values. ZONED_UTC columns are normalized
    to UTC by the server and echoed back shifted into the session time zone.
    """
    LOCAL = "local"
    ZONED_UTC = "zoned-stored-as-utc"


class DateBucket(Enum):
    """Date/time bucketing granularities requested by query plans."""
    DEFAULT = "default"
    MINUTE = "minute"
    MINUTE_OF_HOUR = "minute-of-hour"
    HOUR = "hour"
    HOUR_OF_DAY = "hour-of-day"
    DAY = "day"
    DAY_OF_WEEK = "day-of-week"
    DAY_OF_MONTH = "day-of-month"
    DAY_OF_YEAR = "day-of-year"
    WEEK = "week"
    WEEK_OF_YEAR = "week-of-year"
    MONTH = "month"
    QUARTER = "quarter"
    MONTH_OF_YEAR = "month-of-year"
    QUARTER_OF_YEAR = "quarter-of-year"
    YEAR = "year"


class TimeUnit(Enum):
    """Units accepted by interval arithmetic."""
    MILLISECOND = "millisecond"
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class TimestampUnit(Enum):
    """Resolution of numeric UNIX timestamps."""
    SECONDS = "seconds"
    MILLISECONDS = "milliseconds"
    MICROSECONDS = "microseconds"
