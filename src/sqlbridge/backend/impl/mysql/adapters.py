# src/sqlbridge/backend/impl/mysql/adapters.py
import datetime
from typing import Any, Dict, List, Optional, Type

from sqlbridge.backend.errors import TimezoneResolutionError, TypeConversionError
from sqlbridge.backend.timezone import format_offset, resolve_timezone, zone_name
from sqlbridge.backend.type_adapter import SQLTypeAdapter
from sqlbridge.backend.typing import StorageKind
from .types import storage_kind_for

# Any fixed date works: only fixed offsets are accepted for time-of-day values
_REFERENCE_DATE = datetime.date(2000, 1, 1)

SESSION_TIME_ZONE = "@@session.time_zone"

# MySQL accepts 0000-00-00 as a stored DATE/DATETIME/TIMESTAMP value; it is read as NULL
ZERO_DATE = "0000-00-00"


def _results_timezone(options: Optional[Dict[str, Any]]) -> datetime.tzinfo:
    tz = (options or {}).get('timezone')
    if tz is None:
        raise TimezoneResolutionError("No results time zone given for temporal conversion")
    return resolve_timezone(tz)


def _as_text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return value.decode('ascii')
    return str(value)


def is_zero_date(value: Any) -> bool:
    """True for the textual zero date MySQL stores in DATE, DATETIME and TIMESTAMP columns."""
    if not isinstance(value, (str, bytes, bytearray)):
        return False
    return _as_text(value).strip().startswith(ZERO_DATE)


def _millis(value) -> str:
    return f"{value.microsecond // 1000:03d}"


def format_offset_literal(offset: datetime.timedelta) -> str:
    """Offset as accepted by CONVERT_TZ; a zero offset is spelled ``UTC``."""
    formatted = format_offset(offset)
    return "UTC" if formatted == "Z" else formatted


def _convert_tz(local_literal: str, source_zone: str) -> str:
    return f"CONVERT_TZ('{local_literal}', '{source_zone}', {SESSION_TIME_ZONE})"


class MySQLOffsetTimeAdapter(SQLTypeAdapter):
    """
    Adapts offset-aware ``datetime.time`` values.

    MySQL has no offset-aware TIME, so values are bound as the equivalent local
    time at UTC, and rendered as literals through CONVERT_TZ.
    """
    @property
    def supported_types(self) -> Dict[Type, List[Any]]:
        return {datetime.time: [datetime.time]}

    @staticmethod
    def _utcoffset(value: datetime.time) -> datetime.timedelta:
        offset = value.utcoffset()
        if offset is None:
            raise TypeConversionError(
                f"Time value {value.isoformat()} has a zone without a fixed offset; "
                f"time-of-day values need a fixed UTC offset"
            )
        return offset

    def to_database(self, value: datetime.time, target_type: Type = datetime.time,
                    options: Optional[Dict[str, Any]] = None) -> Any:
        if value is None:
            return None
        if value.tzinfo is None:
            return value
        offset = self._utcoffset(value)
        as_datetime = datetime.datetime.combine(_REFERENCE_DATE, value.replace(tzinfo=None))
        return (as_datetime - offset).time()

    def from_database(self, value: Any, target_type: Type = datetime.time,
                      options: Optional[Dict[str, Any]] = None) -> Any:
        return MySQLTimeAdapter().from_database(value, target_type, options)

    def to_literal(self, value: datetime.time) -> str:
        local = value.strftime('%H:%M:%S') + '.' + _millis(value)
        if value.tzinfo is None:
            return f"'{local}'"
        return _convert_tz(local, format_offset_literal(self._utcoffset(value)))


class MySQLTimeAdapter(SQLTypeAdapter):
    """
    Reads MySQL TIME values, which drivers return as ``datetime.timedelta``.
    """
    @property
    def supported_types(self) -> Dict[Type, List[Any]]:
        return {datetime.time: [datetime.timedelta]}

    def to_database(self, value: datetime.time, target_type: Type = datetime.timedelta,
                    options: Optional[Dict[str, Any]] = None) -> Any:
        if value is None:
            return None
        return value.isoformat(timespec='microseconds')  # "HH:MM:SS.ffffff"

    def from_database(self, value: Any, target_type: Type = datetime.time,
                      options: Optional[Dict[str, Any]] = None) -> Optional[datetime.time]:
        if value is None:
            return None
        if isinstance(value, datetime.time):
            return value
        if isinstance(value, datetime.timedelta):
            if value < datetime.timedelta(0) or value >= datetime.timedelta(days=1):
                raise TypeConversionError(
                    f"MySQL TIME value {value} is outside the time-of-day range: MySQL TIME allows "
                    f"-838:59:59 to 838:59:59, but datetime.time only covers 00:00:00 to 23:59:59.999999"
                )
            total_seconds = int(value.total_seconds())
            hours, remainder = divmod(total_seconds, 3600)
            minutes, seconds = divmod(remainder, 60)
            return datetime.time(hours, minutes, seconds, value.microseconds)
        return datetime.time.fromisoformat(str(value))


class MySQLDatetimeAdapter(SQLTypeAdapter):
    """
    Adapts Python datetime to MySQL DATETIME/TIMESTAMP and back.

    Bound zone-less values are interpreted by the server in the session time
    zone, so aware values are converted to local time in the results time zone
    before binding. On read, only columns declared ``TIMESTAMP`` are shifted:
    the server echoes them in the session zone although it stores them as UTC.
    """
    @property
    def supported_types(self) -> Dict[Type, List[Any]]:
        return {datetime.datetime: [datetime.datetime]}

    def to_database(self, value: datetime.datetime, target_type: Type = datetime.datetime,
                    options: Optional[Dict[str, Any]] = None) -> Any:
        if value is None:
            return None
        if value.tzinfo is None:
            return value
        return value.astimezone(_results_timezone(options)).replace(tzinfo=None)

    def from_database(self, value: Any, target_type: Type = datetime.datetime,
                      options: Optional[Dict[str, Any]] = None) -> Optional[datetime.datetime]:
        if value is None or is_zero_date(value):
            return None
        local = self._as_local(value)
        column_type = (options or {}).get('column_type')
        if column_type is None or storage_kind_for(column_type) != StorageKind.ZONED_UTC:
            return local
        recorded = local.replace(tzinfo=_results_timezone(options))
        return recorded.astimezone(datetime.timezone.utc)

    @staticmethod
    def _as_local(value: Any) -> datetime.datetime:
        if isinstance(value, datetime.datetime):
            return value.replace(tzinfo=None)
        if isinstance(value, datetime.date):
            return datetime.datetime.combine(value, datetime.time())
        value = _as_text(value)
        try:
            return datetime.datetime.fromisoformat(value.replace('T', ' ')).replace(tzinfo=None)
        except ValueError as e:
            raise TypeConversionError(f"Cannot read '{value}' as a MySQL datetime: {e}") from e

    def to_literal(self, value: datetime.datetime) -> str:
        local = value.strftime('%Y-%m-%d %H:%M:%S') + '.' + _millis(value)
        if value.tzinfo is None:
            return f"'{local}'"
        name = zone_name(value.tzinfo)
        if name:
            return _convert_tz(local, name)
        return _convert_tz(local, format_offset_literal(value.utcoffset()))


class MySQLDateAdapter(SQLTypeAdapter):
    """
    Adapts Python date to MySQL DATE string (YYYY-MM-DD) and vice-versa.
    """
    @property
    def supported_types(self) -> Dict[Type, List[Any]]:
        return {datetime.date: [datetime.date]}

    def to_database(self, value: datetime.date, target_type: Type = datetime.date,
                    options: Optional[Dict[str, Any]] = None) -> Any:
        return value

    def from_database(self, value: Any, target_type: Type = datetime.date,
                      options: Optional[Dict[str, Any]] = None) -> Optional[datetime.date]:
        if value is None or is_zero_date(value):
            return None
        if isinstance(value, datetime.datetime):
            return value.date()
        if isinstance(value, datetime.date):
            return value
        value = _as_text(value)
        try:
            return datetime.date.fromisoformat(value.strip())
        except ValueError as e:
            raise TypeConversionError(f"Cannot read '{value}' as a MySQL date: {e}") from e

    def to_literal(self, value: datetime.date) -> str:
        return f"'{value.isoformat()}'"
