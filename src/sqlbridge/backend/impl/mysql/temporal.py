# src/sqlbridge/backend/impl/mysql/temporal.py
"""
Time zone normalization at the parameter-bind and result-read boundaries.

MySQL stores TIMESTAMP columns normalized to UTC but returns them shifted into
the session time zone, while DATETIME columns hold plain wall-clock values.
Correct handling therefore depends on the declared column type, never on the
shape of the value.
"""
import datetime
from dataclasses import dataclass, field
from typing import Any, Optional

from sqlbridge.backend.timezone import TimezoneSpec, resolve_timezone
from .adapters import MySQLDateAdapter, MySQLDatetimeAdapter, MySQLOffsetTimeAdapter, MySQLTimeAdapter
from .config import MySQLConnectionConfig
from .types import MySQLTypes

_TIME_COLUMN_TYPES = frozenset({MySQLTypes.TIME})
_DATE_COLUMN_TYPES = frozenset({MySQLTypes.DATE})


@dataclass(frozen=True)
class MySQLTemporalNormalizer:
    """Immutable snapshot of the results time zone plus the conversions that use it.

    Construct one per connection or request; the zone is resolved eagerly so a
    bad configuration fails here rather than while reading rows.

    Raises:
        TimezoneResolutionError: If ``results_timezone`` cannot be resolved
    """
    results_timezone: TimezoneSpec
    tzinfo: datetime.tzinfo = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'tzinfo', resolve_timezone(self.results_timezone))

    @classmethod
    def from_config(cls, config: MySQLConnectionConfig) -> 'MySQLTemporalNormalizer':
        return cls(config.results_timezone())

    @property
    def _options(self):
        return {'timezone': self.tzinfo}

    def bind_parameter(self, value: Any) -> Any:
        """Convert a statement parameter to the zone-less form MySQL expects."""
        if isinstance(value, datetime.datetime):
            return MySQLDatetimeAdapter().to_database(value, datetime.datetime, self._options)
        if isinstance(value, datetime.time):
            return MySQLOffsetTimeAdapter().to_database(value, datetime.time, self._options)
        return value

    def render_literal(self, value: Any) -> str:
        """Render a temporal value as inline SQL for non-prepared statements.

        Aware values become CONVERT_TZ calls from their own zone or offset into
        the session time zone.
        """
        if isinstance(value, datetime.datetime):
            return MySQLDatetimeAdapter().to_literal(value)
        if isinstance(value, datetime.date):
            return MySQLDateAdapter().to_literal(value)
        if isinstance(value, datetime.time):
            return MySQLOffsetTimeAdapter().to_literal(value)
        raise TypeError(f"Cannot render {type(value).__name__} as a MySQL temporal literal")

    def read_column(self, value: Any, column_type_name: Optional[str]) -> Any:
        """Convert a raw temporal cell according to its declared native column type.

        ``TIMESTAMP`` columns come back as aware UTC datetimes; every other
        temporal type comes back as a zone-less local value.
        """
        if value is None:
            return None
        if column_type_name in _TIME_COLUMN_TYPES or isinstance(value, datetime.timedelta):
            return MySQLTimeAdapter().from_database(value)
        if column_type_name in _DATE_COLUMN_TYPES:
            return MySQLDateAdapter().from_database(value)
        options = dict(self._options, column_type=column_type_name)
        return MySQLDatetimeAdapter().from_database(value, datetime.datetime, options)
