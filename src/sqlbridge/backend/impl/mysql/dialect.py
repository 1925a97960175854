# src/sqlbridge/backend/impl/mysql/dialect.py
import logging
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from sqlbridge.backend.capabilities import DialectCapabilities
from sqlbridge.backend.dialect import SQLDialectBase
from sqlbridge.backend.expression import (
    SQLExpressionBase, FunctionCall, IntervalLiteral,
    as_expression, call, concat, divide, literal, multiply, subtract,
)
from sqlbridge.backend.typing import DateBucket, PortableType, StorageKind, TimestampUnit, TimeUnit
from .capabilities import MYSQL_CAPABILITIES
from .config import MySQLConnectionConfig
from .connection import DriverType
from .temporal import MySQLTemporalNormalizer
from .types import map_native_type, storage_kind_for

# DATE_FORMAT/STR_TO_DATE patterns used to truncate by formatting and re-parsing
MINUTE_FORMAT = "%Y-%m-%d %H:%i"
HOUR_FORMAT = "%Y-%m-%d %H"
MONTH_FORMAT = "%Y-%m"
DATE_FORMAT = "%Y-%m-%d"
# YEARWEEK() output followed by a weekday name, Sunday-first weeks
YEARWEEK_FORMAT = "%X%V %W"

# WEEK() mode 6: Sunday is the first day of the week, weeks are numbered 1-53
# and week 1 is the first week with 4 or more days in the year
WEEK_OF_YEAR_MODE = 6

_INTERVAL_UNITS = {
    TimeUnit.SECOND: "SECOND",
    TimeUnit.MINUTE: "MINUTE",
    TimeUnit.HOUR: "HOUR",
    TimeUnit.DAY: "DAY",
    TimeUnit.WEEK: "WEEK",
    TimeUnit.MONTH: "MONTH",
    TimeUnit.QUARTER: "QUARTER",
    TimeUnit.YEAR: "YEAR",
}


def date_format(format_str: str, expr: Any) -> FunctionCall:
    return call("DATE_FORMAT", expr, literal(format_str))


def str_to_date(format_str: str, expr: Any) -> FunctionCall:
    return call("STR_TO_DATE", expr, literal(format_str))


def trunc_with_format(format_str: str, expr: Any) -> FunctionCall:
    """Truncate by rendering to ``format_str`` and parsing the text back.

    MySQL has no DATE_TRUNC; dropping the finer fields in the formatted text
    truncates without rounding.
    """
    return str_to_date(format_str, date_format(format_str, expr))


class MySQLDialect(SQLDialectBase):
    """MySQL dialect implementation"""

    def __init__(self, config: Optional[MySQLConnectionConfig] = None, version: tuple = (8, 0, 0),
                 logger: Optional[logging.Logger] = None):
        """Initialize MySQL dialect

        Args:
            config: Connection configuration, used for the results time zone
            version: Server version; updated by the execution layer after connecting
            logger: Logger to use instead of the module logger
        """
        super().__init__(version, logger)
        self._config = config
        self._date_trunc_table: Dict[DateBucket, Callable[[SQLExpressionBase], SQLExpressionBase]] = {
            DateBucket.DEFAULT: lambda expr: expr,
            DateBucket.MINUTE: lambda expr: trunc_with_format(MINUTE_FORMAT, expr),
            DateBucket.MINUTE_OF_HOUR: lambda expr: call("MINUTE", expr),
            DateBucket.HOUR: lambda expr: trunc_with_format(HOUR_FORMAT, expr),
            DateBucket.HOUR_OF_DAY: lambda expr: call("HOUR", expr),
            DateBucket.DAY: lambda expr: call("DATE", expr),
            DateBucket.DAY_OF_WEEK: lambda expr: call("DAYOFWEEK", expr),
            DateBucket.DAY_OF_MONTH: lambda expr: call("DAYOFMONTH", expr),
            DateBucket.DAY_OF_YEAR: lambda expr: call("DAYOFYEAR", expr),
            DateBucket.WEEK: self._trunc_week,
            DateBucket.WEEK_OF_YEAR: lambda expr: call("WEEK", expr, literal(WEEK_OF_YEAR_MODE)),
            DateBucket.MONTH: self._trunc_month,
            DateBucket.QUARTER: self._trunc_quarter,
            DateBucket.MONTH_OF_YEAR: lambda expr: call("MONTH", expr),
            DateBucket.QUARTER_OF_YEAR: lambda expr: call("QUARTER", expr),
            DateBucket.YEAR: lambda expr: call("MAKEDATE", call("YEAR", expr), literal(1)),
        }

    @property
    def config(self) -> Optional[MySQLConnectionConfig]:
        return self._config

    @property
    def capabilities(self) -> DialectCapabilities:
        return MYSQL_CAPABILITIES

    def get_placeholder(self) -> str:
        """Get MySQL parameter placeholder"""
        return "%s"

    def format_string_literal(self, value: str) -> str:
        """Quote string literal

        MySQL uses single quotes for string literals; backslash is an escape
        character unless NO_BACKSLASH_ESCAPES is set, so it is doubled too.
        """
        escaped = value.replace("\\", "\\\\").replace("'", "''")
        return f"'{escaped}'"

    def format_identifier(self, identifier: str) -> str:
        """Quote identifier (table/column name)

        MySQL uses backticks for identifiers
        """
        if '`' in identifier:
            escaped = identifier.replace('`', '``')
            return f"`{escaped}`"
        return f"`{identifier}`"

    # --- Date bucketing ---

    def date_trunc(self, bucket: Union[DateBucket, str], expr: Any) -> SQLExpressionBase:
        """Translate a date bucketing request into a MySQL expression.

        Truncating buckets (minute, hour, day, week, month, quarter, year) yield
        a temporal value; the ``-of-`` buckets yield an ordinal number.

        Raises:
            ValueError: If the bucket is unknown
        """
        bucket = DateBucket(bucket)
        return self._date_trunc_table[bucket](as_expression(expr))

    @staticmethod
    def _trunc_week(expr: SQLExpressionBase) -> SQLExpressionBase:
        # YEARWEEK gives e.g. 202422; naming the weekday pins the result to that week's Sunday
        return str_to_date(YEARWEEK_FORMAT, concat(call("YEARWEEK", expr), literal(" Sunday")))

    @staticmethod
    def _trunc_month(expr: SQLExpressionBase) -> SQLExpressionBase:
        return str_to_date(DATE_FORMAT, concat(date_format(MONTH_FORMAT, expr), literal("-01")))

    @staticmethod
    def _trunc_quarter(expr: SQLExpressionBase) -> SQLExpressionBase:
        # No format specifier for quarters: first month of the quarter is QUARTER * 3 - 2
        first_month = subtract(multiply(call("QUARTER", expr), 3), 2)
        return str_to_date(DATE_FORMAT, concat(call("YEAR", expr), literal("-"), first_month, literal("-01")))

    # --- Arithmetic and casts ---

    def add_interval(self, expr: Any, amount: Union[int, float, Decimal],
                     unit: Union[TimeUnit, str]) -> SQLExpressionBase:
        """Add ``amount`` units to a temporal expression.

        MySQL has no MILLISECOND interval unit but accepts fractional seconds,
        so milliseconds are converted to seconds.

        Raises:
            TypeError: If amount is not a number
            ValueError: If the unit is unknown
        """
        if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
            raise TypeError(f"Interval amount must be a number, got {type(amount).__name__}")
        unit = TimeUnit(unit)
        if unit == TimeUnit.MILLISECOND:
            return self.add_interval(expr, amount / 1000, TimeUnit.SECOND)
        return call("DATE_ADD", expr, IntervalLiteral(amount, _INTERVAL_UNITS[unit]))

    def to_float(self, expr: Any) -> SQLExpressionBase:
        # MySQL doesn't support CAST(... AS FLOAT); numeric expressions are used as-is
        return as_expression(expr)

    def unix_timestamp_to_timestamp(self, expr: Any,
                                    unit: Union[TimestampUnit, str] = TimestampUnit.SECONDS) -> SQLExpressionBase:
        unit = TimestampUnit(unit)
        expr = as_expression(expr)
        if unit == TimestampUnit.MILLISECONDS:
            return call("FROM_UNIXTIME", divide(expr, 1000))
        if unit == TimestampUnit.MICROSECONDS:
            return call("FROM_UNIXTIME", divide(expr, 1000000))
        return call("FROM_UNIXTIME", expr)

    def set_timezone_sql(self) -> str:
        """Statement that sets the session time zone; bind the zone name as its parameter.

        If this fails, the server's time zone tables need loading:
        ``mysql_tzinfo_to_sql /usr/share/zoneinfo | mysql -u root mysql``.
        """
        return "SET @@session.time_zone = %s"

    # --- Types ---

    def map_native_type(self, native_type_name: str) -> Optional[PortableType]:
        return map_native_type(native_type_name)

    def storage_kind(self, native_type_name: str) -> StorageKind:
        return storage_kind_for(native_type_name)

    def temporal_normalizer(self) -> MySQLTemporalNormalizer:
        """Normalizer bound to the configured results time zone."""
        config = self._config or MySQLConnectionConfig()
        return MySQLTemporalNormalizer.from_config(config)


class MySQLSQLBuilder:
    """MySQL specific SQL Builder

    Prepares a statement for a ``%s`` paramstyle driver: expression parameters
    are inlined into the SQL text and temporal parameters are normalized for
    binding.
    """

    def __init__(self, dialect: MySQLDialect, normalizer: Optional[MySQLTemporalNormalizer] = None,
                 driver_type: DriverType = DriverType.MYSQL_CONNECTOR):
        """Initialize MySQL SQL builder

        Args:
            dialect: MySQL dialect instance
            normalizer: Temporal normalizer; parameters are bound unchanged when omitted
            driver_type: Driver the statement is executed with
        """
        self.dialect = dialect
        self.normalizer = normalizer
        # PyMySQL interpolates with the % operator; mysql-connector only replaces %s markers
        self.escape_percent = driver_type == DriverType.PYMYSQL
        config = dialect.config
        self.log_queries = bool(config and config.log_queries)
        self.log_level = config.log_level if config else logging.DEBUG

    def build(self, sql: str, params: Optional[Union[Tuple, List]] = None) -> Tuple[str, Tuple]:
        """Build SQL statement with parameters for MySQL

        All ``%s`` placeholders in the statement are parameter placeholders and
        must have a corresponding parameter. For PyMySQL, ``%`` inside inlined
        expressions is doubled and the statement must be executed with the
        returned parameter tuple, even when it is empty.

        Args:
            sql: SQL statement with %s placeholders
            params: Parameter values

        Returns:
            Tuple[str, Tuple]: (Processed SQL, Processed parameters)

        Raises:
            ValueError: If parameter count doesn't match placeholder count
        """
        if not params:
            return self._log_built(sql, ())

        params = tuple(params)
        result = []
        final_params = []
        current_pos = 0
        placeholder_count = 0

        while True:
            placeholder_pos = sql.find('%s', current_pos)
            if placeholder_pos == -1:
                result.append(sql[current_pos:])
                break

            result.append(sql[current_pos:placeholder_pos])

            if placeholder_count < len(params):
                param = params[placeholder_count]
                if isinstance(param, SQLExpressionBase):
                    inlined = self.dialect.format_expression(param)
                    result.append(inlined.replace('%', '%%') if self.escape_percent else inlined)
                else:
                    result.append(self.dialect.get_placeholder())
                    final_params.append(self.normalizer.bind_parameter(param) if self.normalizer else param)

            current_pos = placeholder_pos + 2  # Skip '%s'
            placeholder_count += 1

        if placeholder_count != len(params):
            raise ValueError(
                f"Parameter count mismatch: SQL needs {placeholder_count} "
                f"parameters but {len(params)} were provided"
            )

        return self._log_built(''.join(result), tuple(final_params))

    def _log_built(self, sql: str, params: Tuple) -> Tuple[str, Tuple]:
        if self.log_queries:
            # Parameter values are not logged
            self.dialect.log(self.log_level, f"Built SQL: {sql} ({len(params)} bound parameters)")
        return sql, params
