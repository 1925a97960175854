# tests/sqlbridge_mysql_test/test_dialect_translation.py
import logging
from decimal import Decimal

import pytest

from sqlbridge.backend.capabilities import DialectFeature
from sqlbridge.backend.errors import UnsupportedFeatureError
from sqlbridge.backend.expression import identifier, raw
from sqlbridge.backend.typing import DateBucket, TimestampUnit, TimeUnit
from sqlbridge.backend.impl.mysql import MySQLDialect


@pytest.fixture
def dialect():
    return MySQLDialect()


@pytest.fixture
def column():
    return identifier("orders", "created_at")


E = "`orders`.`created_at`"


@pytest.mark.parametrize("bucket,expected", [
    (DateBucket.DEFAULT, E),
    (DateBucket.MINUTE, f"STR_TO_DATE(DATE_FORMAT({E}, '%Y-%m-%d %H:%i'), '%Y-%m-%d %H:%i')"),
    (DateBucket.MINUTE_OF_HOUR, f"MINUTE({E})"),
    (DateBucket.HOUR, f"STR_TO_DATE(DATE_FORMAT({E}, '%Y-%m-%d %H'), '%Y-%m-%d %H')"),
    (DateBucket.HOUR_OF_DAY, f"HOUR({E})"),
    (DateBucket.DAY, f"DATE({E})"),
    (DateBucket.DAY_OF_WEEK, f"DAYOFWEEK({E})"),
    (DateBucket.DAY_OF_MONTH, f"DAYOFMONTH({E})"),
    (DateBucket.DAY_OF_YEAR, f"DAYOFYEAR({E})"),
    (DateBucket.WEEK, f"STR_TO_DATE(CONCAT(YEARWEEK({E}), ' Sunday'), '%X%V %W')"),
    (DateBucket.WEEK_OF_YEAR, f"WEEK({E}, 6)"),
    (DateBucket.MONTH, f"STR_TO_DATE(CONCAT(DATE_FORMAT({E}, '%Y-%m'), '-01'), '%Y-%m-%d')"),
    (DateBucket.QUARTER, f"STR_TO_DATE(CONCAT(YEAR({E}), '-', ((QUARTER({E}) * 3) - 2), '-01'), '%Y-%m-%d')"),
    (DateBucket.MONTH_OF_YEAR, f"MONTH({E})"),
    (DateBucket.QUARTER_OF_YEAR, f"QUARTER({E})"),
    (DateBucket.YEAR, f"MAKEDATE(YEAR({E}), 1)"),
])
def test_date_trunc_sql(dialect, column, bucket, expected):
    assert dialect.format_expression(dialect.date_trunc(bucket, column)) == expected


def test_date_trunc_accepts_bucket_name(dialect, column):
    assert dialect.format_expression(dialect.date_trunc("day-of-month", column)) == f"DAYOFMONTH({E})"


def test_every_bucket_is_translated(dialect, column):
    for bucket in DateBucket:
        assert dialect.date_trunc(bucket, column) is not None


def test_unknown_bucket(dialect, column):
    with pytest.raises(ValueError):
        dialect.date_trunc("fortnight", column)


def test_date_trunc_wraps_raw_sql(dialect):
    assert dialect.format_expression(dialect.date_trunc(DateBucket.DAY, raw("NOW()"))) == "DATE(NOW())"


class TestAddInterval:
    @pytest.mark.parametrize("unit,keyword", [
        (TimeUnit.SECOND, "SECOND"),
        (TimeUnit.MINUTE, "MINUTE"),
        (TimeUnit.HOUR, "HOUR"),
        (TimeUnit.DAY, "DAY"),
        (TimeUnit.WEEK, "WEEK"),
        (TimeUnit.MONTH, "MONTH"),
        (TimeUnit.QUARTER, "QUARTER"),
        (TimeUnit.YEAR, "YEAR"),
    ])
    def test_native_units(self, dialect, column, unit, keyword):
        expr = dialect.add_interval(column, 3, unit)
        assert dialect.format_expression(expr) == f"DATE_ADD({E}, INTERVAL 3 {keyword})"

    def test_milliseconds_become_fractional_seconds(self, dialect, column):
        expr = dialect.add_interval(column, 1500, TimeUnit.MILLISECOND)
        assert dialect.format_expression(expr) == f"DATE_ADD({E}, INTERVAL 1.5 SECOND)"

    def test_unit_by_name(self, dialect, column):
        expr = dialect.add_interval(column, -2, "day")
        assert dialect.format_expression(expr) == f"DATE_ADD({E}, INTERVAL -2 DAY)"

    def test_tiny_millisecond_amount_is_fixed_point(self, dialect, column):
        expr = dialect.add_interval(column, 0.01, TimeUnit.MILLISECOND)
        assert dialect.format_expression(expr) == f"DATE_ADD({E}, INTERVAL 0.00001 SECOND)"

    def test_decimal_amount(self, dialect, column):
        expr = dialect.add_interval(column, Decimal("250"), TimeUnit.MILLISECOND)
        assert dialect.format_expression(expr) == f"DATE_ADD({E}, INTERVAL 0.25 SECOND)"

    @pytest.mark.parametrize("amount", ["3", None, True, [1]])
    def test_non_numeric_amount(self, dialect, column, amount):
        with pytest.raises(TypeError):
            dialect.add_interval(column, amount, TimeUnit.DAY)

    def test_unknown_unit(self, dialect, column):
        with pytest.raises(ValueError):
            dialect.add_interval(column, 1, "fortnight")


def test_to_float_is_passthrough(dialect, column):
    assert dialect.to_float(column) is column
    assert dialect.format_expression(dialect.to_float(column)) == E


@pytest.mark.parametrize("unit,expected", [
    (TimestampUnit.SECONDS, "FROM_UNIXTIME(`ts`)"),
    (TimestampUnit.MILLISECONDS, "FROM_UNIXTIME((`ts` / 1000))"),
    (TimestampUnit.MICROSECONDS, "FROM_UNIXTIME((`ts` / 1000000))"),
])
def test_unix_timestamp_to_timestamp(dialect, unit, expected):
    expr = dialect.unix_timestamp_to_timestamp(identifier("ts"), unit)
    assert dialect.format_expression(expr) == expected


def test_set_timezone_sql(dialect):
    assert dialect.set_timezone_sql() == "SET @@session.time_zone = %s"


class TestQuoting:
    def test_format_identifier(self, dialect):
        assert dialect.format_identifier("orders") == "`orders`"
        assert dialect.format_identifier("we`ird") == "`we``ird`"

    def test_format_string_literal(self, dialect):
        assert dialect.format_string_literal("plain") == "'plain'"
        assert dialect.format_string_literal("it's") == "'it''s'"
        assert dialect.format_string_literal("back\\slash") == "'back\\\\slash'"

    def test_qualified_identifier(self, dialect):
        assert dialect.format_expression(identifier("shop", "orders", "id")) == "`shop`.`orders`.`id`"

    def test_placeholder(self, dialect):
        assert dialect.get_placeholder() == "%s"

    def test_format_expression_rejects_plain_values(self, dialect):
        with pytest.raises(ValueError):
            dialect.format_expression("orders")

    def test_create_expression(self, dialect):
        assert dialect.format_expression(dialect.create_expression("NOW()")) == "NOW()"


class TestFeatureSupport:
    @pytest.mark.parametrize("feature", [
        DialectFeature.FULL_JOIN,
        DialectFeature.CASE_SENSITIVITY_STRING_FILTER_OPTIONS,
    ])
    def test_unsupported_features_are_rejected(self, dialect, feature, caplog):
        assert dialect.supports(feature) is False
        with caplog.at_level(logging.WARNING):
            with pytest.raises(UnsupportedFeatureError) as exc_info:
                dialect.ensure_supported(feature)
        assert exc_info.value.feature == feature
        assert feature.value in str(exc_info.value)
        assert "MySQL" in str(exc_info.value)
        assert feature.value in caplog.text

    @pytest.mark.parametrize("feature", [
        DialectFeature.INNER_JOIN,
        DialectFeature.LEFT_JOIN,
        DialectFeature.RIGHT_JOIN,
        DialectFeature.SET_TIMEZONE,
        DialectFeature.NESTED_QUERIES,
    ])
    def test_supported_features(self, dialect, feature):
        assert dialect.supports(feature) is True
        dialect.ensure_supported(feature)


def test_dialect_version_and_logger():
    custom = logging.getLogger("custom.dialect")
    dialect = MySQLDialect(version=(5, 7, 44), logger=custom)
    assert dialect.version == (5, 7, 44)
    assert dialect.logger is custom
