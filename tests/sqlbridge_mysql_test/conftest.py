# tests/sqlbridge_mysql_test/conftest.py
"""
Live-server fixtures.

Scenarios come from tests/config_manager.py (MYSQL_SCENARIOS_CONFIG_PATH, a
default scenario file, or MYSQL_* environment variables). Tests using these
fixtures are skipped when no scenario is configured or the server cannot be
reached.
"""
import logging

import pytest

from sqlbridge.backend.errors import ConnectionError
from sqlbridge.backend.impl.mysql import DriverType, MySQLDialect, MySQLSQLBuilder
from tests.config_manager import get_mysql_scenarios

from live_support import connect, offset_name, scenario_config

# Setup logger
logger = logging.getLogger("mysql_test")

SCENARIOS = get_mysql_scenarios()


@pytest.fixture(scope="module", params=SCENARIOS or [None],
                ids=[s.get('label', 'mysql') for s in SCENARIOS] or ["unconfigured"])
def scenario(request):
    if request.param is None:
        pytest.skip("No MySQL scenario configured")
    return request.param


@pytest.fixture(scope="module")
def live_config(scenario):
    return scenario_config(scenario)


@pytest.fixture(scope="module")
def live_dialect(live_config):
    return MySQLDialect(live_config)


@pytest.fixture(scope="module")
def live_normalizer(live_dialect):
    return live_dialect.temporal_normalizer()


@pytest.fixture(scope="module")
def live_builder(live_dialect, live_normalizer):
    # connect() always opens a mysql-connector connection
    return MySQLSQLBuilder(live_dialect, live_normalizer, DriverType.MYSQL_CONNECTOR)


@pytest.fixture(scope="module")
def mysql_connection(live_config, live_dialect, live_normalizer):
    try:
        connection = connect(live_config)
    except ConnectionError as e:
        pytest.skip(f"MySQL server unavailable: {e}")

    cursor = connection.cursor()
    # Bound zone-less values are read by the server in the session zone
    cursor.execute(live_dialect.set_timezone_sql(), (offset_name(live_normalizer),))
    cursor.close()
    logger.info(f"Connected to {live_config.to_descriptor().url}")

    yield connection
    connection.close()


@pytest.fixture
def fetch_one(mysql_connection, live_builder):
    def _fetch(sql, params=None):
        sql, params = live_builder.build(sql, params)
        cursor = mysql_connection.cursor()
        try:
            cursor.execute(sql, params)
            return cursor.fetchone()[0]
        finally:
            cursor.close()
    return _fetch
