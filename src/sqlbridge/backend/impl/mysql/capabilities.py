# src/sqlbridge/backend/impl/mysql/capabilities.py
"""MySQL/MariaDB capability table and server version checks."""
import logging
import re
from typing import Optional, Tuple

from sqlbridge.backend.capabilities import ConnectionProperty, DialectCapabilities, DialectFeature

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3306

# Version boundary constants
MIN_SUPPORTED_MYSQL_VERSION = (5, 7, 0)
MIN_SUPPORTED_MARIADB_VERSION = (10, 2, 0)

CONNECTION_PROPERTIES = (
    ConnectionProperty("host", "Host", default="localhost", placeholder="localhost"),
    ConnectionProperty("port", "Port", type="integer", default=DEFAULT_PORT, placeholder=str(DEFAULT_PORT)),
    ConnectionProperty("db", "Database name", placeholder="birds_of_the_world", required=True),
    ConnectionProperty("user", "Username", placeholder="What username do you use to login to the database?",
                       required=True),
    ConnectionProperty("password", "Password", type="password", placeholder="*******"),
    ConnectionProperty("ssl", "Use a secure connection (SSL)?", type="boolean", default=False),
    ConnectionProperty("additional_options", "Additional connection string options (optional)",
                       placeholder="tinyInt1isBit=false"),
)

MYSQL_CAPABILITIES = DialectCapabilities(
    name="MySQL",
    default_port=DEFAULT_PORT,
    quote_style="mysql",
    excluded_schemas=frozenset({"INFORMATION_SCHEMA"}),
    # LIKE is case-sensitive or not depending on server and column collation,
    # which a single query cannot override.
    unsupported_features=frozenset({
        DialectFeature.FULL_JOIN,
        DialectFeature.CASE_SENSITIVITY_STRING_FILTER_OPTIONS,
    }),
    connection_properties=CONNECTION_PROPERTIES,
)


def parse_server_version(version_str: str) -> Tuple[Tuple[int, int, int], bool]:
    """Parse a ``SELECT VERSION()`` string.

    Returns:
        Tuple of the (major, minor, patch) version and whether the server is MariaDB
    """
    is_mariadb = "mariadb" in version_str.lower()
    # MariaDB replication builds report e.g. "5.5.5-10.6.12-MariaDB"
    match = re.search(r'5\.5\.5-(\d+(?:\.\d+)*)', version_str) if is_mariadb else None
    version_part = match.group(1) if match else version_str.split('-')[0]

    parts = []
    for part in version_part.split('.')[:3]:
        digits = re.match(r'\d+', part)
        if not digits:
            break
        parts.append(int(digits.group(0)))
    if not parts:
        raise ValueError(f"Cannot parse MySQL server version from '{version_str}'")

    version = tuple(parts) + (0,) * (3 - len(parts))
    return version, is_mariadb


def check_server_version(version: Tuple[int, ...], is_mariadb: bool = False,
                         product_name: Optional[str] = None) -> bool:
    """Return whether the server version is supported, warning when it is not."""
    if product_name is not None:
        is_mariadb = product_name == "MariaDB"
    minimum = MIN_SUPPORTED_MARIADB_VERSION if is_mariadb else MIN_SUPPORTED_MYSQL_VERSION
    if tuple(version) < minimum:
        product = "MariaDB" if is_mariadb else "MySQL"
        logger.warning(
            f"Unsupported {product} version {'.'.join(map(str, version))}; "
            f"minimum supported version is {'.'.join(map(str, minimum))}"
        )
        return False
    return True
