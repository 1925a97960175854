# src/sqlbridge/backend/impl/mysql/connection.py
"""
Connection descriptor construction.

The descriptor is everything the external execution layer needs to open a
connection; building it performs no I/O.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Union
from urllib.parse import parse_qsl

from .capabilities import DEFAULT_PORT

logger = logging.getLogger(__name__)


class DriverType(Enum):
    MYSQL_CONNECTOR = "mysql-connector"
    PYMYSQL = "pymysql"


DRIVER_MODULES = {
    DriverType.MYSQL_CONNECTOR: "mysql.connector",
    DriverType.PYMYSQL: "pymysql",
}

SUBPROTOCOL = "mysql"
IDENTIFIER_DELIMITER = "`"

DEFAULT_USER = "root"
DEFAULT_PASSWORD = ""
DEFAULT_DB = ""
DEFAULT_HOST = "localhost"

# Driver properties applied to every connection unless overridden
DEFAULT_CONNECTION_ARGS = {
    # Force UTF-8 encoding of results
    'charset': 'utf8mb4',
    'use_unicode': True,
}

# Certificate and verification options, spelled as both drivers' connect() keywords
SSL_OPTIONS = ('ssl_ca', 'ssl_cert', 'ssl_key', 'ssl_verify_cert', 'ssl_verify_identity')

RECOGNIZED_OPTIONS = frozenset(
    {'user', 'password', 'db', 'host', 'port', 'ssl', 'driver', 'additional_options'}
    | set(SSL_OPTIONS)
)


@dataclass(frozen=True)
class ConnectionDescriptor:
    """Fully resolved connection parameters, immutable once built."""
    driver: DriverType
    classname: str
    subprotocol: str
    subname: str
    host: str
    port: str
    dbname: str
    user: str
    password: str = field(repr=False)
    encrypt: bool
    delimiters: str
    properties: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    ssl_options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def url(self) -> str:
        """Connection URL without credentials, e.g. ``mysql://localhost:3306/shop``."""
        return f"{self.subprotocol}:{self.subname}"

    def to_connect_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``mysql.connector.connect`` or ``pymysql.connect``.

        Both drivers take the same ``ssl_*`` keywords. Encryption is disabled
        explicitly when not requested.

        Raises:
            ValueError: If the port is not numeric
        """
        try:
            port = int(self.port)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid port for MySQL connection: {self.port!r}")

        kwargs: Dict[str, Any] = {
            'host': self.host,
            'port': port,
            'user': self.user,
            'password': self.password,
        }
        if self.dbname:
            kwargs['database'] = self.dbname

        kwargs['ssl_disabled'] = not self.encrypt
        if self.encrypt:
            kwargs.update(self.ssl_options)
            if self.driver == DriverType.PYMYSQL and not self.ssl_options:
                # PyMySQL only requires TLS when given some SSL parameter
                kwargs['ssl'] = {'check_hostname': False}

        kwargs.update(self.properties)
        return kwargs


def parse_additional_options(additional_options: str) -> Dict[str, Any]:
    """Parse ``key=value&key2=value2`` connection string options.

    ``true``/``false`` become booleans; everything else stays a string.
    """
    parsed: Dict[str, Any] = {}
    for key, value in parse_qsl(additional_options or "", keep_blank_values=True):
        lowered = value.lower()
        if lowered in ("true", "false"):
            parsed[key] = lowered == "true"
        else:
            parsed[key] = value
    return parsed


def _resolve_driver(driver: Union[DriverType, str, None]) -> DriverType:
    if driver is None:
        return DriverType.MYSQL_CONNECTOR
    if isinstance(driver, DriverType):
        return driver
    try:
        return DriverType(driver)
    except ValueError:
        raise ValueError(
            f"Unknown MySQL driver: {driver!r}. "
            f"Available: {', '.join(d.value for d in DriverType)}"
        )


def build_connection_descriptor(options: Mapping[str, Any]) -> ConnectionDescriptor:
    """Build a connection descriptor from user connection options.

    No option is required; absent ones take the MySQL defaults. Options outside
    the recognized set are carried through as driver properties.

    Args:
        options: Mapping with any of ``user``, ``password``, ``db``, ``host``,
            ``port``, ``ssl``, ``driver``, ``additional_options``, the
            ``ssl_*`` certificate options and arbitrary passthrough driver
            options. Any certificate option turns encryption on.

    Returns:
        ConnectionDescriptor: The resolved descriptor
    """
    def option(key, default):
        value = options.get(key)
        return default if value is None else value

    user = option('user', DEFAULT_USER)
    password = option('password', DEFAULT_PASSWORD)
    db = option('db', DEFAULT_DB)
    host = option('host', DEFAULT_HOST)
    port = option('port', str(DEFAULT_PORT))
    driver = _resolve_driver(options.get('driver'))

    properties = dict(DEFAULT_CONNECTION_ARGS)
    properties.update(parse_additional_options(options.get('additional_options')))
    properties.update({k: v for k, v in options.items() if k not in RECOGNIZED_OPTIONS})

    # Unset paths and disabled checks are left to the driver defaults
    ssl_options = {key: options[key] for key in SSL_OPTIONS if options.get(key)}

    descriptor = ConnectionDescriptor(
        driver=driver,
        classname=DRIVER_MODULES[driver],
        subprotocol=SUBPROTOCOL,
        subname=f"//{host}:{port}/{db}",
        host=str(host),
        port=str(port),
        dbname=str(db),
        user=str(user),
        password=str(password),
        encrypt=bool(options.get('ssl', False)) or bool(ssl_options),
        delimiters=IDENTIFIER_DELIMITER,
        properties=MappingProxyType(properties),
        ssl_options=MappingProxyType(ssl_options),
    )
    logger.debug(f"Built {driver.value} connection descriptor for {descriptor.url}")
    return descriptor
