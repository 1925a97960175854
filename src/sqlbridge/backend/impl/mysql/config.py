# src/sqlbridge/backend/impl/mysql/config.py
"""MySQL-specific connection configuration

This module provides the MySQL connection configuration class that extends
the base ConnectionConfig and turns it into the option mapping consumed by
the connection descriptor builder.
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from sqlbridge.backend.config import (
    ConnectionConfig,
    SSLMixin,
    CharsetMixin,
    TimezoneMixin,
    LoggingMixin
)
from .connection import ConnectionDescriptor, DriverType, build_connection_descriptor

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class MySQLConnectionConfig(
    ConnectionConfig,
    SSLMixin,
    CharsetMixin,
    TimezoneMixin,
    LoggingMixin
):
    """MySQL connection configuration with MySQL-specific parameters.

    Unset fields fall back to the descriptor builder's defaults.
    """

    driver_type: DriverType = DriverType.MYSQL_CONNECTOR

    # Connection string style options, e.g. "tinyInt1isBit=false&connect_timeout=10"
    additional_options: Optional[str] = None

    def to_options(self) -> Dict[str, Any]:
        """Convert config to the option mapping understood by build_connection_descriptor."""
        options: Dict[str, Any] = dict(self.options)
        recognized = {
            'host': self.host,
            'port': self.port,
            'db': self.database,
            'user': self.username,
            'password': self.password,
            'ssl': self.ssl,
            'ssl_ca': self.ssl_ca,
            'ssl_cert': self.ssl_cert,
            'ssl_key': self.ssl_key,
            'ssl_verify_cert': self.ssl_verify_cert or None,
            'ssl_verify_identity': self.ssl_verify_identity or None,
            'driver': self.driver_type,
            'additional_options': self.additional_options,
            'charset': self.charset,
            'collation': self.collation,
        }
        for key, value in recognized.items():
            if value is not None:
                options[key] = value
        return options

    def to_descriptor(self) -> ConnectionDescriptor:
        return build_connection_descriptor(self.to_options())

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> 'MySQLConnectionConfig':
        """Build a config from MYSQL_* environment variables.

        Recognized variables: MYSQL_HOST, MYSQL_PORT, MYSQL_DATABASE, MYSQL_USER,
        MYSQL_PASSWORD, MYSQL_CHARSET, MYSQL_TIMEZONE, MYSQL_SSL, MYSQL_SSL_CA,
        MYSQL_SSL_CERT, MYSQL_SSL_KEY. Keyword overrides take precedence over
        the environment.
        """
        env = os.environ if environ is None else environ
        params: Dict[str, Any] = {}
        if env.get('MYSQL_HOST'):
            params['host'] = env['MYSQL_HOST']
        if env.get('MYSQL_PORT'):
            params['port'] = int(env['MYSQL_PORT'])
        if env.get('MYSQL_DATABASE'):
            params['database'] = env['MYSQL_DATABASE']
        if env.get('MYSQL_USER'):
            params['username'] = env['MYSQL_USER']
        if 'MYSQL_PASSWORD' in env:
            params['password'] = env['MYSQL_PASSWORD']
        if env.get('MYSQL_CHARSET'):
            params['charset'] = env['MYSQL_CHARSET']
        if env.get('MYSQL_TIMEZONE'):
            params['timezone'] = env['MYSQL_TIMEZONE']
        if env.get('MYSQL_SSL'):
            params['ssl'] = env['MYSQL_SSL'].lower() in _TRUE_VALUES
        for name in ('ssl_ca', 'ssl_cert', 'ssl_key'):
            if env.get(f'MYSQL_{name.upper()}'):
                params[name] = env[f'MYSQL_{name.upper()}']
        params.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**params)
