# src/sqlbridge/backend/config.py
"""Base connection configuration and reusable configuration mixins."""
import datetime
import logging
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

from .timezone import resolve_timezone

logger = logging.getLogger(__name__)


@dataclass
class ConnectionConfig:
    """Options common to every backend connection."""
    host: str = "localhost"
    port: Optional[int] = None
    database: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    options: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to a dictionary, omitting unset values."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                result[f.name] = value
        return result


@dataclass
class SSLMixin:
    ssl: bool = False
    ssl_ca: Optional[str] = None
    ssl_cert: Optional[str] = None
    ssl_key: Optional[str] = None
    ssl_verify_cert: bool = False
    ssl_verify_identity: bool = False


@dataclass
class CharsetMixin:
    charset: str = "utf8mb4"
    collation: Optional[str] = None


@dataclass
class TimezoneMixin:
    """Results time zone in which temporal values are presented to the engine."""
    timezone: Optional[str] = None

    def results_timezone(self) -> datetime.tzinfo:
        """Resolve the configured results time zone.

        An unset zone falls back to the host's local zone. A zone that is set
        but cannot be resolved raises TimezoneResolutionError.
        """
        if self.timezone:
            return resolve_timezone(self.timezone)

        import tzlocal
        local_name = tzlocal.get_localzone_name()
        logger.info(f"No results time zone configured, using host zone {local_name}")
        return resolve_timezone(local_name or "UTC")


@dataclass
class LoggingMixin:
    log_queries: bool = False
    log_level: int = logging.INFO
