# src/sqlbridge/backend/errors.py
"""Portable exception hierarchy raised by dialect backends."""
from typing import Any, Optional


class DatabaseError(Exception):
    """Base class for every error reported by this layer."""


class ConnectionError(DatabaseError):
    """Connecting to the backend failed.

    Attributes:
        category: Portable classification of the failure, when one matched
        raw_message: The driver's original message text
    """

    def __init__(self, message: str, category: Optional[Any] = None, raw_message: Optional[str] = None):
        super().__init__(message)
        self.category = category
        self.raw_message = raw_message if raw_message is not None else message


class OperationalError(DatabaseError):
    pass


class DeadlockError(OperationalError):
    pass


class IntegrityError(DatabaseError):
    pass


class QueryError(DatabaseError):
    pass


class TypeConversionError(DatabaseError):
    """A value could not be converted between Python and the backend."""


class TimezoneResolutionError(TypeConversionError):
    """A configured time zone could not be resolved to a valid zone."""


class UnsupportedFeatureError(DatabaseError):
    """A query plan asked for a feature the backend dialect does not support."""

    def __init__(self, feature: Any, dialect_name: str = ""):
        self.feature = feature
        name = getattr(feature, 'value', feature)
        target = f" by {dialect_name}" if dialect_name else ""
        super().__init__(f"Feature '{name}' is not supported{target}")
