# src/sqlbridge/backend/__init__.py
"""
Engine-facing base layer.

Defines the narrow contracts a backend dialect implements for the generic
query engine: the neutral expression tree, portable type tags, the dialect
interface, the capability table, configuration mixins and the portable
exception hierarchy. Backend implementations live under ``sqlbridge.backend.impl``.
"""

from .capabilities import ConnectionProperty, DialectCapabilities, DialectFeature
from .config import CharsetMixin, ConnectionConfig, LoggingMixin, SSLMixin, TimezoneMixin
from .dialect import SQLDialectBase
from .errors import (
    ConnectionError,
    DatabaseError,
    DeadlockError,
    IntegrityError,
    OperationalError,
    QueryError,
    TimezoneResolutionError,
    TypeConversionError,
    UnsupportedFeatureError,
)
from .expression import (
    BinaryOperation,
    FunctionCall,
    Identifier,
    IntervalLiteral,
    Literal,
    RawExpression,
    SQLExpressionBase,
)
from .type_adapter import SQLTypeAdapter
from .typing import DateBucket, PortableType, StorageKind, TimestampUnit, TimeUnit

__all__ = [
    # Dialect
    'SQLDialectBase',
    'DialectCapabilities',
    'DialectFeature',
    'ConnectionProperty',

    # Expressions
    'SQLExpressionBase',
    'RawExpression',
    'Identifier',
    'Literal',
    'FunctionCall',
    'BinaryOperation',
    'IntervalLiteral',

    # Types
    'PortableType',
    'StorageKind',
    'DateBucket',
    'TimeUnit',
    'TimestampUnit',
    'SQLTypeAdapter',

    # Configuration
    'ConnectionConfig',
    'SSLMixin',
    'CharsetMixin',
    'TimezoneMixin',
    'LoggingMixin',

    # Errors
    'DatabaseError',
    'ConnectionError',
    'OperationalError',
    'DeadlockError',
    'IntegrityError',
    'QueryError',
    'TypeConversionError',
    'TimezoneResolutionError',
    'UnsupportedFeatureError',
]
