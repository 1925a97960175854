# src/sqlbridge/backend/dialect.py
"""
Dialect interface between the generic query engine and a backend.

The engine selects one dialect per backend at startup and calls its
translation hooks for every plan node; none of them perform I/O or keep
mutable state, so a single instance is shared between concurrent requests.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional, Union

from .capabilities import DialectCapabilities, DialectFeature
from .errors import UnsupportedFeatureError
from .expression import RawExpression, SQLExpressionBase
from .typing import DateBucket, PortableType, StorageKind, TimestampUnit, TimeUnit


class SQLDialectBase(ABC):
    """Base class of backend dialects."""

    def __init__(self, version: tuple = (0, 0, 0), logger: Optional[logging.Logger] = None):
        self._version = version
        self._logger = logger or logging.getLogger(f"{__name__}.{type(self).__name__}")

    @property
    def version(self) -> tuple:
        return self._version

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def log(self, level: int, msg: str) -> None:
        self._logger.log(level, msg)

    # --- Quoting ---

    @abstractmethod
    def format_identifier(self, identifier: str) -> str:
        """Quote a table, column or schema name."""

    @abstractmethod
    def format_string_literal(self, value: str) -> str:
        """Quote a string constant."""

    @abstractmethod
    def get_placeholder(self) -> str:
        """Parameter placeholder used by the backend's driver."""

    def format_expression(self, expr: SQLExpressionBase) -> str:
        """Render an expression tree with this dialect."""
        if not isinstance(expr, SQLExpressionBase):
            raise ValueError(f"Unsupported expression type: {type(expr)}")
        return expr.format(self)

    def create_expression(self, expression: str) -> RawExpression:
        return RawExpression(expression)

    # --- Expression translation ---

    @abstractmethod
    def date_trunc(self, bucket: Union[DateBucket, str], expr: Any) -> SQLExpressionBase:
        """Truncate or extract ``expr`` for the given date bucket."""

    @abstractmethod
    def add_interval(self, expr: Any, amount: Union[int, float], unit: Union[TimeUnit, str]) -> SQLExpressionBase:
        """Add ``amount`` units to a temporal expression."""

    @abstractmethod
    def to_float(self, expr: Any) -> SQLExpressionBase:
        """Cast an expression to a floating point value."""

    @abstractmethod
    def unix_timestamp_to_timestamp(self, expr: Any,
                                    unit: Union[TimestampUnit, str] = TimestampUnit.SECONDS) -> SQLExpressionBase:
        """Convert a numeric UNIX timestamp expression to a temporal value."""

    # --- Types ---

    @abstractmethod
    def map_native_type(self, native_type_name: str) -> Optional[PortableType]:
        """Map a native column type name; ``None`` means unmapped."""

    @abstractmethod
    def storage_kind(self, native_type_name: str) -> StorageKind:
        """Storage semantics of temporal values in a column of this native type."""

    # --- Capabilities ---

    @property
    @abstractmethod
    def capabilities(self) -> DialectCapabilities:
        """Static capability table of this backend."""

    def supports(self, feature: DialectFeature) -> bool:
        return self.capabilities.supports(feature)

    def ensure_supported(self, feature: DialectFeature) -> None:
        """Reject plans that rely on an unsupported feature.

        Raises:
            UnsupportedFeatureError: If the feature is declared unsupported
        """
        if not self.supports(feature):
            self.log(logging.WARNING, f"Rejecting plan: {feature.value} is not supported by {self.capabilities.name}")
            raise UnsupportedFeatureError(feature, self.capabilities.name)
