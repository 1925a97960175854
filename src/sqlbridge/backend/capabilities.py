# src/sqlbridge/backend/capabilities.py
"""Static capability declarations consumed by the engine."""
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple


class DialectFeature(Enum):
    """Query features the engine asks a dialect about before building a plan."""
    BASIC_AGGREGATIONS = "basic-aggregations"
    STANDARD_DEVIATION_AGGREGATIONS = "standard-deviation-aggregations"
    EXPRESSIONS = "expressions"
    NATIVE_PARAMETERS = "native-parameters"
    NESTED_QUERIES = "nested-queries"
    BINNING = "binning"
    FOREIGN_KEYS = "foreign-keys"
    SET_TIMEZONE = "set-timezone"
    INNER_JOIN = "inner-join"
    LEFT_JOIN = "left-join"
    RIGHT_JOIN = "right-join"
    FULL_JOIN = "full-join"
    CASE_SENSITIVITY_STRING_FILTER_OPTIONS = "case-sensitivity-string-filter-options"


@dataclass(frozen=True)
class ConnectionProperty:
    """One user-facing connection setting a backend accepts."""
    name: str
    display_name: str
    type: str = "string"
    default: Optional[object] = None
    placeholder: Optional[str] = None
    required: bool = False


@dataclass(frozen=True)
class DialectCapabilities:
    """Capability and metadata table of a backend dialect.

    Every feature is supported unless listed in ``unsupported_features``.
    """
    name: str
    default_port: int
    quote_style: str
    excluded_schemas: FrozenSet[str] = frozenset()
    unsupported_features: FrozenSet[DialectFeature] = frozenset()
    connection_properties: Tuple[ConnectionProperty, ...] = field(default=())

    def supports(self, feature: DialectFeature) -> bool:
        return feature not in self.unsupported_features

    def is_excluded_schema(self, schema_name: str) -> bool:
        """Whether tables in ``schema_name`` should be skipped during schema sync."""
        upper = schema_name.upper()
        return any(upper == excluded.upper() for excluded in self.excluded_schemas)
