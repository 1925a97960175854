# src/sqlbridge/backend/type_adapter.py
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type


class SQLTypeAdapter(ABC):
    """
    Converts values of one Python type at the parameter-bind and result-read boundaries.

    ``options`` carries per-call context such as the results time zone
    (``'timezone'``) or the declared native column type (``'column_type'``).
    """

    @property
    @abstractmethod
    def supported_types(self) -> Dict[Type, List[Any]]:
        """Python types handled, each mapped to the driver-side types produced."""

    @abstractmethod
    def to_database(self, value: Any, target_type: Type, options: Optional[Dict[str, Any]] = None) -> Any:
        """Convert a Python value into the form bound as a statement parameter."""

    @abstractmethod
    def from_database(self, value: Any, target_type: Type, options: Optional[Dict[str, Any]] = None) -> Any:
        """Convert a raw driver value read from a result set."""
