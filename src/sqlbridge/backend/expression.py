# src/sqlbridge/backend/expression.py
"""
Neutral SQL expression tree.

Nodes are immutable and know nothing about any particular backend; rendering
is delegated to the dialect passed to ``format`` for the parts that differ
between backends (identifier and string quoting). Dialects assemble these
nodes when translating plan fragments, and the engine renders the final tree.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Tuple, Union

if TYPE_CHECKING:
    from .dialect import SQLDialectBase


def format_number(value: Union[int, float, Decimal]) -> str:
    """Render a number as a plain decimal literal, never in exponent notation."""
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        value = Decimal(repr(value))
    if not value.is_finite():
        raise ValueError(f"Cannot render non-finite number {value} as a SQL literal")
    return format(value, 'f')


class SQLExpressionBase(ABC):
    """Base class of all expression tree nodes."""

    @abstractmethod
    def format(self, dialect: 'SQLDialectBase') -> str:
        """Render this node as SQL text for the given dialect."""


@dataclass(frozen=True)
class RawExpression(SQLExpressionBase):
    """SQL text inserted verbatim."""
    expression: str

    def format(self, dialect: 'SQLDialectBase') -> str:
        return self.expression


@dataclass(frozen=True)
class Identifier(SQLExpressionBase):
    """Possibly qualified identifier, e.g. ``Identifier(("orders", "created_at"))``."""
    parts: Tuple[str, ...]

    def format(self, dialect: 'SQLDialectBase') -> str:
        return ".".join(dialect.format_identifier(part) for part in self.parts)


@dataclass(frozen=True)
class Literal(SQLExpressionBase):
    """Constant value rendered inline."""
    value: Any

    def format(self, dialect: 'SQLDialectBase') -> str:
        value = self.value
        if value is None:
            return "NULL"
        if isinstance(value, bool):
            return "TRUE" if value else "FALSE"
        if isinstance(value, (int, float, Decimal)):
            return format_number(value)
        if isinstance(value, str):
            return dialect.format_string_literal(value)
        raise TypeError(f"Cannot render {type(value).__name__} as a SQL literal")


@dataclass(frozen=True)
class FunctionCall(SQLExpressionBase):
    name: str
    args: Tuple[SQLExpressionBase, ...] = ()

    def format(self, dialect: 'SQLDialectBase') -> str:
        args = ", ".join(arg.format(dialect) for arg in self.args)
        return f"{self.name}({args})"


@dataclass(frozen=True)
class BinaryOperation(SQLExpressionBase):
    """Infix arithmetic; always parenthesised so nesting keeps its meaning."""
    operator: str
    left: SQLExpressionBase
    right: SQLExpressionBase

    def format(self, dialect: 'SQLDialectBase') -> str:
        return f"({self.left.format(dialect)} {self.operator} {self.right.format(dialect)})"


@dataclass(frozen=True)
class IntervalLiteral(SQLExpressionBase):
    """``INTERVAL <amount> <UNIT>``; the unit is a backend keyword such as ``SECOND``."""
    amount: Union[int, float, Decimal]
    unit: str

    def format(self, dialect: 'SQLDialectBase') -> str:
        return f"INTERVAL {format_number(self.amount)} {self.unit}"


def as_expression(value: Any) -> SQLExpressionBase:
    """Wrap plain Python values as literals; expression nodes pass through."""
    if isinstance(value, SQLExpressionBase):
        return value
    return Literal(value)


def identifier(*parts: str) -> Identifier:
    return Identifier(tuple(parts))


def literal(value: Any) -> Literal:
    return Literal(value)


def raw(sql: str) -> RawExpression:
    return RawExpression(sql)


def call(name: str, *args: Any) -> FunctionCall:
    return FunctionCall(name, tuple(as_expression(arg) for arg in args))


def concat(*args: Any) -> FunctionCall:
    return call("CONCAT", *args)


def add(left: Any, right: Any) -> BinaryOperation:
    return BinaryOperation("+", as_expression(left), as_expression(right))


def subtract(left: Any, right: Any) -> BinaryOperation:
    return BinaryOperation("-", as_expression(left), as_expression(right))


def multiply(left: Any, right: Any) -> BinaryOperation:
    return BinaryOperation("*", as_expression(left), as_expression(right))


def divide(left: Any, right: Any) -> BinaryOperation:
    return BinaryOperation("/", as_expression(left), as_expression(right))
