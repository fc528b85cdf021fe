"""Exceptions raised while running queries."""

from __future__ import annotations

from typing import Any

from .value import display


def _describe(value: Any) -> str:
    try:
        return display(value)
    except TypeError:
        return repr(value)


class XQError(Exception):
    """Base class for every error raised by a query."""


class QueryExecutionError(XQError):
    """An error raised while a query is being evaluated."""


class InvalidArgTypeError(QueryExecutionError):
    """A built-in function received a value of a type it cannot handle."""

    def __init__(self, function: str, value: Any) -> None:
        super().__init__(f"Invalid argument type for `{function}`: {_describe(value)}")
        self.function = function
        self.value = value


class IncompatibleOperatorError(QueryExecutionError):
    """A binary operator was applied to operands it does not support."""

    def __init__(self, operator: str, lhs: Any, rhs: Any) -> None:
        super().__init__(
            f"Incompatible operands for `{operator}`: {_describe(lhs)} and {_describe(rhs)}"
        )
        self.operator = operator
        self.lhs = lhs
        self.rhs = rhs


class DivModByZeroError(QueryExecutionError):
    """Division or modulo by zero."""

    def __init__(self) -> None:
        super().__init__("Divide or modulo by zero")


class IndexingError(QueryExecutionError):
    """Indexing or slicing a value failed."""

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class PathError(QueryExecutionError):
    """A path expression was malformed or could not be applied."""

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class UserDefinedError(QueryExecutionError):
    """An error raised by the query itself through `error`."""

    def __init__(self, value: Any) -> None:
        if isinstance(value, str):
            message = value
        else:
            message = f"{_describe(value)} (not a string)"
        super().__init__(message)
        self.value = value