"""Query values: None, bool, numbers, str, list and dict, with their ordering."""

from __future__ import annotations

import functools
import json
import math
import sys
from decimal import Decimal
from typing import Any, Iterable

from .number import format_number, is_number

_TYPE_NAMES = ("null", "boolean", "number", "string", "array", "object")
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def type_order(value: Any) -> int:
    """Return the rank of the value's type in the total ordering."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return 1
    if is_number(value):
        return 2
    if isinstance(value, str):
        return 3
    if isinstance(value, list):
        return 4
    if isinstance(value, dict):
        return 5
    raise TypeError(f"not a query value: {value!r}")


def type_name(value: Any) -> str:
    """Return the query type name of ``value``."""
    return _TYPE_NAMES[type_order(value)]


def _sign(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _compare_numbers(lhs: Any, rhs: Any) -> int:
    lnan = isinstance(lhs, float) and math.isnan(lhs)
    rnan = isinstance(rhs, float) and math.isnan(rhs)
    if lnan or rnan:
        return _sign(lnan, rnan)
    return _sign(lhs, rhs)


def compare(lhs: Any, rhs: Any) -> int:
    """Total ordering of two values: -1, 0 or 1. NaN sorts above all numbers."""
    lt, rt = type_order(lhs), type_order(rhs)
    if lt != rt:
        return _sign(lt, rt)
    if lhs is None:
        return 0
    if lt == 2:
        return _compare_numbers(lhs, rhs)
    if lt in (1, 3):
        return _sign(lhs, rhs)
    if lt == 4:
        for a, b in zip(lhs, rhs):
            result = compare(a, b)
            if result:
                return result
        return _sign(len(lhs), len(rhs))
    lkeys, rkeys = sorted(lhs), sorted(rhs)
    if lkeys != rkeys:
        return _sign(lkeys, rkeys)
    for key in lkeys:
        result = compare(lhs[key], rhs[key])
        if result:
            return result
    return 0


def freeze(value: Any) -> tuple:
    """Return a hashable key that is equal for equal values."""
    order = type_order(value)
    if order == 0:
        return ("null",)
    if order == 1:
        return ("boolean", value)
    if order == 2:
        f = float(value)
        return ("number", "nan" if math.isnan(f) else f)
    if order == 3:
        return ("string", value)
    if order == 4:
        return ("array", tuple(freeze(v) for v in value))
    return ("object", frozenset((k, freeze(v)) for k, v in value.items()))


@functools.total_ordering
class OrderKey:
    """Sort key wrapper that orders values by :func:`compare`."""

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    def __lt__(self, other: "OrderKey") -> bool:
        return compare(self.value, other.value) < 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderKey):
            return NotImplemented
        return compare(self.value, other.value) == 0

    def __hash__(self) -> int:
        return hash(freeze(self.value))

    def __repr__(self) -> str:
        return f"OrderKey({self.value!r})"


def sort_values(values: Iterable[Any]) -> list:
    """Return the values sorted stably by the total ordering."""
    return sorted(values, key=OrderKey)


def _json_float(f: float) -> str:
    sign = "-" if f < 0 else ""
    _, digit_tuple, exp = Decimal(repr(abs(f))).normalize().as_tuple()
    digits = "".join(map(str, digit_tuple))
    length = len(digits)
    kk = length + exp
    if 0 <= exp and kk <= 16:
        body = digits + "0" * exp + ".0"
    elif 0 < kk <= 16:
        body = digits[:kk] + "." + digits[kk:]
    elif -5 < kk <= 0:
        body = "0." + "0" * (-kk) + digits
    elif length == 1:
        body = f"{digits}e{kk - 1}"
    else:
        body = f"{digits[0]}.{digits[1:]}e{kk - 1}"
    return sign + body


def _json_number(n: Any) -> str:
    f = float(n)
    if math.isnan(f):
        return "null"
    if math.isinf(f):
        f = sys.float_info.max if f > 0 else -sys.float_info.max
    if f.is_integer() and _I32_MIN <= f <= _I32_MAX:
        return str(int(f))
    return _json_float(f)


def _json_string(s: str) -> str:
    return json.dumps(s, ensure_ascii=False)


def to_json(value: Any) -> str:
    """Serialise a value as compact JSON. NaN becomes null, infinities the float limits."""
    order = type_order(value)
    if order == 0:
        return "null"
    if order == 1:
        return "true" if value else "false"
    if order == 2:
        return _json_number(value)
    if order == 3:
        return _json_string(value)
    if order == 4:
        return "[" + ",".join(to_json(v) for v in value) + "]"
    parts = []
    for key, item in value.items():
        if not isinstance(key, str):
            raise TypeError(f"object key must be a string: {key!r}")
        parts.append(f"{_json_string(key)}:{to_json(item)}")
    return "{" + ",".join(parts) + "}"


def _parse_json_float(text: str) -> float:
    f = float(text)
    if math.isinf(f):
        raise ValueError(f"number out of range: {text}")
    return f


def _parse_json_int(text: str) -> float:
    try:
        return float(int(text))
    except OverflowError:
        raise ValueError(f"number out of range: {text}") from None


def _reject_constant(text: str) -> float:
    raise ValueError(f"invalid JSON literal: {text}")


def from_json(text: str) -> Any:
    """Parse JSON text into a value; every number becomes a float."""
    return json.loads(
        text,
        parse_int=_parse_json_int,
        parse_float=_parse_json_float,
        parse_constant=_reject_constant,
    )


_DEBUG_ESCAPES = {
    "\t": "\\t",
    "\r": "\\r",
    "\n": "\\n",
    "\\": "\\\\",
    '"': '\\"',
    "\0": "\\0",
}


def _debug_string(s: str) -> str:
    out = ['"']
    for ch in s:
        if ch in _DEBUG_ESCAPES:
            out.append(_DEBUG_ESCAPES[ch])
        elif not ch.isprintable():
            out.append(f"\\u{{{ord(ch):x}}}")
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)


def display(value: Any) -> str:
    """Human-readable rendering used in messages: strings quoted, object keys bare."""
    order = type_order(value)
    if order == 0:
        return "null"
    if order == 1:
        return "true" if value else "false"
    if order == 2:
        return format_number(value)
    if order == 3:
        return _debug_string(value)
    if order == 4:
        return "[" + ", ".join(display(v) for v in value) + "]"
    return "{" + ", ".join(f"{k}: {display(v)}" for k, v in value.items()) + "}"