"""Numeric built-ins with IEEE-754 results instead of exceptions."""

from __future__ import annotations

import math
import sys
from fractions import Fraction
from typing import Any, Callable

from .errors import InvalidArgTypeError
from .number import is_number

_INF = math.inf


def nan(value: Any) -> float:
    """Return NaN, whatever the input."""
    return math.nan


def infinite(value: Any) -> float:
    """Return positive infinity, whatever the input."""
    return _INF


def _lenient(func: Callable[[float], float], odd: bool = False) -> Callable[[float], float]:
    """Wrap a math function so domain errors give NaN and overflow gives infinity."""

    def wrapped(x: float) -> float:
        try:
            return func(x)
        except ValueError:
            return math.nan
        except OverflowError:
            return math.copysign(_INF, x) if odd else _INF

    return wrapped


def _is_odd_integer(y: float) -> bool:
    return math.isfinite(y) and y.is_integer() and abs(y) % 2 == 1


def _pow(x: float, y: float) -> float:
    try:
        return math.pow(x, y)
    except OverflowError:
        return -_INF if x < 0 and _is_odd_integer(y) else _INF
    except ValueError:
        if x == 0:
            negative = math.copysign(1.0, x) < 0 and _is_odd_integer(y)
            return -_INF if negative else _INF
        return math.nan


def _log(func: Callable[[float], float]) -> Callable[[float], float]:
    def wrapped(x: float) -> float:
        if x == 0:
            return -_INF
        if x < 0:
            return math.nan
        return func(x)

    return wrapped


def _is_normal(x: float) -> bool:
    return math.isfinite(x) and x != 0 and abs(x) >= sys.float_info.min


def _integral(func: Callable[[float], int]) -> Callable[[float], float]:
    def wrapped(x: float) -> float:
        if not math.isfinite(x):
            return x
        return math.copysign(float(func(x)), x)

    return wrapped


def _round(x: float) -> float:
    """Round half away from zero."""
    if not math.isfinite(x):
        return x
    whole = math.trunc(x)
    if abs(x - whole) >= 0.5:
        whole += 1 if x > 0 else -1
    return math.copysign(float(whole), x)


def _cbrt(x: float) -> float:
    if not math.isfinite(x) or x == 0:
        return x
    root = math.copysign(abs(x) ** (1.0 / 3.0), x)
    return root - (root * root * root - x) / (3.0 * root * root)


def _atanh(x: float) -> float:
    if x == 1:
        return _INF
    if x == -1:
        return -_INF
    return _lenient(math.atanh)(x)


def _fmax(v: float, w: float) -> float:
    if math.isnan(v):
        return w
    if math.isnan(w):
        return v
    return max(v, w)


def _fmin(v: float, w: float) -> float:
    if math.isnan(v):
        return w
    if math.isnan(w):
        return v
    return min(v, w)


def _fma(v: float, w: float, x: float) -> float:
    """Fused multiply-add with a single rounding."""
    if not (math.isfinite(v) and math.isfinite(w) and math.isfinite(x)):
        return v * w + x
    exact = Fraction(v) * Fraction(w) + Fraction(x)
    if exact == 0:
        return v * w + x
    try:
        return float(exact)
    except OverflowError:
        return _INF if exact > 0 else -_INF


_UNARY: dict[str, Callable[[float], Any]] = {
    "isnan": math.isnan,
    "isnormal": _is_normal,
    "isinfinite": math.isinf,
    "floor": _integral(math.floor),
    "round": _round,
    "ceil": _integral(math.ceil),
    "trunc": _integral(math.trunc),
    "fabs": math.fabs,
    "sqrt": _lenient(math.sqrt),
    "cbrt": _cbrt,
    "sin": _lenient(math.sin),
    "cos": _lenient(math.cos),
    "tan": _lenient(math.tan),
    "asin": _lenient(math.asin),
    "acos": _lenient(math.acos),
    "atan": math.atan,
    "sinh": _lenient(math.sinh, odd=True),
    "cosh": _lenient(math.cosh),
    "tanh": math.tanh,
    "asinh": math.asinh,
    "acosh": _lenient(math.acosh),
    "atanh": _atanh,
    "exp": _lenient(math.exp),
    "exp2": lambda x: _pow(2.0, x),
    "exp10": lambda x: _pow(10.0, x),
    "expm1": _lenient(math.expm1),
    "log": _log(math.log),
    "log2": _log(math.log2),
    "log10": _log(math.log10),
}

_BINARY: dict[str, Callable[[float, float], float]] = {
    "fmax": _fmax,
    "fmin": _fmin,
    "copysign": math.copysign,
    "atan2": math.atan2,
    "hypot": math.hypot,
    "pow": _pow,
}

_TERNARY: dict[str, Callable[[float, float, float], float]] = {
    "fma": _fma,
}


def _lookup(table: dict, name: str) -> Callable:
    try:
        return table[name]
    except KeyError:
        raise ValueError(f"unknown math function: {name}") from None


def unary_math(name: str, value: Any) -> Any:
    """Apply the one-argument math function ``name`` to a number."""
    func = _lookup(_UNARY, name)
    if not is_number(value):
        raise InvalidArgTypeError(name, value)
    return func(float(value))


def binary_math(name: str, v: Any, w: Any) -> float:
    """Apply the two-argument math function ``name``."""
    func = _lookup(_BINARY, name)
    if not is_number(w):
        raise InvalidArgTypeError(name, w)
    if not is_number(v):
        raise InvalidArgTypeError(name, v)
    return func(float(v), float(w))


def ternary_math(name: str, v: Any, w: Any, x: Any) -> float:
    """Apply the three-argument math function ``name``."""
    func = _lookup(_TERNARY, name)
    if not is_number(x):
        raise InvalidArgTypeError(name, x)
    if not is_number(w):
        raise InvalidArgTypeError(name, w)
    if not is_number(v):
        raise InvalidArgTypeError(name, v)
    return func(float(v), float(w), float(x))