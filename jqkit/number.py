"""Numeric helpers: every number behaves as a 64-bit float."""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any

_NUMBER_RE = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?)",
    re.IGNORECASE,
)


def is_number(value: Any) -> bool:
    """Return whether ``value`` is a number (booleans are not numbers)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_number(text: str) -> float:
    """Parse a number literal strictly, without surrounding whitespace."""
    if not isinstance(text, str) or not _NUMBER_RE.fullmatch(text):
        raise ValueError(f"invalid number literal: {text!r}")
    return float(text)


def format_number(n: float) -> str:
    """Render a number in plain positional notation, never with an exponent."""
    f = float(n)
    if math.isnan(f):
        return "NaN"
    if math.isinf(f):
        return "inf" if f > 0 else "-inf"
    return format(Decimal(repr(f)).normalize(), "f")


def saturating_int(n: float, low: int, high: int) -> int:
    """Truncate ``n`` toward zero, saturating at ``low``/``high`` when out of range."""
    f = float(n)
    if math.isnan(f):
        return low
    if math.isinf(f):
        return high if f > 0 else low
    t = int(f)
    if t < low or t > high:
        return high if f > 0 else low
    return t