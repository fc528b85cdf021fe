"""Comparison operators with their NaN rules."""

from __future__ import annotations

import enum
import math
from typing import Any, Optional

from .value import compare, type_order


class Comparator(enum.Enum):
    """Comparison operators."""

    EQ = "=="
    NEQ = "!="
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="


def _sign(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def values_equal(lhs: Any, rhs: Any) -> bool:
    """Equality as the ``==`` operator sees it: NaN is never equal to a number."""
    lt, rt = type_order(lhs), type_order(rhs)
    if lt != rt:
        return False
    if lt == 0:
        return True
    if lt == 2:
        return not _is_nan(lhs) and float(lhs) == float(rhs)
    if lt in (1, 3):
        return lhs == rhs
    if lt == 4:
        return len(lhs) == len(rhs) and all(
            values_equal(a, b) for a, b in zip(lhs, rhs)
        )
    if len(lhs) != len(rhs) or sorted(lhs) != sorted(rhs):
        return False
    # Object members are compared with the total equality, where NaN equals NaN.
    return all(compare(lhs[key], rhs[key]) == 0 for key in lhs)


def partial_compare(lhs: Any, rhs: Any) -> Optional[int]:
    """Order two values as -1, 0 or 1, or None when a NaN makes them unordered."""
    lt, rt = type_order(lhs), type_order(rhs)
    if lt != rt:
        return _sign(lt, rt)
    if lt == 0:
        return 0
    if lt == 2:
        if _is_nan(lhs) or _is_nan(rhs):
            return None
        return _sign(float(lhs), float(rhs))
    if lt in (1, 3):
        return _sign(lhs, rhs)
    if lt == 4:
        for a, b in zip(lhs, rhs):
            result = partial_compare(a, b)
            if result != 0:
                return result
        return _sign(len(lhs), len(rhs))
    lkeys, rkeys = sorted(lhs), sorted(rhs)
    if lkeys != rkeys:
        return _sign(lkeys, rkeys)
    for key in lkeys:
        result = partial_compare(lhs[key], rhs[key])
        if result:
            return result
    return 0


def apply_comparator(op: Comparator, lhs: Any, rhs: Any) -> bool:
    """Evaluate ``lhs op rhs``; ordering tests involving NaN are false."""
    op = Comparator(op)
    if op is Comparator.EQ:
        return values_equal(lhs, rhs)
    if op is Comparator.NEQ:
        return not values_equal(lhs, rhs)
    result = partial_compare(lhs, rhs)
    if result is None:
        return False
    if op is Comparator.GT:
        return result > 0
    if op is Comparator.GE:
        return result >= 0
    if op is Comparator.LT:
        return result < 0
    return result <= 0