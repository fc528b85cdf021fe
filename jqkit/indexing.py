"""Indexing and slicing of query values."""

from __future__ import annotations

import sys
from typing import Any, Optional

from .errors import IndexingError
from .number import is_number, saturating_int
from .value import compare, display

_ISIZE_MIN = -sys.maxsize - 1
_ISIZE_MAX = sys.maxsize

# Marks a slice bound that was not given at all, as opposed to one given as null.
_ABSENT = object()


def _shift_index(length: int, idx: Any, message: str) -> Optional[int]:
    if not is_number(idx):
        raise IndexingError(f"{message}: {display(idx)}", idx)
    i = saturating_int(idx, _ISIZE_MIN, _ISIZE_MAX)
    if i < 0:
        shifted = i + length
        return None if shifted < 0 else shifted
    return i


def _subarray_positions(array: list, pattern: list) -> list:
    if not pattern:
        return []
    width = len(pattern)
    return [
        float(pos)
        for pos in range(len(array) - width + 1)
        if all(compare(a, b) == 0 for a, b in zip(array[pos : pos + width], pattern))
    ]


def _slice_by_object(value: Any, bounds: dict) -> tuple:
    given = {key: bounds[key] for key in ("start", "end") if key in bounds}
    return slice_value(value, **given)


def index(value: Any, idx: Any) -> tuple:
    """Index ``value`` by ``idx``; return the result and its path element."""
    if value is None and (isinstance(idx, (str, dict)) or is_number(idx)):
        return None, idx
    if value is None or isinstance(value, bool) or is_number(value):
        raise IndexingError(f"Cannot index on non-indexable value {display(value)}", value)
    if isinstance(value, str):
        if isinstance(idx, dict):
            return _slice_by_object(value, idx)
        pos = _shift_index(len(value), idx, "Cannot index an array with a non-integer")
        result = value[pos] if pos is not None and pos < len(value) else None
        return result, idx
    if isinstance(value, list):
        if isinstance(idx, list):
            return _subarray_positions(value, idx), idx
        if isinstance(idx, dict):
            return _slice_by_object(value, idx)
        pos = _shift_index(len(value), idx, "Cannot index an array with a non-integer")
        result = value[pos] if pos is not None and pos < len(value) else None
        return result, idx
    if not isinstance(idx, str):
        raise IndexingError(f"Cannot index an object with a non-string {display(idx)}", idx)
    return value.get(idx), idx


def calculate_slice_index(length: int, start: Any = _ABSENT, end: Any = _ABSENT) -> range:
    """Resolve slice bounds against ``length``; null or omitted bounds are open."""
    if start is _ABSENT and end is _ABSENT:
        raise IndexingError("Slice must have at least one bound")
    message = "Cannot slice with a non-integer"
    if start is _ABSENT or start is None:
        first = 0
    else:
        shifted = _shift_index(length, start, message)
        first = min(max(shifted or 0, 0), length)
    if end is _ABSENT or end is None:
        last = length
    else:
        shifted = _shift_index(length, end, message)
        last = min(max(shifted or 0, first), length)
    return range(first, last)


def slice_value(value: Any, start: Any = _ABSENT, end: Any = _ABSENT) -> tuple:
    """Slice a string or array; return the result and its path element."""
    path_element = {}
    if start is not _ABSENT:
        path_element["start"] = start
    if end is not _ABSENT:
        path_element["end"] = end
    if value is None:
        return None, path_element
    if not isinstance(value, (str, list)):
        raise IndexingError(
            f"Cannot slice a value that is neither an array nor a string: {display(value)}",
            value,
        )
    bounds = calculate_slice_index(len(value), start, end)
    return value[bounds.start : bounds.stop], path_element