"""Reading, writing and deleting values at paths."""

from __future__ import annotations

import math
import sys
from typing import Any, Optional

from .errors import IndexingError, PathError
from .indexing import calculate_slice_index
from .number import is_number
from .value import display

_ISIZE_MIN = -sys.maxsize - 1
_ISIZE_MAX = sys.maxsize


class _Tombstone:
    """Marks a slot that is to be removed once every path has been visited."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<tombstone>"


_TOMBSTONE = _Tombstone()


def _to_int(n: Any, low: int, high: int) -> Optional[int]:
    f = float(n)
    if math.isnan(f) or math.isinf(f):
        return None
    t = int(f)
    if t < low or t > high:
        return None
    return t


def _to_isize(n: Any) -> Optional[int]:
    return _to_int(n, _ISIZE_MIN, _ISIZE_MAX)


def _to_usize(n: Any) -> Optional[int]:
    return _to_int(n, 0, 2 * _ISIZE_MAX + 1)


def _slice_range(length: int, bounds: dict) -> range:
    given = {key: bounds[key] for key in ("start", "end") if key in bounds}
    return calculate_slice_index(length, **given)


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (bool, str)) or is_number(value)


def _non_indexable(value: Any) -> IndexingError:
    return IndexingError(f"Cannot index on non-indexable value {display(value)}", value)


def _invalid_index(idx: Any) -> PathError:
    return PathError(f"Invalid path index {display(idx)}", idx)


def _invalid_indexing(value: Any, idx: Any) -> PathError:
    return PathError(f"Cannot index {display(value)} with {display(idx)}", value)


def _expected_array(value: Any) -> PathError:
    return PathError(f"Expected an array but got {display(value)}", value)


def _require_path(path: Any) -> list:
    if not isinstance(path, list):
        raise PathError(f"Path must be an array, got {display(path)}", path)
    return path


def _resolve_array_index(length: int, idx: Any) -> int:
    i = _to_isize(idx)
    if i is None or i + length < 0:
        raise _invalid_index(idx)
    return i + length if i < 0 else i


def _get(context: Any, path: list) -> Any:
    for position, idx in enumerate(path):
        if _is_scalar(context):
            raise _non_indexable(context)
        if context is None:
            if isinstance(idx, dict):
                _slice_range(0, idx)
            elif not (isinstance(idx, str) or is_number(idx)):
                raise _invalid_indexing(context, idx)
        elif isinstance(context, list) and is_number(idx):
            i = _resolve_array_index(len(context), idx)
            context = context[i] if i < len(context) else None
        elif isinstance(context, list) and isinstance(idx, dict):
            bounds = _slice_range(len(context), idx)
            context = context[bounds.start : bounds.stop]
        elif isinstance(context, dict) and isinstance(idx, str):
            context = context.get(idx)
        else:
            raise _invalid_indexing(context, idx)
    return context


def get_path(context: Any, path: Any) -> Any:
    """Return the value found at ``path`` inside ``context``."""
    return _get(context, _require_path(path))


def _set(context: Any, path: list, replacement: Any) -> Any:
    if not path:
        return replacement
    idx, rest = path[0], path[1:]
    if _is_scalar(context):
        raise _non_indexable(context)
    if context is None:
        if is_number(idx):
            count = _to_usize(idx)
            if count is None:
                raise _invalid_index(idx)
            return [None] * count + [_set(None, rest, replacement)]
        if isinstance(idx, str):
            return {idx: _set(None, rest, replacement)}
        if isinstance(idx, dict):
            _slice_range(0, idx)
            result = _set(None, rest, replacement)
            if not isinstance(result, list):
                raise _expected_array(result)
            return result
        raise _invalid_indexing(context, idx)
    if isinstance(context, list) and is_number(idx):
        i = _resolve_array_index(len(context), idx)
        updated = list(context)
        if i >= len(updated):
            updated.extend([None] * (i - len(updated) + 1))
        updated[i] = _set(updated[i], rest, replacement)
        return updated
    if isinstance(context, list) and isinstance(idx, dict):
        bounds = _slice_range(len(context), idx)
        middle = _set(context[bounds.start : bounds.stop], rest, replacement)
        if not isinstance(middle, list):
            raise _expected_array(middle)
        return context[: bounds.start] + middle + context[bounds.stop :]
    if isinstance(context, dict) and isinstance(idx, str):
        updated = dict(context)
        updated[idx] = _set(updated.get(idx), rest, replacement)
        return updated
    raise _invalid_indexing(context, idx)


def set_path(context: Any, path: Any, value: Any) -> Any:
    """Return a copy of ``context`` with ``value`` placed at ``path``."""
    return _set(context, _require_path(path), value)


def _mark(context: Any, path: list) -> Any:
    if not path:
        return None
    idx, rest = path[0], path[1:]
    if _is_scalar(context):
        raise _non_indexable(context)
    if context is None:
        return None
    if isinstance(context, list) and is_number(idx):
        i = _to_isize(idx)
        if i is None:
            raise _invalid_index(idx)
        if i + len(context) < 0:
            return context
        if i < 0:
            i += len(context)
        if i >= len(context):
            return context
        updated = list(context)
        updated[i] = _TOMBSTONE if not rest else _mark(updated[i], rest)
        return updated
    if isinstance(context, list) and isinstance(idx, dict):
        bounds = _slice_range(len(context), idx)
        if not bounds:
            return context
        before = context[: bounds.start]
        after = context[bounds.stop :]
        if not rest:
            return before + [_TOMBSTONE] * len(bounds) + after
        middle = _mark(context[bounds.start : bounds.stop], rest)
        if not isinstance(middle, list):
            raise _expected_array(middle)
        return before + middle + after
    if isinstance(context, dict) and isinstance(idx, str):
        if idx not in context:
            return context
        updated = dict(context)
        updated[idx] = _TOMBSTONE if not rest else _mark(updated[idx], rest)
        return updated
    raise _invalid_indexing(context, idx)


def _sweep(original: Any, marked: Any) -> Any:
    """Drop tombstoned slots; return the tombstone itself when the whole value goes."""
    if marked is _TOMBSTONE or original is marked:
        return marked
    if isinstance(original, list) and isinstance(marked, list):
        kept = (_sweep(orig, item) for orig, item in zip(original, marked))
        return [item for item in kept if item is not _TOMBSTONE]
    if isinstance(original, dict) and isinstance(marked, dict):
        result = {}
        for key, item in marked.items():
            swept = _sweep(original[key], item) if key in original else item
            if swept is not _TOMBSTONE:
                result[key] = swept
        return result
    return marked


def _depth(path: list) -> int:
    # A slice followed by further indexing addresses values at the slice's own
    # level, so only non-slice components count, plus one for a trailing slice.
    depth = sum(1 for component in path if not isinstance(component, dict))
    if path and isinstance(path[-1], dict):
        depth += 1
    return depth


def del_paths(context: Any, paths: Any) -> Any:
    """Return a copy of ``context`` with every value at the given paths removed."""
    paths = _require_path(paths)
    checked = [_require_path(path) for path in paths]
    checked.sort(key=_depth, reverse=True)
    marked = context
    for path in checked:
        marked = _mark(marked, path)
    result = _sweep(context, marked)
    return None if result is _TOMBSTONE else result