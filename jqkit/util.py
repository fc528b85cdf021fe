"""Small shared helpers."""

from __future__ import annotations

from typing import Any, Iterable, Iterator


class SharedIterator:
    """An iterator whose copies all advance one underlying source.

    Wrapping a ``SharedIterator`` (or copying one) yields a handle onto the
    same source, so items consumed through one handle are gone for the others.
    """

    __slots__ = ("_source",)

    def __init__(self, iterable: Iterable[Any]) -> None:
        if isinstance(iterable, SharedIterator):
            self._source: Iterator[Any] = iterable._source
        else:
            self._source = iter(iterable)

    def __iter__(self) -> "SharedIterator":
        return self

    def __next__(self) -> Any:
        return next(self._source)

    def __copy__(self) -> "SharedIterator":
        return SharedIterator(self)