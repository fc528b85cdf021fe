import copy

from jqkit.util import SharedIterator


def test_copies_share_progress():
    first = SharedIterator([1, 2, 3])
    second = copy.copy(first)
    assert next(first) == 1
    assert next(second) == 2
    assert list(first) == [3]
    assert list(second) == []


def test_wrapping_shares_source():
    first = SharedIterator(iter("abc"))
    second = SharedIterator(first)
    assert next(second) == "a"
    assert list(first) == ["b", "c"]


def test_exhausted_yields_default():
    it = SharedIterator([])
    assert next(it, "done") == "done"
    assert list(it) == []


def test_iter_returns_items_in_order():
    assert list(SharedIterator(range(4))) == [0, 1, 2, 3]