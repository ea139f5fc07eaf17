import pytest

from photobracket.models.ordered_set import OrderedSet


def test_keeps_insertion_order_and_rejects_duplicates():
    items = OrderedSet(["c", "a", "b", "a"])

    assert list(items) == ["c", "a", "b"]
    assert items.add("c") is False
    assert items.add("d") is True
    assert list(items) == ["c", "a", "b", "d"]
    assert len(items) == 4


def test_removal_from_both_ends():
    items = OrderedSet("abcde")

    assert items.pop_first() == "a"
    assert items.pop_last() == "e"
    assert items.first() == "b"
    assert items.last() == "d"
    assert "a" not in items
    assert list(reversed(items)) == ["d", "c", "b"]


def test_add_first_puts_new_items_in_front_only():
    items = OrderedSet("bc")

    assert items.add_first("a") is True
    assert items.add_first("c") is False
    assert list(items) == ["a", "b", "c"]


def test_empty_set_errors():
    items = OrderedSet()

    with pytest.raises(KeyError):
        items.pop_first()
    with pytest.raises(KeyError):
        items.pop_last()
    with pytest.raises(KeyError):
        items.first()
    with pytest.raises(KeyError):
        items.remove("x")


def test_discard_and_remove():
    items = OrderedSet("abc")

    items.discard("b")
    items.discard("zzz")
    items.remove("a")
    assert list(items) == ["c"]


def test_equality_ignores_order():
    assert OrderedSet("abc") == OrderedSet("cba")
    assert OrderedSet("abc") != OrderedSet("ab")
    assert OrderedSet("abc") == {"a", "b", "c"}


def test_snapshot_is_independent_copy():
    items = OrderedSet("abc")
    copy = items.snapshot()
    copy.append("d")
    copy.remove("a")

    assert list(items) == ["a", "b", "c"]


def test_insert_in_the_middle():
    items = OrderedSet("abd")

    assert items.insert(2, "c") is True
    assert items.insert(0, "d") is False
    assert list(items) == ["a", "b", "c", "d"]
    assert items.pop_last() == "d"
