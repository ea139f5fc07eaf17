"""Insertion-ordered set with removal from either end."""

# Photo Bracket
# Copyright (C) 2025  Photo Bracket developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from collections import OrderedDict
from collections.abc import MutableSet
from typing import Generic, Hashable, Iterable, Iterator, List, Optional, TypeVar

T = TypeVar("T", bound=Hashable)


class OrderedSet(MutableSet, Generic[T]):
    """A set that remembers insertion order and works as a double-ended queue.

    Membership, insertion and removal at either end are O(1). Adding an
    element that is already present is a no-op and keeps its position.

    Parameters
    ----------
    items : iterable, optional
        Initial elements, inserted in iteration order.
    """

    __slots__ = ("_data",)

    def __init__(self, items: Optional[Iterable[T]] = None):
        self._data: "OrderedDict[T, None]" = OrderedDict()
        if items is not None:
            for item in items:
                self.add(item)

    def __contains__(self, item: object) -> bool:
        return item in self._data

    def __iter__(self) -> Iterator[T]:
        return iter(self._data)

    def __reversed__(self) -> Iterator[T]:
        return reversed(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._data)!r})"

    def add(self, item: T) -> bool:
        """Append ``item``. Returns False if it was already present."""
        if item in self._data:
            return False
        self._data[item] = None
        return True

    def add_first(self, item: T) -> bool:
        """Insert ``item`` at the front. Returns False if it was already present."""
        if item in self._data:
            return False
        self._data[item] = None
        self._data.move_to_end(item, last=False)
        return True

    def insert(self, index: int, item: T) -> bool:
        """Insert ``item`` before position ``index``; False if already present.

        Positions between the ends cost O(n).
        """
        if item in self._data:
            return False
        items = list(self._data)
        items.insert(index, item)
        self._data = OrderedDict.fromkeys(items)
        return True

    def discard(self, item: T) -> None:
        self._data.pop(item, None)

    def pop_first(self) -> T:
        """Remove and return the first element. Raises KeyError when empty."""
        if not self._data:
            raise KeyError("pop_first from an empty OrderedSet")
        item, _ = self._data.popitem(last=False)
        return item

    def pop_last(self) -> T:
        """Remove and return the last element. Raises KeyError when empty."""
        if not self._data:
            raise KeyError("pop_last from an empty OrderedSet")
        item, _ = self._data.popitem(last=True)
        return item

    def first(self) -> T:
        if not self._data:
            raise KeyError("first of an empty OrderedSet")
        return next(iter(self._data))

    def last(self) -> T:
        if not self._data:
            raise KeyError("last of an empty OrderedSet")
        return next(reversed(self._data))

    def clear(self) -> None:
        self._data.clear()

    def snapshot(self) -> List[T]:
        """Return the elements as a new list; changing it never touches the set."""
        return list(self._data)
