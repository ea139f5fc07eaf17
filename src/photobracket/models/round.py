"""One elimination level of a bracket."""

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

from typing import Generic, Hashable, Iterable, List, Optional, Tuple, TypeVar

from photobracket.models.ordered_set import OrderedSet
from photobracket.models.resources import (
    CancelCheck,
    LoadProgress,
    flush_items,
    load_items,
)

T = TypeVar("T", bound=Hashable)


class Round(Generic[T]):
    """Pool of undecided items for one level, plus the survivors of that level.

    ``winners`` stays ``None`` until the round receives its first item; after
    that it is a (possibly empty) Round that becomes the next level once this
    one is used up.

    Attributes
    ----------
    pending : OrderedSet
        Items still waiting to be compared, in presentation order.
    winners : Round or None
        Survivors of this level. None means the round never held an item.
    """

    def __init__(self, items: Optional[Iterable[T]] = None):
        self.pending: OrderedSet[T] = OrderedSet()
        self.winners: Optional["Round[T]"] = None
        if items is not None:
            for item in items:
                self.add(item)

    @property
    def has_winners(self) -> bool:
        return self.winners is not None

    def _ensure_winners(self) -> "Round[T]":
        if self.winners is None:
            self.winners = Round()
        return self.winners

    def add(self, item: T) -> None:
        """Put ``item`` at the back of the pool. Adding a present item is a no-op."""
        self.pending.add(item)
        self._ensure_winners()

    def push_front(self, item: T) -> None:
        """Put ``item`` at the front of the pool."""
        self.pending.add_first(item)
        self._ensure_winners()

    def insert_middle(self, *items: T) -> None:
        """Put ``items`` in the middle of the pool, keeping their order.

        Pairs are pulled from the ends, so requeued items are not handed out
        again straight away while other items are waiting.
        """
        index = len(self.pending) // 2
        for item in items:
            if self.pending.insert(index, item):
                index += 1
        if items:
            self._ensure_winners()

    def remove(self, item: T) -> bool:
        """Take ``item`` out of the pool. Returns whether it was there."""
        if item not in self.pending:
            return False
        self.pending.discard(item)
        return True

    def next_pair(self) -> Optional[Tuple[T, T]]:
        """Remove and return the first and last items of the pool.

        Pulling from opposite ends keeps neighbouring shots (bursts taken in
        sequence) from being shown against each other.

        Returns:
            The pair, or None if fewer than two items are left
        """
        if len(self.pending) < 2:
            return None
        first = self.pending.pop_first()
        last = self.pending.pop_last()
        return first, last

    def next_single(self) -> Optional[T]:
        """Remove and return the lone remaining item, if exactly one is left."""
        if len(self.pending) != 1:
            return None
        return self.pending.pop_first()

    def is_empty(self) -> bool:
        """Whether the pool is empty.

        A lone leftover is moved into ``winners`` before answering, so this
        call can change the round.
        """
        if len(self.pending) == 1:
            self._ensure_winners().add(self.next_single())
        return not self.pending

    def has_next_pair(self) -> bool:
        return len(self.pending) >= 2

    def size(self) -> int:
        return len(self.pending)

    def __len__(self) -> int:
        return len(self.pending)

    def snapshot(self) -> List[T]:
        """Copy of the pool in presentation order."""
        return self.pending.snapshot()

    def flush_all(self) -> None:
        flush_items(self.snapshot())

    def load_all(
        self, progress: LoadProgress, is_cancelled: Optional[CancelCheck] = None
    ) -> bool:
        """Load every pending item, then signal completion once.

        Returns:
            False if the pass was cancelled
        """
        completed = load_items(self.snapshot(), progress, is_cancelled)
        progress.on_complete(not completed)
        return completed

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Round):
            return NotImplemented
        return self.pending == other.pending

    def __repr__(self) -> str:
        winners = "None" if self.winners is None else len(self.winners)
        return f"Round(pending={self.snapshot()!r}, winners={winners})"
