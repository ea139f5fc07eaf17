"""Round-to-round scheduling for a photo bracket.

The bracket hands out pairs from the current round, files verdicts into that
round's winners and, once the round runs dry, promotes the winners to be the
next round. A round in which every pair was kept whole is not promoted on
its own; ``ignore_done`` forces it.
"""

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

from photobracket.constants import PAIR_SIZE
from photobracket.controllers.history import (
    Drain,
    Keep,
    Promote,
    Requeue,
    SetDelta,
    TakePair,
    VerdictHistory,
)
from photobracket.exceptions import InvalidVerdictError
from photobracket.models.resources import CancelCheck, LoadProgress, load_items
from photobracket.models.round import Round
from photobracket.utils import setup_logger

logger = setup_logger(__name__)

T = TypeVar("T", bound=Hashable)


class Bracket(Generic[T]):
    """Drives the elimination rounds and exposes the scheduling API.

    Typical use from a presentation layer::

        while bracket.has_next_pair():
            pair = bracket.get_next_pair()
            if pair is None:
                continue  # round boundary, ask again
            bracket.selected(*judge(pair))

    Only one caller may drive a bracket at a time. ``load_all`` is the one
    operation meant to run on another thread; it never touches pairing state.
    """

    def __init__(self, items: Optional[Iterable[T]] = None):
        """Initialize a bracket.

        Args:
            items: Initial pool, in presentation order. Can be None
        """
        self._current: Round[T] = Round(items)
        self._round_count = 0
        # Set once the current round has eliminated something
        self._delta = False
        self._presented: Optional[Tuple[T, T]] = None
        self._history = VerdictHistory()

    # ----- state -----

    @property
    def current_round(self) -> Round[T]:
        return self._current

    @property
    def round_count(self) -> int:
        return self._round_count

    @property
    def delta(self) -> bool:
        """Whether the current round may roll over into its winners."""
        return self._delta

    @property
    def presented(self) -> Optional[Tuple[T, T]]:
        """The pair awaiting a verdict, if any."""
        return self._presented

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def is_empty(self) -> bool:
        """True if the bracket has never held any item."""
        return self._current.size() == 0 and not self._current.has_winners

    def get_round_count(self) -> int:
        return self._round_count

    def get_round_size(self) -> int:
        return self._current.size()

    def size(self) -> int:
        """Items in the current round plus those already through to the next one."""
        winners = self._current.winners
        return self._current.size() + (winners.size() if winners is not None else 0)

    def __len__(self) -> int:
        return self.size()

    def get_current_image_files(self) -> List[T]:
        return self._current.snapshot()

    def get_all_image_files(self) -> List[T]:
        files = self._current.snapshot()
        if self._current.winners is not None:
            files.extend(self._current.winners.snapshot())
        return files

    # ----- scheduling -----

    def add(self, *items: T) -> None:
        """Add items to the current round.

        Items already waiting in the current round or already through to its
        winners are ignored. Adding clears the undo history; a pair on display
        can still be taken back.
        """
        winners = self._current.winners
        for item in items:
            if winners is not None and item in winners.pending:
                logger.debug("Ignoring %s, already among the winners", item)
                continue
            if self._presented is not None and item in self._presented:
                logger.debug("Ignoring %s, it is on display", item)
                continue
            self._current.add(item)
        self._history.clear_committed()

    def has_next_pair(self) -> bool:
        """Whether ``get_next_pair`` can still produce material.

        Past a round boundary this looks one level down, but only when the
        round eliminated something (or ``ignore_done`` was called).
        """
        current = self._current
        if current.has_next_pair():
            return True
        winners = current.winners
        if not self._delta or winners is None:
            return False
        return (current.size() > 0 and winners.size() > 0) or winners.has_next_pair()

    def get_next_pair(self) -> Optional[Tuple[T, T]]:
        """Return the next two items to compare.

        A lone leftover is passed straight through to the winners. A round
        that was already empty on entry is replaced by its winners if it
        eliminated something and kept at least one item.

        Returns:
            The pair, or None at a round boundary or when nothing is left
        """
        if self._presented is not None:
            logger.warning("Pair %s is still awaiting a verdict", self._presented)
            return self._presented

        current = self._current
        was_empty = current.size() == 0
        winners = current.winners

        if (
            winners is not None
            and winners.size() > 0
            and current.size() > 0
            and not current.has_next_pair()
        ):
            item = current.next_single()
            winners.add(item)
            self._history.record(Drain(current, item))
            logger.debug("Passed %s through to round %d", item, self._round_count + 1)

        if (
            was_empty
            and self._delta
            and winners is not None
            and winners.size() > 0
        ):
            self._promote()

        pair = self._current.next_pair()
        if pair is not None:
            self._history.record(TakePair(self._current, pair))
            self._presented = pair
        return pair

    def _promote(self) -> None:
        previous = self._current
        self._history.record(Promote(previous, self._round_count, self._delta))
        self._current = previous.winners
        self._round_count += 1
        self._delta = False
        logger.info(
            "Round %d started with %d photo(s)", self._round_count, self._current.size()
        )

    def _set_delta(self, value: bool) -> None:
        if self._delta != value:
            self._history.record(SetDelta(self._delta, value))
            self._delta = value

    def _check_verdict(self, items: Tuple[T, ...]) -> Tuple[T, T]:
        presented = self._presented
        if presented is None:
            raise InvalidVerdictError(items, "no pair is on display")
        if len(items) > PAIR_SIZE:
            raise InvalidVerdictError(items, "a pair has only two items")
        if len(set(items)) != len(items):
            raise InvalidVerdictError(items, "an item was passed twice")
        for item in items:
            if item not in presented:
                raise InvalidVerdictError(
                    items, f"{item} is not part of the displayed pair"
                )
        return presented

    def selected(self, *items: T) -> None:
        """Record the judge's verdict on the displayed pair.

        Args:
            items: The survivors: both items, one of them, or none

        Raises:
            InvalidVerdictError: If the items are not a subset of the pair
                returned by the last ``get_next_pair`` call
        """
        self._check_verdict(items)
        round_ = self._current
        for item in items:
            round_.winners.add(item)
        self._history.record(Keep(round_, tuple(items)))
        if len(items) != PAIR_SIZE:
            self._set_delta(True)
        self._presented = None
        self._history.commit()
        logger.debug("Kept %d of the pair", len(items))

    def get_new_files(self, *items: T) -> Optional[Tuple[T, T]]:
        """Put the displayed items back mid-pool and return a fresh pair.

        Used when the two photos are not worth comparing against each other.

        Args:
            items: Items to put back; defaults to the whole displayed pair.
                Displayed items left out are eliminated.

        Returns:
            The next pair, as ``get_next_pair`` would
        """
        presented = self._check_verdict(items)
        if not items:
            items = presented
        round_ = self._current
        round_.insert_middle(*items)
        self._history.record(Requeue(round_, tuple(items)))
        if len(items) != PAIR_SIZE:
            self._set_delta(True)
        self._presented = None
        self._history.commit()
        return self.get_next_pair()

    def ignore_done(self) -> None:
        """Keep going past a round that eliminated nothing."""
        self._set_delta(True)
        logger.info("Continuing past the end of round %d", self._round_count)

    def undo(self) -> bool:
        """Take back the last verdict. Returns whether anything changed."""
        changed = self._history.undo(self)
        if changed:
            self._presented = None
        return changed

    def redo(self) -> bool:
        """Re-apply the last undone verdict. Returns whether anything changed."""
        changed = self._history.redo(self)
        if changed:
            self._presented = None
        return changed

    # ----- resources -----

    def flush_all(self) -> None:
        self._current.flush_all()
        if self._current.winners is not None:
            self._current.winners.flush_all()

    def load_all(
        self, progress: LoadProgress, is_cancelled: Optional[CancelCheck] = None
    ) -> bool:
        """Load every item of the current round and its winners.

        ``progress.on_complete`` is called exactly once, whether or not the
        pass was cancelled.

        Returns:
            False if the pass was cancelled
        """
        completed = load_items(self.get_all_image_files(), progress, is_cancelled)
        progress.on_complete(not completed)
        return completed

    def __repr__(self) -> str:
        return (
            f"Bracket(round={self._round_count}, pending={self._current.size()}, "
            f"size={self.size()}, delta={self._delta})"
        )
