"""Undo/redo for bracket verdicts.

Every change the bracket makes to its rounds is described by a small,
immutable step that knows how to re-apply and revert itself. Steps recorded
between two verdicts form one ``Verdict`` command on the undo stack.
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

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Hashable, List, Tuple

from photobracket.models.round import Round
from photobracket.utils import setup_logger

if TYPE_CHECKING:
    from photobracket.controllers.bracket import Bracket

logger = setup_logger(__name__)


class Step(ABC):
    """A reversible change to a bracket."""

    @abstractmethod
    def apply(self, bracket: "Bracket") -> None:
        pass

    @abstractmethod
    def revert(self, bracket: "Bracket") -> None:
        pass


@dataclass(frozen=True, eq=False)
class TakePair(Step):
    """A pair pulled from the front and back of a round's pool."""

    round: Round
    pair: Tuple[Hashable, Hashable]

    def apply(self, bracket: "Bracket") -> None:
        for item in self.pair:
            self.round.remove(item)

    def revert(self, bracket: "Bracket") -> None:
        first, last = self.pair
        self.round.push_front(first)
        self.round.add(last)


@dataclass(frozen=True, eq=False)
class Drain(Step):
    """A lone leftover moved straight into the winners."""

    round: Round
    item: Hashable

    def apply(self, bracket: "Bracket") -> None:
        self.round.remove(self.item)
        self.round.winners.add(self.item)

    def revert(self, bracket: "Bracket") -> None:
        self.round.winners.remove(self.item)
        self.round.add(self.item)


@dataclass(frozen=True, eq=False)
class Promote(Step):
    """The winners of ``previous`` became the current round."""

    previous: Round
    round_count: int
    delta: bool

    def apply(self, bracket: "Bracket") -> None:
        bracket._current = self.previous.winners
        bracket._round_count = self.round_count + 1
        bracket._delta = False

    def revert(self, bracket: "Bracket") -> None:
        bracket._current = self.previous
        bracket._round_count = self.round_count
        bracket._delta = self.delta


@dataclass(frozen=True, eq=False)
class Keep(Step):
    """Verdict survivors added to a round's winners."""

    round: Round
    items: Tuple[Hashable, ...]

    def apply(self, bracket: "Bracket") -> None:
        for item in self.items:
            self.round.winners.add(item)

    def revert(self, bracket: "Bracket") -> None:
        for item in self.items:
            self.round.winners.remove(item)


@dataclass(frozen=True, eq=False)
class Requeue(Step):
    """Items put back into the middle of a round's pool."""

    round: Round
    items: Tuple[Hashable, ...]

    def apply(self, bracket: "Bracket") -> None:
        self.round.insert_middle(*self.items)

    def revert(self, bracket: "Bracket") -> None:
        for item in self.items:
            self.round.remove(item)


@dataclass(frozen=True, eq=False)
class SetDelta(Step):
    before: bool
    after: bool

    def apply(self, bracket: "Bracket") -> None:
        bracket._delta = self.after

    def revert(self, bracket: "Bracket") -> None:
        bracket._delta = self.before


@dataclass(frozen=True, eq=False)
class Verdict(Step):
    """Everything that happened from one verdict up to and including the next."""

    steps: Tuple[Step, ...]

    def apply(self, bracket: "Bracket") -> None:
        for step in self.steps:
            step.apply(bracket)

    def revert(self, bracket: "Bracket") -> None:
        for step in reversed(self.steps):
            step.revert(bracket)


class VerdictHistory:
    """Undo and redo stacks of committed verdicts, plus the open transaction."""

    def __init__(self) -> None:
        self._open: List[Step] = []
        self._undo: List[Verdict] = []
        self._redo: List[Verdict] = []

    @property
    def can_undo(self) -> bool:
        return bool(self._undo or self._open)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def record(self, step: Step) -> None:
        """Add an already-performed step to the open transaction."""
        self._open.append(step)

    def commit(self) -> None:
        """Close the open transaction as one undoable verdict."""
        if not self._open:
            return
        self._undo.append(Verdict(tuple(self._open)))
        self._open = []
        self._redo.clear()

    def rollback(self, bracket: "Bracket") -> bool:
        """Revert the uncommitted steps. Returns whether there were any."""
        if not self._open:
            return False
        for step in reversed(self._open):
            step.revert(bracket)
        self._open = []
        return True

    def undo(self, bracket: "Bracket") -> bool:
        rolled_back = self.rollback(bracket)
        if not self._undo:
            return rolled_back
        command = self._undo.pop()
        command.revert(bracket)
        self._redo.append(command)
        logger.debug("Undid verdict (%d step(s))", len(command.steps))
        return True

    def redo(self, bracket: "Bracket") -> bool:
        if not self._redo:
            return False
        self.rollback(bracket)
        command = self._redo.pop()
        command.apply(bracket)
        self._undo.append(command)
        logger.debug("Redid verdict (%d step(s))", len(command.steps))
        return True

    def clear_committed(self) -> None:
        """Forget the undo and redo stacks, keeping the open transaction.

        The open transaction still describes the pair on display, which must
        be put back if the next verdict is undone.
        """
        self._undo.clear()
        self._redo.clear()
