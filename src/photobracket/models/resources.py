"""Resource-cache contract shared by rounds and brackets.

Items only need ``load()`` (raises ``OSError`` on failure) and ``flush()``.
Loading reports through a progress sink and can be cancelled between items.
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

from typing import Callable, Hashable, Iterable, Optional, Protocol

from photobracket.utils import setup_logger

logger = setup_logger(__name__)

CancelCheck = Callable[[], bool]


class CachedItem(Protocol):
    """An item whose decoded resource can be loaded and dropped."""

    def load(self) -> object: ...

    def flush(self) -> None: ...


class LoadProgress(Protocol):
    """Receives per-item load results.

    Callbacks run synchronously on whichever thread performs the load.
    """

    def on_item_loaded(self, item: Hashable) -> None: ...

    def on_item_load_error(self, item: Hashable, error: OSError) -> None: ...

    def on_complete(self, cancelled: bool) -> None: ...


def load_items(
    items: Iterable[CachedItem],
    progress: LoadProgress,
    is_cancelled: Optional[CancelCheck] = None,
) -> bool:
    """Load every item, reporting each result to ``progress``.

    A failed item is reported and skipped; it never stops the pass.
    Cancellation is checked before each item, never in the middle of one.
    ``progress.on_complete`` is left to the caller so that several passes can
    share one terminal notification.

    Args:
        items: Items to load, usually a snapshot of a pool
        progress: Sink for per-item results
        is_cancelled: Polled between items; a True result stops the pass

    Returns:
        True if every item was attempted, False if the pass was cancelled
    """
    for item in items:
        if is_cancelled is not None and is_cancelled():
            logger.info("Image loading cancelled")
            return False
        try:
            item.load()
        except OSError as e:
            logger.warning("Failed to load %s: %s", item, e)
            progress.on_item_load_error(item, e)
        else:
            progress.on_item_loaded(item)
    return True


def flush_items(items: Iterable[CachedItem]) -> None:
    """Drop the cached resource of every item."""
    for item in items:
        item.flush()
