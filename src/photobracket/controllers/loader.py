"""Bulk image loading, in the foreground or on a worker thread."""

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

from typing import Hashable, List, Optional, Tuple

from PyQt6 import QtCore

from photobracket.controllers.bracket import Bracket
from photobracket.utils import setup_logger

logger = setup_logger(__name__)


class LoggingProgress:
    """Progress sink that counts results and logs a summary.

    Attributes:
        loaded: Number of items that loaded
        failed: (item, error) for each item that did not
        cancelled: None until the pass completes, then whether it was cancelled
    """

    def __init__(self) -> None:
        self.loaded = 0
        self.failed: List[Tuple[Hashable, OSError]] = []
        self.cancelled: Optional[bool] = None

    def on_item_loaded(self, item: Hashable) -> None:
        self.loaded += 1
        logger.debug("Loaded %s", item)

    def on_item_load_error(self, item: Hashable, error: OSError) -> None:
        self.failed.append((item, error))

    def on_complete(self, cancelled: bool) -> None:
        self.cancelled = cancelled
        logger.info(
            "Loaded %d photo(s), %d failed%s",
            self.loaded,
            len(self.failed),
            " (cancelled)" if cancelled else "",
        )


class ImageLoadWorker(QtCore.QObject):
    """Loads every photo of a bracket; meant to be moved to a QThread.

    Cancellation is cooperative and checked between photos, either through
    ``cancel()`` or ``QThread.requestInterruption()``.
    """

    item_loaded = QtCore.pyqtSignal(str)  # path
    item_failed = QtCore.pyqtSignal(str, str)  # path, message
    progress = QtCore.pyqtSignal(int, int)  # done, total
    finished = QtCore.pyqtSignal(bool)  # cancelled

    def __init__(self, bracket: Bracket):
        super().__init__()
        self.bracket = bracket
        self._cancel_requested = False
        self._done = 0
        self._total = 0

    def cancel(self) -> None:
        self._cancel_requested = True

    def is_cancelled(self) -> bool:
        if self._cancel_requested:
            return True
        thread = QtCore.QThread.currentThread()
        return thread is not None and thread.isInterruptionRequested()

    @QtCore.pyqtSlot()
    def run(self) -> None:
        self._done = 0
        self._total = self.bracket.size()
        self.bracket.load_all(self, self.is_cancelled)

    # LoadProgress

    def on_item_loaded(self, item: Hashable) -> None:
        self._done += 1
        self.item_loaded.emit(str(item))
        self.progress.emit(self._done, self._total)

    def on_item_load_error(self, item: Hashable, error: OSError) -> None:
        self._done += 1
        self.item_failed.emit(str(item), str(error))
        self.progress.emit(self._done, self._total)

    def on_complete(self, cancelled: bool) -> None:
        self.finished.emit(cancelled)


def start_preload(
    bracket: Bracket, parent: Optional[QtCore.QObject] = None
) -> Tuple[QtCore.QThread, ImageLoadWorker]:
    """Start loading a bracket's photos on a new thread.

    The thread quits and both objects are scheduled for deletion once the
    worker finishes. Connect to the worker's signals before control returns
    to the event loop.

    Returns:
        The started thread and its worker
    """
    thread = QtCore.QThread(parent)
    worker = ImageLoadWorker(bracket)
    worker.moveToThread(thread)

    thread.started.connect(worker.run)
    worker.finished.connect(thread.quit)
    worker.finished.connect(worker.deleteLater)
    thread.finished.connect(thread.deleteLater)

    thread.start()
    logger.debug("Started preloading %d photo(s)", bracket.size())
    return thread, worker
