import time

from photobracket.controllers.bracket import Bracket
from photobracket.controllers.loader import (
    ImageLoadWorker,
    LoggingProgress,
    start_preload,
)
from photobracket.models.image_file import ImageFile
from photobracket.models.resources import load_items


class Recorder:
    def __init__(self):
        self.events = []

    def on_item_loaded(self, item):
        self.events.append(("loaded", item))

    def on_item_load_error(self, item, error):
        self.events.append(("error", item))

    def on_complete(self, cancelled):
        self.events.append(("complete", cancelled))


def test_failure_does_not_abort_the_pass(fake_item):
    items = [fake_item("a"), fake_item("b", fail=True), fake_item("c")]
    recorder = Recorder()

    assert load_items(items, recorder) is True
    assert [kind for kind, _ in recorder.events] == ["loaded", "error", "loaded"]
    assert all(item.load_calls == 1 for item in items)


def test_cancellation_checked_between_items(fake_item):
    items = [fake_item(name) for name in "abcd"]
    bracket = Bracket(items)
    recorder = Recorder()
    checks = []

    def is_cancelled():
        checks.append(True)
        return len(checks) > 2

    assert bracket.load_all(recorder, is_cancelled) is False
    assert [kind for kind, _ in recorder.events] == ["loaded", "loaded", "complete"]
    assert recorder.events[-1] == ("complete", True)
    # pool untouched
    assert bracket.get_current_image_files() == items
    assert items[2].load_calls == 0


def test_logging_progress_counts(fake_item):
    bracket = Bracket([fake_item("ok"), fake_item("broken", fail=True)])
    progress = LoggingProgress()

    bracket.load_all(progress)

    assert progress.loaded == 1
    assert len(progress.failed) == 1
    assert progress.cancelled is False


def test_worker_emits_progress(qapp, make_image, tmp_path):
    good = ImageFile(make_image("good.png"))
    missing = ImageFile(tmp_path / "missing.png")
    worker = ImageLoadWorker(Bracket([good, missing]))

    progress, loaded, failed, finished = [], [], [], []
    worker.progress.connect(lambda done, total: progress.append((done, total)))
    worker.item_loaded.connect(loaded.append)
    worker.item_failed.connect(lambda path, message: failed.append(path))
    worker.finished.connect(finished.append)

    worker.run()

    assert progress == [(1, 2), (2, 2)]
    assert loaded == [str(good)]
    assert failed == [str(missing)]
    assert finished == [False]
    assert good.is_loaded


def test_worker_cancel(qapp, fake_item):
    worker = ImageLoadWorker(Bracket([fake_item("a"), fake_item("b")]))
    finished = []
    worker.finished.connect(finished.append)

    worker.cancel()
    worker.run()

    assert finished == [True]


def test_start_preload_loads_on_worker_thread(qapp, fake_item):
    items = [fake_item(name) for name in "abc"]
    thread, worker = start_preload(Bracket(items))

    deadline = time.monotonic() + 5
    while not all(item.loaded for item in items) and time.monotonic() < deadline:
        time.sleep(0.01)

    thread.quit()
    assert thread.wait(5000)
    assert all(item.loaded for item in items)
