import sys

import pytest
from PyQt6 import QtCore, QtGui


class FakeItem:
    """Stand-in for an image file with a scripted load outcome."""

    def __init__(self, name, fail=False):
        self.name = name
        self.fail = fail
        self.loaded = False
        self.load_calls = 0
        self.flush_calls = 0

    def load(self):
        self.load_calls += 1
        if self.fail:
            raise OSError(f"cannot read {self.name}")
        self.loaded = True
        return self.name

    def flush(self):
        self.flush_calls += 1
        self.loaded = False

    def __repr__(self):
        return f"FakeItem({self.name!r})"


@pytest.fixture(scope="session")
def qapp():
    app = QtCore.QCoreApplication.instance()
    if app is None:
        app = QtCore.QCoreApplication(sys.argv[:1])
    yield app


@pytest.fixture
def make_image(tmp_path):
    def _make(name, width=8, height=6):
        path = tmp_path / name
        image = QtGui.QImage(width, height, QtGui.QImage.Format.Format_RGB32)
        image.fill(0xFF336699)
        assert image.save(str(path), "PNG")
        return path

    return _make


@pytest.fixture
def fake_item():
    return FakeItem
