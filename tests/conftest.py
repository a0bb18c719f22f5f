"""Shared pytest fixtures for scalablelayout tests."""
import os

import pytest

# Qt tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from scalablelayout import GridFormatter, PixelRect, VariableEnvironment


@pytest.fixture
def grid() -> GridFormatter:
    """Return an empty grid."""
    return GridFormatter()


@pytest.fixture
def canvas() -> PixelRect:
    """Return a 640x480 canvas at the origin."""
    return PixelRect(0, 0, 640, 480)


@pytest.fixture
def env() -> VariableEnvironment:
    """Return the bindings of a 100x50 container."""
    return VariableEnvironment.for_container(100, 50)


@pytest.fixture(scope="session")
def qapp():
    """Return the QApplication, skipping when PySide6 is unavailable."""
    qt_widgets = pytest.importorskip("PySide6.QtWidgets")
    app = qt_widgets.QApplication.instance() or qt_widgets.QApplication([])
    yield app
