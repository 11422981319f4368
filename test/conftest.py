# !/usr/bin/python
# coding=utf-8
"""Shared test infrastructure for the shapemenu test suite.

Provides the QApplication bootstrap, base test cases and a `FakeHost` that
stands in for the overlay so menus can be driven without a window system.
"""

import sys
import os
import logging
from pathlib import Path
from typing import Optional
from unittest import TestCase

# Add package root to path for imports, and this directory for `from conftest import`
PACKAGE_ROOT = Path(__file__).parent.parent.absolute()
TEST_DIR = Path(__file__).parent.absolute()
for path in (PACKAGE_ROOT, TEST_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

# No display is needed; widgets are created but never shown on screen.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


def setup_qt_application():
    """Ensure a QApplication instance exists for Qt-based tests.

    Returns:
        QApplication: The existing or newly created QApplication instance.
    """
    from qtpy import QtWidgets

    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication(sys.argv)
    return app


class BaseTestCase(TestCase):
    """Base test case with a per-class logger."""

    logger: Optional[logging.Logger] = None

    @classmethod
    def setUpClass(cls):
        cls.logger = logging.getLogger(cls.__name__)
        cls.logger.setLevel(logging.DEBUG)

    def setUp(self):
        self.test_name = self._testMethodName
        if self.logger:
            self.logger.debug(f"Starting test: {self.test_name}")

    def tearDown(self):
        if self.logger:
            self.logger.debug(f"Completed test: {self.test_name}")

    def assertPointAlmostEqual(self, actual, expected, places=6):
        """Compare two QPointF-like values component-wise."""
        self.assertAlmostEqual(actual.x(), expected[0], places=places)
        self.assertAlmostEqual(actual.y(), expected[1], places=places)


class QtBaseTestCase(BaseTestCase):
    """Base test case for Qt tests.

    Provides automatic QApplication setup and object cleanup.
    """

    app = None
    _widgets_to_cleanup = None

    @classmethod
    def setUpClass(cls):
        super().setUpClass()
        cls.app = setup_qt_application()

    def setUp(self):
        super().setUp()
        self._widgets_to_cleanup = []

    def tearDown(self):
        super().tearDown()
        if self._widgets_to_cleanup:
            for widget in self._widgets_to_cleanup:
                try:
                    widget.deleteLater()
                except RuntimeError:
                    # Already deleted
                    pass
            self._widgets_to_cleanup.clear()

    def track_widget(self, widget):
        """Register a widget or QObject for cleanup after the test.

        Returns:
            The widget (for chaining).
        """
        if self._widgets_to_cleanup is not None:
            self._widgets_to_cleanup.append(widget)
        return widget


def make_rect(width, height):
    from qtpy import QtCore

    return QtCore.QRectF(0, 0, width, height)


class FakeHost:
    """In-memory layer host recording what the menu asks of it.

    Parameters:
        sizes (dict/callable): Item -> (width, height). Items missing from the
            dict are reported as unmeasured. Defaults to 40x20 for everything.
        screen (QRectF): The screen geometry. Defaults to 800x600 at the origin.
        push_sizes (bool): Report sizes through `on_item_measured` in
            `present_layer` instead of waiting to be polled.
    """

    def __init__(self, sizes=None, screen=None, bounds=None, push_sizes=False):
        from qtpy import QtCore

        self.sizes = sizes
        self.screen = screen if screen is not None else QtCore.QRectF(0, 0, 800, 600)
        self.bounds = bounds if bounds is not None else QtCore.QRectF(380, 280, 40, 40)
        self.push_sizes = push_sizes
        self.presented_items = None
        self.present_count = 0
        self.remove_count = 0
        self.updates = []
        self.screen_callback = None
        self.on_item_clicked = None
        self.on_background_clicked = None

    def size_of(self, item):
        if self.sizes is None:
            return (40, 20)
        if callable(self.sizes):
            return self.sizes(item)
        return self.sizes.get(item)

    # LayerHost interface
    def screen_geometry(self, trigger=None):
        return self.screen

    def map_to_layer(self, point, trigger=None):
        return point - self.screen.topLeft()

    def trigger_bounds(self, trigger):
        return self.bounds

    @property
    def is_presented(self):
        return self.presented_items is not None

    def present_layer(
        self,
        items,
        on_item_clicked,
        on_background_clicked,
        on_item_measured=None,
        trigger=None,
    ):
        self.presented_items = list(items)
        self.present_count += 1
        self.on_item_clicked = on_item_clicked
        self.on_background_clicked = on_background_clicked
        if self.push_sizes and on_item_measured is not None:
            for index, item in enumerate(self.presented_items):
                rect = self.measure(item)
                if rect is not None:
                    on_item_measured(index, rect)

    def remove_layer(self):
        self.presented_items = None
        self.remove_count += 1

    def measure(self, item):
        if not self.is_presented:
            return None
        size = self.size_of(item)
        return make_rect(*size) if size else None

    def update_layer(self, cycle, transforms, background_opacity):
        self.updates.append((cycle, list(transforms), background_opacity))

    def watch_screen(self, callback, trigger=None):
        self.screen_callback = callback

    def unwatch_screen(self):
        self.screen_callback = None


# Test data paths
TEST_DIR = Path(__file__).parent
PACKAGE_DIR = PACKAGE_ROOT / "shapemenu"
