# !/usr/bin/python
# coding=utf-8
"""Tap and long-press detection on a trigger widget.

Classes:
    PressTracker: Decides whether a pointer down/move/up sequence opens the menu.
    PointerEventFilter: Event filter feeding a widget's mouse events to a PressTracker.

Example:
    tracker = PressTracker(use_long_press=True, long_press_duration_ms=400)
    tracker.activated.connect(lambda global_pos, local_pos: menu.open(global_pos))
    PointerEventFilter(tracker).install(button)
"""
import math
import weakref
from typing import Optional, Tuple
from qtpy import QtCore
import pythontk as ptk


MOVE_THRESHOLD = 10.0


def distance(a: QtCore.QPointF, b: QtCore.QPointF) -> float:
    return math.hypot(a.x() - b.x(), a.y() - b.y())


class PressTracker(QtCore.QObject, ptk.LoggingMixin):
    """Turns pointer events into an activation.

    Without long press, a release within `MOVE_THRESHOLD` pixels of the press
    activates. With long press, a timer is armed on press; when it fires and
    the pointer is still within the threshold, it activates. Releasing first
    cancels the timer and never falls back to a tap.

    Signals:
        activated (QPointF, QPointF): Global and trigger-local pointer position
            of the press that activated.

    Parameters:
        use_long_press (bool): Require a long press instead of a tap.
        long_press_duration_ms (int): How long the pointer must stay down.
        log_level (str/int): Logging level. Defaults to 'WARNING'.
    """

    activated = QtCore.Signal(object, object)

    def __init__(
        self,
        parent: QtCore.QObject = None,
        use_long_press: bool = False,
        long_press_duration_ms: int = 500,
        log_level="WARNING",
    ):
        super().__init__(parent)
        self.logger.setLevel(log_level)
        self.use_long_press = use_long_press

        self._timer = QtCore.QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(long_press_duration_ms)
        self._timer.timeout.connect(self._on_long_press_timeout)

        self._down_pos: Optional[QtCore.QPointF] = None
        self._down_local_pos: Optional[QtCore.QPointF] = None
        self._last_pos: Optional[QtCore.QPointF] = None

    @property
    def long_press_duration_ms(self) -> int:
        return self._timer.interval()

    @long_press_duration_ms.setter
    def long_press_duration_ms(self, value: int) -> None:
        self._timer.setInterval(value)

    @property
    def is_armed(self) -> bool:
        """True while a long press timer is waiting to fire."""
        return self._timer.isActive()

    @property
    def is_pressed(self) -> bool:
        return self._down_pos is not None

    def pointer_down(
        self, global_pos: QtCore.QPointF, local_pos: QtCore.QPointF = None
    ) -> None:
        self._down_pos = QtCore.QPointF(global_pos)
        if local_pos is None:
            local_pos = global_pos
        self._down_local_pos = QtCore.QPointF(local_pos)
        self._last_pos = QtCore.QPointF(global_pos)
        if self.use_long_press:
            self._timer.start()

    def pointer_move(self, global_pos: QtCore.QPointF) -> None:
        if self._down_pos is not None:
            self._last_pos = QtCore.QPointF(global_pos)

    def pointer_up(self, global_pos: QtCore.QPointF) -> bool:
        """Returns True when the release activated (tap mode only)."""
        down_pos, down_local_pos = self._down_pos, self._down_local_pos
        self._clear()

        if self.use_long_press or down_pos is None:
            return False
        if distance(down_pos, global_pos) < MOVE_THRESHOLD:
            self.logger.debug("tap activation")
            self.activated.emit(down_pos, down_local_pos)
            return True
        return False

    def cancel(self) -> None:
        """Forget the current press and stop any pending long press timer."""
        self._clear()

    def _clear(self) -> None:
        self._timer.stop()
        self._down_pos = self._down_local_pos = self._last_pos = None

    def _on_long_press_timeout(self) -> None:
        if self._down_pos is None:
            return
        if distance(self._down_pos, self._last_pos) < MOVE_THRESHOLD:
            self.logger.debug("long press activation")
            self.activated.emit(
                QtCore.QPointF(self._down_pos), QtCore.QPointF(self._down_local_pos)
            )
        else:
            self.logger.debug("long press ignored: pointer moved")


def event_positions(event) -> Tuple[QtCore.QPointF, QtCore.QPointF]:
    """Global and local position of a mouse event for Qt5 and Qt6 bindings."""
    if hasattr(event, "globalPosition"):
        return QtCore.QPointF(event.globalPosition()), QtCore.QPointF(
            event.position()
        )
    return QtCore.QPointF(event.screenPos()), QtCore.QPointF(event.localPos())


class PointerEventFilter(QtCore.QObject):
    """Forwards mouse press/move/release of the installed widgets to a PressTracker.

    Parameters:
        tracker (PressTracker): Receiver of the pointer events.
        consume (bool): If True, the filtered events are not passed on to the widget.
    """

    def __init__(
        self,
        tracker: PressTracker,
        parent: QtCore.QObject = None,
        consume: bool = False,
    ):
        super().__init__(parent if parent is not None else tracker)
        self.tracker = tracker
        self.consume = consume
        self._installed_widgets: "weakref.WeakSet[QtCore.QObject]" = weakref.WeakSet()

    def install(self, widgets):
        """Install this event filter on one or more widgets."""
        for w in ptk.make_iterable(widgets):
            w.installEventFilter(self)
            self._installed_widgets.add(w)

    def uninstall(self, widgets=None):
        """Uninstall from the given widgets, or from all of them."""
        widgets = list(self._installed_widgets) if widgets is None else widgets
        for w in ptk.make_iterable(widgets):
            try:
                w.removeEventFilter(self)
            except RuntimeError:  # widget already deleted
                pass
            self._installed_widgets.discard(w)

    def is_installed(self, widget: QtCore.QObject) -> bool:
        return widget in self._installed_widgets

    def eventFilter(self, widget: QtCore.QObject, event: QtCore.QEvent) -> bool:
        if widget not in self._installed_widgets:
            return False

        etype = event.type()
        if etype == QtCore.QEvent.Type.MouseButtonPress:
            global_pos, local_pos = event_positions(event)
            self.tracker.pointer_down(global_pos, local_pos)
        elif etype == QtCore.QEvent.Type.MouseMove:
            self.tracker.pointer_move(event_positions(event)[0])
        elif etype == QtCore.QEvent.Type.MouseButtonRelease:
            self.tracker.pointer_up(event_positions(event)[0])
        else:
            return False
        return self.consume
