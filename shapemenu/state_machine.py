# !/usr/bin/python
# coding=utf-8
"""Menu state and the eased progress that drives it.

Classes:
    MenuState: closed / opening / open / closing.
    ProgressDriver: A QVariantAnimation over [0, 1] that can be reversed in place.
    MenuStateMachine: Turns driver events into MenuState transitions.

The state machine never looks at time. It only reacts to the driver starting
forward or backward and to the track reaching either end, which keeps it
testable without an event loop.
"""
from enum import Enum
from typing import Optional, Union
from qtpy import QtCore
import pythontk as ptk


class MenuState(Enum):
    CLOSED = "closed"
    OPENING = "opening"
    OPEN = "open"
    CLOSING = "closing"


class ProgressDriver(QtCore.QObject, ptk.LoggingMixin):
    """Eased 0 -> 1 (open) and 1 -> 0 (close) progress.

    Reversing while running continues from the current point of the track:
    the linear time fraction is kept and rescaled to the new duration, so the
    eased value does not jump.

    Signals:
        progress_changed (float): Eased value, may overshoot [0, 1] with curves like OutBack.
        forward_started: The track started (or turned) towards 1.
        reverse_started: The track started (or turned) towards 0.
        completed: The track reached 1 moving forward.
        dismissed: The track reached 0 moving backward.
    """

    progress_changed = QtCore.Signal(float)
    forward_started = QtCore.Signal()
    reverse_started = QtCore.Signal()
    completed = QtCore.Signal()
    dismissed = QtCore.Signal()

    def __init__(
        self,
        parent: QtCore.QObject = None,
        easing: Union[QtCore.QEasingCurve, QtCore.QEasingCurve.Type] = None,
        log_level="WARNING",
    ):
        super().__init__(parent)
        self.logger.setLevel(log_level)

        self.animation = QtCore.QVariantAnimation(self)
        self.animation.setStartValue(0.0)
        self.animation.setEndValue(1.0)
        self.animation.setDuration(1)
        if easing is not None:
            if not isinstance(easing, QtCore.QEasingCurve):
                easing = QtCore.QEasingCurve(easing)
            self.animation.setEasingCurve(easing)
        self.animation.valueChanged.connect(self._on_value_changed)
        self.animation.finished.connect(self._on_finished)
        self._value = 0.0

    @property
    def value(self) -> float:
        """The eased value as last emitted."""
        return self._value

    @property
    def progress(self) -> float:
        """The eased value clamped to [0, 1]."""
        return min(max(self._value, 0.0), 1.0)

    @property
    def is_running(self) -> bool:
        return self.animation.state() == QtCore.QAbstractAnimation.State.Running

    @property
    def is_forward(self) -> bool:
        return self.animation.direction() == QtCore.QAbstractAnimation.Direction.Forward

    @property
    def fraction(self) -> float:
        """Linear time fraction of the track in [0, 1]."""
        duration = self.animation.duration()
        return self.animation.currentTime() / duration if duration else 0.0

    def forward(self, duration_ms: int) -> None:
        self.forward_started.emit()
        self._run(QtCore.QAbstractAnimation.Direction.Forward, duration_ms)

    def reverse(self, duration_ms: int) -> None:
        self.reverse_started.emit()
        self._run(QtCore.QAbstractAnimation.Direction.Backward, duration_ms)

    def _run(self, direction, duration_ms: int) -> None:
        duration_ms = max(int(duration_ms), 1)
        if self.is_running:
            fraction = self.fraction
            self.animation.setDirection(direction)
            self.animation.setDuration(duration_ms)
            self.animation.setCurrentTime(round(fraction * duration_ms))
            self.logger.debug(f"reversed at fraction {fraction:.3f}")
            return

        self.animation.setDirection(direction)
        self.animation.setDuration(duration_ms)
        self.animation.start()

    def seek(self, fraction: float) -> None:
        """Move the track to a linear time fraction.

        Reaching the end of the current direction finishes the animation and
        emits `completed` or `dismissed`.
        """
        fraction = min(max(fraction, 0.0), 1.0)
        self.animation.setCurrentTime(round(fraction * self.animation.duration()))

    def stop(self) -> None:
        """Halt the track where it is without emitting completed/dismissed."""
        self.animation.stop()

    def reset(self) -> None:
        """Stop and rewind to 0 without notifying the state machine."""
        self.animation.stop()
        self.animation.setDirection(QtCore.QAbstractAnimation.Direction.Forward)
        self.animation.setCurrentTime(0)
        self._value = 0.0

    def _on_value_changed(self, value) -> None:
        self._value = float(value)
        self.progress_changed.emit(self._value)

    def _on_finished(self) -> None:
        if self.is_forward:
            self.completed.emit()
        else:
            self.dismissed.emit()


class MenuStateMachine(QtCore.QObject, ptk.LoggingMixin):
    """Single authority over the menu state.

    Signals:
        state_changed (object): Emitted with the new MenuState on every change.
        progress_changed (float): Forwarded eased progress.

    Parameters:
        driver (ProgressDriver): Optional driver to attach to.
        log_level (str/int): Logging level. Defaults to 'WARNING'.
    """

    state_changed = QtCore.Signal(object)
    progress_changed = QtCore.Signal(float)

    def __init__(
        self,
        driver: Optional[ProgressDriver] = None,
        parent: QtCore.QObject = None,
        log_level="WARNING",
    ):
        super().__init__(parent)
        self.logger.setLevel(log_level)
        self._state = MenuState.CLOSED
        self.progress = 0.0
        self.driver: Optional[ProgressDriver] = None
        if driver is not None:
            self.attach(driver)

    @property
    def state(self) -> MenuState:
        return self._state

    @property
    def is_closed(self) -> bool:
        return self._state is MenuState.CLOSED

    @property
    def is_visible(self) -> bool:
        """True in any state where the overlay should be shown."""
        return self._state is not MenuState.CLOSED

    def attach(self, driver: ProgressDriver) -> None:
        if self.driver is driver:
            return
        self.detach()
        self.driver = driver
        driver.forward_started.connect(self.on_forward_started)
        driver.reverse_started.connect(self.on_reverse_started)
        driver.completed.connect(self.on_completed)
        driver.dismissed.connect(self.on_dismissed)
        driver.progress_changed.connect(self.on_progress)

    def detach(self) -> None:
        """Disconnect from the current driver, if any."""
        driver, self.driver = self.driver, None
        if driver is None:
            return
        for signal, slot in (
            (driver.forward_started, self.on_forward_started),
            (driver.reverse_started, self.on_reverse_started),
            (driver.completed, self.on_completed),
            (driver.dismissed, self.on_dismissed),
            (driver.progress_changed, self.on_progress),
        ):
            try:
                signal.disconnect(slot)
            except (RuntimeError, TypeError):
                pass

    def on_forward_started(self) -> None:
        self._set_state(MenuState.OPENING)

    def on_reverse_started(self) -> None:
        self._set_state(MenuState.CLOSING)

    def on_completed(self) -> None:
        self.progress = 1.0
        self._set_state(MenuState.OPEN)

    def on_dismissed(self) -> None:
        self.progress = 0.0
        self._set_state(MenuState.CLOSED)

    def on_progress(self, value: float) -> None:
        self.progress = value
        self.progress_changed.emit(value)

    def force_closed(self, notify: bool = True) -> None:
        """Jump straight to CLOSED, ie. on teardown or a failed open.

        Parameters:
            notify (bool): Emit `state_changed` if the state changes.
        """
        self.progress = 0.0
        self._set_state(MenuState.CLOSED, notify)

    def _set_state(self, state: MenuState, notify: bool = True) -> None:
        if state is self._state:
            return
        self.logger.debug(f"state: {self._state.value} -> {state.value}")
        self._state = state
        if notify:
            self.state_changed.emit(state)
