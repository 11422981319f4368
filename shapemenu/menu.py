# !/usr/bin/python
# coding=utf-8
from typing import Callable, List, Optional, Sequence
from qtpy import QtCore, QtWidgets
import pythontk as ptk

# From this package:
from shapemenu.errors import (
    ItemProviderError,
    LayoutError,
    MenuConfigurationError,
)
from shapemenu.params import MenuParameters
from shapemenu.layout import LayoutCycle, LayoutOrchestrator
from shapemenu.state_machine import MenuState, MenuStateMachine, ProgressDriver
from shapemenu.gestures import PointerEventFilter, PressTracker
from shapemenu.controller import MenuController
from shapemenu.overlay import LayerHost, OverlayHost


class ShapeMenu(QtCore.QObject, ptk.LoggingMixin):
    """A popup menu whose items unfold into a circle, a line or a grid.

    The menu opens from a trigger widget (tap or long press on it), or
    programmatically through `open` / the controller. Items are laid out once
    per open cycle, after every item has been measured, and animate from a
    collapsed state to their place on screen.

    Parameters:
        items (list): The item widgets. Only one of `items` or `lazy_items` is allowed.
        lazy_items (callable): Called once per open request to build the items. May
            return a list, or a future-like object (anything with `add_done_callback`,
            ie. concurrent.futures.Future) resolving to a list.
        trigger (QWidget): Widget that opens the menu when pressed; also used for
            positioning. Only one of `trigger` or `anchor` is allowed.
        anchor (QWidget/QRect/QRectF): Positions the menu without listening to its
            pointer events. A rect is taken in global coordinates.
        params (MenuParameters): Menu configuration.
        controller (MenuController): Handle bound to this menu's open/close.
        on_state_changed (callable): Called with the new MenuState on every transition.
        on_item_activated (callable): Called with (index, controller) when an item is clicked.
        host (LayerHost): Where the menu is drawn. Defaults to an OverlayHost.
        log_level (str/int): Logging level. Defaults to 'WARNING'.

    Raises:
        MenuConfigurationError: If both or neither of `items`/`lazy_items`, or of
            `trigger`/`anchor`, are given.

    Example:
        menu = ShapeMenu(
            items=[QtWidgets.QPushButton(str(i)) for i in range(6)],
            trigger=button,
            params=MenuParameters.for_circle(radius_x=90, radius_y=90),
            on_item_activated=lambda index, ctrl: ctrl.close(),
        )
    """

    state_changed = QtCore.Signal(object)
    item_activated = QtCore.Signal(int)
    layout_failed = QtCore.Signal(object)
    items_failed = QtCore.Signal(object)

    _items_resolved = QtCore.Signal(int, object)

    def __init__(
        self,
        items: Optional[Sequence[QtWidgets.QWidget]] = None,
        lazy_items: Optional[Callable[[], object]] = None,
        trigger: Optional[QtWidgets.QWidget] = None,
        anchor=None,
        params: Optional[MenuParameters] = None,
        controller: Optional[MenuController] = None,
        on_state_changed: Optional[Callable[[MenuState], None]] = None,
        on_item_activated: Optional[Callable[[int, MenuController], None]] = None,
        host: Optional[LayerHost] = None,
        parent: Optional[QtCore.QObject] = None,
        log_level="WARNING",
    ):
        if items is None and lazy_items is None:
            raise MenuConfigurationError("Either 'items' or 'lazy_items' is required.")
        if items is not None and lazy_items is not None:
            raise MenuConfigurationError("Pass 'items' or 'lazy_items', not both.")
        if trigger is None and anchor is None:
            raise MenuConfigurationError("Either 'trigger' or 'anchor' is required.")
        if trigger is not None and anchor is not None:
            raise MenuConfigurationError("Pass 'trigger' or 'anchor', not both.")
        if lazy_items is not None and not callable(lazy_items):
            raise MenuConfigurationError("'lazy_items' must be callable.")

        super().__init__(parent)
        self.logger.setLevel(log_level)

        self.params = params if params is not None else MenuParameters()
        self.trigger = trigger
        self.anchor = anchor
        self.on_state_changed = on_state_changed
        self.on_item_activated = on_item_activated
        self.host = host if host is not None else OverlayHost(self.params, log_level)

        self._items = list(items) if items is not None else None
        self._lazy_items = lazy_items
        self._current_items: List[QtWidgets.QWidget] = []
        self._touch_point: Optional[QtCore.QPointF] = None
        self._request_id = 0
        self._pending_request = None
        self._disposed = False

        self.controller = controller if controller is not None else MenuController()
        self.controller.bind(self.open, self.close)

        self.driver = ProgressDriver(self, self.params.easing_curve, log_level)
        self.state_machine = MenuStateMachine(self.driver, self, log_level)
        self.state_machine.state_changed.connect(self._on_state_changed)
        self.state_machine.progress_changed.connect(self._on_progress)

        self.layout = LayoutOrchestrator(self.params, log_level)

        self.tracker = PressTracker(
            self,
            self.params.use_long_press,
            self.params.long_press_duration_ms,
            log_level,
        )
        self.tracker.activated.connect(self._on_trigger_activated)
        self.pointer_filter = PointerEventFilter(self.tracker)
        if isinstance(self.trigger, QtCore.QObject):
            self.pointer_filter.install(self.trigger)
            self.trigger.destroyed.connect(self._on_trigger_destroyed)

        self._items_resolved.connect(self._on_items_resolved)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def state(self) -> MenuState:
        return self.state_machine.state

    @property
    def progress(self) -> float:
        return self.driver.progress

    @property
    def cycle(self) -> Optional[LayoutCycle]:
        """The frozen layout of the current open cycle, once computed."""
        return self.layout.cycle

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def is_ready(self) -> bool:
        """True while the controller is bound to this menu."""
        return self.controller.is_ready()

    # ------------------------------------------------------------------
    # Open / close
    # ------------------------------------------------------------------
    def open(self, touch_point: Optional[QtCore.QPointF] = None) -> None:
        """Open the menu.

        While closing, the animation turns back towards open on the same
        layout. Opening and open menus ignore the request.

        Parameters:
            touch_point (QPointF): Global position of the touch that opened the
                menu. Used as the center with CenterStrategy.TOUCH_POINT.

        Raises:
            ItemProviderError: If `lazy_items` raises or returns something that
                is not a sequence of items. The menu stays closed.
        """
        if self._disposed:
            self.logger.warning("open: menu has been disposed")
            return
        if self.state is MenuState.CLOSING and self.layout.cycle is not None:
            # turn the close around on the same track and layout
            self.driver.forward(self.params.open_duration_ms)
            return
        if not self.state_machine.is_closed:
            self.logger.debug(f"open: ignored in state '{self.state.value}'")
            return

        # a new request replaces any attempt still waiting on items
        self._cancel_pending_request()
        self._release_layer()
        self._request_id += 1

        if self._lazy_items is None:
            self._show(self._items, touch_point)
            return

        try:
            result = self._lazy_items()
        except Exception as error:
            raise self._items_error(error) from error

        if hasattr(result, "add_done_callback"):
            request_id = self._request_id
            self._pending_request = result
            self._touch_point = touch_point
            result.add_done_callback(
                lambda future: self._items_resolved.emit(request_id, future)
            )
            self.logger.debug(f"open: waiting on lazy items (request {request_id})")
            return

        self._show(self._coerce_items(result), touch_point)

    def close(self) -> None:
        """Close the menu, reversing the opening animation if it is still running.

        While the menu is closed, cancels an open request still waiting on its items.
        """
        if self.state_machine.is_closed:
            self._cancel_pending_request()
            return
        if self.state is MenuState.CLOSING:
            return
        self.driver.reverse(self.params.close_duration_ms)

    def toggle(self) -> None:
        if self.state in (MenuState.OPEN, MenuState.OPENING):
            self.close()
        else:
            self.open()

    def relayout(self) -> None:
        """Rebuild the layout from scratch, ie. after the screen geometry changed.

        An open or opening menu opens again with a fresh layout cycle; a
        closing menu finishes closed. Items from a lazy provider are reused.
        """
        state = self.state
        if state is MenuState.CLOSED or not self._current_items:
            return

        items, touch_point = self._current_items, self._touch_point
        self.logger.debug(f"relayout: from state '{state.value}'")
        self.driver.stop()
        self.driver.reset()
        self._release_layer()
        self.state_machine.force_closed(notify=False)

        if state in (MenuState.OPEN, MenuState.OPENING):
            self._show(items, touch_point)
        else:
            self._notify_state(MenuState.CLOSED)

    def dispose(self) -> None:
        """Release every resource held by the menu. Safe to call more than once."""
        if self._disposed:
            return
        self._disposed = True

        self.tracker.cancel()
        self.pointer_filter.uninstall()
        self._cancel_pending_request()
        self.state_machine.detach()
        self.driver.stop()
        self._release_layer()
        self.state_machine.force_closed(notify=False)
        self.controller.dispose()
        self.logger.debug("disposed")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _coerce_items(self, result) -> List[QtWidgets.QWidget]:
        if result is None or isinstance(result, (str, bytes)):
            raise self._items_error(
                TypeError(f"Lazy items returned {type(result).__name__}, expected a list")
            )
        try:
            return list(result)
        except TypeError as error:
            raise self._items_error(error) from error

    def _items_error(self, error: Exception) -> ItemProviderError:
        wrapped = ItemProviderError(f"Lazy item provider failed: {error}")
        wrapped.__cause__ = error
        self.logger.error(str(wrapped))
        self.items_failed.emit(wrapped)
        return wrapped

    def _on_items_resolved(self, request_id: int, future) -> None:
        if self._disposed or request_id != self._request_id:
            self.logger.debug(f"lazy items for stale request {request_id} ignored")
            return
        self._pending_request = None
        if future.cancelled():
            return

        error = future.exception()
        if error is not None:
            self._items_error(error)
            return
        try:
            items = self._coerce_items(future.result())
        except ItemProviderError:
            return
        self._show(items, self._touch_point)

    def _cancel_pending_request(self) -> None:
        request, self._pending_request = self._pending_request, None
        if request is None:
            return
        self._request_id += 1
        cancel = getattr(request, "cancel", None)
        if callable(cancel):
            cancel()
        self.logger.debug("pending lazy items request cancelled")

    def _show(self, items: Sequence[QtWidgets.QWidget], touch_point=None) -> None:
        items = list(items or [])
        if not items:
            self.logger.warning("open: there are no items; the menu stays closed")
            return

        target = self.trigger if self.trigger is not None else self.anchor
        screen = self.host.screen_geometry(target)
        trigger_bounds = self.host.trigger_bounds(target)
        layer_touch = (
            self.host.map_to_layer(touch_point, target)
            if touch_point is not None
            else None
        )

        self._current_items = items
        self._touch_point = touch_point
        self.layout.begin(items, trigger_bounds, screen.size(), layer_touch)
        self.host.present_layer(
            items,
            self._on_item_clicked,
            self._on_background_clicked,
            self._on_item_measured,
            target,
        )
        self.host.watch_screen(self.relayout, target)
        self.driver.forward(self.params.open_duration_ms)

    def _release_layer(self) -> None:
        self.host.unwatch_screen()
        if self.host.is_presented:
            self.host.remove_layer()
        self.layout.reset()
        self._current_items = []
        self._touch_point = None

    def _abort(self, error: LayoutError) -> None:
        self.logger.error(f"layout failed: {error}")
        self.driver.stop()
        self.driver.reset()
        self._release_layer()
        self.state_machine.force_closed()
        self.layout_failed.emit(error)

    def _on_progress(self, value: float) -> None:
        if self.layout.pending and value > 0:
            try:
                self.layout.poll(self.host.measure)
            except LayoutError as error:
                self._abort(error)
                return
        self._render(value)

    def _on_item_measured(self, index: int, rect: QtCore.QRectF) -> None:
        if self.layout.pending and self.layout.item_measured(index, rect) is not None:
            self._render(self.driver.value)

    def _render(self, value: float) -> None:
        cycle = self.layout.cycle
        if cycle is None or not self.host.is_presented:
            return
        transforms = [
            cycle.item_transform(
                i, value, self.params.rotate_items_angle, self.params.start_item_scale
            )
            for i in range(len(cycle.items))
        ]
        opacity = (
            min(max(value, 0.0), 1.0) if self.params.background.animated else 1.0
        )
        self.host.update_layer(cycle, transforms, opacity)

    def _on_state_changed(self, state: MenuState) -> None:
        if state is MenuState.OPEN and self.layout.pending:
            # no more ticks will arrive once the track has finished
            try:
                self.layout.settle(self.host.measure)
            except LayoutError as error:
                self._abort(error)
                return
            self._render(self.driver.value)
        if state is MenuState.CLOSED:
            self._release_layer()
        self._notify_state(state)

    def _notify_state(self, state: MenuState) -> None:
        self.state_changed.emit(state)
        if self.on_state_changed is not None:
            self.on_state_changed(state)

    def _on_trigger_activated(self, global_pos, local_pos) -> None:
        self.open(global_pos)

    def _on_trigger_destroyed(self, *args) -> None:
        self.trigger = None
        self.dispose()

    def _on_item_clicked(self, index: int) -> None:
        if self.state in (MenuState.CLOSING, MenuState.CLOSED):
            return
        self.logger.debug(f"item {index} activated")
        self.item_activated.emit(index)
        if self.on_item_activated is not None:
            self.on_item_activated(index, self.controller)
        if self.params.close_on_item_activated:
            self.close()

    def _on_background_clicked(self) -> None:
        if self.state not in (MenuState.CLOSING, MenuState.CLOSED):
            self.close()
