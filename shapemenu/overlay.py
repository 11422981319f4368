# !/usr/bin/python
# coding=utf-8
"""The layer ShapeMenu draws into.

Classes:
    LayerHost: The capabilities ShapeMenu needs from a UI toolkit: present and
        remove a layer above the existing UI, measure items, map coordinates
        and report screen changes. Subclass it to host the menu elsewhere.
    OverlayHost: LayerHost backed by a full-screen, translucent QGraphicsView.
    Overlay: The QGraphicsView itself.
    ItemProxy: Graphics proxy embedding one item widget.
"""
from typing import Callable, List, Optional, Sequence
from qtpy import QtCore, QtGui, QtWidgets
import pythontk as ptk

# From this package:
from shapemenu.params import MenuParameters


class LayerHost(ptk.LoggingMixin):
    """Toolkit capabilities used by ShapeMenu.

    Layer coordinates have their origin at the top left corner of the screen
    the layer covers. Every method taking or returning geometry uses them,
    except `screen_geometry`, `map_to_layer` and `trigger_bounds` inputs,
    which are global.
    """

    def screen_geometry(self, trigger=None) -> QtCore.QRectF:
        """Global geometry of the screen the menu opens on."""
        raise NotImplementedError

    def map_to_layer(self, point: QtCore.QPointF, trigger=None) -> QtCore.QPointF:
        origin = self.screen_geometry(trigger).topLeft()
        return QtCore.QPointF(point) - origin

    def trigger_bounds(self, trigger) -> QtCore.QRectF:
        """Trigger rectangle in layer coordinates."""
        raise NotImplementedError

    @property
    def is_presented(self) -> bool:
        raise NotImplementedError

    def present_layer(
        self,
        items: Sequence[object],
        on_item_clicked: Callable[[int], None],
        on_background_clicked: Callable[[], None],
        on_item_measured: Optional[Callable[[int, QtCore.QRectF], None]] = None,
        trigger=None,
    ) -> None:
        raise NotImplementedError

    def remove_layer(self) -> None:
        raise NotImplementedError

    def measure(self, item) -> Optional[QtCore.QRectF]:
        """The item's size as a rectangle at the origin; None or empty while unmounted."""
        raise NotImplementedError

    def update_layer(
        self, cycle, transforms: Sequence, background_opacity: float
    ) -> None:
        """Draw the items at the given transforms."""
        raise NotImplementedError

    def watch_screen(self, callback: Callable[[], None], trigger=None) -> None:
        """Call `callback` whenever the screen geometry changes until unwatched."""

    def unwatch_screen(self) -> None:
        pass


class ItemProxy(QtWidgets.QGraphicsProxyWidget):
    """Proxy for one item widget. Reports clicks and applies the hover scale."""

    def __init__(
        self, index: int, on_clicked: Callable[[int], None], hover_scale: float = 1.0
    ):
        super().__init__()
        self.index = index
        self.on_clicked = on_clicked
        self.hover_scale = hover_scale
        self.hovered = False
        self.base_scale = 1.0
        self.setAcceptHoverEvents(True)
        # hidden until the first layout is applied
        self.setOpacity(0.0)

    def apply_transform(self, transform) -> None:
        size = self.size()
        self.setTransformOriginPoint(size.width() / 2, size.height() / 2)
        self.setPos(
            transform.position.x() - size.width() / 2,
            transform.position.y() - size.height() / 2,
        )
        self.setRotation(transform.rotation)
        self.base_scale = transform.scale
        self._update_scale()
        self.setOpacity(1.0)

    def _update_scale(self) -> None:
        self.setScale(self.base_scale * (self.hover_scale if self.hovered else 1.0))

    def hoverEnterEvent(self, event):
        self.hovered = True
        self._update_scale()
        super().hoverEnterEvent(event)

    def hoverLeaveEvent(self, event):
        self.hovered = False
        self._update_scale()
        super().hoverLeaveEvent(event)

    def mousePressEvent(self, event):
        super().mousePressEvent(event)
        # keep the grab so the release comes back here even for passive widgets
        event.accept()

    def mouseReleaseEvent(self, event):
        super().mouseReleaseEvent(event)
        if self.contains(event.pos()):
            self.on_clicked(self.index)


class Overlay(QtWidgets.QGraphicsView):
    """Frameless, translucent view covering a screen.

    Paints the backdrop and the optional boundary background; clicks that do
    not land on an item call `on_background_clicked`.
    """

    def __init__(self, geometry: QtCore.QRect, params: MenuParameters, parent=None):
        super().__init__(parent)
        self.params = params
        self.on_background_clicked: Optional[Callable[[], None]] = None
        self.background_opacity = 0.0
        self.items_bounds = QtCore.QRectF()

        self.setWindowFlags(
            QtCore.Qt.WindowType.FramelessWindowHint
            | QtCore.Qt.WindowType.Tool
            | QtCore.Qt.WindowType.WindowStaysOnTopHint
        )
        self.setAttribute(QtCore.Qt.WidgetAttribute.WA_TranslucentBackground)
        self.setAttribute(QtCore.Qt.WidgetAttribute.WA_DeleteOnClose)
        self.setStyleSheet("background: transparent; border: none;")
        self.setFrameShape(QtWidgets.QFrame.Shape.NoFrame)
        self.setHorizontalScrollBarPolicy(QtCore.Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(QtCore.Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing)
        self.setAlignment(
            QtCore.Qt.AlignmentFlag.AlignLeft | QtCore.Qt.AlignmentFlag.AlignTop
        )

        scene = QtWidgets.QGraphicsScene(self)
        scene.setSceneRect(QtCore.QRectF(0, 0, geometry.width(), geometry.height()))
        self.setScene(scene)
        self.setGeometry(geometry)

    def drawBackground(self, painter: QtGui.QPainter, rect: QtCore.QRectF) -> None:
        color = QtGui.QColor(self.params.background.color)
        color.setAlphaF(color.alphaF() * self.background_opacity)
        painter.fillRect(rect, color)

        decoration = self.params.boundary_background
        if decoration is None or self.items_bounds.isEmpty():
            return
        padding = decoration.padding
        box = self.items_bounds.adjusted(
            -padding.left(), -padding.top(), padding.right(), padding.bottom()
        )
        fill = QtGui.QColor(decoration.color)
        fill.setAlphaF(fill.alphaF() * self.background_opacity)
        painter.setPen(QtCore.Qt.PenStyle.NoPen)
        painter.setBrush(fill)
        painter.drawRoundedRect(box, decoration.radius, decoration.radius)

    def mousePressEvent(self, event):
        if self.itemAt(event.pos()) is None:
            if self.on_background_clicked is not None:
                self.on_background_clicked()
            event.accept()
            return
        super().mousePressEvent(event)


class OverlayHost(LayerHost):
    """Hosts the menu in an `Overlay` window covering the trigger's screen.

    Parameters:
        params (MenuParameters): Menu configuration (background, hover scale).
        log_level (str/int): Logging level. Defaults to 'WARNING'.
    """

    def __init__(self, params: MenuParameters, log_level="WARNING"):
        self.logger.setLevel(log_level)
        self.params = params
        self.overlay: Optional[Overlay] = None
        self._proxies: List[ItemProxy] = []
        self._items: List[QtWidgets.QWidget] = []
        self._watched_screen: Optional[QtGui.QScreen] = None
        self._screen_callback: Optional[Callable[[], None]] = None

    def screen(self, trigger=None) -> QtGui.QScreen:
        screen = None
        if isinstance(trigger, QtWidgets.QWidget):
            screen = trigger.screen() if hasattr(trigger, "screen") else None
        elif isinstance(trigger, (QtCore.QRect, QtCore.QRectF)):
            center = QtCore.QRectF(trigger).center().toPoint()
            screen = QtGui.QGuiApplication.screenAt(center)
        return screen or QtGui.QGuiApplication.primaryScreen()

    def screen_geometry(self, trigger=None) -> QtCore.QRectF:
        return QtCore.QRectF(self.screen(trigger).geometry())

    def trigger_bounds(self, trigger) -> QtCore.QRectF:
        if isinstance(trigger, QtWidgets.QWidget):
            top_left = trigger.mapToGlobal(QtCore.QPoint(0, 0))
            bounds = QtCore.QRectF(QtCore.QRect(top_left, trigger.size()))
        elif isinstance(trigger, (QtCore.QRect, QtCore.QRectF)):
            bounds = QtCore.QRectF(trigger)
        else:
            raise TypeError(f"Cannot resolve bounds of {type(trigger).__name__}")
        origin = self.screen_geometry(trigger).topLeft()
        return bounds.translated(-origin.x(), -origin.y())

    @property
    def is_presented(self) -> bool:
        return self.overlay is not None

    def present_layer(
        self,
        items,
        on_item_clicked,
        on_background_clicked,
        on_item_measured=None,
        trigger=None,
    ) -> None:
        if self.overlay is not None:
            self.remove_layer()

        self.overlay = Overlay(self.screen(trigger).geometry(), self.params)
        self.overlay.on_background_clicked = on_background_clicked
        scene = self.overlay.scene()

        self._items = list(items)
        for index, widget in enumerate(self._items):
            widget.adjustSize()
            proxy = ItemProxy(index, on_item_clicked, self.params.on_hover_scale)
            proxy.setWidget(widget)
            # a widget hidden by a previous remove_layer would hide its new proxy
            proxy.show()
            proxy.setScale(self.params.start_item_scale)
            scene.addItem(proxy)
            self._proxies.append(proxy)

        self.overlay.show()
        self.logger.debug(f"overlay presented with {len(self._items)} items")

        if on_item_measured is not None:
            for index, widget in enumerate(self._items):
                rect = self.measure(widget)
                if rect is not None and not rect.isEmpty():
                    on_item_measured(index, rect)

    def remove_layer(self) -> None:
        if self.overlay is None:
            return
        for proxy in self._proxies:
            widget = proxy.widget()
            if widget is not None:
                widget.hide()
                proxy.setWidget(None)
        self._proxies = []
        self._items = []
        overlay, self.overlay = self.overlay, None
        overlay.close()
        self.logger.debug("overlay removed")

    def measure(self, item) -> Optional[QtCore.QRectF]:
        if self.overlay is None or not self.overlay.isVisible():
            return None
        if not isinstance(item, QtWidgets.QWidget):
            return None
        return QtCore.QRectF(0, 0, item.width(), item.height())

    def update_layer(self, cycle, transforms, background_opacity) -> None:
        if self.overlay is None:
            return
        self.overlay.background_opacity = background_opacity
        self.overlay.items_bounds = (
            QtCore.QRectF(cycle.items_bounds) if cycle is not None else QtCore.QRectF()
        )
        for proxy, transform in zip(self._proxies, transforms):
            proxy.apply_transform(transform)
        self.overlay.viewport().update()

    def watch_screen(self, callback, trigger=None) -> None:
        self.unwatch_screen()
        screen = self.screen(trigger)
        screen.geometryChanged.connect(self._on_screen_changed)
        self._watched_screen = screen
        self._screen_callback = callback

    def unwatch_screen(self) -> None:
        screen, self._watched_screen = self._watched_screen, None
        self._screen_callback = None
        if screen is None:
            return
        try:
            screen.geometryChanged.disconnect(self._on_screen_changed)
        except (RuntimeError, TypeError):
            pass

    def _on_screen_changed(self, *args) -> None:
        if self._screen_callback is not None:
            self._screen_callback()
