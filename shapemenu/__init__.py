# !/usr/bin/python
# coding=utf-8
"""shapemenu - Animated shape popup menus for Qt/PySide applications.

Items unfold from a trigger widget into a circle (or arc), a straight line or
a grid, drawn in a translucent overlay above the existing UI. The layout is
computed once per open, after every item has been measured, and kept on
screen by a boundary fitter.

Example:
    Basic usage::

        from shapemenu import ShapeMenu, MenuParameters, ArcType

        menu = ShapeMenu(
            items=[QtWidgets.QPushButton(name) for name in ("Cut", "Copy", "Paste")],
            trigger=button,
            params=MenuParameters.for_arc(ArcType.SEMI_UP, 90, 90),
            on_item_activated=lambda index, ctrl: ctrl.close(),
        )

Key Modules:
    menu: ShapeMenu, the popup itself
    params: MenuParameters and the shape records
    geometry: Item placement for each shape
    boundary: Keeps items inside the screen
    layout: Measurement and the per-open LayoutCycle
    state_machine: Menu states and the eased progress driver
    gestures: Tap and long press detection
    overlay: The overlay layer and its host interface

Attributes:
    __version__: Current package version string.
"""
__package__ = "shapemenu"
__version__ = "1.0.0"

from shapemenu.errors import (
    ShapeMenuError,
    MenuConfigurationError,
    LayoutError,
    LayoutTimeoutError,
    ItemProviderError,
)
from shapemenu.params import (
    MenuShape,
    LinearAlignment,
    CenterStrategy,
    ArcType,
    CircleShape,
    LinearShape,
    GridShape,
    BoundaryPolicy,
    BackgroundParams,
    BoundaryBackground,
    MenuParameters,
)
from shapemenu.geometry import ItemSpec, compute_positions
from shapemenu.boundary import FitResult, fit
from shapemenu.layout import LayoutCycle, LayoutOrchestrator, ItemTransform
from shapemenu.state_machine import MenuState, MenuStateMachine, ProgressDriver
from shapemenu.gestures import PressTracker, PointerEventFilter
from shapemenu.controller import MenuController
from shapemenu.overlay import LayerHost, OverlayHost
from shapemenu.menu import ShapeMenu
