# !/usr/bin/python
# coding=utf-8
"""Configuration records for ShapeMenu.

Every record is a dataclass. Shape records are frozen since a layout pass
must never see them change; `MenuParameters` offers `replace` and a set of
`for_*` presets for building variations.
"""
import math
import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union
from qtpy import QtCore, QtGui

# From this package:
from shapemenu.errors import MenuConfigurationError


class MenuShape(Enum):
    CIRCLE = "circle"
    LINEAR = "linear"
    GRID = "grid"


class LinearAlignment(Enum):
    """Cross-axis alignment of linear items relative to the first item."""

    CENTER = "center"
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"


class CenterStrategy(Enum):
    """Where the menu is centered when it opens."""

    SCREEN_CENTER = "screen_center"
    TRIGGER_BOUNDS = "trigger_bounds"
    TOUCH_POINT = "touch_point"


class ArcType(Enum):
    """Common circle sections as (start_angle, end_angle) in degrees."""

    SEMI_UP = (0.0, 180.0)
    SEMI_DOWN = (180.0, 360.0)
    SEMI_LEFT = (90.0, 270.0)
    SEMI_RIGHT = (-90.0, 90.0)
    QUARTER_TOP_RIGHT = (0.0, 90.0)
    QUARTER_TOP_LEFT = (90.0, 180.0)
    QUARTER_BOTTOM_LEFT = (180.0, 270.0)
    QUARTER_BOTTOM_RIGHT = (270.0, 360.0)

    @property
    def start_angle(self) -> float:
        return self.value[0]

    @property
    def end_angle(self) -> float:
        return self.value[1]


@dataclass(frozen=True)
class CircleShape:
    """Items spread over an ellipse arc. Angles are in degrees, counter-clockwise from 3 o'clock."""

    start_angle: float = 0.0
    end_angle: float = 360.0
    radius_x: float = 100.0
    radius_y: float = 100.0

    def __post_init__(self):
        if self.radius_x < 0 or self.radius_y < 0:
            raise MenuConfigurationError(
                f"Circle radii must be positive, got ({self.radius_x}, {self.radius_y})."
            )

    @classmethod
    def from_arc(
        cls, arc_type: ArcType, radius_x: float = 100.0, radius_y: float = 100.0
    ) -> "CircleShape":
        """Create a circle shape covering one of the `ArcType` sections."""
        return cls(arc_type.start_angle, arc_type.end_angle, radius_x, radius_y)

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle

    @property
    def is_degenerate(self) -> bool:
        return not (math.isfinite(self.start_angle) and math.isfinite(self.end_angle))


@dataclass(frozen=True)
class LinearShape:
    """Items placed back to back along a ray leaving the center at `angle` degrees."""

    angle: float = 90.0
    spacing: float = 0.0
    alignment: LinearAlignment = LinearAlignment.CENTER

    @property
    def is_degenerate(self) -> bool:
        return not math.isfinite(self.angle)


@dataclass(frozen=True)
class GridShape:
    """Items flowed row-major into `columns` columns."""

    columns: int = 3
    spacing_h: float = 0.0
    spacing_v: float = 0.0

    def __post_init__(self):
        if self.columns < 1:
            raise MenuConfigurationError(
                f"Grid needs at least one column, got {self.columns}."
            )

    @property
    def is_degenerate(self) -> bool:
        return False


ShapeParameters = Union[CircleShape, LinearShape, GridShape]


@dataclass(frozen=True)
class BoundaryPolicy:
    """How item positions are kept on screen.

    Attributes:
        clamp_per_item: Move each item that crosses a screen edge back inside.
        clamp_group: Move the whole menu so the union of the items fits.
        padding: Margins added around the group bounds before the group clamp.
    """

    clamp_per_item: bool = True
    clamp_group: bool = True
    padding: Optional[QtCore.QMarginsF] = None


@dataclass
class BackgroundParams:
    """Full-screen backdrop painted behind the items."""

    color: QtGui.QColor = field(default_factory=lambda: QtGui.QColor(0, 0, 0, 0))
    animated: bool = True


@dataclass
class BoundaryBackground:
    """Decoration drawn around the items' bounding rectangle."""

    padding: QtCore.QMarginsF = field(
        default_factory=lambda: QtCore.QMarginsF(8, 8, 8, 8)
    )
    color: QtGui.QColor = field(default_factory=lambda: QtGui.QColor(40, 40, 40, 200))
    radius: float = 8.0


@dataclass
class MenuParameters:
    """Configuration for ShapeMenu.

    Attributes:
        shape: Which of `circle`, `linear` or `grid` is used for placement.
        center_strategy: Where the arrangement is centered.
        center_offset: Added to the screen or trigger center.
        clamp_per_item / clamp_group: See `BoundaryPolicy`.
        top_inset: Height reserved at the top of the screen (ie. a status bar).
        use_long_press: Open on long press instead of tap.
        easing: QEasingCurve or QEasingCurve.Type used by the progress driver.
        rotate_items_angle: Start rotation in degrees of every item; animates to 0.
        start_item_scale: Start scale of every item; animates to 1.
        on_hover_scale: Scale applied to an item while hovered.
        close_on_item_activated: Close after an item click. Off by default, so closing
            is left to `on_item_activated` through the controller.
        max_measure_attempts: Ticks to wait for item sizes before failing the open.
    """

    shape: MenuShape = MenuShape.CIRCLE
    circle: CircleShape = field(default_factory=CircleShape)
    linear: LinearShape = field(default_factory=LinearShape)
    grid: GridShape = field(default_factory=GridShape)
    center_strategy: CenterStrategy = CenterStrategy.TRIGGER_BOUNDS
    center_offset: QtCore.QPointF = field(default_factory=QtCore.QPointF)
    clamp_per_item: bool = True
    clamp_group: bool = True
    top_inset: float = 24.0
    use_long_press: bool = False
    long_press_duration_ms: int = 500
    open_duration_ms: int = 400
    close_duration_ms: int = 150
    easing: Union[QtCore.QEasingCurve, QtCore.QEasingCurve.Type] = (
        QtCore.QEasingCurve.Type.OutBack
    )
    rotate_items_angle: float = 0.0
    start_item_scale: float = 0.3
    on_hover_scale: float = 1.0
    background: BackgroundParams = field(default_factory=BackgroundParams)
    boundary_background: Optional[BoundaryBackground] = None
    close_on_item_activated: bool = False
    max_measure_attempts: int = 30

    def __post_init__(self):
        if not isinstance(self.shape, MenuShape):
            raise MenuConfigurationError(f"Invalid shape: {self.shape!r}")
        if not isinstance(self.center_strategy, CenterStrategy):
            raise MenuConfigurationError(
                f"Invalid center strategy: {self.center_strategy!r}"
            )
        for name in ("long_press_duration_ms", "open_duration_ms", "close_duration_ms"):
            if getattr(self, name) < 0:
                raise MenuConfigurationError(f"'{name}' must not be negative.")
        if self.max_measure_attempts < 1:
            raise MenuConfigurationError("'max_measure_attempts' must be at least 1.")
        if self.start_item_scale < 0 or self.on_hover_scale < 0:
            raise MenuConfigurationError("Item scales must not be negative.")

    @classmethod
    def for_circle(
        cls, radius_x: float = 100.0, radius_y: float = 100.0, **overrides
    ) -> "MenuParameters":
        """Create parameters for a full circle menu."""
        defaults = {
            "shape": MenuShape.CIRCLE,
            "circle": CircleShape(0.0, 360.0, radius_x, radius_y),
        }
        return cls(**{**defaults, **overrides})

    @classmethod
    def for_arc(
        cls,
        arc_type: ArcType,
        radius_x: float = 100.0,
        radius_y: float = 100.0,
        **overrides,
    ) -> "MenuParameters":
        """Create parameters for a circle section menu."""
        defaults = {
            "shape": MenuShape.CIRCLE,
            "circle": CircleShape.from_arc(arc_type, radius_x, radius_y),
        }
        return cls(**{**defaults, **overrides})

    @classmethod
    def for_linear(
        cls,
        angle: float = 90.0,
        spacing: float = 0.0,
        alignment: LinearAlignment = LinearAlignment.CENTER,
        **overrides,
    ) -> "MenuParameters":
        """Create parameters for a linear menu."""
        defaults = {
            "shape": MenuShape.LINEAR,
            "linear": LinearShape(angle, spacing, alignment),
            "start_item_scale": 1.0,
        }
        return cls(**{**defaults, **overrides})

    @classmethod
    def for_grid(
        cls,
        columns: int = 3,
        spacing_h: float = 0.0,
        spacing_v: float = 0.0,
        **overrides,
    ) -> "MenuParameters":
        """Create parameters for a grid menu."""
        defaults = {
            "shape": MenuShape.GRID,
            "grid": GridShape(columns, spacing_h, spacing_v),
            "center_strategy": CenterStrategy.SCREEN_CENTER,
        }
        return cls(**{**defaults, **overrides})

    def replace(self, **changes) -> "MenuParameters":
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    @property
    def shape_params(self) -> ShapeParameters:
        """The parameter record of the active shape."""
        return {
            MenuShape.CIRCLE: self.circle,
            MenuShape.LINEAR: self.linear,
            MenuShape.GRID: self.grid,
        }[self.shape]

    @property
    def boundary(self) -> BoundaryPolicy:
        padding = self.boundary_background.padding if self.boundary_background else None
        return BoundaryPolicy(self.clamp_per_item, self.clamp_group, padding)

    @property
    def easing_curve(self) -> QtCore.QEasingCurve:
        if isinstance(self.easing, QtCore.QEasingCurve):
            return self.easing
        return QtCore.QEasingCurve(self.easing)
