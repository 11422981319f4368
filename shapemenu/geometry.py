# !/usr/bin/python
# coding=utf-8
"""Geometry engine: item center positions for each menu shape.

All functions are pure. They take the measured item rectangles (only the
size is used), the shape record and the menu center, and return one
`QPointF` per item in item order.

Example:
    >>> items = [ItemSpec(i, QtCore.QRectF(0, 0, 40, 40)) for i in range(4)]
    >>> compute_positions(items, CircleShape(0, 360, 80, 80), QtCore.QPointF(200, 200))
"""
import math
from dataclasses import dataclass, field
from typing import List, Sequence
from qtpy import QtCore

# From this package:
from shapemenu.params import (
    CircleShape,
    GridShape,
    LinearAlignment,
    LinearShape,
    ShapeParameters,
)


@dataclass(frozen=True)
class ItemSpec:
    """One menu item within a layout pass.

    Attributes:
        index: Position of the item in the menu's item list.
        rect: Measured size of the item. Empty until the item has been measured.
        target: Final item center once positions have been computed.
    """

    index: int
    rect: QtCore.QRectF = field(default_factory=QtCore.QRectF)
    target: QtCore.QPointF = field(default_factory=QtCore.QPointF)

    @property
    def is_measured(self) -> bool:
        return not self.rect.isEmpty()

    @property
    def width(self) -> float:
        return self.rect.width()

    @property
    def height(self) -> float:
        return self.rect.height()

    def with_target(self, target: QtCore.QPointF) -> "ItemSpec":
        return ItemSpec(self.index, QtCore.QRectF(self.rect), QtCore.QPointF(target))


def compute_positions(
    items: Sequence[ItemSpec], shape: ShapeParameters, center: QtCore.QPointF
) -> List[QtCore.QPointF]:
    """Return the center of every item for the given shape.

    Parameters:
        items (Sequence[ItemSpec]): The measured items, in order.
        shape (CircleShape/LinearShape/GridShape): The arrangement to use.
        center (QPointF): The menu center.

    Returns:
        (list) One QPointF per item. Empty when there are no items.
    """
    if not items:
        return []
    if shape.is_degenerate:
        return [QtCore.QPointF(center) for _ in items]

    if isinstance(shape, CircleShape):
        return circle_positions(len(items), shape, center)
    if isinstance(shape, LinearShape):
        return linear_positions(items, shape, center)
    if isinstance(shape, GridShape):
        return grid_positions(items, shape, center)
    raise TypeError(f"Unsupported shape parameters: {type(shape).__name__}")


def circle_positions(
    count: int, shape: CircleShape, center: QtCore.QPointF
) -> List[QtCore.QPointF]:
    """Spread `count` items over the arc from `start_angle` to `end_angle`.

    An open arc puts the last item exactly on `end_angle`. A full (or larger)
    turn would put it on top of the first one, so the step is `span / count`
    instead of `span / (count - 1)`.
    """
    if count < 1:
        return []

    start = math.radians(shape.start_angle)
    end = math.radians(shape.end_angle)
    divisor = count - 1 if shape.span < 360 else count
    positions = []
    for i in range(count):
        theta = start + (end - start) * i / divisor if divisor else start
        positions.append(
            QtCore.QPointF(
                center.x() + math.cos(theta) * shape.radius_x,
                # screen y grows downward
                center.y() - math.sin(theta) * shape.radius_y,
            )
        )
    return positions


def linear_item_diameter(width: float, height: float, angle: float) -> float:
    """Length of the ray segment crossing an item's box through its center.

    Parameters:
        width (float): Item width.
        height (float): Item height.
        angle (float): Ray angle in degrees.
    """
    normalized = math.fmod(angle, 180.0)
    if normalized < 0:
        normalized += 180.0
    if normalized == 0.0:
        return width
    if normalized == 90.0:
        return height

    rad = math.radians(angle)
    sec_h = abs((height / 2) / math.sin(rad))
    sec_v = abs((width / 2) / math.sin(math.pi / 2 - rad))
    # the ray leaves the box through the nearer pair of edges
    return min(sec_h, sec_v) * 2.0


def linear_positions(
    items: Sequence[ItemSpec], shape: LinearShape, center: QtCore.QPointF
) -> List[QtCore.QPointF]:
    """Place items back to back along a ray, the first one on the center."""
    rad = math.radians(shape.angle)
    cos_a, sin_a = math.cos(rad), math.sin(rad)

    positions = []
    radius = 0.0
    first_half_w = first_half_h = 0.0
    for i, item in enumerate(items):
        half_w = item.width / 2
        half_h = item.height / 2

        if i == 0:
            first_half_w, first_half_h = half_w, half_h
            positions.append(QtCore.QPointF(center))
        else:
            shift_x = shift_y = 0.0
            if shape.alignment is LinearAlignment.LEFT:
                shift_x = half_w - first_half_w
            elif shape.alignment is LinearAlignment.RIGHT:
                shift_x = first_half_w - half_w
            elif shape.alignment is LinearAlignment.TOP:
                shift_y = half_h - first_half_h
            elif shape.alignment is LinearAlignment.BOTTOM:
                shift_y = first_half_h - half_h

            positions.append(
                QtCore.QPointF(
                    center.x() + cos_a * (radius + half_w - first_half_w) + shift_x,
                    center.y() - sin_a * (radius + half_h - first_half_h) + shift_y,
                )
            )

        radius += (
            linear_item_diameter(item.width, item.height, shape.angle) + shape.spacing
        )
    return positions


def grid_rows(count: int, columns: int) -> List[range]:
    """Item index ranges of each grid row, ie. 7 items in 3 columns -> [0-2, 3-5, 6]."""
    return [range(i, min(i + columns, count)) for i in range(0, count, columns)]


def grid_positions(
    items: Sequence[ItemSpec], shape: GridShape, center: QtCore.QPointF
) -> List[QtCore.QPointF]:
    """Flow items row-major, center every row under the widest one,
    then center the whole grid on `center`."""
    rows = grid_rows(len(items), shape.columns)

    local = [None] * len(items)
    row_widths = []
    y = 0.0
    for row in rows:
        x = 0.0
        row_height = max(items[i].height for i in row)
        for i in row:
            local[i] = (x + items[i].width / 2, y + row_height / 2)
            x += items[i].width + shape.spacing_h
        row_widths.append(x - shape.spacing_h)
        y += row_height + shape.spacing_v

    grid_height = y - shape.spacing_v
    grid_width = max(row_widths)

    positions = []
    for row, row_width in zip(rows, row_widths):
        dx = math.floor((grid_width - row_width) / 2)
        for i in row:
            lx, ly = local[i]
            positions.append(
                QtCore.QPointF(
                    lx + dx - grid_width / 2 + center.x(),
                    ly - grid_height / 2 + center.y(),
                )
            )
    return positions
