# !/usr/bin/python
# coding=utf-8
"""Boundary fitter: keeps menu items on screen.

Two independent corrections are applied, in this order:

1. Per item: every item rectangle crossing a screen edge is moved back inside
   on its own. Items may end up overlapping.
2. Group: the union of all item rectangles (optionally grown by a padding) is
   moved back inside as a whole. This produces a single `group_offset` that is
   added at draw time; item positions are left untouched.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
from qtpy import QtCore

# From this package:
from shapemenu.geometry import ItemSpec
from shapemenu.params import BoundaryPolicy


@dataclass(frozen=True)
class FitResult:
    """Output of `fit`.

    Attributes:
        positions: Item centers after the per-item clamp.
        group_offset: Translation shared by every item at draw time.
        items_bounds: Union of the item rectangles with `group_offset` applied.
    """

    positions: Tuple[QtCore.QPointF, ...] = ()
    group_offset: QtCore.QPointF = field(default_factory=QtCore.QPointF)
    items_bounds: QtCore.QRectF = field(default_factory=QtCore.QRectF)


def item_rect(item: ItemSpec, center: QtCore.QPointF) -> QtCore.QRectF:
    """The on-screen rectangle of an item whose center is at `center`."""
    return QtCore.QRectF(
        center.x() - item.width / 2,
        center.y() - item.height / 2,
        item.width,
        item.height,
    )


def edge_correction(
    rect: QtCore.QRectF, screen_size: QtCore.QSizeF, top_inset: float = 0.0
) -> QtCore.QPointF:
    """Minimal translation bringing each violated edge of `rect` back on screen.

    Every edge is tested against the original rectangle, so a rectangle larger
    than the screen gets both of its opposite corrections summed.
    """
    dx = dy = 0.0
    if rect.top() < top_inset:
        dy += top_inset - rect.top()
    if rect.bottom() > screen_size.height():
        dy += screen_size.height() - rect.bottom()
    if rect.left() < 0:
        dx += -rect.left()
    if rect.right() > screen_size.width():
        dx += screen_size.width() - rect.right()
    return QtCore.QPointF(dx, dy)


def union_rect(rects: Sequence[QtCore.QRectF]) -> QtCore.QRectF:
    """Bounding rectangle of `rects`; an empty QRectF for no input."""
    if not rects:
        return QtCore.QRectF()
    bounds = QtCore.QRectF(rects[0])
    for rect in rects[1:]:
        bounds = bounds.united(rect)
    return bounds


def pad_rect(rect: QtCore.QRectF, padding: Optional[QtCore.QMarginsF]) -> QtCore.QRectF:
    if padding is None:
        return QtCore.QRectF(rect)
    return rect.adjusted(
        -padding.left(), -padding.top(), padding.right(), padding.bottom()
    )


def fit(
    items: Sequence[ItemSpec],
    positions: Sequence[QtCore.QPointF],
    screen_size: QtCore.QSizeF,
    top_inset: float,
    policy: BoundaryPolicy,
) -> FitResult:
    """Fit item positions inside the screen.

    Parameters:
        items (Sequence[ItemSpec]): Measured items, in order.
        positions (Sequence[QPointF]): Raw item centers from the geometry engine.
        screen_size (QSizeF): Size of the screen the overlay covers.
        top_inset (float): Area at the top of the screen items must not cover.
        policy (BoundaryPolicy): Which clamps to apply and the group padding.

    Returns:
        (FitResult)
    """
    if len(items) != len(positions):
        raise ValueError(
            f"Got {len(positions)} positions for {len(items)} items."
        )
    if not items:
        return FitResult()

    fitted: List[QtCore.QPointF] = [QtCore.QPointF(p) for p in positions]

    if policy.clamp_per_item:
        for i, item in enumerate(items):
            fitted[i] = fitted[i] + edge_correction(
                item_rect(item, fitted[i]), screen_size, top_inset
            )

    rects = [item_rect(item, pos) for item, pos in zip(items, fitted)]

    group_offset = QtCore.QPointF()
    if policy.clamp_group:
        boundaries = pad_rect(union_rect(rects), policy.padding)
        group_offset = edge_correction(boundaries, screen_size, top_inset)

    items_bounds = union_rect(rects).translated(group_offset)
    return FitResult(tuple(fitted), group_offset, items_bounds)
