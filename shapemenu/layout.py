# !/usr/bin/python
# coding=utf-8
"""Layout orchestration for one open cycle.

`LayoutOrchestrator` collects item sizes (polled every animation tick, or
pushed by the host as items are mounted), then runs the geometry engine and
the boundary fitter exactly once and freezes the outcome in a `LayoutCycle`.

All coordinates are in overlay space: (0, 0) is the top left corner of the
screen the overlay covers.
"""
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple
from qtpy import QtCore
import pythontk as ptk

# From this package:
from shapemenu.errors import LayoutTimeoutError
from shapemenu.geometry import ItemSpec, compute_positions
from shapemenu.boundary import fit
from shapemenu.params import CenterStrategy, MenuParameters


def resolve_center(
    strategy: CenterStrategy,
    trigger_bounds: QtCore.QRectF,
    screen_size: QtCore.QSizeF,
    offset: QtCore.QPointF = None,
    touch_point: Optional[QtCore.QPointF] = None,
) -> QtCore.QPointF:
    """Return the menu center for an open cycle.

    A touch point wins when the strategy asks for it and a touch occurred;
    otherwise the screen center or the trigger center is used, plus `offset`.
    """
    offset = offset if offset is not None else QtCore.QPointF()

    if strategy is CenterStrategy.TOUCH_POINT and touch_point is not None:
        return QtCore.QPointF(touch_point)
    if strategy is CenterStrategy.SCREEN_CENTER:
        return QtCore.QPointF(
            screen_size.width() / 2 + offset.x(),
            screen_size.height() / 2 + offset.y(),
        )
    return trigger_bounds.center() + offset


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


@dataclass(frozen=True)
class ItemTransform:
    """Where and how to draw an item at a given progress."""

    position: QtCore.QPointF
    rotation: float = 0.0
    scale: float = 1.0


@dataclass(frozen=True)
class LayoutCycle:
    """Everything that stays fixed while the menu animates.

    Rebuilt wholesale on every open cycle, never mutated.
    """

    items: Tuple[ItemSpec, ...]
    center: QtCore.QPointF
    screen_size: QtCore.QSizeF
    top_inset: float
    trigger_bounds: QtCore.QRectF = field(default_factory=QtCore.QRectF)
    group_offset: QtCore.QPointF = field(default_factory=QtCore.QPointF)
    items_bounds: QtCore.QRectF = field(default_factory=QtCore.QRectF)

    @property
    def positions(self) -> List[QtCore.QPointF]:
        return [QtCore.QPointF(item.target) for item in self.items]

    def draw_position(self, index: int) -> QtCore.QPointF:
        """Final item center with the group offset applied."""
        return self.items[index].target + self.group_offset

    def item_transform(
        self,
        index: int,
        progress: float,
        rotate_angle: float = 0.0,
        start_scale: float = 1.0,
    ) -> ItemTransform:
        """Interpolate an item from the collapsed state (progress 0) to its layout.

        Every item starts from the final position of the item before it, so
        the menu unfolds like a fan; the first item starts from its own spot.
        """
        start = self.draw_position(max(index - 1, 0))
        end = self.draw_position(index)
        position = QtCore.QPointF(
            lerp(start.x(), end.x(), progress), lerp(start.y(), end.y(), progress)
        )
        return ItemTransform(
            position,
            rotation=lerp(rotate_angle, 0.0, progress),
            scale=lerp(start_scale, 1.0, progress),
        )


class LayoutOrchestrator(ptk.LoggingMixin):
    """Runs the measure -> position -> fit sequence of an open cycle.

    Parameters:
        params (MenuParameters): Menu configuration. Only the shape, boundary and
            centering fields are read.
        log_level (str/int): Logging level. Defaults to 'WARNING'.

    Example:
        orchestrator.begin(items, trigger_bounds, screen_size)
        while orchestrator.pending:  # once per animation tick
            orchestrator.poll(host.measure)
        orchestrator.cycle.draw_position(0)
    """

    def __init__(self, params: MenuParameters, log_level="WARNING"):
        self.logger.setLevel(log_level)
        self.params = params
        self.reset()

    def reset(self) -> None:
        """Discard every piece of state of the current cycle."""
        self._items: Optional[List[object]] = None
        self._specs: List[ItemSpec] = []
        self._trigger_bounds = QtCore.QRectF()
        self._screen_size = QtCore.QSizeF()
        self._center: Optional[QtCore.QPointF] = None
        self._cycle: Optional[LayoutCycle] = None
        self.attempts = 0

    def begin(
        self,
        items: Sequence[object],
        trigger_bounds: QtCore.QRectF,
        screen_size: QtCore.QSizeF,
        touch_point: Optional[QtCore.QPointF] = None,
    ) -> None:
        """Start a new cycle. Any previous cycle is dropped first.

        Parameters:
            items (Sequence): The host's item objects, in menu order.
            trigger_bounds (QRectF): Trigger rectangle in overlay coordinates.
            screen_size (QSizeF): Size of the overlay.
            touch_point (QPointF): Where the menu was touched, if anywhere.
        """
        self.reset()
        self._items = list(items)
        self._specs = [ItemSpec(i) for i in range(len(self._items))]
        self._trigger_bounds = QtCore.QRectF(trigger_bounds)
        self._screen_size = QtCore.QSizeF(screen_size)
        self._center = resolve_center(
            self.params.center_strategy,
            self._trigger_bounds,
            self._screen_size,
            self.params.center_offset,
            touch_point,
        )
        self.logger.debug(
            f"begin: {len(self._items)} items, center=({self._center.x()}, {self._center.y()})"
        )

    @property
    def active(self) -> bool:
        return self._items is not None

    @property
    def pending(self) -> bool:
        """True while a cycle has started but its items are not all measured."""
        return self.active and self._cycle is None

    @property
    def cycle(self) -> Optional[LayoutCycle]:
        return self._cycle

    @property
    def center(self) -> Optional[QtCore.QPointF]:
        return self._center

    @property
    def items(self) -> List[object]:
        return list(self._items or [])

    def unmeasured(self) -> List[int]:
        return [spec.index for spec in self._specs if not spec.is_measured]

    def poll(
        self, measure: Callable[[object], Optional[QtCore.QRectF]]
    ) -> Optional[LayoutCycle]:
        """Measure every item and complete the cycle if all have a size.

        Parameters:
            measure (callable): Returns an item's rectangle, or None/an empty
                rectangle while the item is not mounted yet.

        Returns:
            (LayoutCycle/None) The frozen cycle, or None while still pending.

        Raises:
            LayoutTimeoutError: After `max_measure_attempts` unsuccessful polls.
                The orchestrator is reset before raising.
        """
        if not self.pending:
            return self._cycle

        for i, item in enumerate(self._items):
            rect = measure(item)
            if rect is None:
                rect = QtCore.QRectF()
            self._specs[i] = ItemSpec(i, QtCore.QRectF(rect))

        if not self.unmeasured():
            return self._complete()

        self.attempts += 1
        if self.attempts >= self.params.max_measure_attempts:
            error = LayoutTimeoutError(self.attempts, self.unmeasured())
            self.logger.error(str(error))
            self.reset()
            raise error

        self.logger.debug(
            f"poll: waiting on items {self.unmeasured()} (attempt {self.attempts})"
        )
        return None

    def settle(
        self, measure: Callable[[object], Optional[QtCore.QRectF]]
    ) -> LayoutCycle:
        """Measure one last time once no more ticks will arrive.

        Raises:
            LayoutTimeoutError: If any item is still unmeasured. The
                orchestrator is reset before raising.
        """
        cycle = self.poll(measure)
        if cycle is not None:
            return cycle

        error = LayoutTimeoutError(self.attempts, self.unmeasured())
        self.logger.error(f"settle: {error}")
        self.reset()
        raise error

    def item_measured(self, index: int, rect: QtCore.QRectF) -> Optional[LayoutCycle]:
        """Record a size pushed by the host. Completes the cycle once all are known."""
        if not self.pending:
            self.logger.debug(f"item_measured: ignored for item {index}, no pending cycle")
            return self._cycle
        if not 0 <= index < len(self._specs):
            self.logger.warning(f"item_measured: index {index} out of range")
            return None

        self._specs[index] = ItemSpec(index, QtCore.QRectF(rect))
        if not self.unmeasured():
            return self._complete()
        return None

    def _complete(self) -> LayoutCycle:
        positions = compute_positions(self._specs, self.params.shape_params, self._center)
        result = fit(
            self._specs,
            positions,
            self._screen_size,
            self.params.top_inset,
            self.params.boundary,
        )
        self._cycle = LayoutCycle(
            items=tuple(
                spec.with_target(pos) for spec, pos in zip(self._specs, result.positions)
            ),
            center=QtCore.QPointF(self._center),
            screen_size=QtCore.QSizeF(self._screen_size),
            top_inset=self.params.top_inset,
            trigger_bounds=QtCore.QRectF(self._trigger_bounds),
            group_offset=result.group_offset,
            items_bounds=result.items_bounds,
        )
        self.logger.debug(
            f"layout complete: offset=({result.group_offset.x()}, {result.group_offset.y()})"
        )
        return self._cycle
