# !/usr/bin/python
# coding=utf-8
"""Unit tests for layout orchestration.

This module tests:
- Center resolution for each strategy
- Per-tick item transforms of a LayoutCycle
- The measure/retry/timeout loop and pushed measurements

Run standalone: python -m pytest test/test_layout.py
"""
import unittest

from conftest import BaseTestCase

from qtpy import QtCore

from shapemenu.errors import LayoutTimeoutError
from shapemenu.geometry import ItemSpec
from shapemenu.layout import LayoutCycle, LayoutOrchestrator, lerp, resolve_center
from shapemenu.params import CenterStrategy, MenuParameters


SCREEN = QtCore.QSizeF(800, 600)
TRIGGER = QtCore.QRectF(100, 100, 40, 20)


def measure_all(item):
    return QtCore.QRectF(0, 0, 40, 20)


class TestResolveCenter(BaseTestCase):
    """Tests for resolve_center()."""

    def test_trigger_bounds(self):
        center = resolve_center(CenterStrategy.TRIGGER_BOUNDS, TRIGGER, SCREEN)
        self.assertEqual(center, QtCore.QPointF(120, 110))

    def test_trigger_bounds_with_offset(self):
        center = resolve_center(
            CenterStrategy.TRIGGER_BOUNDS, TRIGGER, SCREEN, QtCore.QPointF(5, -5)
        )
        self.assertEqual(center, QtCore.QPointF(125, 105))

    def test_screen_center_with_offset(self):
        center = resolve_center(
            CenterStrategy.SCREEN_CENTER, TRIGGER, SCREEN, QtCore.QPointF(10, 0)
        )
        self.assertEqual(center, QtCore.QPointF(410, 300))

    def test_touch_point_ignores_offset(self):
        center = resolve_center(
            CenterStrategy.TOUCH_POINT,
            TRIGGER,
            SCREEN,
            QtCore.QPointF(10, 10),
            QtCore.QPointF(50, 60),
        )
        self.assertEqual(center, QtCore.QPointF(50, 60))

    def test_touch_strategy_without_touch_uses_trigger(self):
        center = resolve_center(CenterStrategy.TOUCH_POINT, TRIGGER, SCREEN)
        self.assertEqual(center, QtCore.QPointF(120, 110))

    def test_touch_point_ignored_by_other_strategies(self):
        center = resolve_center(
            CenterStrategy.SCREEN_CENTER, TRIGGER, SCREEN, None, QtCore.QPointF(1, 1)
        )
        self.assertEqual(center, QtCore.QPointF(400, 300))


class TestLayoutCycle(BaseTestCase):
    """Tests for LayoutCycle transforms."""

    def setUp(self):
        super().setUp()
        rect = QtCore.QRectF(0, 0, 10, 10)
        self.cycle = LayoutCycle(
            items=(
                ItemSpec(0, rect, QtCore.QPointF(100, 100)),
                ItemSpec(1, rect, QtCore.QPointF(200, 100)),
                ItemSpec(2, rect, QtCore.QPointF(200, 200)),
            ),
            center=QtCore.QPointF(100, 100),
            screen_size=SCREEN,
            top_inset=24,
            group_offset=QtCore.QPointF(0, 10),
        )

    def test_lerp(self):
        self.assertEqual(lerp(0, 10, 0.25), 2.5)
        self.assertEqual(lerp(10, 0, 1.0), 0)

    def test_draw_position_includes_group_offset(self):
        self.assertEqual(self.cycle.draw_position(1), QtCore.QPointF(200, 110))

    def test_items_start_from_previous_item(self):
        start = self.cycle.item_transform(2, 0.0)
        self.assertEqual(start.position, QtCore.QPointF(200, 110))
        end = self.cycle.item_transform(2, 1.0)
        self.assertEqual(end.position, QtCore.QPointF(200, 210))

    def test_first_item_starts_from_itself(self):
        for progress in (0.0, 0.5, 1.0):
            transform = self.cycle.item_transform(0, progress)
            self.assertEqual(transform.position, QtCore.QPointF(100, 110))

    def test_midway(self):
        transform = self.cycle.item_transform(1, 0.5, rotate_angle=90, start_scale=0.5)
        self.assertEqual(transform.position, QtCore.QPointF(150, 110))
        self.assertEqual(transform.rotation, 45)
        self.assertEqual(transform.scale, 0.75)

    def test_final_transform_is_identity(self):
        transform = self.cycle.item_transform(1, 1.0, rotate_angle=90, start_scale=0.3)
        self.assertEqual(transform.rotation, 0)
        self.assertEqual(transform.scale, 1)

    def test_positions_are_copies(self):
        positions = self.cycle.positions
        positions[0].setX(-1)
        self.assertEqual(self.cycle.items[0].target, QtCore.QPointF(100, 100))


class TestLayoutOrchestrator(BaseTestCase):
    """Tests for the measure -> position -> fit sequence."""

    def setUp(self):
        super().setUp()
        self.params = MenuParameters.for_linear(0, 0, max_measure_attempts=3)
        self.layout = LayoutOrchestrator(self.params)
        self.items = ["a", "b", "c"]

    def test_idle_until_begin(self):
        self.assertFalse(self.layout.active)
        self.assertFalse(self.layout.pending)
        self.assertIsNone(self.layout.cycle)

    def test_begin_resolves_center(self):
        self.layout.begin(self.items, TRIGGER, SCREEN)
        self.assertTrue(self.layout.pending)
        self.assertEqual(self.layout.center, QtCore.QPointF(120, 110))
        self.assertEqual(self.layout.unmeasured(), [0, 1, 2])

    def test_poll_completes_when_all_measured(self):
        self.layout.begin(self.items, TRIGGER, SCREEN)
        cycle = self.layout.poll(measure_all)

        self.assertIsNotNone(cycle)
        self.assertFalse(self.layout.pending)
        self.assertEqual(
            cycle.positions,
            [QtCore.QPointF(120, 110), QtCore.QPointF(160, 110), QtCore.QPointF(200, 110)],
        )
        self.assertEqual(self.layout.attempts, 0)

    def test_poll_waits_on_empty_rects(self):
        sizes = {"a": QtCore.QRectF(0, 0, 40, 20), "b": None, "c": QtCore.QRectF()}
        self.layout.begin(self.items, TRIGGER, SCREEN)

        self.assertIsNone(self.layout.poll(sizes.get))
        self.assertEqual(self.layout.unmeasured(), [1, 2])
        self.assertEqual(self.layout.attempts, 1)

        self.assertIsNotNone(self.layout.poll(measure_all))

    def test_poll_times_out(self):
        self.layout.begin(self.items, TRIGGER, SCREEN)
        self.layout.poll(lambda item: None)
        self.layout.poll(lambda item: None)
        with self.assertRaises(LayoutTimeoutError) as ctx:
            self.layout.poll(lambda item: None)

        self.assertEqual(ctx.exception.attempts, 3)
        self.assertEqual(ctx.exception.unmeasured, (0, 1, 2))
        self.assertFalse(self.layout.active)

    def test_settle_fails_before_attempts_run_out(self):
        self.layout.begin(self.items, TRIGGER, SCREEN)
        self.layout.poll(lambda item: None)
        with self.assertRaises(LayoutTimeoutError) as ctx:
            self.layout.settle(lambda item: None)

        self.assertEqual(ctx.exception.attempts, 2)
        self.assertEqual(ctx.exception.unmeasured, (0, 1, 2))
        self.assertFalse(self.layout.active)
        self.assertFalse(self.layout.pending)

    def test_settle_completes_late_measurements(self):
        self.layout.begin(self.items, TRIGGER, SCREEN)
        self.layout.poll(lambda item: None)
        cycle = self.layout.settle(measure_all)
        self.assertIs(cycle, self.layout.cycle)
        self.assertFalse(self.layout.pending)

    def test_layout_runs_once_per_cycle(self):
        self.layout.begin(self.items, TRIGGER, SCREEN)
        cycle = self.layout.poll(measure_all)
        # later sizes are ignored until the next begin()
        again = self.layout.poll(lambda item: QtCore.QRectF(0, 0, 100, 100))
        self.assertIs(again, cycle)

    def test_pushed_measurements(self):
        self.layout.begin(self.items, TRIGGER, SCREEN)
        self.assertIsNone(self.layout.item_measured(0, QtCore.QRectF(0, 0, 40, 20)))
        self.assertIsNone(self.layout.item_measured(2, QtCore.QRectF(0, 0, 40, 20)))
        cycle = self.layout.item_measured(1, QtCore.QRectF(0, 0, 40, 20))
        self.assertIsNotNone(cycle)
        self.assertEqual(cycle.positions[2], QtCore.QPointF(200, 110))

    def test_pushed_index_out_of_range(self):
        self.layout.begin(self.items, TRIGGER, SCREEN)
        with self.assertLogs(self.layout.logger, "WARNING"):
            self.assertIsNone(self.layout.item_measured(5, QtCore.QRectF(0, 0, 1, 1)))

    def test_cycle_is_clamped(self):
        trigger = QtCore.QRectF(760, 100, 40, 20)
        self.layout.begin(self.items, trigger, SCREEN)
        cycle = self.layout.poll(measure_all)
        # the raw row 760..880 is pulled back by the per-item clamp
        self.assertEqual(cycle.items[1].target, QtCore.QPointF(780, 110))
        self.assertEqual(cycle.items[2].target, QtCore.QPointF(780, 110))
        self.assertEqual(cycle.group_offset, QtCore.QPointF(0, 0))

    def test_begin_discards_previous_cycle(self):
        self.layout.begin(self.items, TRIGGER, SCREEN)
        self.layout.poll(measure_all)
        self.layout.begin(["x"], TRIGGER, SCREEN)
        self.assertIsNone(self.layout.cycle)
        self.assertEqual(self.layout.items, ["x"])

    def test_touch_point_center(self):
        layout = LayoutOrchestrator(
            self.params.replace(center_strategy=CenterStrategy.TOUCH_POINT)
        )
        layout.begin(self.items, TRIGGER, SCREEN, QtCore.QPointF(300, 300))
        self.assertEqual(layout.center, QtCore.QPointF(300, 300))

    def test_reset(self):
        self.layout.begin(self.items, TRIGGER, SCREEN)
        self.layout.poll(lambda item: None)
        self.layout.reset()
        self.assertFalse(self.layout.active)
        self.assertEqual(self.layout.attempts, 0)


if __name__ == "__main__":
    unittest.main()
