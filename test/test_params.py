# !/usr/bin/python
# coding=utf-8
"""Unit tests for the configuration records.

Run standalone: python -m pytest test/test_params.py
"""
import unittest
from dataclasses import FrozenInstanceError

from conftest import BaseTestCase

from qtpy import QtCore

from shapemenu.errors import MenuConfigurationError
from shapemenu.params import (
    ArcType,
    BoundaryBackground,
    CenterStrategy,
    CircleShape,
    GridShape,
    LinearAlignment,
    LinearShape,
    MenuParameters,
    MenuShape,
)


class TestMenuParametersDefaults(BaseTestCase):
    """Tests for MenuParameters defaults."""

    def test_defaults(self):
        params = MenuParameters()
        self.assertIs(params.shape, MenuShape.CIRCLE)
        self.assertIs(params.center_strategy, CenterStrategy.TRIGGER_BOUNDS)
        self.assertEqual(params.top_inset, 24.0)
        self.assertFalse(params.use_long_press)
        self.assertEqual(params.long_press_duration_ms, 500)
        self.assertEqual(params.open_duration_ms, 400)
        self.assertEqual(params.close_duration_ms, 150)
        self.assertEqual(params.start_item_scale, 0.3)
        self.assertEqual(params.max_measure_attempts, 30)
        self.assertIsNone(params.boundary_background)

    def test_shape_params_follow_shape(self):
        params = MenuParameters(shape=MenuShape.GRID)
        self.assertIs(params.shape_params, params.grid)

    def test_easing_curve_from_type(self):
        curve = MenuParameters().easing_curve
        self.assertIsInstance(curve, QtCore.QEasingCurve)
        self.assertEqual(curve.type(), QtCore.QEasingCurve.Type.OutBack)

    def test_boundary_without_background_has_no_padding(self):
        boundary = MenuParameters(clamp_group=False).boundary
        self.assertTrue(boundary.clamp_per_item)
        self.assertFalse(boundary.clamp_group)
        self.assertIsNone(boundary.padding)

    def test_boundary_padding_from_background(self):
        params = MenuParameters(
            boundary_background=BoundaryBackground(padding=QtCore.QMarginsF(1, 2, 3, 4))
        )
        self.assertEqual(params.boundary.padding, QtCore.QMarginsF(1, 2, 3, 4))


class TestMenuParametersPresets(BaseTestCase):
    """Tests for the for_* presets and replace()."""

    def test_for_circle(self):
        params = MenuParameters.for_circle(80, 60)
        self.assertIs(params.shape, MenuShape.CIRCLE)
        self.assertEqual(params.circle, CircleShape(0, 360, 80, 60))

    def test_for_arc(self):
        params = MenuParameters.for_arc(ArcType.SEMI_DOWN, 50, 50)
        self.assertEqual(params.circle.start_angle, 180)
        self.assertEqual(params.circle.end_angle, 360)

    def test_for_linear(self):
        params = MenuParameters.for_linear(0, 4, LinearAlignment.TOP)
        self.assertIs(params.shape, MenuShape.LINEAR)
        self.assertEqual(params.linear, LinearShape(0, 4, LinearAlignment.TOP))
        self.assertEqual(params.start_item_scale, 1.0)

    def test_for_grid_centers_on_screen(self):
        params = MenuParameters.for_grid(4, 2, 2)
        self.assertIs(params.shape, MenuShape.GRID)
        self.assertEqual(params.grid.columns, 4)
        self.assertIs(params.center_strategy, CenterStrategy.SCREEN_CENTER)

    def test_preset_overrides_win(self):
        params = MenuParameters.for_grid(
            center_strategy=CenterStrategy.TOUCH_POINT, top_inset=0
        )
        self.assertIs(params.center_strategy, CenterStrategy.TOUCH_POINT)
        self.assertEqual(params.top_inset, 0)

    def test_replace_returns_copy(self):
        params = MenuParameters()
        changed = params.replace(open_duration_ms=100)
        self.assertEqual(changed.open_duration_ms, 100)
        self.assertEqual(params.open_duration_ms, 400)


class TestValidation(BaseTestCase):
    """Tests for invalid configuration."""

    def test_negative_radius(self):
        with self.assertRaises(MenuConfigurationError):
            CircleShape(radius_x=-1)

    def test_zero_columns(self):
        with self.assertRaises(MenuConfigurationError):
            GridShape(columns=0)

    def test_negative_duration(self):
        with self.assertRaises(MenuConfigurationError):
            MenuParameters(open_duration_ms=-1)

    def test_zero_measure_attempts(self):
        with self.assertRaises(MenuConfigurationError):
            MenuParameters(max_measure_attempts=0)

    def test_invalid_shape(self):
        with self.assertRaises(MenuConfigurationError):
            MenuParameters(shape="circle")

    def test_configuration_error_is_value_error(self):
        with self.assertRaises(ValueError):
            MenuParameters(start_item_scale=-1)

    def test_shape_records_are_frozen(self):
        shape = CircleShape()
        with self.assertRaises(FrozenInstanceError):
            shape.radius_x = 10

    def test_non_finite_angle_is_degenerate(self):
        self.assertTrue(LinearShape(angle=float("inf")).is_degenerate)
        self.assertFalse(LinearShape().is_degenerate)


if __name__ == "__main__":
    unittest.main()
