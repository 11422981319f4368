# !/usr/bin/python
# coding=utf-8
"""Exception types raised by shapemenu.

Classes:
    ShapeMenuError: Base class for every error raised by this package.
    MenuConfigurationError: Conflicting or invalid construction arguments.
    LayoutError: A layout pass could not produce item positions.
    LayoutTimeoutError: Items were never measured within the retry budget.
    ItemProviderError: A lazy item provider failed or returned nothing usable.
"""


class ShapeMenuError(Exception):
    """Base error for the package."""


class MenuConfigurationError(ShapeMenuError, ValueError):
    """Raised at construction time for contract violations.

    ie. both `items` and `lazy_items` given, or neither.
    """


class LayoutError(ShapeMenuError):
    """A layout pass failed."""


class LayoutTimeoutError(LayoutError):
    """Item rectangles were still empty after the allowed number of ticks.

    Attributes:
        attempts (int): The number of measurement ticks that were tried.
        unmeasured (tuple): Indices of the items that never reported a size.
    """

    def __init__(self, attempts: int, unmeasured=()):
        self.attempts = attempts
        self.unmeasured = tuple(unmeasured)
        super().__init__(
            f"Items {list(self.unmeasured)} were not measured after {attempts} attempts."
        )


class ItemProviderError(ShapeMenuError):
    """The lazy item provider raised or returned an invalid result."""
