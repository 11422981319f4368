# !/usr/bin/python
# coding=utf-8
from typing import Callable, Optional


class MenuController:
    """Programmatic handle of a ShapeMenu.

    The menu binds its `open` and `close` to the controller on construction
    and unbinds them on dispose, after which every call is a no-op. It is also
    the handle passed to `on_item_activated(index, controller)`, so a callback
    can decide to close (or re-open) the menu.
    """

    def __init__(self):
        self._open: Optional[Callable[[], None]] = None
        self._close: Optional[Callable[[], None]] = None

    def bind(self, open_menu: Callable[[], None], close_menu: Callable[[], None]):
        self._open = open_menu
        self._close = close_menu

    def is_ready(self) -> bool:
        """True when both open and close are bound."""
        return self._open is not None and self._close is not None

    def open(self) -> None:
        if self._open is not None:
            self._open()

    def close(self) -> None:
        if self._close is not None:
            self._close()

    def dispose(self) -> None:
        self._open = None
        self._close = None
