# !/usr/bin/python
# coding=utf-8
"""ShapeMenu demo.

One trigger button per shape. Tap a button to open its menu; the circle menu
opens on a long press instead. Click an item to log it, click anywhere else
to close the menu.

Run:
    python -m shapemenu.examples.example
"""
import sys
import logging
from qtpy import QtWidgets, QtCore, QtGui

from shapemenu import (
    ArcType,
    BackgroundParams,
    BoundaryBackground,
    CenterStrategy,
    LinearAlignment,
    MenuParameters,
    ShapeMenu,
)


def make_items(labels, width=72):
    items = []
    for label in labels:
        button = QtWidgets.QPushButton(label)
        button.setMinimumWidth(width)
        items.append(button)
    return items


class ExampleWindow(QtWidgets.QWidget):
    """A row of trigger buttons, each owning a ShapeMenu."""

    def __init__(self, parent=None, log_level="INFO"):
        super().__init__(parent)
        self.setWindowTitle("ShapeMenu Example")
        self.log_level = log_level
        self.output = QtWidgets.QLabel("Tap a button.")

        layout = QtWidgets.QVBoxLayout(self)
        row = QtWidgets.QHBoxLayout()
        layout.addLayout(row)
        layout.addWidget(self.output)

        backdrop = BackgroundParams(color=QtGui.QColor(0, 0, 0, 90))
        self.menus = []

        circle = self._add_trigger(row, "Circle (hold)")
        self._add_menu(
            circle,
            [str(i) for i in range(8)],
            MenuParameters.for_circle(
                100,
                100,
                use_long_press=True,
                rotate_items_angle=-90.0,
                background=backdrop,
            ),
        )

        arc = self._add_trigger(row, "Arc")
        self._add_menu(
            arc,
            ["Cut", "Copy", "Paste", "Delete", "Select"],
            MenuParameters.for_arc(ArcType.SEMI_UP, 110, 80, background=backdrop),
        )

        linear = self._add_trigger(row, "Linear")
        self._add_menu(
            linear,
            ["New", "Open...", "Save", "Save As...", "Close"],
            MenuParameters.for_linear(
                angle=270,
                spacing=4,
                alignment=LinearAlignment.LEFT,
                boundary_background=BoundaryBackground(),
            ),
        )

        grid = self._add_trigger(row, "Grid")
        self._add_menu(
            grid,
            list("ABCDEFG"),
            MenuParameters.for_grid(
                3,
                6,
                6,
                center_strategy=CenterStrategy.SCREEN_CENTER,
                background=backdrop,
            ),
            lazy=True,
        )

    def _add_trigger(self, layout, text):
        button = QtWidgets.QPushButton(text)
        button.setMinimumHeight(40)
        layout.addWidget(button)
        return button

    def _add_menu(self, trigger, labels, params, lazy=False):
        kwargs = {"lazy_items": lambda: make_items(labels)} if lazy else {
            "items": make_items(labels)
        }
        menu = ShapeMenu(
            trigger=trigger,
            params=params,
            on_item_activated=lambda index, ctrl: self.on_item_activated(
                trigger.text(), labels[index], ctrl
            ),
            on_state_changed=lambda state: self.output.setText(
                f"{trigger.text()}: {state.value}"
            ),
            parent=self,
            log_level=self.log_level,
            **kwargs,
        )
        self.menus.append(menu)
        return menu

    def on_item_activated(self, menu_name, label, controller):
        logging.getLogger(__name__).info(f"{menu_name}: '{label}' activated")
        self.output.setText(f"{menu_name}: '{label}'")
        controller.close()

    def closeEvent(self, event):
        for menu in self.menus:
            menu.dispose()
        super().closeEvent(event)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(sys.argv)
    window = ExampleWindow()
    window.resize(480, 120)
    window.show()
    sys.exit(app.exec_() if hasattr(app, "exec_") else app.exec())
