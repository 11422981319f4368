# !/usr/bin/python
# coding=utf-8
"""shapemenu test suite

Each test module is standalone and can be run independently.
Use run_tests.py to execute the complete test suite.
"""

__all__ = [
    "test_boundary",
    "test_controller",
    "test_geometry",
    "test_gestures",
    "test_layout",
    "test_logging",
    "test_menu",
    "test_overlay",
    "test_params",
    "test_state_machine",
]
