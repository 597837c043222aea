"""Textual in-process test harness for edgebar-groups.

Re-exports all public API for convenient imports:
    from tests.harness import run_app, press_and_settle, ...
"""

from tests.harness.app_runner import run_app
from tests.harness.interactions import (
    press_and_settle,
    press_sequence,
    settle,
)
from tests.harness.assertions import (
    dock_visible,
    open_titles,
    window_for,
)

__all__ = [
    "run_app",
    "press_and_settle",
    "press_sequence",
    "settle",
    "dock_visible",
    "open_titles",
    "window_for",
]
