"""Keyboard bindings module.

- app: App-level bindings (APP_BINDINGS)
- navigation: Screen-specific bindings (*_SCREEN_BINDINGS)
"""

from kstool.keyboard.app import APP_BINDINGS
from kstool.keyboard.navigation import (
    CONFIG_EDIT_SCREEN_BINDINGS,
    CONFIG_LIST_SCREEN_BINDINGS,
    JOBS_SCREEN_BINDINGS,
)

__all__ = [
    "APP_BINDINGS",
    "CONFIG_EDIT_SCREEN_BINDINGS",
    "CONFIG_LIST_SCREEN_BINDINGS",
    "JOBS_SCREEN_BINDINGS",
]
