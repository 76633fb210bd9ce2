"""Keyboard bindings module.

This module provides all keyboard bindings for the nginxgate TUI.
Bindings are organized into two categories:

- app: App-level bindings (APP_BINDINGS)
- navigation: Screen and modal bindings (*_BINDINGS)
"""

from nginxgate.keyboard.app import APP_BINDINGS
from nginxgate.keyboard.navigation import (
    CONSOLE_SCREEN_BINDINGS,
    RESULT_MODAL_BINDINGS,
    UPDATE_MODAL_BINDINGS,
)

__all__ = [
    "APP_BINDINGS",
    "CONSOLE_SCREEN_BINDINGS",
    "RESULT_MODAL_BINDINGS",
    "UPDATE_MODAL_BINDINGS",
]
