"""Screens for the nginxgate TUI."""

from nginxgate.screens.console import ConsoleScreen

__all__ = [
    "ConsoleScreen",
]
