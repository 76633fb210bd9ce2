"""Console screen package."""

from nginxgate.screens.console.console_screen import ConsoleScreen
from nginxgate.screens.console.presenter import ConsolePresenter

__all__ = [
    "ConsolePresenter",
    "ConsoleScreen",
]
