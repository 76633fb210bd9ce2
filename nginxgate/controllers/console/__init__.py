"""Console orchestration."""

from nginxgate.controllers.console.controller import ConsoleController

__all__ = [
    "ConsoleController",
]
