"""Special widgets for nginxgate TUI.

- CustomTree: Tree data structure display
"""

from nginxgate.widgets.special.custom_tree import CustomTree

__all__ = [
    "CustomTree",
]
