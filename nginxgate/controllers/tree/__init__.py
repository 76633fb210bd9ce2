"""Change tree domain: pure builder and the fetching controller."""

from nginxgate.controllers.tree.builder import (
    ChangeTreeBuilder,
    build_change_tree,
    marker_for,
)
from nginxgate.controllers.tree.controller import TreeController, TreeSnapshot

__all__ = [
    "ChangeTreeBuilder",
    "TreeController",
    "TreeSnapshot",
    "build_change_tree",
    "marker_for",
]
