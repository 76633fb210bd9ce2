"""CustomTree widget for the TUI application.

Standard Wrapper Pattern:
- Wraps Textual's Tree; selection still arrives as ``Tree.NodeSelected``
- Node labels are rich ``Text`` so status colours survive

CSS Classes: widget-custom-tree
"""

from __future__ import annotations

from typing import Generic, TypeVar

from textual.widgets import Tree

NodeDataT = TypeVar("NodeDataT")


class CustomTree(Tree[NodeDataT], Generic[NodeDataT]):
    """Tree widget with standardized styling."""

    _default_classes = "widget-custom-tree"

    def __init__(
        self,
        label: str,
        data: NodeDataT | None = None,
        *,
        id: str | None = None,
        classes: str | None = None,
        disabled: bool = False,
    ) -> None:
        super().__init__(label, data, id=id, classes=classes, disabled=disabled)
        self.add_class(self._default_classes)
        self.show_root = False
        self.guide_depth = 3

    def clear_nodes(self) -> None:
        """Remove every node below the (hidden) root."""
        self.root.remove_children()


__all__ = [
    "CustomTree",
]
