"""Tree node models for the change tree.

Nodes are immutable and rebuilt from scratch on every tree fetch. A node is
either a ``LeafNode`` (one listed path) or a ``DirectoryNode`` (an
intermediate segment with ordered children).
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class StatusMarker:
    """Display decoration for a leaf that carries a status tag."""

    icon: str
    color: str
    label: str


@dataclass(frozen=True)
class LeafNode:
    """A file entry in the tree."""

    key: str
    name: str
    status: str | None = None
    marker: StatusMarker | None = None

    @property
    def is_leaf(self) -> bool:
        return True

    @property
    def has_change(self) -> bool:
        """Aggregated-change flag; for a leaf this is its own status."""
        return bool(self.status)

    @property
    def title(self) -> str:
        """Display title with the marker icon prepended when present."""
        if self.marker is None:
            return self.name
        return f"{self.marker.icon} {self.name}"


@dataclass(frozen=True)
class DirectoryNode:
    """A directory entry; ``has_change`` is computed once at build time."""

    key: str
    name: str
    children: tuple[TreeNode, ...] = field(default_factory=tuple)
    status: str | None = None
    has_change: bool = False

    @property
    def is_leaf(self) -> bool:
        return False

    @property
    def marker(self) -> StatusMarker | None:
        return None

    @property
    def title(self) -> str:
        return self.name


TreeNode = Union[LeafNode, DirectoryNode]


def iter_nodes(forest: tuple[TreeNode, ...] | list[TreeNode]) -> Iterator[TreeNode]:
    """Yield every node of ``forest`` depth-first, parents before children."""
    for node in forest:
        yield node
        if isinstance(node, DirectoryNode):
            yield from iter_nodes(node.children)


def iter_leaves(forest: tuple[TreeNode, ...] | list[TreeNode]) -> Iterator[LeafNode]:
    """Yield every leaf of ``forest`` in display order."""
    for node in iter_nodes(forest):
        if isinstance(node, LeafNode):
            yield node


def find_node(forest: tuple[TreeNode, ...] | list[TreeNode], key: str) -> TreeNode | None:
    """Return the node whose key is ``key`` or None."""
    return next((node for node in iter_nodes(forest) if node.key == key), None)


__all__ = [
    "DirectoryNode",
    "LeafNode",
    "StatusMarker",
    "TreeNode",
    "find_node",
    "iter_leaves",
    "iter_nodes",
]
