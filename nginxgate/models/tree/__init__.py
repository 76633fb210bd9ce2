"""Change tree models."""

from nginxgate.models.tree.tree_node import (
    DirectoryNode,
    LeafNode,
    StatusMarker,
    TreeNode,
    find_node,
    iter_leaves,
    iter_nodes,
)

__all__ = [
    "DirectoryNode",
    "LeafNode",
    "StatusMarker",
    "TreeNode",
    "find_node",
    "iter_leaves",
    "iter_nodes",
]
