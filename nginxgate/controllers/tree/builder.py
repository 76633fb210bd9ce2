"""Change tree builder - flat path listing to a filtered, sorted hierarchy.

The builder is pure: no I/O and no state survives between calls. Paths are
split on ``/`` (empty segments dropped) and inserted into a nested map keyed
by segment; the map is then folded bottom-up into ``LeafNode`` and
``DirectoryNode`` values with aggregated change flags, filtered and sorted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from nginxgate.constants.values import PATH_SEPARATOR, STATUS_MARKERS
from nginxgate.models.tree.tree_node import (
    DirectoryNode,
    LeafNode,
    StatusMarker,
    TreeNode,
)

logger = logging.getLogger(__name__)

_MARKERS: dict[str, StatusMarker] = {
    status: StatusMarker(icon=icon, color=color, label=label)
    for status, (icon, color, label) in STATUS_MARKERS.items()
}


def collation_key(name: str) -> tuple[str, str]:
    """Case-insensitive order, with the raw name breaking ties."""
    return (name.casefold(), name)


def marker_for(status: str | None) -> StatusMarker | None:
    """Return the display marker for a status tag, or None if it has none."""
    if not status:
        return None
    return _MARKERS.get(status)


@dataclass
class _PendingNode:
    """Mutable insertion-phase node. Never escapes this module."""

    name: str
    rel_path: str
    is_leaf: bool
    status: str | None
    children: dict[str, _PendingNode] = field(default_factory=dict)


class ChangeTreeBuilder:
    """Builds the display forest for one tree response.

    Args:
        collate: Sort key for segment names. Defaults to
            ``collation_key`` (case-insensitive, independent of the process
            locale).
    """

    def __init__(self, collate: Callable[[str], Any] | None = None) -> None:
        self._collate = collate or collation_key

    def build(
        self,
        prefix: str,
        paths: Iterable[str],
        statuses: Mapping[str, str] | None,
        show_all: bool,
    ) -> tuple[TreeNode, ...]:
        """Build the ordered forest.

        Args:
            prefix: Key prefix joined to each relative path with ``/``.
            paths: Repository-relative file paths.
            statuses: Status tag per relative path (any depth).
            show_all: When False, subtrees without any status are dropped.

        Returns:
            Tuple of root nodes in display order. Empty for empty input.
        """
        root = self._insert_all(paths or (), statuses or {})
        nodes, _ = self._fold(root, prefix or "", show_all)
        return nodes

    # =========================================================================
    # Phase 1: nested insertion
    # =========================================================================

    @staticmethod
    def _insert_all(
        paths: Iterable[str], statuses: Mapping[str, str]
    ) -> dict[str, _PendingNode]:
        root: dict[str, _PendingNode] = {}
        for path in paths:
            segments = [seg for seg in str(path).split(PATH_SEPARATOR) if seg]
            current: dict[str, _PendingNode] | None = root
            for depth, segment in enumerate(segments):
                if current is None:
                    # An earlier path already registered an ancestor as a file.
                    logger.debug("Dropping path %s nested under a file entry", path)
                    break
                rel_path = PATH_SEPARATOR.join(segments[: depth + 1])
                node = current.get(segment)
                if node is None:
                    node = _PendingNode(
                        name=segment,
                        rel_path=rel_path,
                        is_leaf=depth == len(segments) - 1,
                        status=statuses.get(rel_path) or None,
                    )
                    current[segment] = node
                current = None if node.is_leaf else node.children
        return root

    # =========================================================================
    # Phase 2: bottom-up fold, filter and sort
    # =========================================================================

    def _fold(
        self,
        pending: dict[str, _PendingNode],
        prefix: str,
        show_all: bool,
    ) -> tuple[tuple[TreeNode, ...], bool]:
        built: list[TreeNode] = []
        group_has_change = False

        for node in pending.values():
            key = f"{prefix}{PATH_SEPARATOR}{node.rel_path}" if prefix else node.rel_path
            if node.is_leaf:
                result: TreeNode = LeafNode(
                    key=key,
                    name=node.name,
                    status=node.status,
                    marker=marker_for(node.status),
                )
            else:
                children, child_has_change = self._fold(node.children, prefix, show_all)
                result = DirectoryNode(
                    key=key,
                    name=node.name,
                    children=children,
                    status=node.status,
                    has_change=bool(node.status) or child_has_change,
                )

            group_has_change = group_has_change or result.has_change
            if not show_all and not result.has_change:
                continue
            built.append(result)

        built.sort(key=lambda n: (not n.has_change, self._collate(n.name)))
        return tuple(built), group_has_change


_default_builder = ChangeTreeBuilder()


def build_change_tree(
    prefix: str,
    paths: Iterable[str],
    statuses: Mapping[str, str] | None,
    show_all: bool,
) -> tuple[TreeNode, ...]:
    """Build the change tree with the default case-insensitive collation."""
    return _default_builder.build(prefix, paths, statuses, show_all)


__all__ = [
    "ChangeTreeBuilder",
    "build_change_tree",
    "collation_key",
    "marker_for",
]
