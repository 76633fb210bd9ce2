"""Tree controller - fetches the configuration tree and keeps the last good one."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from nginxgate.controllers.api.client import ApiError
from nginxgate.controllers.base import BaseController, WorkerResult
from nginxgate.controllers.tree.builder import ChangeTreeBuilder
from nginxgate.models.api.payloads import TreeResponse
from nginxgate.models.state.selection import SelectionContext
from nginxgate.models.tree.tree_node import TreeNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TreeSnapshot:
    """A fetched tree response together with the forest built from it."""

    context: SelectionContext
    response: TreeResponse
    forest: tuple[TreeNode, ...]
    show_all: bool


class TreeController(BaseController):
    """Holds the change tree for the current selection context."""

    def __init__(self, api, builder: ChangeTreeBuilder | None = None) -> None:
        super().__init__(api)
        self._builder = builder or ChangeTreeBuilder()
        self._snapshot: TreeSnapshot | None = None

    @property
    def snapshot(self) -> TreeSnapshot | None:
        return self._snapshot

    @property
    def forest(self) -> tuple[TreeNode, ...]:
        return self._snapshot.forest if self._snapshot else ()

    def reset(self) -> None:
        self._requests.invalidate()
        self._snapshot = None

    async def load(self, context: SelectionContext, show_all: bool) -> WorkerResult:
        """Fetch and rebuild the tree for ``context``.

        On failure the previous snapshot stays in place.
        """
        ticket = self._requests.begin(context)
        try:
            response = await self._api.fetch_tree(context.group, context.host, context.mode)
        except ApiError as exc:
            if not self._requests.is_current(ticket):
                return self._discard(ticket, "tree")
            return WorkerResult(
                success=False,
                error=f"Failed to load file tree: {exc}",
                duration_ms=ticket.elapsed_ms(),
            )

        if not self._requests.is_current(ticket):
            return self._discard(ticket, "tree")

        self._snapshot = self._build_snapshot(context, response, show_all)
        logger.debug(
            "Tree for %s/%s (%s): %d paths, %d statuses",
            context.group,
            context.host,
            context.mode.value,
            len(response.paths),
            len(response.file_statuses),
        )
        return WorkerResult(success=True, data=self._snapshot, duration_ms=ticket.elapsed_ms())

    def rebuild(self, show_all: bool) -> tuple[TreeNode, ...]:
        """Rebuild the forest from the held response with a new filter."""
        if self._snapshot is None:
            return ()
        self._snapshot = self._build_snapshot(
            self._snapshot.context, self._snapshot.response, show_all
        )
        return self._snapshot.forest

    def _build_snapshot(
        self, context: SelectionContext, response: TreeResponse, show_all: bool
    ) -> TreeSnapshot:
        forest = self._builder.build(
            response.prefix, response.paths, response.file_statuses, show_all
        )
        return TreeSnapshot(context=context, response=response, forest=forest, show_all=show_all)


__all__ = [
    "TreeController",
    "TreeSnapshot",
]
