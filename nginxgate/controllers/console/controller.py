"""Console controller - orchestrates the per-selection controllers.

This module is the single owner of the selection context. It delegates to
specialized controllers:
- TreeController: configuration tree fetch and change tree build
- DiffWorkflowController: selected file and its triple diff
- ConfigCheckController: ``nginx -t`` style checks in the displayed mode
- DeploymentGate: prepare/apply rollout on production
- StatusPoller: auto-refresh and drift-status timers

A context change (group, host or mode) clears every piece of state keyed by
the old context before any request for the new one is issued.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from nginxgate.constants.enums import DeployMode
from nginxgate.controllers.api.client import ApiError, ConsoleApiClient
from nginxgate.controllers.base import PolicyViolationError, WorkerResult
from nginxgate.controllers.deploy import ConfigCheckController, DeploymentGate
from nginxgate.controllers.diff import DiffWorkflowController
from nginxgate.controllers.status import StatusPoller
from nginxgate.controllers.tree import ChangeTreeBuilder, TreeController
from nginxgate.models.api.payloads import GroupSummary, HostSummary
from nginxgate.models.state.selection import SelectionContext
from nginxgate.models.tree.tree_node import TreeNode

logger = logging.getLogger(__name__)

RefreshListener = Callable[[WorkerResult, "WorkerResult | None"], None]


class ConsoleController:
    """Selection state plus the controllers that hang off it.

    Args:
        api: Backend client shared by all controllers.
        mode: Initial comparison mode.
        show_all: Initial tree filter.
        refresh_interval: Auto-refresh interval in seconds.
        builder: Change tree builder (collation is injectable for tests).
        poller: Optional pre-built poller; one is created otherwise.
    """

    def __init__(
        self,
        api: ConsoleApiClient,
        *,
        mode: DeployMode = DeployMode.PREVIEW,
        show_all: bool = True,
        refresh_interval: float = 5,
        builder: ChangeTreeBuilder | None = None,
        poller: StatusPoller | None = None,
    ) -> None:
        self._api = api
        self._mode = mode
        self._show_all = show_all
        self._groups: list[GroupSummary] = []
        self._context: SelectionContext | None = None
        self._host_summary: HostSummary | None = None
        self._refresh_listener: RefreshListener | None = None

        self.tree = TreeController(api, builder)
        self.diff = DiffWorkflowController(api)
        self.check = ConfigCheckController(api)
        self.gate = DeploymentGate(api)
        self.poller = poller or StatusPoller(
            api, self.refresh, refresh_interval=refresh_interval
        )

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def api(self) -> ConsoleApiClient:
        return self._api

    @property
    def groups(self) -> list[GroupSummary]:
        return self._groups

    @property
    def context(self) -> SelectionContext | None:
        return self._context

    @property
    def mode(self) -> DeployMode:
        return self._mode

    @property
    def show_all(self) -> bool:
        return self._show_all

    @property
    def config_dir_suffix(self) -> str | None:
        return self._host_summary.config_dir_suffix if self._host_summary else None

    @property
    def forest(self) -> tuple[TreeNode, ...]:
        return self.tree.forest

    def set_refresh_listener(self, listener: RefreshListener | None) -> None:
        """Register a callback receiving (tree, diff) outcomes of each refresh."""
        self._refresh_listener = listener

    # =========================================================================
    # Groups and context
    # =========================================================================

    async def load_groups(self) -> WorkerResult:
        """Fetch groups; select the first group's first host if none is selected."""
        try:
            response = await self._api.fetch_groups()
        except ApiError as exc:
            return WorkerResult(success=False, error=f"Failed to load groups: {exc}")
        self._groups = response.groups
        if self._context is None:
            first = next((g for g in self._groups if g.hosts), None)
            if first is not None:
                self.select_host(first.name, first.hosts[0].host)
        return WorkerResult(success=True, data=self._groups)

    def select_host(self, group: str, host: str) -> bool:
        """Switch to ``group``/``host`` in the current mode.

        Returns:
            True if the context changed (caller should reload the tree).
        """
        target = next((g for g in self._groups if g.name == group), None)
        self._host_summary = target.find_host(host) if target else None
        return self._change_context(SelectionContext(group, host, self._mode))

    def set_mode(self, mode: DeployMode) -> bool:
        """Switch comparison mode; returns True if the context changed."""
        self._mode = mode
        if self._context is None:
            return False
        return self._change_context(self._context.with_mode(mode))

    def _change_context(self, context: SelectionContext) -> bool:
        if context == self._context:
            return False
        logger.info(
            "Context -> group=%s host=%s mode=%s", context.group, context.host, context.mode.value
        )
        self.diff.reset()
        self.check.reset()
        self.gate.reset()
        self.tree.reset()
        self._context = context
        return True

    # =========================================================================
    # Tree and file
    # =========================================================================

    async def load_tree(self) -> WorkerResult:
        if self._context is None:
            return WorkerResult(success=False, error="Select a host first")
        return await self.tree.load(self._context, self._show_all)

    def set_show_all(self, show_all: bool) -> tuple[TreeNode, ...]:
        self._show_all = show_all
        return self.tree.rebuild(show_all)

    async def select_file(self, path: str) -> WorkerResult:
        if self._context is None:
            raise PolicyViolationError("Select a host first")
        context = self._context
        return await self.diff.select_file(context.group, context.host, path, context.mode)

    async def refresh(self) -> tuple[WorkerResult, WorkerResult | None] | None:
        """Refresh the tree and, if a file is selected, its diff.

        A no-op returning None until a host is selected.
        """
        if self._context is None:
            logger.debug("Refresh skipped, no host selected")
            return None
        tree_result, diff_result = await asyncio.gather(self.load_tree(), self.diff.refresh())
        if self._refresh_listener is not None:
            self._refresh_listener(tree_result, diff_result)
        return tree_result, diff_result

    # =========================================================================
    # Check and update
    # =========================================================================

    async def run_check(self) -> WorkerResult:
        return await self.check.run(self._context)

    async def prepare_update(self) -> WorkerResult:
        context = self._require_context()
        return await self.gate.prepare(context.group, context.host, display_mode=context.mode)

    async def apply_update(self) -> WorkerResult:
        context = self._require_context()
        return await self.gate.apply(context.group, context.host)

    def _require_context(self) -> SelectionContext:
        if self._context is None:
            raise PolicyViolationError("Select a host first")
        return self._context

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def aclose(self) -> None:
        self.poller.stop_all()
        await self._api.aclose()


__all__ = [
    "ConsoleController",
]
