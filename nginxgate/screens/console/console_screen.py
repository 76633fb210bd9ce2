"""Console screen - groups, change tree, file diff and rollout actions."""

from __future__ import annotations

import logging
from contextlib import suppress
from typing import TYPE_CHECKING, Any

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import Footer, Header, Tree
from textual.widgets.tree import TreeNode as WidgetTreeNode

from nginxgate.constants.enums import DeployMode
from nginxgate.constants.limits import REFRESH_INTERVAL_MIN
from nginxgate.controllers import ConsoleController, PolicyViolationError, WorkerResult
from nginxgate.keyboard import CONSOLE_SCREEN_BINDINGS
from nginxgate.models.tree.tree_node import DirectoryNode, LeafNode, TreeNode
from nginxgate.screens.console.components import (
    CheckResultModal,
    DiffView,
    DriftStatusPanel,
    UpdateResultModal,
)
from nginxgate.screens.console.config import (
    DRIFT_INDICATOR_ID,
    FILES_TREE_ID,
    FILES_TREE_LABEL,
    GROUPS_TREE_ID,
    GROUPS_TREE_LABEL,
    LEGEND_ID,
    LOADING_TEXT_ID,
    STATUS_LINE_ID,
)
from nginxgate.screens.console.presenter import (
    ConsolePresenter,
    drift_indicator,
    legend_text,
    tree_label,
)
from nginxgate.screens.mixins import WorkerMixin
from nginxgate.widgets import CustomButton, CustomStatic, CustomTree

if TYPE_CHECKING:
    from nginxgate.models.api.payloads import DriftStatusReport

logger = logging.getLogger(__name__)


class ConsoleScreen(WorkerMixin, Screen):
    """Operator console for one backend."""

    BINDINGS = CONSOLE_SCREEN_BINDINGS

    DEFAULT_CSS = """
    ConsoleScreen #console-body {
        height: 1fr;
    }

    ConsoleScreen #console-sidebar {
        width: 32;
        border-right: solid $primary;
    }

    ConsoleScreen #console-groups-tree {
        height: 1fr;
    }

    ConsoleScreen #console-files {
        width: 48;
        border-right: solid $primary;
    }

    ConsoleScreen #console-files-tree {
        height: 1fr;
    }

    ConsoleScreen #console-legend {
        height: auto;
        padding: 0 1;
    }

    ConsoleScreen #console-statusbar {
        height: 1;
        background: $boost;
    }

    ConsoleScreen #console-status-line {
        width: 1fr;
        padding: 0 1;
    }

    ConsoleScreen #console-drift-indicator {
        width: auto;
        padding: 0 1;
    }

    ConsoleScreen #console-drift-indicator.-warning {
        color: $warning;
    }

    ConsoleScreen #console-drift-indicator.-error {
        color: $error;
    }

    ConsoleScreen #loading-text {
        width: auto;
        padding: 0 1;
    }

    ConsoleScreen #loading-text.error-text {
        color: $error;
    }
    """

    def __init__(
        self,
        controller: ConsoleController,
        *,
        auto_refresh: bool = False,
    ) -> None:
        super().__init__()
        self.controller = controller
        self.presenter = ConsolePresenter(self)
        self._auto_refresh_on_mount = auto_refresh

    # =========================================================================
    # Composition and lifecycle
    # =========================================================================

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="console-body"):
            with Vertical(id="console-sidebar"):
                yield CustomTree(GROUPS_TREE_LABEL, id=GROUPS_TREE_ID)
                yield CustomStatic(legend_text(), id=LEGEND_ID)
            with Vertical(id="console-files"):
                yield CustomTree(FILES_TREE_LABEL, id=FILES_TREE_ID)
            yield DiffView(id="console-diff")
        yield DriftStatusPanel(id="console-drift-panel")
        with Horizontal(id="console-statusbar"):
            yield CustomStatic("", id=STATUS_LINE_ID, markup=False)
            yield CustomStatic("", id=DRIFT_INDICATOR_ID, markup=False)
            yield CustomStatic("", id=LOADING_TEXT_ID, markup=False)
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#console-drift-panel", DriftStatusPanel).display = False
        self.controller.set_refresh_listener(self._on_refreshed)
        self.controller.poller.set_drift_listener(self._on_drift)
        if self._auto_refresh_on_mount:
            self.controller.poller.enable_auto_refresh()
        self._update_status_line()
        self.is_loading = True
        self.start_worker(self._load_groups_worker, name="load-groups")

    def on_unmount(self) -> None:
        self.controller.poller.stop_all()
        self.controller.set_refresh_listener(None)
        self.controller.poller.set_drift_listener(None)
        self.cancel_workers()

    # =========================================================================
    # Workers
    # =========================================================================

    async def _load_groups_worker(self) -> None:
        outcome = await self.controller.load_groups()
        self.is_loading = False
        if not outcome.success:
            self._report(outcome)
            return
        self._render_groups()
        if self.controller.context is not None:
            self._on_context_changed()

    async def _load_tree_worker(self) -> None:
        outcome = await self.controller.load_tree()
        self.is_loading = False
        if outcome.stale:
            return
        if not outcome.success:
            self._report(outcome)
            return
        self._render_files()

    async def _select_file_worker(self, path: str) -> None:
        outcome = await self.controller.select_file(path)
        if outcome.stale:
            return
        if not outcome.success:
            self._report(outcome)
        self._render_diff()

    async def _refresh_worker(self) -> None:
        await self.controller.refresh()

    async def _check_worker(self) -> None:
        try:
            outcome = await self.controller.run_check()
        except PolicyViolationError as exc:
            self.notify(str(exc), severity="warning")
            return
        if outcome.stale:
            return
        if not outcome.success:
            self._report(outcome)
        if outcome.data is not None:
            self.app.push_screen(
                CheckResultModal(outcome.data, target=self._target_label())
            )

    async def _prepare_worker(self) -> None:
        try:
            outcome = await self.controller.prepare_update()
        except PolicyViolationError as exc:
            self.notify(str(exc), severity="warning")
            return
        if outcome.stale:
            return
        if not outcome.success:
            self._report(outcome)
        if outcome.data is not None:
            self.app.push_screen(
                UpdateResultModal(
                    outcome.data,
                    can_apply=self.controller.gate.can_apply,
                    target=self._target_label(),
                ),
                self._on_update_modal_closed,
            )

    async def _apply_worker(self) -> None:
        try:
            outcome = await self.controller.apply_update()
        except PolicyViolationError as exc:
            self.notify(str(exc), severity="warning")
            return
        if outcome.stale:
            return
        if not outcome.success:
            self._report(outcome)
        elif outcome.data.success:
            self.notify("Configuration applied", severity="information")
        if outcome.data is not None:
            self.app.push_screen(UpdateResultModal(outcome.data, target=self._target_label()))
        self._refresh_now()

    def _on_update_modal_closed(self, confirmed: bool | None) -> None:
        if confirmed:
            self.start_worker(self._apply_worker, name="update-apply", group="update")

    # =========================================================================
    # Controller callbacks
    # =========================================================================

    def _on_refreshed(self, tree: WorkerResult, diff: WorkerResult | None) -> None:
        if not self.is_mounted:
            return
        if tree.success:
            self._render_files()
        elif not tree.stale:
            self._report(tree)
        if diff is not None and not diff.stale:
            if not diff.success:
                self._report(diff)
            self._render_diff()

    def _on_drift(self, outcome: WorkerResult) -> None:
        if not self.is_mounted:
            return
        panel = self.query_one("#console-drift-panel", DriftStatusPanel)
        if outcome.success:
            panel.show_report(outcome.data)
            self._update_drift_indicator(outcome.data)
            return
        panel.show_error(outcome.error or "Failed to fetch git status")
        self._report(outcome)

    # =========================================================================
    # Tree events
    # =========================================================================

    def on_tree_node_selected(self, event: Tree.NodeSelected) -> None:
        tree_id = event.control.id
        data = event.node.data
        if tree_id == GROUPS_TREE_ID and isinstance(data, tuple):
            group, host = data
            if self.controller.select_host(group, host):
                self._on_context_changed()
        elif tree_id == FILES_TREE_ID and isinstance(data, LeafNode):
            self.start_worker(
                self._select_file_worker(data.key),
                name="select-file",
                group="diff",
            )

    def _on_context_changed(self) -> None:
        """Clear everything keyed by the old context and fetch the new tree."""
        self._render_files()
        self._render_diff()
        self._update_status_line()
        self.is_loading = True
        self.start_worker(self._load_tree_worker, name="load-tree", group="tree")

    # =========================================================================
    # Actions
    # =========================================================================

    def action_refresh(self) -> None:
        self._refresh_now()
        if self.controller.poller.drift_panel_open:
            self.controller.poller.refresh_drift_now()

    def action_toggle_mode(self) -> None:
        mode = (
            DeployMode.PROD
            if self.controller.mode is DeployMode.PREVIEW
            else DeployMode.PREVIEW
        )
        changed = self.controller.set_mode(mode)
        self.notify(f"Mode: {mode.label}", severity="information")
        if changed:
            self._on_context_changed()
        else:
            self._update_status_line()

    def action_toggle_show_all(self) -> None:
        show_all = not self.controller.show_all
        self.controller.set_show_all(show_all)
        self._persist_setting("show_all_files", show_all)
        self._render_files()
        self._update_status_line()

    def action_toggle_auto_refresh(self) -> None:
        poller = self.controller.poller
        if poller.auto_refresh.running:
            poller.disable_auto_refresh()
        else:
            poller.enable_auto_refresh()
        self._persist_setting("auto_refresh", poller.auto_refresh.running)
        self._update_status_line()

    def action_refresh_interval_up(self) -> None:
        self._change_interval(1)

    def action_refresh_interval_down(self) -> None:
        self._change_interval(-1)

    def action_run_check(self) -> None:
        self.start_worker(self._check_worker, name="run-check", group="check", exclusive=True)

    def action_prepare_update(self) -> None:
        if self.controller.gate.in_flight:
            self.notify("An update request is already running", severity="warning")
            return
        self.start_worker(self._prepare_worker, name="update-prepare", group="update")

    def action_toggle_drift_panel(self) -> None:
        panel = self.query_one("#console-drift-panel", DriftStatusPanel)
        if self.controller.poller.drift_panel_open:
            self.controller.poller.close_drift_panel()
            panel.display = False
            return
        panel.display = True
        self.controller.poller.open_drift_panel()

    def on_button_pressed(self, event: CustomButton.Pressed) -> None:
        if event.button.id == "drift-panel-refresh":
            self.controller.poller.refresh_drift_now()
        elif event.button.id == "drift-panel-close" and self.controller.poller.drift_panel_open:
            self.action_toggle_drift_panel()

    # =========================================================================
    # Rendering
    # =========================================================================

    def _render_groups(self) -> None:
        tree = self.query_one(f"#{GROUPS_TREE_ID}", CustomTree)
        tree.clear_nodes()
        context = self.controller.context
        for group in self.controller.groups:
            group_node = tree.root.add(group.name, expand=True)
            for host in group.hosts:
                leaf = group_node.add_leaf(host.name or host.host, data=(group.name, host.host))
                if context is not None and (group.name, host.host) == (context.group, context.host):
                    tree.move_cursor(leaf)

    def _render_files(self) -> None:
        tree = self.query_one(f"#{FILES_TREE_ID}", CustomTree)
        tree.clear_nodes()
        selected = self.controller.diff.selected_path
        cursor: WidgetTreeNode[Any] | None = None
        stack: list[tuple[WidgetTreeNode[Any], tuple[TreeNode, ...]]] = [
            (tree.root, self.controller.forest)
        ]
        while stack:
            parent, nodes = stack.pop()
            for node in nodes:
                if isinstance(node, DirectoryNode):
                    branch = parent.add(tree_label(node), data=node, expand=True)
                    stack.append((branch, node.children))
                else:
                    leaf = parent.add_leaf(tree_label(node), data=node)
                    if node.key == selected:
                        cursor = leaf
        if cursor is not None:
            tree.move_cursor(cursor)

    def _render_diff(self) -> None:
        view = self.query_one("#console-diff", DiffView)
        view.set_title(self.presenter.file_title())
        view.show_record(self.controller.diff.record)

    def _update_status_line(self) -> None:
        with suppress(NoMatches):
            self.query_one(f"#{STATUS_LINE_ID}", CustomStatic).update(
                self.presenter.status_line()
            )

    def _update_drift_indicator(self, report: DriftStatusReport) -> None:
        indicator = self.query_one(f"#{DRIFT_INDICATOR_ID}", CustomStatic)
        state = drift_indicator(report)
        indicator.set_class(False, "-warning", "-error")
        if state is None:
            indicator.update("")
            return
        text, severity = state
        indicator.update(text)
        indicator.add_class(f"-{severity}")

    # =========================================================================
    # Helpers
    # =========================================================================

    def _refresh_now(self) -> None:
        self.start_worker(self._refresh_worker, name="refresh", group="refresh")

    def _change_interval(self, delta: int) -> None:
        poller = self.controller.poller
        current = int(poller.auto_refresh.interval)
        interval = poller.set_refresh_interval(max(REFRESH_INTERVAL_MIN, current + delta))
        self._persist_setting("refresh_interval", int(interval))
        self._update_status_line()

    def _persist_setting(self, name: str, value: Any) -> None:
        settings = getattr(self.app, "settings", None)
        if settings is not None:
            setattr(settings, name, value)

    def _target_label(self) -> str:
        context = self.controller.context
        return f"{context.group}/{context.host}" if context else ""

    def _report(self, outcome: WorkerResult) -> None:
        if outcome.error:
            logger.warning(outcome.error)
            self.notify(outcome.error, severity="error")


__all__ = [
    "ConsoleScreen",
]
