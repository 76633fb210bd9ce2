"""Console screen presenter - text formatting for trees, results and status."""

from __future__ import annotations

import logging
from typing import Any

from rich.text import Text

from nginxgate.constants.enums import DeployMode, DriftState
from nginxgate.constants.limits import MAX_FILE_LIST_DISPLAY, SHORT_HASH_LENGTH
from nginxgate.constants.values import STATUS_MARKERS
from nginxgate.models.api.payloads import (
    ApplyResult,
    CheckResult,
    CommitInfo,
    DriftStatusReport,
    NginxExecRecord,
    PrepareResult,
    SyncStats,
    UpdateResult,
)
from nginxgate.models.tree.tree_node import TreeNode
from nginxgate.screens.console.config import (
    DIFF_LINE_ADDED,
    DIFF_LINE_CONTEXT,
    DIFF_LINE_HEADER,
    DIFF_LINE_HUNK,
    DIFF_LINE_REMOVED,
    DIFF_LINE_STYLES,
    DRIFT_STATUS_TAGS,
    NO_DIFFERENCES,
    NO_HOST_SELECTED,
    NO_RESULT,
    NO_SYNC_IN_PRODUCTION,
    RELOAD_UNAVAILABLE,
    STAGE_LABELS,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Diff rendering
# =============================================================================


def normalize_newlines(content: str | None) -> str:
    return str(content or "").replace("\r\n", "\n")


def classify_diff_line(line: str) -> str:
    """Classify a unified diff line by its prefix."""
    if line.startswith(("+++ ", "--- ")):
        return DIFF_LINE_HEADER
    if line.startswith("@@"):
        return DIFF_LINE_HUNK
    if line.startswith("+"):
        return DIFF_LINE_ADDED
    if line.startswith("-"):
        return DIFF_LINE_REMOVED
    return DIFF_LINE_CONTEXT


def render_diff_lines(diff: str | None) -> list[Text]:
    """Render unified diff text as styled lines; empty diff yields a notice."""
    normalized = normalize_newlines(diff).rstrip("\n")
    if not normalized.strip():
        return [Text(NO_DIFFERENCES, style="dim")]
    return [
        Text(line, style=DIFF_LINE_STYLES[classify_diff_line(line)])
        for line in normalized.split("\n")
    ]


# =============================================================================
# Tree labels and legend
# =============================================================================


def tree_label(node: TreeNode) -> Text:
    """Tree label: leaf marker icon in its colour, then the segment name."""
    marker = node.marker
    if marker is None:
        style = "bold" if not node.is_leaf and node.has_change else ""
        return Text(node.name, style=style)
    label = Text(f"{marker.icon} ", style=f"bold {marker.color}")
    label.append(node.name, style=marker.color)
    return label


def legend_text() -> Text:
    legend = Text()
    for index, (icon, color, label) in enumerate(STATUS_MARKERS.values()):
        if index:
            legend.append("  ")
        legend.append(icon, style=f"bold {color}")
        legend.append(f" {label}")
    return legend


# =============================================================================
# Check and update results
# =============================================================================


def pass_fail(ok: bool | None) -> str:
    return "PASSED" if ok else "FAILED"


def mode_label(mode: str | None) -> str:
    if not mode:
        return "-"
    try:
        return DeployMode(mode).label
    except ValueError:
        return mode


def _file_list(title: str, files: list[str] | None, count: int) -> list[str]:
    if count <= 0 or not files:
        return []
    lines = [f"{title}:"]
    lines.extend(f"  {name}" for name in files[:MAX_FILE_LIST_DISPLAY])
    hidden = len(files) - MAX_FILE_LIST_DISPLAY
    if hidden > 0:
        lines.append(f"  ... and {hidden} more")
    return lines


def format_sync_stats(sync: SyncStats | None, *, include_added: bool = False) -> list[str]:
    """Counts line plus the per-category file lists whose count is non-zero."""
    if sync is None:
        return [f"Sync: {NO_SYNC_IN_PRODUCTION}"]
    counts = [f"total={sync.total}", f"skipped={sync.skipped}"]
    if include_added:
        counts.append(f"added={sync.added}")
    counts.extend([f"updated={sync.updated}", f"deleted={sync.deleted}"])
    lines = ["Sync: " + " ".join(counts)]
    if include_added:
        lines.extend(_file_list("Added", sync.added_files, sync.added))
    lines.extend(_file_list("Updated", sync.updated_files, sync.updated))
    lines.extend(_file_list("Deleted", sync.deleted_files, sync.deleted))
    return lines


def format_nginx_record(record: NginxExecRecord | None, *, title: str = "nginx") -> list[str]:
    if record is None:
        return [f"{title}: -"]
    lines = [
        f"{title}: {'OK' if record.ok else 'ERROR'}",
        f"Command: {record.command or '-'}",
        "Output:",
    ]
    output = normalize_newlines(record.output).rstrip("\n")
    if not output:
        lines.append("  -")
        return lines
    lines.extend(f"  {line}" for line in output.split("\n"))
    return lines


def format_check_result(result: CheckResult | None) -> list[str]:
    if result is None:
        return [NO_RESULT]
    lines = [
        f"Status: {pass_fail(result.ok)}",
        f"Mode: {mode_label(result.mode)}",
    ]
    lines.extend(format_sync_stats(result.sync))
    lines.extend(format_nginx_record(result.nginx, title="nginx -t"))
    return lines


def format_update_result(result: UpdateResult | None) -> list[str]:
    """Lines for either stage of the update workflow."""
    if result is None:
        return [NO_RESULT]
    lines = [
        f"Stage: {STAGE_LABELS[result.stage.value]}",
        f"Status: {pass_fail(result.ok)}",
    ]
    if isinstance(result, PrepareResult):
        if result.sync is not None:
            lines.extend(format_sync_stats(result.sync, include_added=True))
        lines.extend(format_nginx_record(result.nginx, title="nginx -t"))
        if not result.ok:
            lines.append(RELOAD_UNAVAILABLE)
    elif isinstance(result, ApplyResult):
        lines.append(f"Message: {result.message or '-'}")
        lines.extend(format_nginx_record(result.nginx, title="nginx reload"))
    return lines


# =============================================================================
# Drift status
# =============================================================================


def short_hash(value: str | None) -> str:
    return (value or "")[:SHORT_HASH_LENGTH] or "-"


def format_commit(commit: CommitInfo | None) -> str:
    if commit is None:
        return "-"
    when = commit.timestamp.strftime("%Y-%m-%d %H:%M:%S") if commit.timestamp else "-"
    parts = [short_hash(commit.hash), commit.author or "-", when]
    if commit.message:
        parts.append(commit.message.splitlines()[0])
    return "  ".join(parts)


def drift_tag(report: DriftStatusReport) -> tuple[str, str]:
    """(label, severity) of the report's status."""
    return DRIFT_STATUS_TAGS[report.state.value]


def format_drift_report(report: DriftStatusReport | None) -> list[str]:
    if report is None:
        return ["Git status not loaded yet"]
    label, _ = drift_tag(report)
    lines = []
    if report.error:
        lines.append(f"Error: {report.error}")
    lines.extend([
        f"Branch: {report.branch or '-'}",
        f"Sync mode: {report.sync_mode or '-'}",
        f"Status: {label}",
        f"Local:  {format_commit(report.local_commit)}",
        f"Remote: {format_commit(report.remote_commit)}",
    ])
    return lines


def drift_indicator(report: DriftStatusReport | None) -> tuple[str, str] | None:
    """Indicator text and severity, or None when in sync or unknown yet."""
    if report is None or report.state is DriftState.SYNCED:
        return None
    label, severity = drift_tag(report)
    return f"Git: {label}", severity


# =============================================================================
# Presenter
# =============================================================================


class ConsolePresenter:
    """Presenter for ConsoleScreen - derives display text from controller state."""

    def __init__(self, screen: Any) -> None:
        """Initialize the presenter.

        Args:
            screen: The parent ConsoleScreen instance.
        """
        self._screen = screen

    @property
    def controller(self) -> Any:
        return self._screen.controller

    def status_line(self) -> str:
        """Group, host, config suffix, mode and refresh state in one line."""
        controller = self.controller
        context = controller.context
        if context is None:
            return NO_HOST_SELECTED
        target = f"{context.group} / {context.host}"
        suffix = controller.config_dir_suffix
        if suffix:
            target += f" [{suffix}]"
        poller = controller.poller
        refresh = (
            f"auto {int(poller.auto_refresh.interval)}s"
            if poller.auto_refresh.running
            else "auto off"
        )
        filter_label = "all files" if controller.show_all else "changed only"
        return f"{target} | {context.mode.label} | {filter_label} | {refresh}"

    def file_title(self) -> str:
        diff = self.controller.diff
        record = diff.record
        if diff.selected_path is None:
            return ""
        if record is None:
            return diff.selected_path
        label = record.compare_label or mode_label(record.mode)
        return f"{record.path}  (remote vs {label})"


__all__ = [
    "ConsolePresenter",
    "classify_diff_line",
    "drift_indicator",
    "drift_tag",
    "format_check_result",
    "format_commit",
    "format_drift_report",
    "format_nginx_record",
    "format_sync_stats",
    "format_update_result",
    "legend_text",
    "mode_label",
    "normalize_newlines",
    "pass_fail",
    "render_diff_lines",
    "short_hash",
    "tree_label",
]
