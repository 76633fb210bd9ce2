"""Console screen configuration - widget IDs, labels and diff line styles."""

from __future__ import annotations

# =============================================================================
# Widget IDs
# =============================================================================

GROUPS_TREE_ID = "console-groups-tree"
FILES_TREE_ID = "console-files-tree"
STATUS_LINE_ID = "console-status-line"
DRIFT_INDICATOR_ID = "console-drift-indicator"
LEGEND_ID = "console-legend"
LOADING_TEXT_ID = "loading-text"
DIFF_VIEW_ID = "console-diff-view"
DRIFT_PANEL_ID = "console-drift-panel"

# =============================================================================
# Labels
# =============================================================================

GROUPS_TREE_LABEL = "Groups"
FILES_TREE_LABEL = "Files"
NO_HOST_SELECTED = "No host selected"
NO_FILE_SELECTED = "Select a file to view its diff"
NO_DIFFERENCES = "No differences"
NO_RESULT = "No result"
NO_SYNC_IN_PRODUCTION = "none - production mode performs no sync"
RELOAD_UNAVAILABLE = "Configuration check failed, reload is unavailable."

STAGE_LABELS: dict[str, str] = {
    "prepare": "Prepare (sync + nginx -t)",
    "apply": "Apply (reload)",
}

# =============================================================================
# Diff line classification
# =============================================================================

DIFF_LINE_HEADER = "header"
DIFF_LINE_HUNK = "hunk"
DIFF_LINE_ADDED = "added"
DIFF_LINE_REMOVED = "removed"
DIFF_LINE_CONTEXT = "context"

DIFF_LINE_STYLES: dict[str, str] = {
    DIFF_LINE_HEADER: "bold cyan",
    DIFF_LINE_HUNK: "bold magenta",
    DIFF_LINE_ADDED: "green",
    DIFF_LINE_REMOVED: "red",
    DIFF_LINE_CONTEXT: "",
}

# =============================================================================
# Drift status tags: state value -> (label, notify severity)
# =============================================================================

DRIFT_STATUS_TAGS: dict[str, tuple[str, str]] = {
    "synced": ("Synced", "information"),
    "ahead": ("Ahead", "warning"),
    "behind": ("Behind", "warning"),
    "diverged": ("Diverged", "error"),
    "error": ("Error", "error"),
    "unknown": ("Unknown", "warning"),
}

__all__ = [
    "DIFF_LINE_ADDED",
    "DIFF_LINE_CONTEXT",
    "DIFF_LINE_HEADER",
    "DIFF_LINE_HUNK",
    "DIFF_LINE_REMOVED",
    "DIFF_LINE_STYLES",
    "DIFF_VIEW_ID",
    "DRIFT_INDICATOR_ID",
    "DRIFT_PANEL_ID",
    "DRIFT_STATUS_TAGS",
    "FILES_TREE_ID",
    "FILES_TREE_LABEL",
    "GROUPS_TREE_ID",
    "GROUPS_TREE_LABEL",
    "LEGEND_ID",
    "LOADING_TEXT_ID",
    "NO_DIFFERENCES",
    "NO_FILE_SELECTED",
    "NO_HOST_SELECTED",
    "NO_RESULT",
    "NO_SYNC_IN_PRODUCTION",
    "RELOAD_UNAVAILABLE",
    "STAGE_LABELS",
    "STATUS_LINE_ID",
]
