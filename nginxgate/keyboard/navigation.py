"""Screen-specific keyboard bindings."""

from typing import Annotated

# ============================================================================
# Console Screen Bindings
# ============================================================================

CONSOLE_SCREEN_BINDINGS: list[
    Annotated[tuple[str, str, str], "key, action, description"]
] = [
    ("r", "refresh", "Refresh"),
    ("m", "toggle_mode", "Mode"),
    ("a", "toggle_show_all", "Show All"),
    ("t", "toggle_auto_refresh", "Auto Refresh"),
    ("plus", "refresh_interval_up", "Interval +"),
    ("minus", "refresh_interval_down", "Interval -"),
    ("c", "run_check", "Check"),
    ("u", "prepare_update", "Update"),
    ("g", "toggle_drift_panel", "Git Status"),
]

# ============================================================================
# Modal Bindings
# ============================================================================

RESULT_MODAL_BINDINGS: list[
    Annotated[tuple[str, str, str], "key, action, description"]
] = [
    ("escape", "close", "Close"),
]

UPDATE_MODAL_BINDINGS: list[
    Annotated[tuple[str, str, str], "key, action, description"]
] = [
    ("escape", "close", "Close"),
    ("enter", "confirm", "Apply"),
]

__all__ = [
    "CONSOLE_SCREEN_BINDINGS",
    "RESULT_MODAL_BINDINGS",
    "UPDATE_MODAL_BINDINGS",
]
