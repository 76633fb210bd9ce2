"""Console screen components."""

from nginxgate.screens.console.components.check_result_modal import CheckResultModal
from nginxgate.screens.console.components.diff_view import DiffView
from nginxgate.screens.console.components.drift_status_panel import DriftStatusPanel
from nginxgate.screens.console.components.update_result_modal import UpdateResultModal

__all__ = [
    "CheckResultModal",
    "DiffView",
    "DriftStatusPanel",
    "UpdateResultModal",
]
