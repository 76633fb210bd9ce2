"""Git status side panel: branch, commits and remote-vs-local diff."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical

from nginxgate.models.api.payloads import DriftStatusReport
from nginxgate.screens.console.presenter import (
    drift_tag,
    format_drift_report,
    render_diff_lines,
)
from nginxgate.widgets import CustomButton, CustomRichLog, CustomStatic


class DriftStatusPanel(Vertical):
    """Docked panel; the owning screen starts and stops polling around it."""

    DEFAULT_CSS = """
    DriftStatusPanel {
        dock: right;
        width: 60;
        border-left: solid $primary;
        background: $surface;
        padding: 0 1;
    }

    DriftStatusPanel #drift-panel-summary {
        height: auto;
    }

    DriftStatusPanel #drift-panel-summary.-error {
        color: $error;
    }

    DriftStatusPanel #drift-panel-summary.-warning {
        color: $warning;
    }

    DriftStatusPanel #drift-panel-diff {
        height: 1fr;
    }

    DriftStatusPanel #drift-panel-buttons {
        height: auto;
    }
    """

    def compose(self) -> ComposeResult:
        yield CustomStatic("Git status", classes="drift-panel-title", markup=False)
        yield CustomStatic(
            "\n".join(format_drift_report(None)), id="drift-panel-summary", markup=False
        )
        yield CustomRichLog(id="drift-panel-diff")
        with Horizontal(id="drift-panel-buttons"):
            yield CustomButton("Refresh", id="drift-panel-refresh")
            yield CustomButton("Close", id="drift-panel-close")

    def show_report(self, report: DriftStatusReport) -> None:
        summary = self.query_one("#drift-panel-summary", CustomStatic)
        summary.update("\n".join(format_drift_report(report)))
        _, severity = drift_tag(report)
        summary.set_class(severity == "error", "-error")
        summary.set_class(severity == "warning", "-warning")
        self.query_one("#drift-panel-diff", CustomRichLog).replace_lines(
            render_diff_lines(report.diff)
        )

    def show_error(self, message: str) -> None:
        summary = self.query_one("#drift-panel-summary", CustomStatic)
        summary.update(message)
        summary.set_class(True, "-error")
        summary.set_class(False, "-warning")


__all__ = [
    "DriftStatusPanel",
]
