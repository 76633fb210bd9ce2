"""Modal showing the outcome of a configuration check."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen

from nginxgate.keyboard import RESULT_MODAL_BINDINGS
from nginxgate.models.api.payloads import CheckResult
from nginxgate.screens.console.presenter import format_check_result, pass_fail
from nginxgate.widgets import CustomButton, CustomRichLog, CustomStatic


class CheckResultModal(ModalScreen[None]):
    """Read-only view of a ``CheckResult``, including failed checks."""

    BINDINGS = RESULT_MODAL_BINDINGS

    DEFAULT_CSS = """
    CheckResultModal {
        align: center middle;
    }

    #check-result-shell {
        width: 90%;
        max-width: 120;
        height: 80%;
        border: round $primary;
        background: $surface;
        padding: 1 2;
    }

    #check-result-title.-ok {
        color: $success;
        text-style: bold;
    }

    #check-result-title.-fail {
        color: $error;
        text-style: bold;
    }

    #check-result-body {
        height: 1fr;
    }

    #check-result-buttons {
        height: auto;
        align-horizontal: right;
    }
    """

    def __init__(self, result: CheckResult | None, *, target: str = "") -> None:
        super().__init__()
        self._result = result
        self._target = target

    def compose(self) -> ComposeResult:
        with Vertical(id="check-result-shell"):
            yield CustomStatic(self._title(), id="check-result-title", markup=False)
            yield CustomRichLog(id="check-result-body", wrap=True)
            with Horizontal(id="check-result-buttons"):
                yield CustomButton("Close", id="check-result-close")

    def on_mount(self) -> None:
        title = self.query_one("#check-result-title", CustomStatic)
        if self._result is not None:
            title.add_class("-ok" if self._result.ok else "-fail")
        self.query_one("#check-result-body", CustomRichLog).replace_lines(
            format_check_result(self._result)
        )

    def _title(self) -> str:
        title = "Configuration check"
        if self._target:
            title += f" - {self._target}"
        if self._result is not None:
            title += f": {pass_fail(self._result.ok)}"
        return title

    def on_button_pressed(self, event: CustomButton.Pressed) -> None:
        if event.button.id == "check-result-close":
            self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)


__all__ = [
    "CheckResultModal",
]
