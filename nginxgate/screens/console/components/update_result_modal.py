"""Modal showing a prepare or apply result.

After a prepare the modal offers an "Apply (reload)" button. The button is
created disabled unless the deployment gate allowed apply at the moment the
modal was opened; dismissing with ``True`` asks the caller to apply.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen

from nginxgate.constants.enums import UpdateStage
from nginxgate.keyboard import UPDATE_MODAL_BINDINGS
from nginxgate.models.api.payloads import UpdateResult
from nginxgate.screens.console.presenter import format_update_result, pass_fail
from nginxgate.widgets import CustomButton, CustomRichLog, CustomStatic


class UpdateResultModal(ModalScreen[bool]):
    """Prepare/apply diagnostics with the gated apply confirmation."""

    BINDINGS = UPDATE_MODAL_BINDINGS

    DEFAULT_CSS = """
    UpdateResultModal {
        align: center middle;
    }

    #update-result-shell {
        width: 90%;
        max-width: 124;
        height: 85%;
        border: round $warning;
        background: $surface;
        padding: 1 2;
    }

    #update-result-title.-ok {
        color: $success;
        text-style: bold;
    }

    #update-result-title.-fail {
        color: $error;
        text-style: bold;
    }

    #update-result-body {
        height: 1fr;
    }

    #update-result-buttons {
        height: auto;
        align-horizontal: right;
    }
    """

    def __init__(
        self,
        result: UpdateResult | None,
        *,
        can_apply: bool = False,
        target: str = "",
    ) -> None:
        super().__init__()
        self._result = result
        self._can_apply = can_apply
        self._target = target

    @property
    def is_prepare(self) -> bool:
        return self._result is None or self._result.stage is UpdateStage.PREPARE

    @property
    def can_apply(self) -> bool:
        return self.is_prepare and self._can_apply

    def compose(self) -> ComposeResult:
        with Vertical(id="update-result-shell"):
            yield CustomStatic(self._title(), id="update-result-title", markup=False)
            yield CustomRichLog(id="update-result-body", wrap=True)
            with Horizontal(id="update-result-buttons"):
                if self.is_prepare:
                    yield CustomButton(
                        "Apply (reload)",
                        variant="warning",
                        id="update-result-confirm",
                        disabled=not self.can_apply,
                    )
                    yield CustomButton("Cancel", id="update-result-cancel")
                else:
                    yield CustomButton("Close", id="update-result-cancel")

    def on_mount(self) -> None:
        title = self.query_one("#update-result-title", CustomStatic)
        if self._result is not None:
            title.add_class("-ok" if self._result.ok else "-fail")
        self.query_one("#update-result-body", CustomRichLog).replace_lines(
            format_update_result(self._result)
        )

    def _title(self) -> str:
        title = "Update configuration"
        if self._target:
            title += f" - {self._target}"
        if self._result is not None:
            title += f": {pass_fail(self._result.ok)}"
        return title

    def on_button_pressed(self, event: CustomButton.Pressed) -> None:
        if event.button.id == "update-result-confirm":
            self.action_confirm()
        elif event.button.id == "update-result-cancel":
            self.dismiss(False)

    def action_confirm(self) -> None:
        if not self.can_apply:
            self.notify("Apply requires a passing prepare", severity="warning")
            return
        self.dismiss(True)

    def action_close(self) -> None:
        self.dismiss(False)


__all__ = [
    "UpdateResultModal",
]
