"""CustomButton widget for the TUI application.

Standard Wrapper Pattern:
- Wraps Textual's Button with the project CSS class
- Pressed messages keep Textual's ``Button.Pressed`` name so handlers
  use ``on_button_pressed``

CSS Classes: widget-custom-button
"""

from __future__ import annotations

from textual.widgets import Button
from textual.widgets.button import ButtonVariant


class CustomButton(Button):
    """Button with standardized styling."""

    _default_classes = "widget-custom-button"

    def __init__(
        self,
        label: str = "",
        variant: ButtonVariant = "default",
        *,
        id: str | None = None,
        classes: str | None = None,
        disabled: bool = False,
        tooltip: str | None = None,
    ) -> None:
        super().__init__(
            label,
            variant,
            id=id,
            classes=classes,
            disabled=disabled,
            tooltip=tooltip,
        )
        self.add_class(self._default_classes)


__all__ = [
    "CustomButton",
]
