"""CustomStatic widget for the TUI application.

Standard Wrapper Pattern:
- Wraps Textual's Static with the project CSS class
- Markup stays configurable so server-supplied text can be shown verbatim

CSS Classes: widget-custom-static
"""

from __future__ import annotations

from rich.console import RenderableType
from textual.widgets import Static


class CustomStatic(Static):
    """Static text display with standardized styling.

    Example:
        >>> yield CustomStatic("Loading...", id="status-line", markup=False)
    """

    _default_classes = "widget-custom-static"

    def __init__(
        self,
        content: RenderableType = "",
        *,
        markup: bool = True,
        id: str | None = None,
        classes: str | None = None,
        disabled: bool = False,
    ) -> None:
        super().__init__(
            content,
            markup=markup,
            id=id,
            classes=classes,
            disabled=disabled,
        )
        self.add_class(self._default_classes)


__all__ = [
    "CustomStatic",
]
