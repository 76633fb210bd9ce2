"""CustomRichLog widget for the TUI application.

Standard Wrapper Pattern:
- Wraps Textual's RichLog with standardized styling
- Markup and highlighting are off by default; content is server supplied

CSS Classes: widget-custom-rich-log
"""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import RenderableType
from textual.widgets import RichLog


class CustomRichLog(RichLog):
    """Scrollable log of rich renderables."""

    _default_classes = "widget-custom-rich-log"

    def __init__(
        self,
        *,
        wrap: bool = False,
        highlight: bool = False,
        markup: bool = False,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(
            wrap=wrap,
            highlight=highlight,
            markup=markup,
            id=id,
            classes=classes,
        )
        self.add_class(self._default_classes)

    def replace_lines(self, lines: Iterable[RenderableType]) -> None:
        """Clear the log and write ``lines`` from the top."""
        self.clear()
        for line in lines:
            self.write(line, scroll_end=False)
        self.scroll_home(animate=False)


__all__ = [
    "CustomRichLog",
]
