"""Display widgets for nginxgate TUI.

- CustomRichLog: Scrollable rich log
- CustomStatic: Static text display widget
"""

from nginxgate.widgets.display.custom_rich_log import CustomRichLog
from nginxgate.widgets.display.custom_static import CustomStatic

__all__ = [
    "CustomRichLog",
    "CustomStatic",
]
