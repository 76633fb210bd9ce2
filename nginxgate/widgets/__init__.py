"""Widgets module for the nginxgate TUI.

Thin wrappers around Textual widgets that carry the project's default CSS
classes:
- display: CustomRichLog, CustomStatic
- feedback: CustomButton
- special: CustomTree
"""

from nginxgate.widgets.display import CustomRichLog, CustomStatic
from nginxgate.widgets.feedback import CustomButton
from nginxgate.widgets.special import CustomTree

__all__ = [
    "CustomButton",
    "CustomRichLog",
    "CustomStatic",
    "CustomTree",
]
