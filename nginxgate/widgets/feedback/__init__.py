"""Feedback widgets."""

from nginxgate.widgets.feedback.custom_button import CustomButton

__all__ = [
    "CustomButton",
]
