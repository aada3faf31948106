"""Feedback widgets: confirmation, message, prompt and choice dialogs."""

from kstool.widgets.feedback.custom_dialog import (
    CustomChoiceDialog,
    CustomConfirmDialog,
    CustomInputDialog,
    CustomMessageDialog,
)

__all__ = [
    "CustomChoiceDialog",
    "CustomConfirmDialog",
    "CustomInputDialog",
    "CustomMessageDialog",
]
