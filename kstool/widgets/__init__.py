"""Widgets module for KSTool.

- feedback: dialogs
"""

from kstool.widgets.feedback import (
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
