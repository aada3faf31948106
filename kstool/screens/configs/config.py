"""Configuration screens - widget IDs, labels and help text."""

from __future__ import annotations

# =============================================================================
# Widget IDs
# =============================================================================

CONFIG_LIST_ID = "config-list"
CONFIG_FORM_ID = "config-form"
PARAM_INPUT_ID_PREFIX = "param-"

# =============================================================================
# Labels
# =============================================================================

CREATE_NEW_LABEL = "Create New Configuration"
ACTION_APPLY = "Apply"
ACTION_CHANGE = "Change"
ACTION_BACK = "Back"

LIST_HELP_TEXT = "Enter - Select | j/k - Move down/up | d - Delete | Esc - Back"
FORM_HELP_TEXT = (
    "Tab/Shift+Tab - Next/Previous | Ctrl+E - Edit in Vim | "
    "Ctrl+S - Save | F5 - Apply | Esc - Back"
)
UNSAVED_CHANGES_MESSAGE = "You have unsaved changes. Are you sure you want to go back?"
