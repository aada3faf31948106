"""Screen-specific keyboard bindings.

Jobs-screen keys are routed through ``action_dispatch`` so the command
dispatcher decides what each key does in the current state.
"""

from textual.binding import Binding

# ============================================================================
# Jobs screen
# ============================================================================

JOBS_SCREEN_BINDINGS: list[Binding] = [
    Binding("r", "dispatch('r')", "Refresh"),
    Binding("f", "dispatch('f')", "Filter"),
    Binding("h", "dispatch('h')", "Hide Others"),
    Binding("s", "dispatch('s')", "Sort"),
    Binding("d", "dispatch('d')", "Delete"),
    Binding("e", "dispatch('e')", "Enter"),
    Binding("c", "dispatch('c')", "Config"),
    Binding("n", "dispatch('n')", "New Config"),
    Binding("escape", "app.quit", "Quit"),
]

# ============================================================================
# Configuration list screen
# ============================================================================

CONFIG_LIST_SCREEN_BINDINGS: list[Binding] = [
    Binding("d", "delete_config", "Delete"),
    Binding("j", "cursor_down", "Down", show=False),
    Binding("k", "cursor_up", "Up", show=False),
    Binding("escape", "back", "Back"),
]

# ============================================================================
# Configuration editor screen
# ============================================================================

CONFIG_EDIT_SCREEN_BINDINGS: list[Binding] = [
    Binding("ctrl+e", "edit_in_editor", "Edit in Vim"),
    Binding("ctrl+s", "save", "Save", priority=True),
    Binding("f5", "apply", "Apply", priority=True),
    Binding("escape", "back", "Back"),
]

__all__ = [
    "CONFIG_EDIT_SCREEN_BINDINGS",
    "CONFIG_LIST_SCREEN_BINDINGS",
    "JOBS_SCREEN_BINDINGS",
]
