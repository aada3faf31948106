"""Utility functions for KSTool."""

from kstool.utils.audit import record
from kstool.utils.sessions import SessionError, edit_text, run_interactive, view_text

__all__ = [
    # Audit
    "record",
    # Sessions
    "SessionError",
    "edit_text",
    "run_interactive",
    "view_text",
]
