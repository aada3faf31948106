"""Jobs screen configuration - column definitions and widget ID constants."""

from __future__ import annotations

# =============================================================================
# Table Column Definitions: list[tuple[str, int]] = [(name, width), ...]
# =============================================================================

JOBS_TABLE_COLUMNS: list[tuple[str, int]] = [
    ("NAME", 40),
    ("STATUS", 10),
    ("COMPLETIONS", 12),
    ("DURATION", 10),
    ("AGE", 10),
    ("PODS", 6),
    ("GPU", 5),
    ("GPU INFO", 16),
]

# =============================================================================
# Widget IDs
# =============================================================================

JOBS_TABLE_ID = "jobs-table"
STATUS_LINE_ID = "jobs-status-line"
VERSION_LINE_ID = "jobs-version-line"
