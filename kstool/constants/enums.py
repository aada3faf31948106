"""All enum definitions for the TUI.

This module consolidates all enumerations used throughout the application.
The cyclic modes (status filter, sort mode) carry an explicit ``next()``
successor so cycling can never produce a value outside the set.
"""

from __future__ import annotations

from enum import Enum, auto

# =============================================================================
# Status Enums
# =============================================================================


class JobStatus(str, Enum):
    """Derived lifecycle status of a Kubernetes Job."""

    RUNNING = "Running"
    COMPLETE = "Complete"
    FAILED = "Failed"
    PENDING = "Pending"


class Severity(Enum):
    """Severity levels for user notices."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "information"


# =============================================================================
# Filter and Sort Enums
# =============================================================================


class StatusFilter(Enum):
    """Status filter presets for the jobs table, cycled with ``f``."""

    ALL = "All"
    RUNNING = "Running"
    FAILED = "Failed"
    PENDING = "Pending"

    def next(self) -> StatusFilter:
        return _NEXT_STATUS_FILTER[self]

    def matches(self, status: JobStatus) -> bool:
        """Return True when *status* passes this filter."""
        if self is StatusFilter.ALL:
            return True
        return status.value == self.value


_NEXT_STATUS_FILTER: dict[StatusFilter, StatusFilter] = {
    StatusFilter.ALL: StatusFilter.RUNNING,
    StatusFilter.RUNNING: StatusFilter.FAILED,
    StatusFilter.FAILED: StatusFilter.PENDING,
    StatusFilter.PENDING: StatusFilter.ALL,
}


class SortKey(Enum):
    """Column a sort mode orders by."""

    AGE = "age"
    GPU_COUNT = "gpu_count"
    DURATION = "duration"
    GPU_TYPE = "gpu_type"


class SortMode(Enum):
    """Sort modes for the jobs table, cycled with ``s``."""

    AGE_DESC = ("Age↓", SortKey.AGE, True)
    AGE_ASC = ("Age↑", SortKey.AGE, False)
    GPU_COUNT_ASC = ("GPU Number↑", SortKey.GPU_COUNT, False)
    GPU_COUNT_DESC = ("GPU Number↓", SortKey.GPU_COUNT, True)
    DURATION_DESC = ("Duration↓", SortKey.DURATION, True)
    DURATION_ASC = ("Duration↑", SortKey.DURATION, False)
    GPU_TYPE_DESC = ("GPU Type↓", SortKey.GPU_TYPE, True)
    GPU_TYPE_ASC = ("GPU Type↑", SortKey.GPU_TYPE, False)

    def __init__(self, label: str, key: SortKey, descending: bool) -> None:
        self.label = label
        self.key = key
        self.descending = descending

    def next(self) -> SortMode:
        return _NEXT_SORT_MODE[self]


_SORT_CYCLE: tuple[SortMode, ...] = tuple(SortMode)
_NEXT_SORT_MODE: dict[SortMode, SortMode] = {
    mode: _SORT_CYCLE[(index + 1) % len(_SORT_CYCLE)]
    for index, mode in enumerate(_SORT_CYCLE)
}


# =============================================================================
# Dispatcher State Enums
# =============================================================================


class ViewState(Enum):
    """Named states of the command dispatcher."""

    MAIN_VIEW = auto()
    CONFIRM_DELETE_MODAL = auto()
    CONFIG_LIST_VIEW = auto()
    CONFIG_EDIT_VIEW = auto()
    SAVE_NAME_MODAL = auto()
    SHELL_SESSION = auto()
    CONFIG_VIEWER_SESSION = auto()


__all__ = [
    "JobStatus",
    "Severity",
    "SortKey",
    "SortMode",
    "StatusFilter",
    "ViewState",
]
