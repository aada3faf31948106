"""Filter/sort state for the jobs table."""

from __future__ import annotations

from dataclasses import dataclass, replace

from kstool.constants.enums import SortMode, StatusFilter


@dataclass(frozen=True, slots=True)
class FilterState:
    """Status filter, ownership filter and sort mode.

    Immutable; each transition returns a new state. Lives only for the
    lifetime of the process.
    """

    status_filter: StatusFilter = StatusFilter.ALL
    owner_only: bool = False
    sort_mode: SortMode = SortMode.AGE_DESC

    def with_next_status(self) -> FilterState:
        return replace(self, status_filter=self.status_filter.next())

    def with_next_sort(self) -> FilterState:
        return replace(self, sort_mode=self.sort_mode.next())

    def with_owner_toggled(self) -> FilterState:
        return replace(self, owner_only=not self.owner_only)
