"""Jobs screen presenter - filter/sort projection and row formatting.

``project`` is a pure function of its inputs so the table can be rebuilt
from the cached snapshot on every key press without touching the cluster.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Sequence

from rich.markup import escape

from kstool.constants.enums import JobStatus, SortKey, StatusFilter
from kstool.constants.values import (
    APP_AUTHOR,
    APP_NAME,
    APP_VERSION,
    COLOR_A100,
    COLOR_COMPLETE,
    COLOR_FAILED,
    COLOR_H100,
    COLOR_H200,
    COLOR_PENDING,
    COLOR_RUNNING,
    GPU_COUNT_COLORS,
    NO_GPU,
)
from kstool.controllers.cluster.parsers.job_parser import (
    gpu_family,
    gpu_memory_class,
    is_waiting_gpu_info,
)
from kstool.models.core.job_info import JobInfo
from kstool.models.state.filter_state import FilterState

logger = logging.getLogger(__name__)

_UNIT_PATTERNS = (
    (re.compile(r"(\d+)d"), 24 * 60),
    (re.compile(r"(\d+)h"), 60),
    (re.compile(r"(\d+)m"), 1),
)

_FAMILY_RANK: dict[str, int] = {"H200": 300, "H100": 200, "A100": 100}
_MEMORY_RANK: dict[str, int] = {"80G": 2, "40G": 1}

_STATUS_COLORS: dict[JobStatus, str] = {
    JobStatus.RUNNING: COLOR_RUNNING,
    JobStatus.COMPLETE: COLOR_COMPLETE,
    JobStatus.FAILED: COLOR_FAILED,
    JobStatus.PENDING: COLOR_PENDING,
}
_FAMILY_COLORS: dict[str, str] = {
    "H200": COLOR_H200,
    "H100": COLOR_H100,
    "A100": COLOR_A100,
}


# =============================================================================
# Projection
# =============================================================================


def parse_compact_duration(text: str) -> int:
    """Total minutes in a ``{d}d{h}h{m}m`` string; missing units and ``–`` count as 0."""
    total = 0
    for pattern, factor in _UNIT_PATTERNS:
        match = pattern.search(text)
        if match:
            total += int(match.group(1)) * factor
    return total


def gpu_type_rank(gpu_info: str) -> int:
    """Rank accelerator descriptions; family always dominates memory class."""
    family = gpu_family(gpu_info)
    memory_class = gpu_memory_class(gpu_info)
    return _FAMILY_RANK.get(family or "", 0) + _MEMORY_RANK.get(memory_class or "", 0)


_SORT_KEYS: dict[SortKey, Callable[[JobInfo], int]] = {
    SortKey.AGE: lambda job: parse_compact_duration(job.age),
    SortKey.DURATION: lambda job: parse_compact_duration(job.duration),
    SortKey.GPU_COUNT: lambda job: job.gpu_count,
    SortKey.GPU_TYPE: lambda job: gpu_type_rank(job.gpu_info),
}


def project(
    snapshot: Iterable[JobInfo],
    filter_state: FilterState,
    identity: str,
) -> list[JobInfo]:
    """Filter and order *snapshot* for display.

    The ownership filter keeps jobs whose name starts with *identity*, the
    naming convention the bundled template uses for ``generateName``. Ties
    keep their snapshot order.
    """
    rows = list(snapshot)
    if filter_state.owner_only:
        rows = [job for job in rows if identity and job.name.startswith(identity)]
    if filter_state.status_filter is not StatusFilter.ALL:
        rows = [job for job in rows if filter_state.status_filter.matches(job.status)]

    sort_mode = filter_state.sort_mode
    return sorted(rows, key=_SORT_KEYS[sort_mode.key], reverse=sort_mode.descending)


# =============================================================================
# Formatting
# =============================================================================


class JobsPresenter:
    """Formats projected jobs as rich-markup table rows."""

    @staticmethod
    def _colored(text: str, color: str) -> str:
        if not color:
            return text
        return f"[{color}]{text}[/{color}]"

    @classmethod
    def format_status(cls, status: JobStatus) -> str:
        return cls._colored(status.value, _STATUS_COLORS[status])

    @classmethod
    def format_gpu_count(cls, count: int) -> str:
        color = GPU_COUNT_COLORS[min(max(count, 0), len(GPU_COUNT_COLORS) - 1)]
        return cls._colored(str(count), color)

    @classmethod
    def format_gpu_info(cls, gpu_info: str) -> str:
        text = escape(gpu_info)
        if gpu_info == NO_GPU or is_waiting_gpu_info(gpu_info):
            return f"[dim]{text}[/dim]"
        family = gpu_family(gpu_info)
        return cls._colored(text, _FAMILY_COLORS.get(family or "", ""))

    def get_job_rows(self, jobs: Sequence[JobInfo]) -> list[tuple[str, ...]]:
        """One row per job, matching the jobs table columns."""
        return [
            (
                escape(job.name),
                self.format_status(job.status),
                job.completions,
                job.duration,
                job.age,
                str(job.pod_count),
                self.format_gpu_count(job.gpu_count),
                self.format_gpu_info(job.gpu_info),
            )
            for job in jobs
        ]

    @staticmethod
    def status_line(filter_state: FilterState, visible: int, total: int) -> str:
        hide = "On" if filter_state.owner_only else "Off"
        return (
            f"(F)ilter: {filter_state.status_filter.value} | "
            f"(H)ide Others: {hide} | "
            f"(S)ort: {filter_state.sort_mode.label} | "
            f"(R)efresh | (D)elete | (E)nter | (C)onfig | (N)ew Config"
            f"  [dim]{visible}/{total} jobs[/dim]"
        )

    @staticmethod
    def version_line() -> str:
        return f"{APP_NAME}@{APP_VERSION} by {APP_AUTHOR}"
