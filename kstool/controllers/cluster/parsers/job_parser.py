"""Job parser for cluster controller - derives display fields from raw Job/Pod JSON.

Every function here is a pure transformation of its inputs; the current
time is passed in explicitly wherever it matters.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from contextlib import suppress
from datetime import datetime, timedelta, timezone
from typing import Any

from kstool.constants.enums import JobStatus
from kstool.constants.values import (
    EMOJI_WAITING,
    GPU_PRODUCT_SELECTOR_KEY,
    GPU_RESOURCE_KEY,
    NO_GPU,
    NO_START_TIME,
)
from kstool.models.core.job_info import JobInfo

# (substring, family) checked in order; first hit wins.
_GPU_FAMILIES: tuple[str, ...] = ("H200", "H100", "A100")
# (substrings, memory class)
_GPU_MEMORY_CLASSES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("40GB", "40G"), "40G"),
    (("80GB", "80G"), "80G"),
)


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a Kubernetes RFC3339 timestamp into an aware datetime."""
    if not isinstance(value, str) or not value:
        return None
    with suppress(ValueError, TypeError):
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    return None


def _coerce_int(value: Any, default: int = 0) -> int:
    with suppress(TypeError, ValueError):
        return int(float(str(value)))
    return default


def derive_status(active: int, succeeded: int, failed: int) -> JobStatus:
    """Derive the job status from its pod counters."""
    if active > 0:
        return JobStatus.RUNNING
    if succeeded > 0:
        return JobStatus.COMPLETE
    if failed > 0:
        return JobStatus.FAILED
    return JobStatus.PENDING


def derive_job_status(job: dict[str, Any]) -> JobStatus:
    status = job.get("status") or {}
    return derive_status(
        _coerce_int(status.get("active")),
        _coerce_int(status.get("succeeded")),
        _coerce_int(status.get("failed")),
    )


def format_completions(succeeded: int, completions: int | None) -> str:
    """Render ``succeeded/target``; a job without a target counts as 1."""
    target = 1 if completions is None else completions
    return f"{succeeded}/{target}"


def format_elapsed(delta: timedelta) -> str:
    """Render *delta* as ``{d}d{h}h{m}m`` without leading zero units."""
    total_minutes = max(0, int(delta.total_seconds() // 60))
    days, remainder = divmod(total_minutes, 24 * 60)
    hours, minutes = divmod(remainder, 60)
    if days > 0:
        return f"{days}d{hours}h{minutes}m"
    if hours > 0:
        return f"{hours}h{minutes}m"
    return f"{minutes}m"


def format_duration(
    start: datetime | None,
    completion: datetime | None,
    now: datetime,
) -> str:
    """Elapsed run time, up to completion or *now* while still running."""
    if start is None:
        return NO_START_TIME
    return format_elapsed((completion or now) - start)


def format_age(created: datetime | None, now: datetime) -> str:
    if created is None:
        return NO_START_TIME
    return format_elapsed(now - created)


def _pod_spec(job: dict[str, Any]) -> dict[str, Any]:
    return ((job.get("spec") or {}).get("template") or {}).get("spec") or {}


def gpu_count(job: dict[str, Any]) -> int:
    """Sum the GPU limits (or requests) over the pod template's containers."""
    total = 0
    for container in _pod_spec(job).get("containers") or []:
        resources = container.get("resources") or {}
        limits = resources.get("limits") or {}
        requests = resources.get("requests") or {}
        quantity = limits.get(GPU_RESOURCE_KEY, requests.get(GPU_RESOURCE_KEY))
        total += max(0, _coerce_int(quantity))
    return total


def gpu_selector_pairs(job: dict[str, Any]) -> list[tuple[str, str]]:
    """Return node-selector and required node-affinity ``(key, value)`` pairs."""
    spec = _pod_spec(job)
    pairs = [
        (str(key), str(value))
        for key, value in (spec.get("nodeSelector") or {}).items()
    ]
    node_affinity = (spec.get("affinity") or {}).get("nodeAffinity") or {}
    required = node_affinity.get("requiredDuringSchedulingIgnoredDuringExecution") or {}
    for term in required.get("nodeSelectorTerms") or []:
        for expression in term.get("matchExpressions") or []:
            if expression.get("operator", "In") != "In":
                continue
            for value in expression.get("values") or []:
                pairs.append((str(expression.get("key", "")), str(value)))
    return pairs


def gpu_model_selector(selectors: Iterable[tuple[str, str]]) -> str:
    for key, value in selectors:
        if key == GPU_PRODUCT_SELECTOR_KEY:
            return value
    return ""


def gpu_family(model: str) -> str | None:
    for family in _GPU_FAMILIES:
        if family in model:
            return family
    return None


def gpu_memory_class(model: str) -> str | None:
    for substrings, memory_class in _GPU_MEMORY_CLASSES:
        if any(token in model for token in substrings):
            return memory_class
    return None


def summarize_gpu(
    count: int,
    selectors: Iterable[tuple[str, str]],
    *,
    waiting: bool = False,
) -> str:
    """Describe the accelerator a job asks for.

    ``No GPU`` when nothing is requested. A known family renders as
    ``H100`` or ``A100-80G``; an unknown one as ``<count> GPU``. While the
    job is still waiting for its first pod the description carries the
    waiting prefix so the view can dim it and the GPU-type sort can still
    read the family out of it.
    """
    if count <= 0:
        return NO_GPU

    model = gpu_model_selector(selectors)
    family = gpu_family(model)
    if family is None:
        description = f"{count} GPU"
    else:
        memory_class = gpu_memory_class(model)
        description = f"{family}-{memory_class}" if memory_class else family

    if waiting:
        return f"{EMOJI_WAITING} {description}"
    return description


def is_waiting_gpu_info(gpu_info: str) -> bool:
    return gpu_info.startswith(EMOJI_WAITING)


class JobParser:
    """Parses raw Job and Pod JSON into :class:`JobInfo` rows."""

    def __init__(self, owner_label: str) -> None:
        self._owner_label = owner_label

    def parse_job(
        self,
        job: dict[str, Any],
        pods: Sequence[dict[str, Any]],
        now: datetime | None = None,
    ) -> JobInfo:
        """Build one :class:`JobInfo` from a Job and the pods it owns."""
        now = now or datetime.now(timezone.utc)
        metadata = job.get("metadata") or {}
        spec = job.get("spec") or {}
        status = job.get("status") or {}
        labels = {str(k): str(v) for k, v in (metadata.get("labels") or {}).items()}

        job_status = derive_job_status(job)
        raw_completions = spec.get("completions")
        completions = None if raw_completions is None else _coerce_int(raw_completions, 1)
        count = gpu_count(job)
        waiting = job_status is JobStatus.PENDING and not pods

        return JobInfo(
            name=str(metadata.get("name", "")),
            namespace=str(metadata.get("namespace", "")),
            owner=labels.get(self._owner_label),
            status=job_status,
            completions=format_completions(
                _coerce_int(status.get("succeeded")), completions
            ),
            duration=format_duration(
                parse_timestamp(status.get("startTime")),
                parse_timestamp(status.get("completionTime")),
                now,
            ),
            age=format_age(parse_timestamp(metadata.get("creationTimestamp")), now),
            pod_count=len(pods),
            gpu_count=count,
            gpu_info=summarize_gpu(count, gpu_selector_pairs(job), waiting=waiting),
            labels=labels,
        )
