"""Pod fetcher for cluster controller - fetches pods and maps them to their Jobs."""

from __future__ import annotations

import json
import logging
from collections import defaultdict
from typing import Any

from kstool.constants.timeouts import CLUSTER_REQUEST_TIMEOUT
from kstool.constants.values import JOB_NAME_LABEL, JOB_OWNER_KIND

logger = logging.getLogger(__name__)


class PodFetcher:
    """Fetches pod data from the Kubernetes cluster."""

    def __init__(
        self,
        run_kubectl_func: Any,
        namespace: str,
        request_timeout: str = CLUSTER_REQUEST_TIMEOUT,
    ) -> None:
        """Initialize with kubectl runner function.

        Args:
            run_kubectl_func: Async function to run kubectl commands
            namespace: Namespace the pods live in
            request_timeout: kubectl --request-timeout value
        """
        self._run_kubectl = run_kubectl_func
        self._namespace = namespace
        self._request_timeout = request_timeout

    async def fetch_pods_raw(self, selector: str | None = None) -> list[dict[str, Any]]:
        """List pods in the namespace, optionally filtered by a label selector."""
        args: list[str] = ["get", "pods", "-n", self._namespace, "-o", "json"]
        if selector:
            args.extend(["-l", selector])
        args.append(f"--request-timeout={self._request_timeout}")
        output = await self._run_kubectl(tuple(args))
        if not output:
            return []
        return json.loads(output).get("items") or []

    @staticmethod
    def owning_job(pod: dict[str, Any]) -> str | None:
        """Return the name of the Job controlling *pod*, if any."""
        for reference in (pod.get("metadata") or {}).get("ownerReferences") or []:
            if (
                reference.get("kind") == JOB_OWNER_KIND
                and reference.get("controller") is True
            ):
                return reference.get("name")
        return None

    @classmethod
    def group_by_job(
        cls, pods: list[dict[str, Any]]
    ) -> dict[str, list[dict[str, Any]]]:
        """Group pods under the Job that controls them; orphans are dropped."""
        grouped: dict[str, list[dict[str, Any]]] = defaultdict(list)
        for pod in pods:
            job_name = cls.owning_job(pod)
            if job_name:
                grouped[job_name].append(pod)
        return dict(grouped)

    async def find_running_pod(self, job_name: str) -> str | None:
        """Return the first Running pod created by *job_name*."""
        pods = await self.fetch_pods_raw(selector=f"{JOB_NAME_LABEL}={job_name}")
        for pod in pods:
            if (pod.get("status") or {}).get("phase") == "Running":
                return (pod.get("metadata") or {}).get("name")
        logger.debug("No running pod for job %s among %d pods", job_name, len(pods))
        return None
