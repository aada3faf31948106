"""Job fetcher for cluster controller - fetches Job objects from one namespace."""

from __future__ import annotations

import json
import logging
from typing import Any

from kstool.constants.timeouts import CLUSTER_REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


class JobFetcher:
    """Fetches batch Job data from the Kubernetes cluster."""

    def __init__(
        self,
        run_kubectl_func: Any,
        namespace: str,
        request_timeout: str = CLUSTER_REQUEST_TIMEOUT,
    ) -> None:
        """Initialize with kubectl runner function.

        Args:
            run_kubectl_func: Async function to run kubectl commands
            namespace: Namespace the jobs live in
            request_timeout: kubectl --request-timeout value
        """
        self._run_kubectl = run_kubectl_func
        self._namespace = namespace
        self._request_timeout = request_timeout

    def _base_args(self, *args: str) -> tuple[str, ...]:
        return (
            *args,
            "-n",
            self._namespace,
            f"--request-timeout={self._request_timeout}",
        )

    async def fetch_jobs_raw(self) -> list[dict[str, Any]]:
        """List every Job in the namespace as raw dicts."""
        output = await self._run_kubectl(
            self._base_args("get", "jobs", "-o", "json")
        )
        if not output:
            return []
        items = json.loads(output).get("items") or []
        logger.debug("Fetched %d jobs from %s", len(items), self._namespace)
        return items

    async def fetch_job_raw(self, name: str) -> dict[str, Any]:
        output = await self._run_kubectl(
            self._base_args("get", "job", name, "-o", "json")
        )
        return json.loads(output)

    async def fetch_job_yaml(self, name: str) -> str:
        """Return the live Job definition as YAML text."""
        return await self._run_kubectl(
            self._base_args("get", "job", name, "-o", "yaml")
        )

    async def delete_job(self, name: str) -> str:
        """Delete a Job and wait for its pods to go first."""
        return await self._run_kubectl(
            self._base_args("delete", "job", name, "--cascade=foreground")
        )
