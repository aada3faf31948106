"""Cluster controller for batch Job operations.

This module is the single entry point the screens use to talk to the
cluster. All calls go through ``kubectl`` in a worker thread so the
Textual event loop stays responsive while a request is in flight.
"""

from __future__ import annotations

import asyncio
import json
import logging
import subprocess
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from kstool.constants.defaults import NAMESPACE_DEFAULT, USER_LABEL_DEFAULT
from kstool.constants.timeouts import (
    CLUSTER_REQUEST_TIMEOUT,
    KUBECTL_PROCESS_TIMEOUT_MARGIN,
)
from kstool.controllers.cluster.fetchers import JobFetcher, PodFetcher
from kstool.controllers.cluster.parsers import JobParser
from kstool.models.core.job_info import JobInfo

logger = logging.getLogger(__name__)

KubectlRunner = Callable[..., Awaitable[str]]


class ClusterClientError(RuntimeError):
    """Raised when a kubectl command fails or its output cannot be read."""


class ClusterNotFoundError(ClusterClientError):
    """Raised when the requested object does not exist."""


class ClusterController:
    """Lists, inspects, deletes and creates Jobs in one namespace."""

    def __init__(
        self,
        namespace: str = NAMESPACE_DEFAULT,
        context: str | None = None,
        request_timeout: str = CLUSTER_REQUEST_TIMEOUT,
        owner_label: str = USER_LABEL_DEFAULT,
        run_kubectl: KubectlRunner | None = None,
    ) -> None:
        self.namespace = namespace
        self.context = context
        self.request_timeout = request_timeout
        self.owner_label = owner_label
        self._run_kubectl = run_kubectl or self._run_kubectl_async

        self._job_fetcher = JobFetcher(self._run_kubectl, namespace, request_timeout)
        self._pod_fetcher = PodFetcher(self._run_kubectl, namespace, request_timeout)
        self._job_parser = JobParser(owner_label)

    # ------------------------------------------------------------------
    # kubectl plumbing
    # ------------------------------------------------------------------

    def _base_command(self) -> list[str]:
        cmd = ["kubectl"]
        if self.context:
            cmd.extend(["--context", self.context])
        return cmd

    def _process_timeout(self) -> int:
        """Process timeout derived from the kubectl request timeout."""
        raw = self.request_timeout.strip().lower()
        seconds = 0
        if raw.endswith("s") and raw[:-1].isdigit():
            seconds = int(raw[:-1])
        elif raw.endswith("m") and raw[:-1].isdigit():
            seconds = int(raw[:-1]) * 60
        elif raw.isdigit():
            seconds = int(raw)
        return max(1, seconds) + KUBECTL_PROCESS_TIMEOUT_MARGIN

    def _run_kubectl_sync(
        self,
        args: tuple[str, ...],
        input_text: str | None = None,
    ) -> str:
        """Run a kubectl command synchronously (thread-safe wrapper target)."""
        cmd = self._base_command()
        cmd.extend(args)
        try:
            result = subprocess.run(
                cmd,
                input=input_text,
                capture_output=True,
                text=True,
                timeout=self._process_timeout(),
            )
        except subprocess.TimeoutExpired as exc:
            raise ClusterClientError(
                f"kubectl {' '.join(args[:2])} timed out after {exc.timeout}s"
            ) from exc
        except OSError as exc:
            raise ClusterClientError(f"Unable to run kubectl: {exc}") from exc

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            if "(NotFound)" in stderr:
                raise ClusterNotFoundError(stderr)
            raise ClusterClientError(stderr or "kubectl command failed")
        return result.stdout

    async def _run_kubectl_async(
        self,
        args: tuple[str, ...],
        input_text: str | None = None,
    ) -> str:
        return await asyncio.to_thread(self._run_kubectl_sync, args, input_text)

    @staticmethod
    def _summarize_connection_error(error: BaseException) -> str:
        """Extract a concise, user-facing connection error from kubectl output."""
        raw_message = str(error).strip()
        if not raw_message:
            return "Cluster connection check failed"

        lines = [line.strip() for line in raw_message.splitlines() if line.strip()]
        preferred_tokens = (
            "unable to connect to the server",
            "you must be logged in",
            "context deadline exceeded",
            "timed out",
            "certificate",
            "no such host",
            "forbidden",
            "unauthorized",
        )

        selected_line = lines[-1]
        for line in reversed(lines):
            lower_line = line.lower()
            if line.startswith("error:") or any(
                token in lower_line for token in preferred_tokens
            ):
                selected_line = line
                break

        cleaned = selected_line.removeprefix("error:").strip()
        if len(cleaned) > 160:
            return f"{cleaned[:157].rstrip()}..."
        return cleaned or "Cluster connection check failed"

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    async def fetch_snapshot(self, now: datetime | None = None) -> list[JobInfo]:
        """Fetch every Job in the namespace together with its pods.

        Jobs are listed before pods and both calls must succeed; a failure
        in either raises :class:`ClusterClientError` and nothing is returned.
        Row order follows the order kubectl lists the Jobs in.
        """
        try:
            jobs = await self._job_fetcher.fetch_jobs_raw()
            pods = await self._pod_fetcher.fetch_pods_raw()
        except (json.JSONDecodeError, AttributeError) as exc:
            raise ClusterClientError(f"Unreadable kubectl output: {exc}") from exc

        pods_by_job = PodFetcher.group_by_job(pods)
        now = now or datetime.now(timezone.utc)
        snapshot = [
            self._job_parser.parse_job(
                job,
                pods_by_job.get((job.get("metadata") or {}).get("name", ""), []),
                now,
            )
            for job in jobs
        ]
        logger.info(
            "Snapshot of %s: %d jobs, %d pods", self.namespace, len(snapshot), len(pods)
        )
        return snapshot

    # ------------------------------------------------------------------
    # Single-Job operations
    # ------------------------------------------------------------------

    async def get_job(self, name: str) -> JobInfo:
        try:
            job = await self._job_fetcher.fetch_job_raw(name)
            pods = await self._pod_fetcher.fetch_pods_raw()
        except json.JSONDecodeError as exc:
            raise ClusterClientError(f"Unreadable kubectl output: {exc}") from exc
        owned = PodFetcher.group_by_job(pods).get(name, [])
        return self._job_parser.parse_job(job, owned)

    async def get_job_yaml(self, name: str) -> str:
        return await self._job_fetcher.fetch_job_yaml(name)

    async def delete_job(self, name: str) -> None:
        """Delete *name* with foreground cascade."""
        output = await self._job_fetcher.delete_job(name)
        logger.info("Deleted job %s/%s: %s", self.namespace, name, output.strip())

    async def find_running_pod(self, job_name: str) -> str | None:
        return await self._pod_fetcher.find_running_pod(job_name)

    def shell_command(self, pod_name: str, shell: str) -> list[str]:
        """Command line that opens an interactive shell in *pod_name*."""
        cmd = self._base_command()
        cmd.extend(["exec", "-it", "-n", self.namespace, pod_name, "--", shell])
        return cmd

    async def create_document(self, document: str) -> str:
        """Submit a rendered manifest and return the created object's name.

        Uses ``kubectl create`` because templates may rely on
        ``metadata.generateName``, which ``apply`` rejects.
        """
        output = await self._run_kubectl(
            (
                "create",
                "-n",
                self.namespace,
                "-f",
                "-",
                "-o",
                "name",
                f"--request-timeout={self.request_timeout}",
            ),
            document,
        )
        created = output.strip()
        logger.info("Created %s in %s", created, self.namespace)
        return created.split("/", 1)[-1] if created else ""
