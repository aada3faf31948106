"""Tests for pod and job fetchers."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from kstool.controllers.cluster.fetchers import JobFetcher, PodFetcher


class TestPodFetcher:
    """Tests for PodFetcher class."""

    @pytest.fixture
    def mock_run_kubectl(self) -> AsyncMock:
        """Create mock kubectl runner."""
        return AsyncMock(return_value=json.dumps({"items": []}))

    @pytest.fixture
    def fetcher(self, mock_run_kubectl: AsyncMock) -> PodFetcher:
        """Create PodFetcher instance."""
        return PodFetcher(mock_run_kubectl, "eidf029ns", "7s")

    @pytest.mark.asyncio
    async def test_fetch_pods_raw_args(
        self, fetcher: PodFetcher, mock_run_kubectl: AsyncMock
    ) -> None:
        await fetcher.fetch_pods_raw()
        assert mock_run_kubectl.await_args.args[0] == (
            "get",
            "pods",
            "-n",
            "eidf029ns",
            "-o",
            "json",
            "--request-timeout=7s",
        )

    @pytest.mark.asyncio
    async def test_fetch_pods_raw_with_selector(
        self, fetcher: PodFetcher, mock_run_kubectl: AsyncMock
    ) -> None:
        await fetcher.fetch_pods_raw(selector="job-name=alice-a")
        args = mock_run_kubectl.await_args.args[0]
        assert args[args.index("-l") + 1] == "job-name=alice-a"

    @pytest.mark.asyncio
    async def test_fetch_pods_raw_empty_output(
        self, fetcher: PodFetcher, mock_run_kubectl: AsyncMock
    ) -> None:
        mock_run_kubectl.return_value = ""
        assert await fetcher.fetch_pods_raw() == []

    def test_owning_job(self) -> None:
        pod = {
            "metadata": {
                "ownerReferences": [
                    {"kind": "ReplicaSet", "name": "rs"},
                    {"kind": "Job", "name": "alice-a", "controller": True},
                ]
            }
        }
        assert PodFetcher.owning_job(pod) == "alice-a"

    def test_owning_job_ignores_non_controller_reference(self) -> None:
        pod = {
            "metadata": {
                "ownerReferences": [{"kind": "Job", "name": "x", "controller": False}]
            }
        }
        assert PodFetcher.owning_job(pod) is None

    def test_owning_job_requires_controller_flag(self) -> None:
        pod = {"metadata": {"ownerReferences": [{"kind": "Job", "name": "x"}]}}
        assert PodFetcher.owning_job(pod) is None

    def test_group_by_job_drops_orphans(self) -> None:
        def owned(name: str, job: str) -> dict:
            reference = {"kind": "Job", "name": job, "controller": True}
            return {"metadata": {"name": name, "ownerReferences": [reference]}}

        pods = [
            owned("a1", "a"),
            owned("b1", "b"),
            owned("a2", "a"),
            {"metadata": {"name": "loose"}},
        ]

        grouped = PodFetcher.group_by_job(pods)

        assert sorted(grouped) == ["a", "b"]
        assert [pod["metadata"]["name"] for pod in grouped["a"]] == ["a1", "a2"]

    @pytest.mark.asyncio
    async def test_find_running_pod_none_running(
        self, fetcher: PodFetcher, mock_run_kubectl: AsyncMock
    ) -> None:
        mock_run_kubectl.return_value = json.dumps(
            {"items": [{"metadata": {"name": "p"}, "status": {"phase": "Pending"}}]}
        )
        assert await fetcher.find_running_pod("alice-a") is None


class TestJobFetcher:
    """Tests for JobFetcher class."""

    @pytest.mark.asyncio
    async def test_fetch_jobs_raw(self) -> None:
        run = AsyncMock(return_value=json.dumps({"items": [{"metadata": {"name": "a"}}]}))
        fetcher = JobFetcher(run, "ns")

        items = await fetcher.fetch_jobs_raw()

        assert items == [{"metadata": {"name": "a"}}]
        assert run.await_args.args[0] == (
            "get",
            "jobs",
            "-o",
            "json",
            "-n",
            "ns",
            "--request-timeout=5s",
        )

    @pytest.mark.asyncio
    async def test_fetch_jobs_raw_null_items(self) -> None:
        fetcher = JobFetcher(AsyncMock(return_value='{"items": null}'), "ns")
        assert await fetcher.fetch_jobs_raw() == []

    @pytest.mark.asyncio
    async def test_fetch_job_raw_invalid_json(self) -> None:
        fetcher = JobFetcher(AsyncMock(return_value="<html>"), "ns")
        with pytest.raises(json.JSONDecodeError):
            await fetcher.fetch_job_raw("a")
