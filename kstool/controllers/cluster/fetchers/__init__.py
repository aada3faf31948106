"""Fetchers that query the cluster through kubectl."""

from __future__ import annotations

from kstool.controllers.cluster.fetchers.job_fetcher import JobFetcher
from kstool.controllers.cluster.fetchers.pod_fetcher import PodFetcher

__all__ = ["JobFetcher", "PodFetcher"]
