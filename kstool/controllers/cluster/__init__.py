"""Cluster domain controllers."""

from __future__ import annotations

from kstool.controllers.cluster.controller import (
    ClusterClientError,
    ClusterController,
    ClusterNotFoundError,
)

__all__ = ["ClusterClientError", "ClusterController", "ClusterNotFoundError"]
