"""Controllers module for KSTool.

Controllers own every side effect: kubectl calls and the local
configuration store.
"""

from __future__ import annotations

from kstool.controllers.cluster.controller import (
    ClusterClientError,
    ClusterController,
    ClusterNotFoundError,
)
from kstool.controllers.templates.controller import TemplateController
from kstool.controllers.templates.store import ConfigStore

__all__ = [
    "ClusterClientError",
    "ClusterController",
    "ClusterNotFoundError",
    "ConfigStore",
    "TemplateController",
]
