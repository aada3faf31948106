"""Template domain controllers."""

from __future__ import annotations

from kstool.controllers.templates.controller import TemplateController
from kstool.controllers.templates.store import ConfigStore

__all__ = ["ConfigStore", "TemplateController"]
