"""Application settings models."""

from __future__ import annotations

import getpass
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kstool.constants.defaults import (
    CONFIG_DIR_DEFAULT,
    EDITOR_DEFAULT,
    GPU_PRODUCT_OPTIONS_DEFAULT,
    NAMESPACE_DEFAULT,
    SHELL_DEFAULT,
    USER_LABEL_DEFAULT,
    VIEWER_DEFAULT,
)
from kstool.constants.timeouts import CLUSTER_REQUEST_TIMEOUT, REFRESH_MIN_INTERVAL


def _default_identity() -> str:
    user = os.environ.get("USER", "").strip()
    if user:
        return user
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return ""


def _default_editor() -> str:
    return os.environ.get("EDITOR", "").strip() or EDITOR_DEFAULT


class AppSettings(BaseModel):
    """Application settings model with validation."""

    model_config = ConfigDict(populate_by_name=True)

    # Cluster
    namespace: str = NAMESPACE_DEFAULT
    context: str | None = None
    identity: str = Field(default_factory=_default_identity)
    user_label: str = USER_LABEL_DEFAULT
    request_timeout: str = CLUSTER_REQUEST_TIMEOUT

    # UI preferences
    refresh_interval_seconds: float = REFRESH_MIN_INTERVAL

    # External sessions
    editor: str = Field(default_factory=_default_editor)
    viewer: str = VIEWER_DEFAULT
    shell: str = SHELL_DEFAULT

    # Configuration store
    config_dir: str = CONFIG_DIR_DEFAULT
    gpu_product_options: list[str] = list(GPU_PRODUCT_OPTIONS_DEFAULT)

    @field_validator("namespace", "user_label")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("refresh_interval_seconds")
    @classmethod
    def _non_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("must be >= 0")
        return value

    @field_validator("gpu_product_options")
    @classmethod
    def _has_options(cls, value: list[str]) -> list[str]:
        cleaned = [option.strip() for option in value if option.strip()]
        if not cleaned:
            raise ValueError("at least one GPU product option is required")
        return cleaned

    @property
    def config_path(self) -> Path:
        """Expanded configuration directory."""
        return Path(self.config_dir).expanduser()


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""


class ConfigSaveError(ConfigError):
    """Raised when settings fail to save."""
