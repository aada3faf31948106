"""Application state models."""

from kstool.models.state.app_settings import (
    AppSettings,
    ConfigError,
    ConfigLoadError,
    ConfigSaveError,
)
from kstool.models.state.config_manager import ConfigManager
from kstool.models.state.filter_state import FilterState

__all__ = [
    "AppSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "ConfigSaveError",
    "FilterState",
]
