"""Settings persistence for the TUI.

Settings live in ``<config_dir>/settings.yaml``. A missing file means
defaults; a present-but-broken file is an error rather than a silent reset.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from kstool.constants.defaults import CONFIG_DIR_DEFAULT, SETTINGS_FILE_NAME
from kstool.models.state.app_settings import (
    AppSettings,
    ConfigError,
    ConfigLoadError,
    ConfigSaveError,
)

logger = logging.getLogger(__name__)


class ConfigManager:
    """Load and save :class:`AppSettings` as YAML."""

    @staticmethod
    def default_path() -> Path:
        return Path(CONFIG_DIR_DEFAULT).expanduser() / SETTINGS_FILE_NAME

    @classmethod
    def load(cls, path: Path | None = None) -> AppSettings:
        """Load settings from *path* (defaults to ``~/.kstool/settings.yaml``)."""
        settings_path = path or cls.default_path()
        if not settings_path.exists():
            logger.debug("No settings file at %s, using defaults", settings_path)
            return AppSettings()

        try:
            raw = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigLoadError(f"Failed to read {settings_path}: {exc}") from exc

        if raw is None:
            return AppSettings()
        if not isinstance(raw, dict):
            raise ConfigLoadError(f"{settings_path} must contain a mapping")

        try:
            return AppSettings.model_validate(raw)
        except ValidationError as exc:
            raise ConfigLoadError(f"Invalid settings in {settings_path}: {exc}") from exc

    @classmethod
    def save(cls, settings: AppSettings, path: Path | None = None) -> Path:
        """Write *settings* to *path* and return the path written."""
        settings_path = path or cls.default_path()
        try:
            settings_path.parent.mkdir(parents=True, exist_ok=True)
            settings_path.write_text(
                yaml.safe_dump(settings.model_dump(), sort_keys=False),
                encoding="utf-8",
            )
        except OSError as exc:
            raise ConfigSaveError(f"Failed to write {settings_path}: {exc}") from exc
        return settings_path


__all__ = [
    "AppSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "ConfigSaveError",
]
