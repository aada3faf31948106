"""Directory-backed store for the base template and named configurations.

Layout under the configuration directory::

    base_apply.yaml              base template with ${NAME:-DEFAULT} placeholders
    base_apply_template.yaml     normalized copy with bare ${NAME} markers
    env_config_list/<name>.yaml  named configurations (flat name -> value maps)
"""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path

import yaml

from kstool.constants.defaults import (
    BASE_TEMPLATE_NAME,
    CONFIG_FILE_SUFFIX,
    CONFIG_LIST_DIR_NAME,
    NORMALIZED_TEMPLATE_NAME,
)
from kstool.models.templates.errors import ConfigStoreError
from kstool.models.templates.parameter_set import NamedConfiguration

logger = logging.getLogger(__name__)

_RESERVED_NAMES = frozenset({BASE_TEMPLATE_NAME, NORMALIZED_TEMPLATE_NAME})


def bundled_template() -> str:
    """Text of the template shipped with the package."""
    return (
        resources.files("kstool.config")
        .joinpath(f"{BASE_TEMPLATE_NAME}{CONFIG_FILE_SUFFIX}")
        .read_text(encoding="utf-8")
    )


class ConfigStore:
    """Key -> document store rooted at one directory."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root).expanduser()
        self.config_dir = self.root / CONFIG_LIST_DIR_NAME

    @property
    def base_template_path(self) -> Path:
        return self.root / f"{BASE_TEMPLATE_NAME}{CONFIG_FILE_SUFFIX}"

    @property
    def normalized_template_path(self) -> Path:
        return self.root / f"{NORMALIZED_TEMPLATE_NAME}{CONFIG_FILE_SUFFIX}"

    @staticmethod
    def validate_name(name: str) -> str:
        """Return the stripped *name* or raise :class:`ConfigStoreError`."""
        cleaned = (name or "").strip()
        if cleaned.endswith(CONFIG_FILE_SUFFIX):
            cleaned = cleaned[: -len(CONFIG_FILE_SUFFIX)]
        if not cleaned:
            raise ConfigStoreError("Configuration name must not be empty")
        if "/" in cleaned or "\\" in cleaned or cleaned in {".", ".."}:
            raise ConfigStoreError(f"Invalid configuration name: {name!r}")
        if cleaned in _RESERVED_NAMES:
            raise ConfigStoreError(f"{cleaned!r} is reserved for the base template")
        return cleaned

    def path_for(self, name: str) -> Path:
        return self.config_dir / f"{self.validate_name(name)}{CONFIG_FILE_SUFFIX}"

    # ------------------------------------------------------------------
    # Base template
    # ------------------------------------------------------------------

    def read_base_template(self) -> str:
        """Read the base template, bootstrapping it from the bundled copy."""
        path = self.base_template_path
        try:
            if not path.exists():
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(bundled_template(), encoding="utf-8")
                logger.info("Created base template at %s", path)
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigStoreError(f"Cannot read base template {path}: {exc}") from exc

    def write_normalized_template(self, text: str) -> Path:
        path = self.normalized_template_path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise ConfigStoreError(f"Cannot write {path}: {exc}") from exc
        return path

    # ------------------------------------------------------------------
    # Named configurations
    # ------------------------------------------------------------------

    def list_names(self) -> list[str]:
        """Stored configuration names, sorted, without the base template."""
        if not self.config_dir.is_dir():
            return []
        return sorted(
            path.stem
            for path in self.config_dir.glob(f"*{CONFIG_FILE_SUFFIX}")
            if path.is_file() and path.stem not in _RESERVED_NAMES
        )

    def load(self, name: str) -> NamedConfiguration:
        path = self.path_for(name)
        try:
            raw = yaml.load(path.read_text(encoding="utf-8"), Loader=yaml.BaseLoader)
        except FileNotFoundError as exc:
            raise ConfigStoreError(f"Configuration {name!r} does not exist") from exc
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigStoreError(f"Cannot read configuration {name!r}: {exc}") from exc

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigStoreError(f"Configuration {name!r} must be a mapping")
        nested = [key for key, value in raw.items() if isinstance(value, (dict, list))]
        if nested:
            raise ConfigStoreError(
                f"Configuration {name!r} has nested values: {', '.join(nested)}"
            )
        parameters = {str(key): str(value) for key, value in raw.items()}
        return NamedConfiguration(name=path.stem, parameters=parameters)

    def save(self, configuration: NamedConfiguration) -> Path:
        """Write *configuration*, replacing any existing one with that name."""
        path = self.path_for(configuration.name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(
                yaml.safe_dump(
                    configuration.parameters,
                    sort_keys=False,
                    default_flow_style=False,
                    allow_unicode=True,
                ),
                encoding="utf-8",
            )
        except OSError as exc:
            raise ConfigStoreError(f"Cannot save configuration {path.stem!r}: {exc}") from exc
        logger.info("Saved configuration %s", path)
        return path

    def delete(self, name: str) -> None:
        path = self.path_for(name)
        try:
            path.unlink()
        except FileNotFoundError as exc:
            raise ConfigStoreError(f"Configuration {name!r} does not exist") from exc
        except OSError as exc:
            raise ConfigStoreError(f"Cannot delete configuration {name!r}: {exc}") from exc
        logger.info("Deleted configuration %s", path)
