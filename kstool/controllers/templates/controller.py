"""Template controller - parameter extraction, editing, persistence and apply."""

from __future__ import annotations

import logging
from collections.abc import Mapping

import yaml

from kstool.controllers.cluster.controller import ClusterController
from kstool.controllers.templates.parsers.document import (
    extract_from_text,
    normalize_template,
    render_template,
)
from kstool.controllers.templates.store import ConfigStore
from kstool.models.templates.errors import TemplateParseError, UnknownParameterError
from kstool.models.templates.parameter_set import NamedConfiguration, ParameterSet

logger = logging.getLogger(__name__)


class TemplateController:
    """Turns the base template plus a parameter set into a submitted Job."""

    def __init__(self, store: ConfigStore, cluster: ClusterController) -> None:
        self.store = store
        self.cluster = cluster
        self._defaults: ParameterSet | None = None
        self._normalized: str | None = None

    def _load_template(self) -> None:
        text = self.store.read_base_template()
        defaults = extract_from_text(text)
        normalized = normalize_template(text, defaults.names())
        self.store.write_normalized_template(normalized)
        self._defaults = defaults
        self._normalized = normalized
        logger.debug("Template declares %d parameters", len(defaults))

    def reload(self) -> None:
        """Re-read the base template from disk."""
        self._defaults = None
        self._normalized = None
        self._load_template()

    @property
    def normalized_template(self) -> str:
        if self._normalized is None:
            self._load_template()
        assert self._normalized is not None
        return self._normalized

    def new_parameter_set(self) -> ParameterSet:
        """A fresh set holding the template's declared defaults."""
        if self._defaults is None:
            self._load_template()
        assert self._defaults is not None
        return self._defaults.copy()

    # ------------------------------------------------------------------
    # Named configurations
    # ------------------------------------------------------------------

    def list_names(self) -> list[str]:
        return self.store.list_names()

    def load(self, name: str) -> ParameterSet:
        """Load *name* on top of the template defaults.

        Stored keys the template no longer declares are ignored.
        """
        configuration = self.store.load(name)
        parameters = self.new_parameter_set()
        known = {k: v for k, v in configuration.parameters.items() if k in parameters}
        stale = sorted(set(configuration.parameters) - set(known))
        if stale:
            logger.warning(
                "Configuration %s has parameters unknown to the template: %s",
                name,
                ", ".join(stale),
            )
        return parameters.merged(known)

    def save(self, name: str, parameters: ParameterSet) -> str:
        """Persist *parameters* under *name* and return the stored name."""
        clean_name = self.store.validate_name(name)
        self.store.save(
            NamedConfiguration(name=clean_name, parameters=parameters.as_dict())
        )
        return clean_name

    def delete(self, name: str) -> None:
        self.store.delete(name)

    # ------------------------------------------------------------------
    # Bulk text editing
    # ------------------------------------------------------------------

    @staticmethod
    def export_for_editor(parameters: ParameterSet) -> str:
        return yaml.safe_dump(
            parameters.as_dict(),
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )

    @staticmethod
    def _scalar_text(name: str, value: object) -> str:
        if isinstance(value, (dict, list)):
            raise TemplateParseError(f"Value for {name} must be a single value")
        return str(value)

    def import_from_editor(self, text: str, parameters: ParameterSet) -> ParameterSet:
        """Parse an edited document back into a new parameter set.

        *parameters* is never modified; on any error the caller keeps it.
        Names left out of the edited document keep their previous values.
        Values are kept exactly as typed: no YAML type resolution is applied.
        """
        try:
            data = yaml.load(text, Loader=yaml.BaseLoader)
        except yaml.YAMLError as exc:
            raise TemplateParseError(f"Edited document is not valid YAML: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise TemplateParseError("Edited document must be a mapping of name: value")

        updates = {
            str(name): self._scalar_text(str(name), value)
            for name, value in data.items()
        }
        unknown = [name for name in updates if name not in parameters]
        if unknown:
            raise UnknownParameterError(unknown)
        return parameters.merged(updates)

    # ------------------------------------------------------------------
    # Render / apply
    # ------------------------------------------------------------------

    def render(self, parameters: ParameterSet) -> str:
        return render_template(self.normalized_template, parameters)

    async def apply(self, parameters: ParameterSet) -> str:
        """Render and submit; returns the created Job's name.

        Rendering errors are raised before anything is sent to the cluster.
        """
        document = self.render(parameters)
        return await self.cluster.create_document(document)
