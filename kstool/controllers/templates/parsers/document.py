"""Template document parser - extracts ``${NAME:-DEFAULT}`` parameters.

A template is YAML whose string scalars may embed placeholders. The
document is converted into a small tree of nodes so extraction only ever
looks at string values, never at keys or at YAML comments.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Collection, Iterator
from dataclasses import dataclass
from typing import Any, Union

import yaml

from kstool.models.templates.errors import MissingParameterError, TemplateParseError
from kstool.models.templates.parameter_set import ParameterSet

logger = logging.getLogger(__name__)

# NAME excludes ':' and '}', DEFAULT excludes '}' and may not be empty.
PLACEHOLDER_PATTERN = re.compile(r"\$\{([^:}]+):-([^}]+)\}")
# Bare marker left behind by normalization.
MARKER_PATTERN = re.compile(r"\$\{([^:}]+)\}")


@dataclass(frozen=True, slots=True)
class ScalarNode:
    value: Any


@dataclass(frozen=True, slots=True)
class SequenceNode:
    items: tuple[Node, ...]


@dataclass(frozen=True, slots=True)
class MappingNode:
    entries: tuple[tuple[Any, Node], ...]


Node = Union[ScalarNode, SequenceNode, MappingNode]


def to_node(data: Any) -> Node:
    """Convert plain ``yaml.safe_load`` output into a node tree."""
    if isinstance(data, dict):
        return MappingNode(tuple((key, to_node(value)) for key, value in data.items()))
    if isinstance(data, list):
        return SequenceNode(tuple(to_node(item) for item in data))
    return ScalarNode(data)


def parse_document(text: str) -> Node:
    """Parse template text into a node tree.

    Raises:
        TemplateParseError: If the text is not valid YAML.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise TemplateParseError(f"Template is not valid YAML: {exc}") from exc
    return to_node(data)


def iter_strings(node: Node) -> Iterator[str]:
    """Yield string scalar values in document order."""
    if isinstance(node, ScalarNode):
        if isinstance(node.value, str):
            yield node.value
    elif isinstance(node, SequenceNode):
        for item in node.items:
            yield from iter_strings(item)
    else:
        for _key, value in node.entries:
            yield from iter_strings(value)


def extract_parameters(node: Node) -> ParameterSet:
    """Collect every placeholder's default; the first default seen for a name wins."""
    defaults: dict[str, str] = {}
    for text in iter_strings(node):
        for name, default in PLACEHOLDER_PATTERN.findall(text):
            if name in defaults:
                if defaults[name] != default:
                    logger.debug(
                        "Ignoring default %r for %s, keeping %r",
                        default,
                        name,
                        defaults[name],
                    )
                continue
            defaults[name] = default
    return ParameterSet(defaults)


def extract_from_text(text: str) -> ParameterSet:
    return extract_parameters(parse_document(text))


def normalize_template(text: str, names: Collection[str] | None = None) -> str:
    """Rewrite ``${NAME:-DEFAULT}`` as a bare ``${NAME}`` marker.

    With *names*, only those placeholders are rewritten; anything else
    (placeholders in comments or mapping keys) is left as written.
    """

    def _strip(match: re.Match[str]) -> str:
        if names is not None and match.group(1) not in names:
            return match.group(0)
        return "${" + match.group(1) + "}"

    return PLACEHOLDER_PATTERN.sub(_strip, text)


def marker_names(text: str) -> list[str]:
    """Distinct marker names in order of first appearance."""
    return list(dict.fromkeys(MARKER_PATTERN.findall(text)))


def render_template(normalized: str, parameters: ParameterSet) -> str:
    """Substitute every marker in *normalized* with its parameter value.

    Raises:
        MissingParameterError: If any marker has no value; nothing is
            substituted in that case.
        TemplateParseError: If the substituted text is no longer valid YAML.
    """
    missing = [name for name in marker_names(normalized) if name not in parameters]
    if missing:
        raise MissingParameterError(missing)

    rendered = MARKER_PATTERN.sub(lambda match: parameters[match.group(1)], normalized)
    try:
        yaml.safe_load(rendered)
    except yaml.YAMLError as exc:
        raise TemplateParseError(f"Rendered document is not valid YAML: {exc}") from exc
    return rendered
