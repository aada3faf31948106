"""Job template models."""

from kstool.models.templates.errors import (
    ConfigStoreError,
    MissingParameterError,
    TemplateError,
    TemplateParseError,
    UnknownParameterError,
)
from kstool.models.templates.parameter_set import NamedConfiguration, ParameterSet

__all__ = [
    "ConfigStoreError",
    "MissingParameterError",
    "NamedConfiguration",
    "ParameterSet",
    "TemplateError",
    "TemplateParseError",
    "UnknownParameterError",
]
