"""Errors raised by the job template engine and configuration store."""

from __future__ import annotations

from collections.abc import Iterable


class TemplateError(Exception):
    """Base exception for template handling."""


class TemplateParseError(TemplateError):
    """Raised when a template or edited parameter document cannot be parsed."""


class UnknownParameterError(TemplateError):
    """Raised when an edit names a parameter the template does not declare."""

    def __init__(self, names: Iterable[str]) -> None:
        self.names = tuple(names)
        super().__init__(f"Unknown parameter(s): {', '.join(self.names)}")


class MissingParameterError(TemplateError):
    """Raised when rendering finds a marker without a value."""

    def __init__(self, names: Iterable[str]) -> None:
        self.names = tuple(names)
        super().__init__(f"Missing value for parameter(s): {', '.join(self.names)}")


class ConfigStoreError(TemplateError):
    """Raised for invalid names or unreadable stored configurations."""
