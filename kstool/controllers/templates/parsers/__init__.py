"""Parsers for templated job documents."""

from __future__ import annotations

from kstool.controllers.templates.parsers.document import (
    extract_from_text,
    extract_parameters,
    normalize_template,
    parse_document,
    render_template,
)

__all__ = [
    "extract_from_text",
    "extract_parameters",
    "normalize_template",
    "parse_document",
    "render_template",
]
