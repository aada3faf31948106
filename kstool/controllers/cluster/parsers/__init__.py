"""Parsers for raw cluster JSON."""

from __future__ import annotations

from kstool.controllers.cluster.parsers.job_parser import JobParser

__all__ = ["JobParser"]
