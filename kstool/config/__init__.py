"""Bundled default job template."""
