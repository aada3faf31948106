"""Models for the KSTool TUI."""
