"""Configuration list and editor screens."""

from kstool.screens.configs.config_edit_screen import ConfigEditScreen
from kstool.screens.configs.config_list_screen import ConfigListScreen

__all__ = ["ConfigEditScreen", "ConfigListScreen"]
