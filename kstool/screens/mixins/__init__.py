"""Screen mixins."""

from kstool.screens.mixins.notice_mixin import NoticeMixin

__all__ = ["NoticeMixin"]
