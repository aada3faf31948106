"""Jobs screen, its presenter and the command dispatcher."""

from kstool.screens.jobs.dispatcher import CommandDispatcher, Notice
from kstool.screens.jobs.jobs_screen import JobsScreen
from kstool.screens.jobs.presenter import JobsPresenter, project

__all__ = ["CommandDispatcher", "JobsPresenter", "JobsScreen", "Notice", "project"]
