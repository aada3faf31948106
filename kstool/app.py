"""Main application class for KSTool."""

from __future__ import annotations

from textual.app import App
from textual.binding import Binding

from kstool.constants import APP_TITLE, APP_VERSION
from kstool.controllers.cluster.controller import ClusterController
from kstool.controllers.templates.controller import TemplateController
from kstool.keyboard.app import APP_BINDINGS
from kstool.models.core.job_info import JobInfo
from kstool.models.state.app_settings import AppSettings
from kstool.screens.jobs.dispatcher import CommandDispatcher
from kstool.screens.jobs.jobs_screen import JobsScreen


class KSToolApp(App[None]):
    """Main TUI application for KSTool."""

    TITLE = APP_TITLE
    SUB_TITLE = APP_VERSION
    BINDINGS: list[Binding] = APP_BINDINGS

    settings: AppSettings
    dispatcher: CommandDispatcher

    def __init__(
        self,
        settings: AppSettings,
        cluster: ClusterController,
        templates: TemplateController,
        initial_snapshot: list[JobInfo] | None = None,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.settings = settings
        self.dispatcher = CommandDispatcher(
            cluster,
            templates,
            settings.identity,
            refresh_interval=settings.refresh_interval_seconds,
            session_context=self.suspend,
            shell=settings.shell,
            editor=settings.editor,
            viewer=settings.viewer,
            gpu_options=settings.gpu_product_options,
        )
        if initial_snapshot is not None:
            self.dispatcher.set_initial_snapshot(initial_snapshot)

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.push_screen(JobsScreen(self.dispatcher))

    def action_quit(self) -> None:  # type: ignore[override]
        """Quit the application."""
        self.exit()


__all__ = [
    "KSToolApp",
]
