"""Jobs screen - the main table of batch Jobs in the namespace."""

from __future__ import annotations

import logging
from contextlib import suppress

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Static

from kstool.constants.enums import ViewState
from kstool.keyboard import JOBS_SCREEN_BINDINGS
from kstool.models.core.job_info import JobInfo
from kstool.screens.jobs.config import (
    JOBS_TABLE_COLUMNS,
    JOBS_TABLE_ID,
    STATUS_LINE_ID,
    VERSION_LINE_ID,
)
from kstool.screens.jobs.dispatcher import CommandDispatcher
from kstool.screens.jobs.presenter import JobsPresenter
from kstool.screens.mixins import NoticeMixin
from kstool.widgets.feedback import CustomConfirmDialog

logger = logging.getLogger(__name__)


class JobsScreen(NoticeMixin, Screen[None]):
    """Main view: jobs table, status line and version line."""

    BINDINGS: list[Binding] = JOBS_SCREEN_BINDINGS

    DEFAULT_CSS = """
    JobsScreen #jobs-status-line {
        height: 1;
        padding: 0 1;
    }
    JobsScreen #jobs-version-line {
        height: 1;
        padding: 0 1;
        color: $text-muted;
    }
    JobsScreen #jobs-table {
        height: 1fr;
    }
    """

    def __init__(self, dispatcher: CommandDispatcher) -> None:
        super().__init__()
        self.dispatcher = dispatcher
        self._presenter = JobsPresenter()
        self._visible: list[JobInfo] = []

    def compose(self) -> ComposeResult:
        yield Static("", id=STATUS_LINE_ID)
        table: DataTable = DataTable(
            id=JOBS_TABLE_ID,
            cursor_type="row",
            zebra_stripes=True,
        )
        for name, width in JOBS_TABLE_COLUMNS:
            table.add_column(name, width=width)
        yield table
        yield Static(self._presenter.version_line(), id=VERSION_LINE_ID)
        yield Footer()

    def on_mount(self) -> None:
        self.render_jobs()
        self.query_one(f"#{JOBS_TABLE_ID}", DataTable).focus()
        self.show_notices()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def selected_job(self) -> JobInfo | None:
        try:
            table = self.query_one(f"#{JOBS_TABLE_ID}", DataTable)
        except NoMatches:
            return None
        row = table.cursor_row
        if 0 <= row < len(self._visible):
            return self._visible[row]
        return None

    def render_jobs(self) -> None:
        """Rebuild the table from the dispatcher's snapshot and filter state."""
        previous = self.selected_job()
        self._visible = self.dispatcher.visible_jobs()
        table = self.query_one(f"#{JOBS_TABLE_ID}", DataTable)
        table.clear()
        for job, row in zip(
            self._visible, self._presenter.get_job_rows(self._visible), strict=True
        ):
            table.add_row(*row, key=job.name)

        if previous is not None:
            with suppress(Exception):
                table.move_cursor(row=table.get_row_index(previous.name))

        self.query_one(f"#{STATUS_LINE_ID}", Static).update(
            self._presenter.status_line(
                self.dispatcher.filter_state,
                len(self._visible),
                len(self.dispatcher.snapshot),
            )
        )

    def sync_view(self) -> None:
        """Redraw, then show notices and whatever the dispatcher state calls for."""
        self.render_jobs()
        self.show_notices(then=self._open_state_view)

    def _open_state_view(self) -> None:
        state = self.dispatcher.state
        if state is ViewState.CONFIRM_DELETE_MODAL and self.dispatcher.pending_delete:
            self._confirm_delete(self.dispatcher.pending_delete)
        elif state is ViewState.CONFIG_LIST_VIEW:
            from kstool.screens.configs import ConfigListScreen

            self.app.push_screen(
                ConfigListScreen(self.dispatcher),
                callback=lambda _: self.sync_view(),
            )

    def _confirm_delete(self, job: JobInfo) -> None:
        labels = "\n".join(
            f"  {escape(key)}: {escape(value)}" for key, value in sorted(job.labels.items())
        )
        message = (
            f"Delete job [b]{escape(job.name)}[/b] ({job.status.value})?"
            + (f"\n\nLabels:\n{labels}" if labels else "")
        )

        async def _done(confirmed: bool | None) -> None:
            await self.dispatcher.confirm_delete(bool(confirmed))
            self.sync_view()

        self.app.push_screen(
            CustomConfirmDialog(
                message,
                title="Delete Job",
                confirm_label="Delete",
            ),
            callback=_done,
        )

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    async def action_dispatch(self, key: str) -> None:
        """Forward a main-view key to the dispatcher and redraw."""
        handled = await self.dispatcher.handle_key(key, self.selected_job())
        if handled:
            self.sync_view()
