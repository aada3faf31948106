"""Configuration list screen - stored job configurations plus "Create New"."""

from __future__ import annotations

import logging

from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer, Label, ListItem, ListView, Static

from kstool.constants.enums import ViewState
from kstool.keyboard import CONFIG_LIST_SCREEN_BINDINGS
from kstool.screens.configs.config import (
    ACTION_APPLY,
    ACTION_BACK,
    ACTION_CHANGE,
    CONFIG_LIST_ID,
    CREATE_NEW_LABEL,
    LIST_HELP_TEXT,
)
from kstool.screens.configs.config_edit_screen import ConfigEditScreen
from kstool.screens.jobs.dispatcher import CommandDispatcher
from kstool.screens.mixins import NoticeMixin
from kstool.widgets.feedback import CustomChoiceDialog, CustomConfirmDialog

logger = logging.getLogger(__name__)


class ConfigListScreen(NoticeMixin, Screen[None]):
    """Lists stored configurations; dismissed when returning to the jobs view."""

    BINDINGS: list[Binding] = CONFIG_LIST_SCREEN_BINDINGS

    DEFAULT_CSS = """
    ConfigListScreen #config-list {
        height: 1fr;
        border: round $primary;
        border-title-align: left;
    }
    ConfigListScreen .config-help {
        height: 1;
        content-align: center middle;
        color: $text-muted;
    }
    """

    def __init__(self, dispatcher: CommandDispatcher) -> None:
        super().__init__()
        self.dispatcher = dispatcher
        self._names: list[str] = []

    def compose(self) -> ComposeResult:
        list_view = ListView(id=CONFIG_LIST_ID)
        list_view.border_title = "Available Configurations"
        yield list_view
        yield Static(LIST_HELP_TEXT, classes="config-help")
        yield Footer()

    async def on_mount(self) -> None:
        await self.reload_names()
        self.query_one(f"#{CONFIG_LIST_ID}", ListView).focus()
        self.show_notices()

    async def reload_names(self) -> None:
        self._names = self.dispatcher.config_names()
        list_view = self.query_one(f"#{CONFIG_LIST_ID}", ListView)
        await list_view.clear()
        await list_view.extend(
            [ListItem(Label(f"[b]{CREATE_NEW_LABEL}[/b]"))]
            + [ListItem(Label(name, markup=False)) for name in self._names]
        )
        list_view.index = 0

    def _selected_name(self) -> str | None:
        index = self.query_one(f"#{CONFIG_LIST_ID}", ListView).index
        if index is None or index == 0 or index > len(self._names):
            return None
        return self._names[index - 1]

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _open_editor(self) -> None:
        async def _closed(_: bool | None) -> None:
            if self.dispatcher.state is ViewState.MAIN_VIEW:
                self.dismiss(None)
                return
            await self.reload_names()
            self.show_notices()

        self.app.push_screen(ConfigEditScreen(self.dispatcher), callback=_closed)

    async def on_list_view_selected(self, event: ListView.Selected) -> None:
        event.stop()
        name = self._selected_name()
        if name is None:
            if self.dispatcher.new_config():
                self._open_editor()
            else:
                self.show_notices()
            return

        async def _chosen(choice: str | None) -> None:
            if choice == ACTION_APPLY:
                applied = await self.dispatcher.apply_named(name)
                if applied:
                    self.dismiss(None)
                    return
            elif choice == ACTION_CHANGE and self.dispatcher.load_config(name):
                self._open_editor()
                return
            self.show_notices()

        self.app.push_screen(
            CustomChoiceDialog(
                f"Configuration: {name}\n\nSelect action:",
                [ACTION_APPLY, ACTION_CHANGE, ACTION_BACK],
            ),
            callback=_chosen,
        )

    def action_cursor_down(self) -> None:
        self.query_one(f"#{CONFIG_LIST_ID}", ListView).action_cursor_down()

    def action_cursor_up(self) -> None:
        self.query_one(f"#{CONFIG_LIST_ID}", ListView).action_cursor_up()

    def action_delete_config(self) -> None:
        name = self._selected_name()
        if name is None:
            return
        self.dispatcher.request_config_delete(name)

        async def _done(confirmed: bool | None) -> None:
            if self.dispatcher.confirm_config_delete(bool(confirmed)):
                await self.reload_names()
            self.show_notices()

        self.app.push_screen(
            CustomConfirmDialog(
                f"Are you sure you want to delete configuration '{name}'?",
                title="Delete Configuration",
                confirm_label="Delete",
            ),
            callback=_done,
        )

    def action_back(self) -> None:
        self.dispatcher.close_config_views()
        self.dismiss(None)
