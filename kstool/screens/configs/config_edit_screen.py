"""Configuration edit screen - one field per template parameter.

Dismisses with True when the configuration was applied, False otherwise.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from contextlib import suppress
from typing import TYPE_CHECKING

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.screen import Screen
from textual.widgets import Button, Footer, Input, Label, Select, Static

from kstool.constants.enums import ViewState
from kstool.constants.values import GPU_PRODUCT_PARAMETER
from kstool.keyboard import CONFIG_EDIT_SCREEN_BINDINGS
from kstool.screens.configs.config import (
    CONFIG_FORM_ID,
    FORM_HELP_TEXT,
    PARAM_INPUT_ID_PREFIX,
    UNSAVED_CHANGES_MESSAGE,
)
from kstool.screens.jobs.dispatcher import CommandDispatcher
from kstool.screens.mixins import NoticeMixin
from kstool.widgets.feedback import CustomConfirmDialog, CustomInputDialog

if TYPE_CHECKING:
    from textual.widgets.select import NoSelection

logger = logging.getLogger(__name__)


def known_gpu_choice(current: str, options: Sequence[str]) -> str | None:
    """Return *current* when it is one of the known GPU models, else None."""
    return current if current in options else None


class ConfigEditScreen(NoticeMixin, Screen[bool]):
    """Form over the dispatcher's current parameter set."""

    BINDINGS: list[Binding] = CONFIG_EDIT_SCREEN_BINDINGS

    DEFAULT_CSS = """
    ConfigEditScreen #config-form {
        height: 1fr;
        border: round $primary;
        border-title-align: left;
        padding: 0 1;
    }
    ConfigEditScreen .param-row {
        height: 3;
    }
    ConfigEditScreen .param-label {
        width: 24;
        padding: 1 1 0 0;
    }
    ConfigEditScreen .param-field {
        width: 1fr;
    }
    ConfigEditScreen Select.-invalid {
        border: tall $error;
    }
    ConfigEditScreen .form-buttons {
        height: 3;
        align: center middle;
    }
    ConfigEditScreen .form-buttons Button {
        margin: 0 1;
    }
    ConfigEditScreen .config-help {
        height: 1;
        content-align: center middle;
        color: $text-muted;
    }
    """

    def __init__(self, dispatcher: CommandDispatcher) -> None:
        super().__init__()
        self.dispatcher = dispatcher
        self._gpu_options = list(dispatcher.gpu_options)
        self._names = dispatcher.parameters.names() if dispatcher.parameters else []

    def _title(self) -> str:
        name = self.dispatcher.config_name
        return f"Job Configuration: {name}" if name else "Job Configuration"

    def _gpu_select_options(self) -> list[tuple[str, str]]:
        return [(option, option) for option in self._gpu_options]

    def _gpu_choice(self, value: str) -> str | NoSelection:
        choice = known_gpu_choice(value, self._gpu_options)
        return Select.BLANK if choice is None else choice

    def _mark_unknown_gpu(self, select: Select, value: str) -> None:
        """Flag a value outside the known models instead of offering it."""
        invalid = bool(value) and known_gpu_choice(value, self._gpu_options) is None
        select.set_class(invalid, "-invalid")
        select.tooltip = f"Unknown GPU model: {value}" if invalid else None

    def compose(self) -> ComposeResult:
        parameters = self.dispatcher.parameters
        with VerticalScroll(id=CONFIG_FORM_ID) as form:
            form.border_title = self._title()
            for index, name in enumerate(self._names):
                value = parameters.get(name, "") if parameters else ""
                field_id = f"{PARAM_INPUT_ID_PREFIX}{index}"
                with Horizontal(classes="param-row"):
                    yield Label(name, classes="param-label", markup=False)
                    if name == GPU_PRODUCT_PARAMETER:
                        select = Select(
                            self._gpu_select_options(),
                            value=self._gpu_choice(value or ""),
                            allow_blank=True,
                            id=field_id,
                            classes="param-field",
                        )
                        self._mark_unknown_gpu(select, value or "")
                        yield select
                    else:
                        yield Input(value=value or "", id=field_id, classes="param-field")
        with Horizontal(classes="form-buttons"):
            yield Button("Edit in Vim (Ctrl+E)", id="edit-btn")
            yield Button("Save Config (Ctrl+S)", id="save-btn", variant="primary")
            yield Button("Apply (F5)", id="apply-btn", variant="success")
            yield Button("Back (Esc)", id="back-btn")
        yield Static(FORM_HELP_TEXT, classes="config-help")
        yield Footer()

    def on_mount(self) -> None:
        with suppress(Exception):
            self.query_one(f"#{PARAM_INPUT_ID_PREFIX}0").focus()

    # ------------------------------------------------------------------
    # Field changes
    # ------------------------------------------------------------------

    def _name_for(self, widget_id: str | None) -> str | None:
        if not widget_id or not widget_id.startswith(PARAM_INPUT_ID_PREFIX):
            return None
        with suppress(ValueError, IndexError):
            return self._names[int(widget_id[len(PARAM_INPUT_ID_PREFIX) :])]
        return None

    def on_input_changed(self, event: Input.Changed) -> None:
        name = self._name_for(event.input.id)
        if name is not None:
            self.dispatcher.update_parameter(name, event.value)

    def on_select_changed(self, event: Select.Changed) -> None:
        name = self._name_for(event.select.id)
        if name is not None and event.value is not Select.BLANK:
            self.dispatcher.update_parameter(name, str(event.value))
            self._mark_unknown_gpu(event.select, str(event.value))

    def _refresh_fields(self) -> None:
        """Copy the dispatcher's parameter values back into the widgets."""
        parameters = self.dispatcher.parameters
        if parameters is None:
            return
        for index, name in enumerate(self._names):
            value = parameters.get(name, "") or ""
            widget = self.query_one(f"#{PARAM_INPUT_ID_PREFIX}{index}")
            if isinstance(widget, Select):
                widget.value = self._gpu_choice(value)
                self._mark_unknown_gpu(widget, value)
            elif isinstance(widget, Input):
                widget.value = value
        self.query_one(f"#{CONFIG_FORM_ID}", VerticalScroll).border_title = self._title()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        button_id = event.button.id
        if button_id == "apply-btn":
            await self.action_apply()
        elif button_id == "edit-btn":
            self.action_edit_in_editor()
        elif button_id == "save-btn":
            self.action_save()
        elif button_id == "back-btn":
            self.action_back()

    def action_edit_in_editor(self) -> None:
        if self.dispatcher.edit_in_editor():
            self._refresh_fields()
        self.show_notices()

    def action_save(self) -> None:
        self.dispatcher.begin_save()
        if self.dispatcher.state is not ViewState.SAVE_NAME_MODAL:
            return

        def _named(name: str | None) -> None:
            if name is None:
                self.dispatcher.cancel_save()
            else:
                self.dispatcher.save_config(name)
                self._refresh_fields()
            self.show_notices()

        self.app.push_screen(
            CustomInputDialog(
                "Enter configuration name:",
                title="Save Configuration",
                value=self.dispatcher.config_name or "",
                placeholder="Config Name",
            ),
            callback=_named,
        )

    async def action_apply(self) -> None:
        if await self.dispatcher.apply_config():
            self.dismiss(True)
        else:
            self.show_notices()

    def action_back(self) -> None:
        if self.dispatcher.leave_editor():
            self.dismiss(False)
            return

        def _confirmed(confirmed: bool | None) -> None:
            if confirmed and self.dispatcher.leave_editor(force=True):
                self.dismiss(False)

        self.app.push_screen(
            CustomConfirmDialog(
                UNSAVED_CHANGES_MESSAGE,
                title="Unsaved Changes",
                confirm_label="Yes",
            ),
            callback=_confirmed,
        )
