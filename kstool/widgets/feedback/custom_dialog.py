"""Custom dialog widgets for the TUI application.

Standard Reactive Pattern:
- Dialogs are modal screens, inherit from ModalScreen
- No reactive state needed (they manage their own lifecycle)

CSS Classes: widget-custom-dialog
"""

from collections.abc import Callable, Sequence
from contextlib import suppress

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.events import Resize
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static

_DIALOG_MIN_WIDTH = 36
_DIALOG_SIDE_MARGIN = 6
_DIALOG_CONTENT_PADDING = 8
_DIALOG_MIN_HEIGHT = 8
_DIALOG_VERTICAL_MARGIN = 4

_DIALOG_CSS = """
.widget-custom-dialog {
    align: center middle;
    background: $background 60%;
}
.widget-custom-dialog .dialog-container {
    border: round $primary;
    background: $surface;
    padding: 1 2;
    height: auto;
}
.widget-custom-dialog .dialog-title {
    text-style: bold;
    width: 100%;
    content-align: center middle;
    margin-bottom: 1;
}
.widget-custom-dialog .dialog-message {
    width: 100%;
    margin-bottom: 1;
}
.widget-custom-dialog .dialog-buttons {
    height: auto;
    align: center middle;
}
.widget-custom-dialog .dialog-btn {
    margin: 0 1;
    min-width: 10;
}
"""


def _max_line_width(*values: str) -> int:
    width = 0
    for value in values:
        for line in value.splitlines() or [""]:
            width = max(width, len(line))
    return width


def _fit_dialog_width(dialog: ModalScreen, content_width: int) -> int:
    available_width = max(
        _DIALOG_MIN_WIDTH,
        getattr(dialog.app.size, "width", _DIALOG_MIN_WIDTH + _DIALOG_SIDE_MARGIN)
        - _DIALOG_SIDE_MARGIN,
    )
    return max(
        _DIALOG_MIN_WIDTH,
        min(content_width + _DIALOG_CONTENT_PADDING, available_width),
    )


def _apply_dialog_shell_size(dialog: ModalScreen, content_width: int) -> None:
    dialog_width = _fit_dialog_width(dialog, content_width)
    dialog_max_height = max(
        _DIALOG_MIN_HEIGHT,
        getattr(dialog.app.size, "height", _DIALOG_MIN_HEIGHT + _DIALOG_VERTICAL_MARGIN)
        - _DIALOG_VERTICAL_MARGIN,
    )
    with suppress(Exception):
        container = dialog.query_one(".dialog-container", Vertical)
        width_value = str(dialog_width)
        container.styles.width = width_value
        container.styles.min_width = width_value
        container.styles.max_width = width_value
        container.styles.height = "auto"
        container.styles.max_height = str(dialog_max_height)


class CustomConfirmDialog(ModalScreen[bool]):
    """Confirmation dialog with confirm/cancel buttons."""

    DEFAULT_CSS = _DIALOG_CSS
    BINDINGS = [Binding("escape", "cancel", "Cancel", show=False)]

    def __init__(
        self,
        message: str,
        title: str = "Confirm",
        confirm_label: str = "OK",
        cancel_label: str = "Cancel",
        on_confirm: Callable[[], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the custom confirmation dialog.

        Args:
            message: Message to display.
            title: Dialog title.
            confirm_label: Label of the confirming button.
            cancel_label: Label of the cancelling button.
            on_confirm: Callback when confirmed.
            on_cancel: Callback when cancelled.
        """
        super().__init__(classes="widget-custom-dialog")
        self._message = message
        self._title = title
        self._confirm_label = confirm_label
        self._cancel_label = cancel_label
        self._on_confirm = on_confirm
        self._on_cancel = on_cancel

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog-container"):
            if self._title:
                yield Static(self._title, classes="dialog-title")
            yield Static(self._message, classes="dialog-message")
            with Horizontal(classes="dialog-buttons"):
                yield Button(
                    self._cancel_label,
                    id="cancel-btn",
                    classes="dialog-btn cancel",
                )
                yield Button(
                    self._confirm_label,
                    id="confirm-btn",
                    variant="error",
                    classes="dialog-btn confirm",
                )

    def on_mount(self) -> None:
        self._apply_dynamic_layout()
        with suppress(Exception):
            self.query_one("#cancel-btn", Button).focus()

    def on_resize(self, _: Resize) -> None:
        self._apply_dynamic_layout()

    def _apply_dynamic_layout(self) -> None:
        content_width = max(
            _max_line_width(self._title, self._message),
            len(self._confirm_label) + len(self._cancel_label) + 9,
        )
        _apply_dialog_shell_size(self, content_width)

    def action_cancel(self) -> None:
        self.dismiss(False)
        if self._on_cancel:
            self._on_cancel()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == "confirm-btn":
            self.dismiss(True)
            if self._on_confirm:
                self._on_confirm()
        else:
            self.action_cancel()


class CustomMessageDialog(ModalScreen[None]):
    """Message dialog that must be acknowledged with OK."""

    DEFAULT_CSS = _DIALOG_CSS
    BINDINGS = [
        Binding("escape", "acknowledge", "OK", show=False),
        Binding("enter", "acknowledge", "OK", show=False),
    ]

    def __init__(self, message: str, title: str = "", severity: str = "information") -> None:
        super().__init__(classes="widget-custom-dialog")
        self._message = message
        self._title = title
        self._severity = severity

    def compose(self) -> ComposeResult:
        variant = "error" if self._severity == "error" else "primary"
        with Vertical(classes="dialog-container"):
            if self._title:
                yield Static(self._title, classes="dialog-title")
            yield Static(self._message, classes="dialog-message", markup=False)
            with Horizontal(classes="dialog-buttons"):
                yield Button("OK", id="ok-btn", variant=variant, classes="dialog-btn")

    def on_mount(self) -> None:
        _apply_dialog_shell_size(self, _max_line_width(self._title, self._message))
        with suppress(Exception):
            self.query_one("#ok-btn", Button).focus()

    def on_resize(self, _: Resize) -> None:
        _apply_dialog_shell_size(self, _max_line_width(self._title, self._message))

    def action_acknowledge(self) -> None:
        self.dismiss(None)

    def on_button_pressed(self, _: Button.Pressed) -> None:
        self.dismiss(None)


class CustomInputDialog(ModalScreen[str | None]):
    """Single-line text prompt; dismisses with the text or None when cancelled."""

    DEFAULT_CSS = _DIALOG_CSS
    BINDINGS = [Binding("escape", "cancel", "Cancel", show=False)]

    def __init__(
        self,
        prompt: str,
        title: str = "",
        value: str = "",
        placeholder: str = "",
        confirm_label: str = "Save",
    ) -> None:
        super().__init__(classes="widget-custom-dialog")
        self._prompt = prompt
        self._title = title
        self._value = value
        self._placeholder = placeholder
        self._confirm_label = confirm_label

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog-container"):
            if self._title:
                yield Static(self._title, classes="dialog-title")
            yield Static(self._prompt, classes="dialog-message")
            yield Input(
                value=self._value,
                placeholder=self._placeholder,
                id="dialog-input",
            )
            with Horizontal(classes="dialog-buttons"):
                yield Button("Cancel", id="cancel-btn", classes="dialog-btn cancel")
                yield Button(
                    self._confirm_label,
                    id="confirm-btn",
                    variant="primary",
                    classes="dialog-btn confirm",
                )

    def on_mount(self) -> None:
        _apply_dialog_shell_size(self, max(_max_line_width(self._prompt), 30))
        self.query_one("#dialog-input", Input).focus()

    def action_cancel(self) -> None:
        self.dismiss(None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.dismiss(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "confirm-btn":
            self.dismiss(self.query_one("#dialog-input", Input).value)
        else:
            self.dismiss(None)


class CustomChoiceDialog(ModalScreen[str | None]):
    """Dialog offering several labelled actions; dismisses with the chosen label."""

    DEFAULT_CSS = _DIALOG_CSS
    BINDINGS = [Binding("escape", "cancel", "Cancel", show=False)]

    def __init__(self, message: str, choices: Sequence[str], title: str = "") -> None:
        super().__init__(classes="widget-custom-dialog")
        self._message = message
        self._choices = list(choices)
        self._title = title

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog-container"):
            if self._title:
                yield Static(self._title, classes="dialog-title")
            yield Static(self._message, classes="dialog-message")
            with Horizontal(classes="dialog-buttons"):
                for index, choice in enumerate(self._choices):
                    yield Button(
                        choice,
                        id=f"choice-{index}",
                        variant="primary" if index == 0 else "default",
                        classes="dialog-btn",
                    )

    def on_mount(self) -> None:
        buttons_width = sum(len(choice) + 6 for choice in self._choices)
        _apply_dialog_shell_size(
            self, max(_max_line_width(self._title, self._message), buttons_width)
        )

    def action_cancel(self) -> None:
        self.dismiss(None)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        index = int((event.button.id or "choice-0").rsplit("-", 1)[-1])
        self.dismiss(self._choices[index])
