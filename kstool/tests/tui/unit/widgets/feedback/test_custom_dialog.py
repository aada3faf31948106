"""Tests for CustomDialog widgets."""

from __future__ import annotations

from typing import Any

import pytest
from textual.app import App

from kstool.widgets.feedback.custom_dialog import (
    CustomChoiceDialog,
    CustomConfirmDialog,
    CustomInputDialog,
    CustomMessageDialog,
)


class DialogHost(App[None]):
    """Minimal app that records what a pushed dialog dismissed with."""

    def __init__(self) -> None:
        super().__init__()
        self.results: list[Any] = []

    def open(self, dialog: Any) -> None:
        self.push_screen(dialog, callback=self.results.append)


def test_custom_confirm_dialog_instantiation():
    """Test CustomConfirmDialog instantiation."""
    dialog = CustomConfirmDialog(message="Test message")
    assert dialog._message == "Test message"
    assert dialog._title == "Confirm"
    assert dialog._confirm_label == "OK"
    assert dialog.has_class("widget-custom-dialog")


def test_custom_confirm_dialog_with_callbacks():
    """Test CustomConfirmDialog with callbacks."""

    def on_confirm():
        pass

    def on_cancel():
        pass

    dialog = CustomConfirmDialog(
        message="Test",
        on_confirm=on_confirm,
        on_cancel=on_cancel,
    )
    assert dialog._on_confirm is on_confirm
    assert dialog._on_cancel is on_cancel


@pytest.mark.asyncio
async def test_confirm_dialog_confirm_button():
    """Pressing the confirm button dismisses with True and runs the callback."""
    confirmed = []
    app = DialogHost()
    async with app.run_test() as pilot:
        app.open(
            CustomConfirmDialog(
                "Delete job?", confirm_label="Delete", on_confirm=lambda: confirmed.append(1)
            )
        )
        await pilot.pause()
        await pilot.click("#confirm-btn")
        await pilot.pause()

    assert app.results == [True]
    assert confirmed == [1]


@pytest.mark.asyncio
async def test_confirm_dialog_escape_cancels():
    """Escape dismisses with False."""
    app = DialogHost()
    async with app.run_test() as pilot:
        app.open(CustomConfirmDialog("Delete job?"))
        await pilot.pause()
        await pilot.press("escape")
        await pilot.pause()

    assert app.results == [False]


@pytest.mark.asyncio
async def test_message_dialog_acknowledged_with_enter():
    """The message dialog closes on enter."""
    app = DialogHost()
    async with app.run_test() as pilot:
        app.open(CustomMessageDialog("Job [x] failed", title="Error", severity="error"))
        await pilot.pause()
        await pilot.press("enter")
        await pilot.pause()

    assert app.results == [None]


@pytest.mark.asyncio
async def test_input_dialog_returns_submitted_text():
    """Submitting the input dismisses with its text."""
    app = DialogHost()
    async with app.run_test() as pilot:
        app.open(CustomInputDialog("Enter configuration name:"))
        await pilot.pause()
        await pilot.press("a", "1", "enter")
        await pilot.pause()

    assert app.results == ["a1"]


@pytest.mark.asyncio
async def test_input_dialog_escape_returns_none():
    """Escape dismisses the input dialog with None."""
    app = DialogHost()
    async with app.run_test() as pilot:
        app.open(CustomInputDialog("Enter configuration name:"))
        await pilot.pause()
        await pilot.press("escape")
        await pilot.pause()

    assert app.results == [None]


@pytest.mark.asyncio
async def test_choice_dialog_returns_label():
    """Clicking a choice dismisses with that choice's label."""
    app = DialogHost()
    async with app.run_test(size=(100, 30)) as pilot:
        app.open(CustomChoiceDialog("Select action:", ["Apply", "Change", "Back"]))
        await pilot.pause()
        await pilot.click("#choice-1")
        await pilot.pause()

    assert app.results == ["Change"]
