"""NoticeMixin - shows dispatcher notices one at a time as modal dialogs."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from kstool.constants.enums import Severity
from kstool.widgets.feedback import CustomMessageDialog

if TYPE_CHECKING:
    from kstool.screens.jobs.dispatcher import CommandDispatcher

logger = logging.getLogger(__name__)


class NoticeMixin:
    """Mixin for screens driven by a :class:`CommandDispatcher`.

    Every pending notice is shown in turn; each is dismissed in the
    dispatcher only after the user acknowledges its dialog.
    """

    dispatcher: CommandDispatcher

    def show_notices(self, then: Callable[[], Any] | None = None) -> None:
        """Show pending notices, then call *then* once all are acknowledged."""
        notice = self.dispatcher.notice
        if notice is None:
            if then is not None:
                then()
            return

        def _acknowledged(_: None) -> None:
            self.dispatcher.dismiss_notice()
            self.show_notices(then)

        severity = "error" if notice.severity is Severity.ERROR else "information"
        self.app.push_screen(  # type: ignore[attr-defined]
            CustomMessageDialog(notice.message, title=notice.title, severity=severity),
            callback=_acknowledged,
        )
