"""Command dispatcher - maps key presses to job and configuration actions.

The dispatcher owns every piece of mutable UI state (snapshot, filter
state, parameter set, pending confirmations) and is driven one action at a
time from the screens. It never touches widgets; screens read its state
after each action and redraw.

States::

    MAIN_VIEW ──d──> CONFIRM_DELETE_MODAL ──confirm/cancel──> MAIN_VIEW
    MAIN_VIEW ──e──> SHELL_SESSION ──exit──> MAIN_VIEW (+refresh)
    MAIN_VIEW ──c──> CONFIG_VIEWER_SESSION ──exit──> MAIN_VIEW
    MAIN_VIEW ──n──> CONFIG_LIST_VIEW <──back── CONFIG_EDIT_VIEW
    CONFIG_EDIT_VIEW ──save──> SAVE_NAME_MODAL ──name/cancel──> CONFIG_EDIT_VIEW
    CONFIG_LIST_VIEW / CONFIG_EDIT_VIEW ──apply──> MAIN_VIEW (+refresh)
"""

from __future__ import annotations

import inspect
import logging
import time
from collections import deque
from collections.abc import Callable, Sequence
from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass

from kstool.constants.defaults import GPU_PRODUCT_OPTIONS_DEFAULT
from kstool.constants.enums import JobStatus, Severity, ViewState
from kstool.constants.timeouts import REFRESH_MIN_INTERVAL
from kstool.controllers.cluster.controller import (
    ClusterClientError,
    ClusterController,
    ClusterNotFoundError,
)
from kstool.controllers.templates.controller import TemplateController
from kstool.models.core.job_info import JobInfo
from kstool.models.state.filter_state import FilterState
from kstool.models.templates.errors import TemplateError
from kstool.models.templates.parameter_set import ParameterSet
from kstool.screens.jobs.presenter import project
from kstool.utils import audit, sessions
from kstool.utils.sessions import SessionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notice:
    """A message the user has to dismiss before anything else happens."""

    message: str
    severity: Severity = Severity.ERROR
    title: str = "Error"


class CommandDispatcher:
    """State machine behind the jobs screen and the configuration screens."""

    KEY_ACTIONS: dict[str, str] = {
        "r": "refresh",
        "f": "cycle_status_filter",
        "s": "cycle_sort_mode",
        "h": "toggle_ownership_filter",
        "d": "request_delete",
        "e": "enter_shell",
        "c": "view_config",
        "n": "open_config_list",
    }
    _SELECTION_ACTIONS = frozenset({"request_delete", "enter_shell", "view_config"})

    def __init__(
        self,
        cluster: ClusterController,
        templates: TemplateController,
        identity: str,
        *,
        refresh_interval: float = REFRESH_MIN_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        session_context: Callable[[], AbstractContextManager[object]] = nullcontext,
        run_interactive: Callable[..., int] = sessions.run_interactive,
        edit_text: Callable[[str, str], str] = sessions.edit_text,
        view_text: Callable[[str, str], None] = sessions.view_text,
        audit_record: Callable[[str, str, str], str] = audit.record,
        shell: str = "bash",
        editor: str = "vim",
        viewer: str = "vim -R",
        gpu_options: Sequence[str] = GPU_PRODUCT_OPTIONS_DEFAULT,
    ) -> None:
        self.cluster = cluster
        self.templates = templates
        self.identity = identity
        self.refresh_interval = refresh_interval
        self.shell = shell
        self.editor = editor
        self.viewer = viewer
        self.gpu_options = list(gpu_options)

        self._clock = clock
        self._session_context = session_context
        self._run_interactive = run_interactive
        self._edit_text = edit_text
        self._view_text = view_text
        self._audit = audit_record

        self.state = ViewState.MAIN_VIEW
        self.filter_state = FilterState()
        self.snapshot: list[JobInfo] = []
        self._last_refresh: float | None = None
        self._notices: deque[Notice] = deque()

        self.pending_delete: JobInfo | None = None
        self.pending_config_delete: str | None = None
        self.parameters: ParameterSet | None = None
        self.config_name: str | None = None
        self.dirty = False

    # ------------------------------------------------------------------
    # Notices
    # ------------------------------------------------------------------

    @property
    def notice(self) -> Notice | None:
        return self._notices[0] if self._notices else None

    def _notify(
        self,
        message: str,
        severity: Severity = Severity.ERROR,
        title: str | None = None,
    ) -> None:
        default_titles = {
            Severity.ERROR: "Error",
            Severity.WARNING: "Not allowed",
            Severity.INFO: "Done",
        }
        notice = Notice(message, severity, title or default_titles[severity])
        if severity is Severity.ERROR:
            logger.error("%s: %s", notice.title, message)
        else:
            logger.info("%s: %s", notice.title, message)
        self._notices.append(notice)

    def dismiss_notice(self) -> Notice | None:
        """Acknowledge the oldest pending notice."""
        return self._notices.popleft() if self._notices else None

    def is_blocked(self) -> bool:
        return bool(self._notices)

    # ------------------------------------------------------------------
    # Main view
    # ------------------------------------------------------------------

    def visible_jobs(self) -> list[JobInfo]:
        return project(self.snapshot, self.filter_state, self.identity)

    def set_initial_snapshot(self, snapshot: list[JobInfo]) -> None:
        """Install the snapshot fetched at startup; it counts as a refresh."""
        self.snapshot = list(snapshot)
        self._last_refresh = self._clock()

    async def handle_key(self, key: str, selected: JobInfo | None = None) -> bool:
        """Run the main-view action bound to *key*.

        Returns False when the key is ignored: unknown key, a notice is
        still pending, or the dispatcher is not in the main view.
        """
        action = self.KEY_ACTIONS.get(key)
        if action is None or self.is_blocked() or self.state is not ViewState.MAIN_VIEW:
            return False
        handler = getattr(self, action)
        result = handler(selected) if action in self._SELECTION_ACTIONS else handler()
        if inspect.isawaitable(result):
            await result
        return True

    async def refresh(self, force: bool = False) -> bool:
        """Replace the snapshot; throttled unless *force* is set.

        A failed fetch keeps the previous snapshot and raises a notice.
        """
        now = self._clock()
        if (
            not force
            and self._last_refresh is not None
            and now - self._last_refresh < self.refresh_interval
        ):
            logger.debug("Refresh ignored, last one %.2fs ago", now - self._last_refresh)
            return False
        try:
            snapshot = await self.cluster.fetch_snapshot()
        except ClusterClientError as exc:
            self._notify(f"Failed to refresh jobs: {exc}")
            return False
        self.snapshot = snapshot
        self._last_refresh = self._clock()
        return True

    def cycle_status_filter(self) -> None:
        self.filter_state = self.filter_state.with_next_status()

    def cycle_sort_mode(self) -> None:
        self.filter_state = self.filter_state.with_next_sort()

    def toggle_ownership_filter(self) -> None:
        self.filter_state = self.filter_state.with_owner_toggled()

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def _owner_violation(self, job: JobInfo, verb: str) -> str | None:
        if job.is_owned_by(self.identity):
            return None
        owner = job.owner or "unknown"
        return (
            f"You can only {verb} your own jobs. "
            f"Job {job.name} belongs to {owner}, you are {self.identity or 'unknown'}."
        )

    def request_delete(self, selected: JobInfo | None) -> None:
        if selected is None:
            return
        violation = self._owner_violation(selected, "delete")
        if violation:
            self._notify(violation, Severity.WARNING)
            return
        self.pending_delete = selected
        self.state = ViewState.CONFIRM_DELETE_MODAL

    async def confirm_delete(self, confirmed: bool) -> bool:
        """Finish the delete confirmation; returns True if the job was deleted."""
        if self.state is not ViewState.CONFIRM_DELETE_MODAL or self.pending_delete is None:
            return False
        job = self.pending_delete
        self.pending_delete = None
        self.state = ViewState.MAIN_VIEW
        if not confirmed:
            return False

        try:
            live = await self.cluster.get_job(job.name)
        except ClusterNotFoundError:
            self._notify(f"Job {job.name} no longer exists", Severity.WARNING, "Gone")
            await self.refresh(force=True)
            return False
        except ClusterClientError as exc:
            self._notify(f"Failed to look up job {job.name}: {exc}")
            return False

        violation = self._owner_violation(live, "delete")
        if violation:
            self._notify(violation, Severity.WARNING)
            return False

        try:
            await self.cluster.delete_job(job.name)
        except ClusterClientError as exc:
            self._notify(f"Failed to delete job {job.name}: {exc}")
            return False

        self._audit(self.identity, "Deleted Job", job.name)
        await self.refresh(force=True)
        return True

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    async def enter_shell(self, selected: JobInfo | None) -> None:
        """Open a shell in the job's first running pod."""
        if selected is None:
            return
        if selected.status is not JobStatus.RUNNING:
            self._notify(
                f"Job {selected.name} is {selected.status.value}; "
                "only running jobs can be entered",
                Severity.WARNING,
            )
            return
        violation = self._owner_violation(selected, "enter")
        if violation:
            self._notify(violation, Severity.WARNING)
            return

        self.state = ViewState.SHELL_SESSION
        try:
            pod = await self.cluster.find_running_pod(selected.name)
            if pod is None:
                self._notify(f"No running pod found for job {selected.name}", Severity.WARNING)
                return
            self._audit(self.identity, "Entered Job", selected.name)
            with self._session_context():
                self._run_interactive(self.cluster.shell_command(pod, self.shell))
        except (ClusterClientError, SessionError) as exc:
            self._notify(f"Failed to enter job {selected.name}: {exc}")
        finally:
            self.state = ViewState.MAIN_VIEW
        await self.refresh(force=True)

    async def view_config(self, selected: JobInfo | None) -> None:
        """Show the live Job definition read-only."""
        if selected is None:
            return
        self.state = ViewState.CONFIG_VIEWER_SESSION
        try:
            text = await self.cluster.get_job_yaml(selected.name)
            with self._session_context():
                self._view_text(text, self.viewer)
        except (ClusterClientError, SessionError) as exc:
            self._notify(f"Failed to show job {selected.name}: {exc}")
        finally:
            self.state = ViewState.MAIN_VIEW

    # ------------------------------------------------------------------
    # Configuration list
    # ------------------------------------------------------------------

    def open_config_list(self) -> None:
        self.pending_config_delete = None
        self.state = ViewState.CONFIG_LIST_VIEW

    def config_names(self) -> list[str]:
        try:
            return self.templates.list_names()
        except TemplateError as exc:
            self._notify(f"Failed to load configurations: {exc}")
            return []

    def new_config(self) -> bool:
        """Open the editor on the defaults of the current base template."""
        try:
            self.templates.reload()
            parameters = self.templates.new_parameter_set()
        except TemplateError as exc:
            self._notify(f"Failed to load base template: {exc}")
            return False
        self._open_editor(parameters, None)
        return True

    def load_config(self, name: str) -> bool:
        """Open the editor on a stored configuration."""
        try:
            parameters = self.templates.load(name)
        except TemplateError as exc:
            self._notify(f"Failed to load configuration {name}: {exc}")
            return False
        self._open_editor(parameters, name)
        return True

    def _open_editor(self, parameters: ParameterSet, name: str | None) -> None:
        self.parameters = parameters
        self.config_name = name
        self.dirty = False
        self.state = ViewState.CONFIG_EDIT_VIEW

    def request_config_delete(self, name: str) -> None:
        if self.state is ViewState.CONFIG_LIST_VIEW:
            self.pending_config_delete = name

    def confirm_config_delete(self, confirmed: bool) -> bool:
        name = self.pending_config_delete
        self.pending_config_delete = None
        if not confirmed or name is None:
            return False
        try:
            self.templates.delete(name)
        except TemplateError as exc:
            self._notify(f"Failed to delete configuration {name}: {exc}")
            return False
        return True

    async def apply_named(self, name: str) -> bool:
        """Apply a stored configuration straight from the list."""
        try:
            parameters = self.templates.load(name)
        except TemplateError as exc:
            self._notify(f"Failed to load configuration {name}: {exc}")
            return False
        return await self._apply(parameters)

    def close_config_views(self) -> None:
        """Leave the configuration list without submitting anything."""
        self.parameters = None
        self.config_name = None
        self.dirty = False
        self.pending_config_delete = None
        self.state = ViewState.MAIN_VIEW

    # ------------------------------------------------------------------
    # Configuration editor
    # ------------------------------------------------------------------

    def update_parameter(self, name: str, value: str) -> None:
        if self.parameters is None or self.parameters.get(name) == value:
            return
        try:
            self.parameters.set(name, value)
        except TemplateError as exc:
            self._notify(str(exc))
            return
        self.dirty = True

    def edit_in_editor(self) -> bool:
        """Round-trip the parameters through the external editor.

        On any failure the current parameters are kept unchanged.
        """
        if self.parameters is None:
            return False
        text = self.templates.export_for_editor(self.parameters)
        try:
            with self._session_context():
                edited = self._edit_text(text, self.editor)
            updated = self.templates.import_from_editor(edited, self.parameters)
        except SessionError as exc:
            self._notify(f"Editor failed: {exc}")
            return False
        except TemplateError as exc:
            self._notify(f"Edited configuration rejected: {exc}")
            return False
        if updated != self.parameters:
            self.parameters = updated
            self.dirty = True
        return True

    def begin_save(self) -> None:
        if self.state is ViewState.CONFIG_EDIT_VIEW:
            self.state = ViewState.SAVE_NAME_MODAL

    def cancel_save(self) -> None:
        if self.state is ViewState.SAVE_NAME_MODAL:
            self.state = ViewState.CONFIG_EDIT_VIEW

    def save_config(self, name: str) -> bool:
        """Store the parameters under *name*, replacing any existing one."""
        if self.state is not ViewState.SAVE_NAME_MODAL or self.parameters is None:
            return False
        self.state = ViewState.CONFIG_EDIT_VIEW
        try:
            stored = self.templates.save(name, self.parameters)
        except TemplateError as exc:
            self._notify(f"Failed to save configuration: {exc}")
            return False
        self.config_name = stored
        self.dirty = False
        self._notify(f"Configuration {stored} saved", Severity.INFO, "Saved")
        return True

    async def apply_config(self) -> bool:
        if self.parameters is None:
            return False
        return await self._apply(self.parameters)

    async def _apply(self, parameters: ParameterSet) -> bool:
        try:
            created = await self.templates.apply(parameters)
        except TemplateError as exc:
            self._notify(f"Failed to render job: {exc}")
            return False
        except ClusterClientError as exc:
            self._notify(f"Failed to apply job: {exc}")
            return False

        self.close_config_views()
        self._notify(
            f"Job created: {created}" if created else "Job created",
            Severity.INFO,
            "Job created",
        )
        await self.refresh(force=True)
        return True

    def leave_editor(self, force: bool = False) -> bool:
        """Go back to the configuration list.

        Returns False without leaving when there are unsaved edits and
        *force* is not set, so the caller can ask for confirmation.
        """
        if self.dirty and not force:
            return False
        self.parameters = None
        self.config_name = None
        self.dirty = False
        self.state = ViewState.CONFIG_LIST_VIEW
        return True
