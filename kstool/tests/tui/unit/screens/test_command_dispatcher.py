"""Tests for the command dispatcher state machine."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator
from unittest.mock import AsyncMock, MagicMock

import pytest

from kstool.constants.enums import JobStatus, Severity, SortMode, StatusFilter, ViewState
from kstool.controllers.cluster.controller import ClusterClientError, ClusterNotFoundError
from kstool.controllers.templates.controller import TemplateController
from kstool.controllers.templates.store import ConfigStore
from kstool.models.core.job_info import JobInfo
from kstool.models.templates.parameter_set import NamedConfiguration
from kstool.screens.jobs.dispatcher import CommandDispatcher
from kstool.utils.sessions import SessionError

BASE_TEMPLATE = """\
apiVersion: batch/v1
kind: Job
metadata:
  generateName: ${USER:-default-user}-job-
spec:
  template:
    spec:
      containers:
        - name: main
          image: ${IMAGE:-busybox}
          resources:
            limits:
              nvidia.com/gpu: "${GPU_COUNT:-1}"
"""


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def make_job(
    name: str,
    owner: str | None = "alice",
    status: JobStatus = JobStatus.RUNNING,
) -> JobInfo:
    return JobInfo(
        name=name,
        namespace="eidf029ns",
        owner=owner,
        status=status,
        completions="0/1",
        duration="5m",
        age="10m",
        pod_count=1,
        gpu_count=1,
        gpu_info="A100-80G",
    )


ALICE_JOB = make_job("alice-job-1")
BOB_JOB = make_job("bob-job-1", owner="bob")
UNLABELLED_JOB = make_job("alice-job-nolabel", owner=None)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cluster() -> MagicMock:
    """Cluster controller double with async operations."""
    mock = MagicMock()
    mock.fetch_snapshot = AsyncMock(return_value=[ALICE_JOB, BOB_JOB])
    mock.get_job = AsyncMock(return_value=ALICE_JOB)
    mock.delete_job = AsyncMock(return_value=None)
    mock.get_job_yaml = AsyncMock(return_value="kind: Job\n")
    mock.find_running_pod = AsyncMock(return_value="alice-job-1-abcde")
    mock.create_document = AsyncMock(return_value="alice-job-x7k2p")
    mock.shell_command = MagicMock(
        return_value=["kubectl", "exec", "-it", "alice-job-1-abcde", "--", "bash"]
    )
    return mock


@pytest.fixture
def store(tmp_path: Path) -> ConfigStore:
    config_store = ConfigStore(tmp_path)
    config_store.base_template_path.write_text(BASE_TEMPLATE, encoding="utf-8")
    return config_store


@pytest.fixture
def templates(store: ConfigStore, cluster: MagicMock) -> TemplateController:
    return TemplateController(store, cluster)


@pytest.fixture
def sessions() -> dict[str, MagicMock]:
    """Recorders for the interactive launchers, the audit trail and suspension."""
    events: list[str] = []

    @contextmanager
    def _suspend() -> Iterator[None]:
        events.append("suspend")
        yield
        events.append("resume")

    return {
        "events": events,  # type: ignore[dict-item]
        "session_context": _suspend,  # type: ignore[dict-item]
        "run_interactive": MagicMock(side_effect=lambda cmd: events.append("shell") or 0),
        "edit_text": MagicMock(side_effect=lambda text, editor: text),
        "view_text": MagicMock(side_effect=lambda text, viewer: events.append("view")),
        "audit_record": MagicMock(return_value="audit line"),
    }


@pytest.fixture
def dispatcher(
    cluster: MagicMock,
    templates: TemplateController,
    clock: FakeClock,
    sessions: dict[str, MagicMock],
) -> CommandDispatcher:
    """Dispatcher for user alice holding an initial snapshot."""
    instance = CommandDispatcher(
        cluster,
        templates,
        "alice",
        refresh_interval=2.0,
        clock=clock,
        session_context=sessions["session_context"],
        run_interactive=sessions["run_interactive"],
        edit_text=sessions["edit_text"],
        view_text=sessions["view_text"],
        audit_record=sessions["audit_record"],
    )
    instance.set_initial_snapshot([ALICE_JOB, BOB_JOB])
    return instance


class TestKeyHandling:
    """Tests for handle_key routing and blocking."""

    @pytest.mark.asyncio
    async def test_unknown_key_ignored(self, dispatcher: CommandDispatcher) -> None:
        assert await dispatcher.handle_key("x") is False
        assert dispatcher.state is ViewState.MAIN_VIEW

    @pytest.mark.asyncio
    async def test_filter_and_sort_keys(self, dispatcher: CommandDispatcher) -> None:
        await dispatcher.handle_key("f")
        await dispatcher.handle_key("s")
        await dispatcher.handle_key("h")

        assert dispatcher.filter_state.status_filter is StatusFilter.RUNNING
        assert dispatcher.filter_state.sort_mode is SortMode.AGE_ASC
        assert dispatcher.filter_state.owner_only is True
        assert [job.name for job in dispatcher.visible_jobs()] == ["alice-job-1"]

    @pytest.mark.asyncio
    async def test_filter_keys_never_touch_cluster(
        self, dispatcher: CommandDispatcher, cluster: MagicMock
    ) -> None:
        for key in "fshfsh":
            await dispatcher.handle_key(key)
        cluster.fetch_snapshot.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_pending_notice_blocks_every_key(
        self, dispatcher: CommandDispatcher
    ) -> None:
        await dispatcher.handle_key("d", BOB_JOB)
        assert dispatcher.notice is not None

        for key in CommandDispatcher.KEY_ACTIONS:
            assert await dispatcher.handle_key(key, ALICE_JOB) is False
        assert dispatcher.filter_state.status_filter is StatusFilter.ALL

        dispatcher.dismiss_notice()
        assert await dispatcher.handle_key("f") is True

    @pytest.mark.asyncio
    async def test_keys_ignored_outside_main_view(
        self, dispatcher: CommandDispatcher
    ) -> None:
        await dispatcher.handle_key("n")
        assert dispatcher.state is ViewState.CONFIG_LIST_VIEW

        assert await dispatcher.handle_key("f") is False
        assert dispatcher.filter_state.status_filter is StatusFilter.ALL

    @pytest.mark.asyncio
    async def test_selection_keys_without_selection_do_nothing(
        self, dispatcher: CommandDispatcher, cluster: MagicMock
    ) -> None:
        for key in "dec":
            assert await dispatcher.handle_key(key, None) is True
        assert dispatcher.state is ViewState.MAIN_VIEW
        assert dispatcher.notice is None
        cluster.get_job_yaml.assert_not_awaited()


class TestRefresh:
    """Tests for refresh throttling and failure handling."""

    @pytest.mark.asyncio
    async def test_throttled_within_interval(
        self, dispatcher: CommandDispatcher, cluster: MagicMock, clock: FakeClock
    ) -> None:
        clock.now += 1.0
        assert await dispatcher.refresh() is False
        cluster.fetch_snapshot.assert_not_awaited()

        clock.now += 1.5
        assert await dispatcher.refresh() is True
        cluster.fetch_snapshot.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_force_bypasses_throttle(
        self, dispatcher: CommandDispatcher, cluster: MagicMock
    ) -> None:
        assert await dispatcher.refresh(force=True) is True
        cluster.fetch_snapshot.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_first_refresh_without_initial_snapshot(
        self, cluster: MagicMock, templates: TemplateController, clock: FakeClock
    ) -> None:
        fresh = CommandDispatcher(cluster, templates, "alice", clock=clock)
        assert await fresh.refresh() is True
        assert [job.name for job in fresh.snapshot] == ["alice-job-1", "bob-job-1"]

    @pytest.mark.asyncio
    async def test_failure_keeps_snapshot_and_notifies(
        self, dispatcher: CommandDispatcher, cluster: MagicMock, clock: FakeClock
    ) -> None:
        cluster.fetch_snapshot.side_effect = ClusterClientError("connection refused")
        clock.now += 10

        assert await dispatcher.refresh() is False

        assert [job.name for job in dispatcher.snapshot] == ["alice-job-1", "bob-job-1"]
        assert dispatcher.notice is not None
        assert dispatcher.notice.severity is Severity.ERROR
        assert "connection refused" in dispatcher.notice.message

    @pytest.mark.asyncio
    async def test_refresh_replaces_snapshot(
        self, dispatcher: CommandDispatcher, cluster: MagicMock, clock: FakeClock
    ) -> None:
        cluster.fetch_snapshot.return_value = [BOB_JOB]
        clock.now += 10

        await dispatcher.handle_key("r")

        assert dispatcher.snapshot == [BOB_JOB]


class TestDelete:
    """Tests for the delete flow."""

    @pytest.mark.asyncio
    async def test_other_users_job_is_refused(
        self, dispatcher: CommandDispatcher, cluster: MagicMock
    ) -> None:
        await dispatcher.handle_key("d", BOB_JOB)

        assert dispatcher.state is ViewState.MAIN_VIEW
        assert dispatcher.pending_delete is None
        assert dispatcher.notice is not None
        assert dispatcher.notice.severity is Severity.WARNING
        assert "bob" in dispatcher.notice.message
        cluster.delete_job.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unlabelled_job_is_refused(
        self, dispatcher: CommandDispatcher
    ) -> None:
        """A matching name prefix is not proof of ownership."""
        dispatcher.request_delete(UNLABELLED_JOB)
        assert dispatcher.state is ViewState.MAIN_VIEW
        assert dispatcher.notice is not None

    @pytest.mark.asyncio
    async def test_confirmed_delete(
        self,
        dispatcher: CommandDispatcher,
        cluster: MagicMock,
        sessions: dict[str, MagicMock],
    ) -> None:
        await dispatcher.handle_key("d", ALICE_JOB)
        assert dispatcher.state is ViewState.CONFIRM_DELETE_MODAL
        assert dispatcher.pending_delete == ALICE_JOB

        assert await dispatcher.confirm_delete(True) is True

        cluster.get_job.assert_awaited_once_with("alice-job-1")
        cluster.delete_job.assert_awaited_once_with("alice-job-1")
        sessions["audit_record"].assert_called_once_with(
            "alice", "Deleted Job", "alice-job-1"
        )
        cluster.fetch_snapshot.assert_awaited_once()
        assert dispatcher.state is ViewState.MAIN_VIEW
        assert dispatcher.pending_delete is None

    @pytest.mark.asyncio
    async def test_cancelled_delete(
        self, dispatcher: CommandDispatcher, cluster: MagicMock
    ) -> None:
        dispatcher.request_delete(ALICE_JOB)

        assert await dispatcher.confirm_delete(False) is False

        assert dispatcher.state is ViewState.MAIN_VIEW
        cluster.get_job.assert_not_awaited()
        cluster.delete_job.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_job_gone_before_confirmation(
        self, dispatcher: CommandDispatcher, cluster: MagicMock
    ) -> None:
        cluster.get_job.side_effect = ClusterNotFoundError("(NotFound)")
        dispatcher.request_delete(ALICE_JOB)

        assert await dispatcher.confirm_delete(True) is False

        cluster.delete_job.assert_not_awaited()
        cluster.fetch_snapshot.assert_awaited_once()
        assert dispatcher.notice is not None
        assert dispatcher.notice.title == "Gone"

    @pytest.mark.asyncio
    async def test_owner_rechecked_against_live_job(
        self, dispatcher: CommandDispatcher, cluster: MagicMock
    ) -> None:
        cluster.get_job.return_value = make_job("alice-job-1", owner="mallory")
        dispatcher.request_delete(ALICE_JOB)

        assert await dispatcher.confirm_delete(True) is False

        cluster.delete_job.assert_not_awaited()
        assert dispatcher.notice is not None
        assert "mallory" in dispatcher.notice.message

    @pytest.mark.asyncio
    async def test_delete_failure_notifies(
        self,
        dispatcher: CommandDispatcher,
        cluster: MagicMock,
        sessions: dict[str, MagicMock],
    ) -> None:
        cluster.delete_job.side_effect = ClusterClientError("forbidden")
        dispatcher.request_delete(ALICE_JOB)

        assert await dispatcher.confirm_delete(True) is False

        assert dispatcher.notice is not None
        assert "forbidden" in dispatcher.notice.message
        sessions["audit_record"].assert_not_called()

    @pytest.mark.asyncio
    async def test_confirm_without_request_is_ignored(
        self, dispatcher: CommandDispatcher, cluster: MagicMock
    ) -> None:
        assert await dispatcher.confirm_delete(True) is False
        cluster.get_job.assert_not_awaited()


class TestSessions:
    """Tests for entering a job and viewing its definition."""

    @pytest.mark.asyncio
    async def test_enter_running_job(
        self,
        dispatcher: CommandDispatcher,
        cluster: MagicMock,
        sessions: dict[str, MagicMock],
    ) -> None:
        await dispatcher.handle_key("e", ALICE_JOB)

        cluster.find_running_pod.assert_awaited_once_with("alice-job-1")
        cluster.shell_command.assert_called_once_with("alice-job-1-abcde", "bash")
        sessions["audit_record"].assert_called_once_with(
            "alice", "Entered Job", "alice-job-1"
        )
        assert sessions["events"] == ["suspend", "shell", "resume"]
        assert dispatcher.state is ViewState.MAIN_VIEW
        cluster.fetch_snapshot.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status", [JobStatus.PENDING, JobStatus.FAILED, JobStatus.COMPLETE]
    )
    async def test_enter_requires_running(
        self,
        dispatcher: CommandDispatcher,
        cluster: MagicMock,
        status: JobStatus,
    ) -> None:
        await dispatcher.handle_key("e", make_job("alice-job-2", status=status))

        assert dispatcher.notice is not None
        assert "only running jobs" in dispatcher.notice.message
        cluster.find_running_pod.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_enter_other_users_job(
        self, dispatcher: CommandDispatcher, cluster: MagicMock
    ) -> None:
        await dispatcher.handle_key("e", BOB_JOB)

        assert dispatcher.notice is not None
        assert dispatcher.notice.severity is Severity.WARNING
        cluster.find_running_pod.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_enter_without_running_pod(
        self,
        dispatcher: CommandDispatcher,
        cluster: MagicMock,
        sessions: dict[str, MagicMock],
    ) -> None:
        cluster.find_running_pod.return_value = None

        await dispatcher.handle_key("e", ALICE_JOB)

        assert dispatcher.notice is not None
        assert "No running pod" in dispatcher.notice.message
        assert dispatcher.state is ViewState.MAIN_VIEW
        sessions["run_interactive"].assert_not_called()
        sessions["audit_record"].assert_not_called()

    @pytest.mark.asyncio
    async def test_shell_failure_returns_to_main_view(
        self,
        dispatcher: CommandDispatcher,
        sessions: dict[str, MagicMock],
    ) -> None:
        sessions["run_interactive"].side_effect = SessionError("no tty")

        await dispatcher.handle_key("e", ALICE_JOB)

        assert dispatcher.state is ViewState.MAIN_VIEW
        assert dispatcher.notice is not None
        assert "no tty" in dispatcher.notice.message

    @pytest.mark.asyncio
    async def test_view_config(
        self,
        dispatcher: CommandDispatcher,
        cluster: MagicMock,
        sessions: dict[str, MagicMock],
    ) -> None:
        await dispatcher.handle_key("c", BOB_JOB)

        cluster.get_job_yaml.assert_awaited_once_with("bob-job-1")
        sessions["view_text"].assert_called_once_with("kind: Job\n", "vim -R")
        assert sessions["events"] == ["suspend", "view", "resume"]
        assert dispatcher.state is ViewState.MAIN_VIEW
        cluster.fetch_snapshot.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_view_config_failure(
        self,
        dispatcher: CommandDispatcher,
        cluster: MagicMock,
        sessions: dict[str, MagicMock],
    ) -> None:
        cluster.get_job_yaml.side_effect = ClusterNotFoundError("(NotFound)")

        await dispatcher.handle_key("c", ALICE_JOB)

        assert dispatcher.state is ViewState.MAIN_VIEW
        assert dispatcher.notice is not None
        sessions["view_text"].assert_not_called()


class TestConfigList:
    """Tests for the configuration list state."""

    def test_new_config_opens_editor_on_defaults(
        self, dispatcher: CommandDispatcher
    ) -> None:
        dispatcher.open_config_list()

        assert dispatcher.new_config() is True

        assert dispatcher.state is ViewState.CONFIG_EDIT_VIEW
        assert dispatcher.parameters is not None
        assert dispatcher.parameters["USER"] == "default-user"
        assert dispatcher.config_name is None
        assert dispatcher.dirty is False

    def test_new_config_rereads_base_template(
        self, dispatcher: CommandDispatcher, store: ConfigStore
    ) -> None:
        dispatcher.open_config_list()
        dispatcher.new_config()
        dispatcher.leave_editor(force=True)

        store.base_template_path.write_text(
            BASE_TEMPLATE.replace("busybox", "pytorch"), encoding="utf-8"
        )
        dispatcher.open_config_list()
        assert dispatcher.new_config() is True

        assert dispatcher.parameters is not None
        assert dispatcher.parameters["IMAGE"] == "pytorch"

    def test_load_config(self, dispatcher: CommandDispatcher, store: ConfigStore) -> None:
        store.save(NamedConfiguration(name="big", parameters={"GPU_COUNT": "8"}))
        dispatcher.open_config_list()

        assert dispatcher.config_names() == ["big"]
        assert dispatcher.load_config("big") is True

        assert dispatcher.config_name == "big"
        assert dispatcher.parameters is not None
        assert dispatcher.parameters["GPU_COUNT"] == "8"

    def test_load_missing_config(self, dispatcher: CommandDispatcher) -> None:
        dispatcher.open_config_list()

        assert dispatcher.load_config("nope") is False

        assert dispatcher.state is ViewState.CONFIG_LIST_VIEW
        assert dispatcher.notice is not None

    def test_delete_config(self, dispatcher: CommandDispatcher, store: ConfigStore) -> None:
        store.save(NamedConfiguration(name="old", parameters={}))
        dispatcher.open_config_list()

        dispatcher.request_config_delete("old")
        assert dispatcher.confirm_config_delete(True) is True

        assert dispatcher.config_names() == []

    def test_cancel_config_delete(
        self, dispatcher: CommandDispatcher, store: ConfigStore
    ) -> None:
        store.save(NamedConfiguration(name="keep", parameters={}))
        dispatcher.open_config_list()

        dispatcher.request_config_delete("keep")
        assert dispatcher.confirm_config_delete(False) is False

        assert dispatcher.config_names() == ["keep"]

    @pytest.mark.asyncio
    async def test_apply_named(
        self,
        dispatcher: CommandDispatcher,
        store: ConfigStore,
        cluster: MagicMock,
    ) -> None:
        store.save(NamedConfiguration(name="run", parameters={"USER": "alice"}))
        dispatcher.open_config_list()

        assert await dispatcher.apply_named("run") is True

        document = cluster.create_document.await_args.args[0]
        assert "generateName: alice-job-" in document
        assert dispatcher.state is ViewState.MAIN_VIEW
        assert dispatcher.notice is not None
        assert dispatcher.notice.message == "Job created: alice-job-x7k2p"
        cluster.fetch_snapshot.assert_awaited_once()

    def test_close_config_views(self, dispatcher: CommandDispatcher) -> None:
        dispatcher.open_config_list()
        dispatcher.new_config()
        dispatcher.update_parameter("USER", "alice")

        dispatcher.close_config_views()

        assert dispatcher.state is ViewState.MAIN_VIEW
        assert dispatcher.parameters is None
        assert dispatcher.dirty is False


class TestConfigEditor:
    """Tests for the configuration edit state."""

    @pytest.fixture
    def editing(self, dispatcher: CommandDispatcher) -> CommandDispatcher:
        """Dispatcher with the editor open on the template defaults."""
        dispatcher.open_config_list()
        dispatcher.new_config()
        return dispatcher

    def test_update_parameter_marks_dirty(self, editing: CommandDispatcher) -> None:
        editing.update_parameter("USER", "default-user")
        assert editing.dirty is False

        editing.update_parameter("USER", "alice")

        assert editing.dirty is True
        assert editing.parameters is not None
        assert editing.parameters["USER"] == "alice"

    def test_update_unknown_parameter(self, editing: CommandDispatcher) -> None:
        editing.update_parameter("BOGUS", "x")

        assert editing.dirty is False
        assert editing.notice is not None

    def test_edit_in_editor_applies_changes(
        self, editing: CommandDispatcher, sessions: dict[str, MagicMock]
    ) -> None:
        sessions["edit_text"].side_effect = lambda text, editor: text.replace(
            "busybox", "pytorch"
        )

        assert editing.edit_in_editor() is True

        assert editing.parameters is not None
        assert editing.parameters["IMAGE"] == "pytorch"
        assert editing.dirty is True
        sessions["edit_text"].assert_called_once()
        assert sessions["edit_text"].call_args.args[1] == "vim"

    def test_edit_without_changes_stays_clean(self, editing: CommandDispatcher) -> None:
        assert editing.edit_in_editor() is True
        assert editing.dirty is False

    @pytest.mark.parametrize(
        "edited",
        ["USER: [unclosed\n", "BOGUS: 1\n", "- not a mapping\n"],
    )
    def test_rejected_edit_keeps_parameters(
        self,
        editing: CommandDispatcher,
        sessions: dict[str, MagicMock],
        edited: str,
    ) -> None:
        before = editing.parameters.copy() if editing.parameters else None
        sessions["edit_text"].side_effect = lambda text, editor: edited

        assert editing.edit_in_editor() is False

        assert editing.parameters == before
        assert editing.dirty is False
        assert editing.notice is not None
        assert editing.notice.message.startswith("Edited configuration rejected")

    def test_editor_crash_keeps_parameters(
        self, editing: CommandDispatcher, sessions: dict[str, MagicMock]
    ) -> None:
        sessions["edit_text"].side_effect = SessionError("vim exited with status 1")

        assert editing.edit_in_editor() is False

        assert editing.notice is not None
        assert editing.notice.message.startswith("Editor failed")

    def test_save_flow(self, editing: CommandDispatcher, store: ConfigStore) -> None:
        editing.update_parameter("GPU_COUNT", "2")

        editing.begin_save()
        assert editing.state is ViewState.SAVE_NAME_MODAL
        assert editing.save_config("two-gpus") is True

        assert editing.state is ViewState.CONFIG_EDIT_VIEW
        assert editing.config_name == "two-gpus"
        assert editing.dirty is False
        assert editing.notice is not None
        assert editing.notice.severity is Severity.INFO
        assert store.load("two-gpus").parameters["GPU_COUNT"] == "2"

    def test_save_with_invalid_name(
        self, editing: CommandDispatcher, store: ConfigStore
    ) -> None:
        editing.update_parameter("GPU_COUNT", "2")
        editing.begin_save()

        assert editing.save_config("  ") is False

        assert editing.state is ViewState.CONFIG_EDIT_VIEW
        assert editing.dirty is True
        assert store.list_names() == []

    def test_cancel_save(self, editing: CommandDispatcher) -> None:
        editing.begin_save()
        editing.cancel_save()
        assert editing.state is ViewState.CONFIG_EDIT_VIEW

    def test_save_outside_modal_ignored(self, editing: CommandDispatcher) -> None:
        assert editing.save_config("x") is False

    @pytest.mark.asyncio
    async def test_apply_config(
        self, editing: CommandDispatcher, cluster: MagicMock
    ) -> None:
        editing.update_parameter("IMAGE", "pytorch")

        assert await editing.apply_config() is True

        assert "image: pytorch" in cluster.create_document.await_args.args[0]
        assert editing.state is ViewState.MAIN_VIEW
        assert editing.parameters is None

    @pytest.mark.asyncio
    async def test_apply_failure_stays_in_editor(
        self, editing: CommandDispatcher, cluster: MagicMock
    ) -> None:
        cluster.create_document.side_effect = ClusterClientError("quota exceeded")
        editing.update_parameter("IMAGE", "pytorch")

        assert await editing.apply_config() is False

        assert editing.state is ViewState.CONFIG_EDIT_VIEW
        assert editing.parameters is not None
        assert editing.parameters["IMAGE"] == "pytorch"
        assert editing.notice is not None
        assert editing.notice.message == "Failed to apply job: quota exceeded"
        cluster.fetch_snapshot.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_render_failure_never_reaches_cluster(
        self, editing: CommandDispatcher, cluster: MagicMock
    ) -> None:
        editing.update_parameter("IMAGE", "[unclosed")

        assert await editing.apply_config() is False

        cluster.create_document.assert_not_awaited()
        assert editing.notice is not None
        assert editing.notice.message.startswith("Failed to render job")

    def test_leave_editor_with_unsaved_changes(
        self, editing: CommandDispatcher
    ) -> None:
        editing.update_parameter("USER", "alice")

        assert editing.leave_editor() is False
        assert editing.state is ViewState.CONFIG_EDIT_VIEW

        assert editing.leave_editor(force=True) is True
        assert editing.state is ViewState.CONFIG_LIST_VIEW
        assert editing.parameters is None

    def test_leave_clean_editor(self, editing: CommandDispatcher) -> None:
        assert editing.leave_editor() is True
        assert editing.state is ViewState.CONFIG_LIST_VIEW


class TestNotices:
    """Tests for the notice queue."""

    def test_notices_are_fifo(self, dispatcher: CommandDispatcher) -> None:
        dispatcher.request_delete(BOB_JOB)
        dispatcher.request_delete(UNLABELLED_JOB)

        first = dispatcher.dismiss_notice()
        second = dispatcher.dismiss_notice()

        assert first is not None and "bob-job-1" in first.message
        assert second is not None and "alice-job-nolabel" in second.message
        assert dispatcher.dismiss_notice() is None
        assert dispatcher.is_blocked() is False
