"""Interactive subprocess sessions (remote shell, editor, read-only viewer).

Each launcher inherits the terminal and blocks until the child exits; the
caller is responsible for suspending the TUI around it.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import tempfile
from collections.abc import Sequence
from pathlib import Path

logger = logging.getLogger(__name__)


class SessionError(RuntimeError):
    """Raised when an interactive program cannot be started."""


def run_interactive(command: Sequence[str]) -> int:
    """Run *command* attached to the terminal and return its exit status."""
    logger.info("Starting session: %s", shlex.join(command))
    try:
        result = subprocess.run(list(command), check=False)
    except OSError as exc:
        raise SessionError(f"Unable to run {command[0]}: {exc}") from exc
    if result.returncode != 0:
        logger.info("Session %s exited with %d", command[0], result.returncode)
    return result.returncode


def _write_temp(text: str, prefix: str) -> Path:
    fd, name = tempfile.mkstemp(prefix=prefix, suffix=".yaml")
    with os.fdopen(fd, "w", encoding="utf-8") as handle:
        handle.write(text)
    return Path(name)


def edit_text(text: str, editor: str) -> str:
    """Open *text* in *editor* and return the saved result."""
    path = _write_temp(text, "kstool-config-")
    try:
        status = run_interactive([*shlex.split(editor), str(path)])
        if status != 0:
            raise SessionError(f"{editor} exited with status {status}")
        return path.read_text(encoding="utf-8")
    finally:
        path.unlink(missing_ok=True)


def view_text(text: str, viewer: str, prefix: str = "kstool-job-") -> None:
    """Show *text* in a read-only *viewer*."""
    path = _write_temp(text, prefix)
    try:
        run_interactive([*shlex.split(viewer), str(path)])
    finally:
        path.unlink(missing_ok=True)
