"""Audit trail for destructive and interactive job actions.

Records go to the ``kstool.audit`` logger, which also forwards them to the
local syslog socket when one exists.
"""

from __future__ import annotations

import logging
import logging.handlers
from contextlib import suppress
from datetime import datetime
from pathlib import Path

AUDIT_LOGGER_NAME = "kstool.audit"
_SYSLOG_SOCKETS = ("/dev/log", "/var/run/syslog")

audit_logger = logging.getLogger(AUDIT_LOGGER_NAME)
audit_logger.setLevel(logging.INFO)


def configure_syslog() -> logging.Handler | None:
    """Attach a syslog handler to the audit logger if a socket is available."""
    for socket_path in _SYSLOG_SOCKETS:
        if not Path(socket_path).exists():
            continue
        with suppress(OSError):
            handler = logging.handlers.SysLogHandler(
                address=socket_path,
                facility=logging.handlers.SysLogHandler.LOG_USER,
            )
            handler.setFormatter(logging.Formatter("kstool: %(message)s"))
            audit_logger.addHandler(handler)
            return handler
    return None


def record(user: str, action: str, job_name: str, when: datetime | None = None) -> str:
    """Write one audit line and return it."""
    timestamp = (when or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    message = f"Timestamp: {timestamp}, User: {user}, {action}: {job_name}"
    audit_logger.info(message)
    return message
