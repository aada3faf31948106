"""Timeout constants for the TUI.

All timeout and interval values for cluster requests and refresh throttling.
"""

from typing import Final

# ============================================================================
# API/Cluster timeouts (string format for kubectl)
# ============================================================================

CLUSTER_REQUEST_TIMEOUT: Final = "5s"

# Process-level command timeout margin (added on top of the request timeout)
KUBECTL_PROCESS_TIMEOUT_MARGIN: Final = 5

# ============================================================================
# Refresh throttling (float, in seconds)
# ============================================================================

REFRESH_MIN_INTERVAL: Final = 2.0

__all__ = [
    "CLUSTER_REQUEST_TIMEOUT",
    "KUBECTL_PROCESS_TIMEOUT_MARGIN",
    "REFRESH_MIN_INTERVAL",
]
