"""Scalar constants for the TUI.

All application-level constants with proper type hints using Final.
"""

from typing import Final

# ============================================================================
# Application
# ============================================================================

APP_NAME: Final = "KSTool"
APP_TITLE: Final = "KSTool"
APP_VERSION: Final = "1.2.0"
APP_AUTHOR: Final = "Beining Yang@LFCS"

# ============================================================================
# Kubernetes keys
# ============================================================================

GPU_RESOURCE_KEY: Final = "nvidia.com/gpu"
GPU_PRODUCT_SELECTOR_KEY: Final = "nvidia.com/gpu.product"
JOB_NAME_LABEL: Final = "job-name"
JOB_OWNER_KIND: Final = "Job"
GPU_PRODUCT_PARAMETER: Final = "GPU_PRODUCT"

# ============================================================================
# Display sentinels
# ============================================================================

EMOJI_WAITING: Final = "⏳"
NO_GPU: Final = "No GPU"
NO_START_TIME: Final = "–"

# ============================================================================
# Colors (hex strings used in rich markup)
# ============================================================================

COLOR_RUNNING: Final = "#30d158"
COLOR_COMPLETE: Final = "#0a84ff"
COLOR_FAILED: Final = "#ff3b30"
COLOR_PENDING: Final = "#ff9f0a"
COLOR_H200: Final = "#ffd60a"
COLOR_H100: Final = "#bf5af2"
COLOR_A100: Final = "#0a84ff"

# Index = GPU count, last entry applies to anything larger.
GPU_COUNT_COLORS: Final = ("", "#ffd60a", "#ff9f0a", "#ff3b30")

__all__ = [
    "APP_AUTHOR",
    "APP_NAME",
    "APP_TITLE",
    "APP_VERSION",
    "COLOR_A100",
    "COLOR_COMPLETE",
    "COLOR_FAILED",
    "COLOR_H100",
    "COLOR_H200",
    "COLOR_PENDING",
    "COLOR_RUNNING",
    "EMOJI_WAITING",
    "GPU_COUNT_COLORS",
    "GPU_PRODUCT_PARAMETER",
    "GPU_PRODUCT_SELECTOR_KEY",
    "GPU_RESOURCE_KEY",
    "JOB_NAME_LABEL",
    "JOB_OWNER_KIND",
    "NO_GPU",
    "NO_START_TIME",
]
