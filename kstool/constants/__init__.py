"""Constants package for the KSTool TUI."""

from kstool.constants.defaults import (
    BASE_TEMPLATE_NAME,
    CONFIG_DIR_DEFAULT,
    GPU_PRODUCT_OPTIONS_DEFAULT,
    NAMESPACE_DEFAULT,
    USER_LABEL_DEFAULT,
)
from kstool.constants.enums import (
    JobStatus,
    Severity,
    SortKey,
    SortMode,
    StatusFilter,
    ViewState,
)
from kstool.constants.timeouts import CLUSTER_REQUEST_TIMEOUT, REFRESH_MIN_INTERVAL
from kstool.constants.values import (
    APP_NAME,
    APP_TITLE,
    APP_VERSION,
    EMOJI_WAITING,
    NO_GPU,
    NO_START_TIME,
)

__all__ = [
    "APP_NAME",
    "APP_TITLE",
    "APP_VERSION",
    "BASE_TEMPLATE_NAME",
    "CLUSTER_REQUEST_TIMEOUT",
    "CONFIG_DIR_DEFAULT",
    "EMOJI_WAITING",
    "GPU_PRODUCT_OPTIONS_DEFAULT",
    "NAMESPACE_DEFAULT",
    "NO_GPU",
    "NO_START_TIME",
    "REFRESH_MIN_INTERVAL",
    "USER_LABEL_DEFAULT",
    "JobStatus",
    "Severity",
    "SortKey",
    "SortMode",
    "StatusFilter",
    "ViewState",
]
