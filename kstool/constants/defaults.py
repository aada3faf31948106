"""Default values for settings.

All default values used in AppSettings model and the configuration store.
"""

from typing import Final

# ============================================================================
# Cluster defaults
# ============================================================================

NAMESPACE_DEFAULT: Final = "eidf029ns"
USER_LABEL_DEFAULT: Final = "eidf/user"

# ============================================================================
# Session defaults
# ============================================================================

EDITOR_DEFAULT: Final = "vim"
VIEWER_DEFAULT: Final = "vim -R"
SHELL_DEFAULT: Final = "bash"

# ============================================================================
# Configuration store layout
# ============================================================================

CONFIG_DIR_DEFAULT: Final = "~/.kstool"
SETTINGS_FILE_NAME: Final = "settings.yaml"
LOG_FILE_NAME: Final = "kstool.log"
CONFIG_LIST_DIR_NAME: Final = "env_config_list"
BASE_TEMPLATE_NAME: Final = "base_apply"
NORMALIZED_TEMPLATE_NAME: Final = "base_apply_template"
CONFIG_FILE_SUFFIX: Final = ".yaml"

GPU_PRODUCT_OPTIONS_DEFAULT: Final = (
    "NVIDIA-H200",
    "NVIDIA-H100-80GB-HBM3",
    "NVIDIA-A100-SXM4-80GB",
    "NVIDIA-A100-SXM4-40GB-MIG-3g.20gb",
)

__all__ = [
    "BASE_TEMPLATE_NAME",
    "CONFIG_DIR_DEFAULT",
    "CONFIG_FILE_SUFFIX",
    "CONFIG_LIST_DIR_NAME",
    "EDITOR_DEFAULT",
    "GPU_PRODUCT_OPTIONS_DEFAULT",
    "LOG_FILE_NAME",
    "NAMESPACE_DEFAULT",
    "NORMALIZED_TEMPLATE_NAME",
    "SETTINGS_FILE_NAME",
    "SHELL_DEFAULT",
    "USER_LABEL_DEFAULT",
    "VIEWER_DEFAULT",
]
