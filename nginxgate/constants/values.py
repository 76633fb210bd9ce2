"""Value constants for the TUI.

Scalar strings and lookup tables shared across screens and controllers.
"""

from typing import Final

from nginxgate.constants.enums import FileStatus

# ============================================================================
# Application
# ============================================================================

APP_TITLE: Final = "nginxgate"
APP_NAME: Final = "nginxgate"

# ============================================================================
# Backend API
# ============================================================================

API_BASE_DEFAULT: Final = "http://127.0.0.1:8080"
API_PREFIX_DEFAULT: Final = "/api/v1"
API_BASE_ENV_VAR: Final = "NGINXGATE_API_BASE"

# ============================================================================
# Tree display
# ============================================================================

PATH_SEPARATOR: Final = "/"

COLOR_SUCCESS: Final = "#52c41a"
COLOR_WARNING: Final = "#faad14"
COLOR_ERROR: Final = "#ff4d4f"

# status -> (icon, color, label)
STATUS_MARKERS: Final[dict[str, tuple[str, str, str]]] = {
    FileStatus.MODIFIED.value: ("★", COLOR_WARNING, "Modified"),
    FileStatus.ADDED.value: ("+", COLOR_SUCCESS, "Added"),
    FileStatus.DELETED.value: ("-", COLOR_ERROR, "Deleted"),
}

__all__ = [
    "API_BASE_DEFAULT",
    "API_BASE_ENV_VAR",
    "API_PREFIX_DEFAULT",
    "APP_NAME",
    "APP_TITLE",
    "COLOR_ERROR",
    "COLOR_SUCCESS",
    "COLOR_WARNING",
    "PATH_SEPARATOR",
    "STATUS_MARKERS",
]
