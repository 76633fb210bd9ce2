"""Default values for settings.

All default values used in AppSettings model and validation fallback values.
"""

from typing import Final

from nginxgate.constants.values import API_BASE_DEFAULT, API_PREFIX_DEFAULT

# ============================================================================
# UI defaults
# ============================================================================

THEME_DEFAULT: Final = "textual-dark"
REFRESH_INTERVAL_DEFAULT: Final = 5
AUTO_REFRESH_DEFAULT: Final = False
SHOW_ALL_FILES_DEFAULT: Final = True
MODE_DEFAULT: Final = "preview"

# ============================================================================
# Backend defaults
# ============================================================================

API_BASE: Final = API_BASE_DEFAULT
API_PREFIX: Final = API_PREFIX_DEFAULT
REQUEST_TIMEOUT_SECONDS_DEFAULT: Final = 30

# ============================================================================
# Logging defaults
# ============================================================================

LOG_LEVEL_DEFAULT: Final = "INFO"
LOG_FILE_NAME: Final = "nginxgate.log"

__all__ = [
    "API_BASE",
    "API_PREFIX",
    "AUTO_REFRESH_DEFAULT",
    "LOG_FILE_NAME",
    "LOG_LEVEL_DEFAULT",
    "MODE_DEFAULT",
    "REFRESH_INTERVAL_DEFAULT",
    "REQUEST_TIMEOUT_SECONDS_DEFAULT",
    "SHOW_ALL_FILES_DEFAULT",
    "THEME_DEFAULT",
]
