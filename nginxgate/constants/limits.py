"""Limit and threshold constants for the TUI.

All limit values and validation ranges.
"""

from typing import Final

# ============================================================================
# Validation limits
# ============================================================================

REFRESH_INTERVAL_MIN: Final = 3
REQUEST_TIMEOUT_MIN: Final = 1

# ============================================================================
# Display limits
# ============================================================================

SHORT_HASH_LENGTH: Final = 7
MAX_FILE_LIST_DISPLAY: Final = 200

__all__ = [
    "MAX_FILE_LIST_DISPLAY",
    "REFRESH_INTERVAL_MIN",
    "REQUEST_TIMEOUT_MIN",
    "SHORT_HASH_LENGTH",
]
