"""Timeout constants for the TUI.

All timeout and interval values for API requests and refresh cycles.
"""

from typing import Final

# ============================================================================
# HTTP timeouts (float, in seconds)
# ============================================================================

API_REQUEST_TIMEOUT: Final = 30.0

# ============================================================================
# Polling intervals (float, in seconds)
# ============================================================================

DRIFT_POLL_INTERVAL: Final = 10.0

__all__ = [
    "API_REQUEST_TIMEOUT",
    "DRIFT_POLL_INTERVAL",
]
