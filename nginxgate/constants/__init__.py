"""Constants module for nginxgate.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- values.py: Scalar constants and lookup tables
- timeouts.py: Timeout and polling values (seconds)
- limits.py: Limit values (max/min)
- defaults.py: Default values for settings

Note: Keyboard bindings are defined in nginxgate.keyboard module.
"""

from nginxgate.constants.defaults import (
    MODE_DEFAULT,
    REFRESH_INTERVAL_DEFAULT,
    THEME_DEFAULT,
)
from nginxgate.constants.enums import (
    DeployMode,
    DriftState,
    FileStatus,
    GateState,
    UpdateStage,
)
from nginxgate.constants.limits import (
    REFRESH_INTERVAL_MIN,
    SHORT_HASH_LENGTH,
)
from nginxgate.constants.timeouts import (
    API_REQUEST_TIMEOUT,
    DRIFT_POLL_INTERVAL,
)
from nginxgate.constants.values import (
    APP_TITLE,
    PATH_SEPARATOR,
    STATUS_MARKERS,
)

__all__ = [
    "API_REQUEST_TIMEOUT",
    # Application
    "APP_TITLE",
    "DRIFT_POLL_INTERVAL",
    "MODE_DEFAULT",
    "PATH_SEPARATOR",
    "REFRESH_INTERVAL_DEFAULT",
    "REFRESH_INTERVAL_MIN",
    "SHORT_HASH_LENGTH",
    "STATUS_MARKERS",
    "THEME_DEFAULT",
    # Enums
    "DeployMode",
    "DriftState",
    "FileStatus",
    "GateState",
    "UpdateStage",
]
