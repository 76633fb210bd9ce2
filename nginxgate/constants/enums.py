"""All enum definitions for the TUI.

This module consolidates all enumerations used throughout the application.
"""

from enum import Enum

# =============================================================================
# Domain Enums
# =============================================================================


class DeployMode(str, Enum):
    """Comparison target for the deployed configuration."""

    PREVIEW = "preview"
    PROD = "prod"

    @property
    def label(self) -> str:
        """Human label for the compared environment."""
        return "Preview" if self is DeployMode.PREVIEW else "Production"


class FileStatus(str, Enum):
    """Change tag attached to a path in the tree response."""

    MODIFIED = "modified"
    ADDED = "added"
    DELETED = "deleted"


class DriftState(str, Enum):
    """Drift between the backend's local and remote commit references."""

    SYNCED = "synced"
    AHEAD = "ahead"
    BEHIND = "behind"
    DIVERGED = "diverged"
    ERROR = "error"
    UNKNOWN = "unknown"


class GateState(Enum):
    """Prepare/apply gate states."""

    IDLE = "idle"
    PREPARING = "preparing"
    PREPARED = "prepared"
    APPLYING = "applying"
    APPLIED = "applied"


class UpdateStage(Enum):
    """Which half of the update workflow a result belongs to."""

    PREPARE = "prepare"
    APPLY = "apply"


__all__ = [
    "DeployMode",
    "DriftState",
    "FileStatus",
    "GateState",
    "UpdateStage",
]
