"""Backend payload models."""

from nginxgate.models.api.payloads import (
    ApplyResult,
    CheckResult,
    CommitInfo,
    DiffRecord,
    DriftStatusReport,
    GroupsResponse,
    GroupSummary,
    HostSummary,
    NginxExecRecord,
    PrepareResult,
    SyncStats,
    TreeResponse,
    UpdateResult,
)

__all__ = [
    "ApplyResult",
    "CheckResult",
    "CommitInfo",
    "DiffRecord",
    "DriftStatusReport",
    "GroupSummary",
    "GroupsResponse",
    "HostSummary",
    "NginxExecRecord",
    "PrepareResult",
    "SyncStats",
    "TreeResponse",
    "UpdateResult",
]
