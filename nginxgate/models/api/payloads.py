"""Backend payload models.

Field-exact pydantic renditions of the gitops-nginx HTTP responses. Optional
fields the backend omits default to ``None`` so partially populated bodies
(e.g. a non-2xx diagnostic) still validate.
"""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from nginxgate.constants.enums import DeployMode, DriftState, UpdateStage


class _Payload(BaseModel):
    """Base for all payloads: ignore unknown fields, accept aliases."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# =============================================================================
# Groups
# =============================================================================


class HostSummary(_Payload):
    """One managed nginx host inside a group."""

    name: str = ""
    host: str
    config_dir_suffix: str = ""


class GroupSummary(_Payload):
    """A named host group."""

    name: str
    hosts: list[HostSummary] = Field(default_factory=list)

    @field_validator("hosts", mode="before")
    @classmethod
    def _null_hosts(cls, value: object) -> object:
        return [] if value is None else value

    def find_host(self, host: str) -> HostSummary | None:
        """Return the host entry matching ``host`` or None."""
        return next((h for h in self.hosts if h.host == host), None)


class GroupsResponse(_Payload):
    groups: list[GroupSummary] = Field(default_factory=list)

    @field_validator("groups", mode="before")
    @classmethod
    def _null_groups(cls, value: object) -> object:
        return [] if value is None else value


# =============================================================================
# Tree and diff
# =============================================================================


class TreeResponse(_Payload):
    """Flat path listing of the deployed configuration tree."""

    prefix: str = ""
    paths: list[str] = Field(default_factory=list)
    diff_paths: list[str] | None = None
    file_statuses: dict[str, str] = Field(default_factory=dict)

    # The backend serialises unset slices and maps as null.
    @field_validator("paths", mode="before")
    @classmethod
    def _null_paths(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("file_statuses", mode="before")
    @classmethod
    def _null_statuses(cls, value: object) -> object:
        return {} if value is None else value


class DiffRecord(_Payload):
    """Triple diff for one file: remote, compare environment and their diff."""

    path: str
    remote_content: str = ""
    compare_content: str = ""
    diff: str = ""
    mode: str = DeployMode.PREVIEW.value
    compare_label: str = ""
    file_status: str | None = None


# =============================================================================
# Check and update
# =============================================================================


class NginxExecRecord(_Payload):
    """Output of an nginx command run on the host (``-t`` or reload)."""

    command: str = ""
    ok: bool = False
    output: str = ""


class SyncStats(_Payload):
    """File-sync counts with optional per-category file lists."""

    total: int = 0
    skipped: int = 0
    updated: int = 0
    added: int = 0
    deleted: int = 0
    updated_files: list[str] | None = None
    added_files: list[str] | None = None
    deleted_files: list[str] | None = None


class CheckResult(_Payload):
    """Result of ``POST /check``. ``sync`` is absent in production mode."""

    ok: bool = False
    mode: str | None = None
    sync: SyncStats | None = None
    nginx: NginxExecRecord | None = None


class PrepareResult(_Payload):
    """Prepare stage of an update: sync to staging plus ``nginx -t``."""

    success: bool | None = None
    nginx: NginxExecRecord | None = None
    sync: SyncStats | None = None

    stage: ClassVar[UpdateStage] = UpdateStage.PREPARE

    @property
    def ok(self) -> bool:
        """Whether the configuration check passed.

        Taken from the nginx record only; the top-level ``success`` flag is
        not consulted.
        """
        return bool(self.nginx and self.nginx.ok)


class ApplyResult(_Payload):
    """Apply stage of an update: reload nginx with the prepared config."""

    success: bool = False
    message: str = ""
    nginx: NginxExecRecord | None = None

    stage: ClassVar[UpdateStage] = UpdateStage.APPLY

    @property
    def ok(self) -> bool:
        return self.success


UpdateResult = Union[PrepareResult, ApplyResult]


# =============================================================================
# Drift status
# =============================================================================


class CommitInfo(_Payload):
    hash: str = ""
    message: str = ""
    author: str = ""
    timestamp: datetime | None = None


class DriftStatusReport(_Payload):
    """Response of ``GET /git/status``."""

    branch: str = ""
    sync_mode: str = ""
    local_commit: CommitInfo | None = None
    remote_commit: CommitInfo | None = None
    status: str = DriftState.UNKNOWN.value
    diff: str | None = None
    error: str | None = None

    @property
    def state(self) -> DriftState:
        """Status as an enum; unrecognised values map to UNKNOWN."""
        try:
            return DriftState(self.status)
        except ValueError:
            return DriftState.UNKNOWN


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
