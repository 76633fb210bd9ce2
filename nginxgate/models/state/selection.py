"""Selection context - the (group, host, mode) triple every view is keyed by."""

from __future__ import annotations

from dataclasses import dataclass, replace

from nginxgate.constants.enums import DeployMode


@dataclass(frozen=True)
class SelectionContext:
    """Currently selected group, host and comparison mode."""

    group: str
    host: str
    mode: DeployMode = DeployMode.PREVIEW

    @property
    def is_preview(self) -> bool:
        return self.mode is DeployMode.PREVIEW

    def with_mode(self, mode: DeployMode) -> SelectionContext:
        return replace(self, mode=mode)


@dataclass(frozen=True)
class FileSelection:
    """A selected file inside a selection context."""

    context: SelectionContext
    path: str


__all__ = [
    "FileSelection",
    "SelectionContext",
]
