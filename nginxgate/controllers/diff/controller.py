"""Diff workflow controller - the selected file and its triple diff.

A response is applied only if the (context, path) it was fetched for is
still the current selection when it completes; arrival order is irrelevant.
"""

from __future__ import annotations

import logging

from nginxgate.constants.enums import DeployMode
from nginxgate.controllers.api.client import ApiError
from nginxgate.controllers.base import BaseController, WorkerResult
from nginxgate.models.api.payloads import DiffRecord
from nginxgate.models.state.selection import FileSelection, SelectionContext

logger = logging.getLogger(__name__)


class DiffWorkflowController(BaseController):
    """Tracks the selected file and its latest diff record."""

    def __init__(self, api) -> None:
        super().__init__(api)
        self._selection: FileSelection | None = None
        self._record: DiffRecord | None = None

    @property
    def selection(self) -> FileSelection | None:
        return self._selection

    @property
    def selected_path(self) -> str | None:
        return self._selection.path if self._selection else None

    @property
    def record(self) -> DiffRecord | None:
        return self._record

    def reset(self) -> None:
        """Clear the selection and its diff; in-flight fetches are discarded."""
        self._requests.invalidate()
        self._selection = None
        self._record = None

    async def select_file(
        self, group: str, host: str, path: str, mode: DeployMode | str
    ) -> WorkerResult:
        """Select ``path`` and fetch its diff.

        Selecting a different file drops the previous record immediately so
        it is never shown under the new file's name.
        """
        selection = FileSelection(SelectionContext(group, host, DeployMode(mode)), path)
        if selection != self._selection:
            logger.debug("Selected %s (%s)", path, selection.context.mode.value)
            self._record = None
        self._selection = selection
        return await self._fetch(selection)

    async def refresh(self) -> WorkerResult | None:
        """Re-fetch the current selection; None when nothing is selected."""
        if self._selection is None:
            return None
        return await self._fetch(self._selection)

    async def _fetch(self, selection: FileSelection) -> WorkerResult:
        ticket = self._requests.begin(selection)
        context = selection.context
        try:
            record = await self._api.fetch_triple_diff(
                context.group, context.host, selection.path, context.mode
            )
        except ApiError as exc:
            if not self._requests.is_current(ticket):
                return self._discard(ticket, "diff")
            return WorkerResult(
                success=False,
                error=f"Failed to load file content/diff: {exc}",
                duration_ms=ticket.elapsed_ms(),
            )

        if not self._requests.is_current(ticket):
            return self._discard(ticket, "diff")
        self._record = record
        return WorkerResult(success=True, data=record, duration_ms=ticket.elapsed_ms())


__all__ = [
    "DiffWorkflowController",
]
