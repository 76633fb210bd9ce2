"""Tests for the diff workflow controller.

This module tests:
- File selection and diff fetch
- Out-of-order completion (latest selection wins)
- Clearing on selection and context changes
- Refresh of the selected file
"""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from nginxgate.constants.enums import DeployMode
from nginxgate.controllers.api.client import ApiTransportError
from nginxgate.controllers.diff.controller import DiffWorkflowController
from nginxgate.models.api.payloads import DiffRecord

GROUP = "edge"
HOST = "10.0.0.1"


def _record(path: str, mode: str = "preview") -> DiffRecord:
    return DiffRecord(
        path=path,
        remote_content="worker_processes 1;\n",
        compare_content="worker_processes 2;\n",
        diff="--- remote\n+++ preview\n-worker_processes 1;\n+worker_processes 2;\n",
        mode=mode,
    )


class GatedDiffApi:
    """Fake backend whose triple-diff responses are released per path."""

    def __init__(self) -> None:
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[tuple[str, str, str, DeployMode]] = []

    def gate(self, path: str) -> asyncio.Event:
        return self.gates.setdefault(path, asyncio.Event())

    async def fetch_triple_diff(self, group, host, path, mode) -> DiffRecord:
        self.calls.append((group, host, path, mode))
        await self.gate(path).wait()
        return _record(path)


class TestDiffWorkflowController:
    """Tests for DiffWorkflowController."""

    @pytest.fixture
    def api(self) -> MagicMock:
        api = MagicMock()
        api.fetch_triple_diff = AsyncMock(side_effect=lambda g, h, p, m: _record(p, m.value))
        return api

    @pytest.fixture
    def controller(self, api: MagicMock) -> DiffWorkflowController:
        return DiffWorkflowController(api)

    @pytest.mark.asyncio
    async def test_select_file_fetches_record(
        self, controller: DiffWorkflowController, api: MagicMock
    ) -> None:
        """Test that selecting a file stores its diff."""
        result = await controller.select_file(GROUP, HOST, "edge/10.0.0.1/nginx.conf", "prod")

        api.fetch_triple_diff.assert_awaited_once_with(
            GROUP, HOST, "edge/10.0.0.1/nginx.conf", DeployMode.PROD
        )
        assert result.success is True
        assert controller.selected_path == "edge/10.0.0.1/nginx.conf"
        assert controller.record.mode == "prod"

    @pytest.mark.asyncio
    async def test_failed_fetch_reports_error(
        self, controller: DiffWorkflowController, api: MagicMock
    ) -> None:
        """Test that a failed fetch keeps the selection without a record."""
        api.fetch_triple_diff.side_effect = ApiTransportError("GET /triple-diff failed")

        result = await controller.select_file(GROUP, HOST, "a.conf", DeployMode.PREVIEW)

        assert result.success is False
        assert "Failed to load file content/diff" in result.error
        assert controller.selected_path == "a.conf"
        assert controller.record is None

    @pytest.mark.asyncio
    async def test_failed_refresh_keeps_record(
        self, controller: DiffWorkflowController, api: MagicMock
    ) -> None:
        """Test that a failed refresh of the same file keeps its diff."""
        await controller.select_file(GROUP, HOST, "a.conf", DeployMode.PREVIEW)
        record = controller.record

        api.fetch_triple_diff.side_effect = ApiTransportError("GET /triple-diff failed")
        result = await controller.refresh()

        assert result.success is False
        assert controller.record == record

    @pytest.mark.asyncio
    async def test_refresh_without_selection(self, controller: DiffWorkflowController) -> None:
        """Test that refresh is a no-op with nothing selected."""
        assert await controller.refresh() is None

    @pytest.mark.asyncio
    async def test_selecting_other_file_clears_record_immediately(self) -> None:
        """Test that a new selection never shows the previous file's diff."""
        api = GatedDiffApi()
        controller = DiffWorkflowController(api)
        api.gate("a.conf").set()
        await controller.select_file(GROUP, HOST, "a.conf", DeployMode.PREVIEW)
        assert controller.record is not None

        task = asyncio.create_task(
            controller.select_file(GROUP, HOST, "b.conf", DeployMode.PREVIEW)
        )
        await asyncio.sleep(0)

        assert controller.selected_path == "b.conf"
        assert controller.record is None
        api.gate("b.conf").set()
        await task
        assert controller.record.path == "b.conf"

    @pytest.mark.asyncio
    async def test_latest_selection_wins_over_late_response(self) -> None:
        """Test that X resolving after Y does not replace Y's diff."""
        api = GatedDiffApi()
        controller = DiffWorkflowController(api)

        task_x = asyncio.create_task(
            controller.select_file(GROUP, HOST, "x.conf", DeployMode.PREVIEW)
        )
        await asyncio.sleep(0)
        task_y = asyncio.create_task(
            controller.select_file(GROUP, HOST, "y.conf", DeployMode.PREVIEW)
        )
        await asyncio.sleep(0)

        api.gate("y.conf").set()
        result_y = await task_y
        assert result_y.success is True
        assert controller.record.path == "y.conf"

        api.gate("x.conf").set()
        result_x = await task_x

        assert result_x.stale is True
        assert controller.selected_path == "y.conf"
        assert controller.record.path == "y.conf"

    @pytest.mark.asyncio
    async def test_reset_discards_in_flight_fetch(self) -> None:
        """Test that a fetch completing after reset is dropped."""
        api = GatedDiffApi()
        controller = DiffWorkflowController(api)

        task = asyncio.create_task(
            controller.select_file(GROUP, HOST, "a.conf", DeployMode.PREVIEW)
        )
        await asyncio.sleep(0)
        controller.reset()
        api.gate("a.conf").set()
        result = await task

        assert result.stale is True
        assert controller.selection is None
        assert controller.record is None
