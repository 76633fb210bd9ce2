"""Unit tests for WorkerMixin.

This module tests:
- start_worker forwarding to run_worker
- cancel_workers tolerance outside an active app
- Worker state handling of the busy flag and errors
"""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

from textual.worker import WorkerState

from nginxgate.screens.mixins import WorkerMixin


class _Host:
    """Minimal stand-in for a Screen providing run_worker and workers."""

    def __init__(self) -> None:
        self.run_worker = MagicMock(return_value="worker")
        self.workers = MagicMock()


class _Harness(WorkerMixin, _Host):
    """WorkerMixin on the stand-in host, reactives replaced by attributes."""

    is_loading = False
    error = None
    loading_duration_ms = 0.0


def _event(state: WorkerState, error: Exception | None = None) -> SimpleNamespace:
    return SimpleNamespace(state=state, worker=SimpleNamespace(name="load", error=error))


class TestWorkerMixin:
    """Tests for WorkerMixin."""

    def test_start_worker_forwards_arguments(self) -> None:
        """Test that start_worker delegates to run_worker."""

        async def job() -> None:
            return None

        harness = _Harness()
        result = harness.start_worker(job, name="load", group="tree", exclusive=True)

        assert result == "worker"
        harness.run_worker.assert_called_once_with(
            job, name="load", group="tree", exclusive=True, exit_on_error=False
        )
        assert harness._load_start_time is not None

    def test_cancel_workers(self) -> None:
        """Test that cancel_workers cancels every worker."""
        harness = _Harness()
        harness.cancel_workers()
        harness.workers.cancel_all.assert_called_once_with()

    def test_success_clears_loading(self) -> None:
        """Test that a finished worker clears the busy flag."""
        harness = _Harness()
        harness.start_worker(MagicMock())
        harness.is_loading = True

        harness.on_worker_state_changed(_event(WorkerState.SUCCESS))

        assert harness.is_loading is False
        assert harness._load_start_time is None

    def test_error_sets_error_text(self) -> None:
        """Test that a failed worker records its error."""
        harness = _Harness()
        harness.is_loading = True

        harness.on_worker_state_changed(_event(WorkerState.ERROR, RuntimeError("boom")))

        assert harness.is_loading is False
        assert harness.error == "boom"

    def test_running_state_keeps_loading(self) -> None:
        """Test that a running worker leaves the busy flag alone."""
        harness = _Harness()
        harness.is_loading = True

        harness.on_worker_state_changed(_event(WorkerState.RUNNING))

        assert harness.is_loading is True
