"""Tests for base controller and request generations."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from nginxgate.controllers.base import (
    BaseController,
    PolicyViolationError,
    RequestGeneration,
    WorkerResult,
)


class TestWorkerResult:
    """Tests for WorkerResult dataclass."""

    def test_worker_result_defaults(self) -> None:
        """Test WorkerResult default values."""
        result = WorkerResult(success=True)
        assert result.data is None
        assert result.error is None
        assert result.stale is False
        assert result.duration_ms == 0.0

    def test_worker_result_failure(self) -> None:
        """Test WorkerResult carrying an error."""
        result = WorkerResult(success=False, error="boom")
        assert result.success is False
        assert result.error == "boom"


class TestRequestGeneration:
    """Tests for RequestGeneration."""

    def test_latest_ticket_is_current(self) -> None:
        """Test that only the most recent ticket stays current."""
        requests = RequestGeneration()
        first = requests.begin("x")
        second = requests.begin("y")

        assert not requests.is_current(first)
        assert requests.is_current(second)

    def test_invalidate_supersedes_outstanding(self) -> None:
        """Test that invalidate makes every issued ticket stale."""
        requests = RequestGeneration()
        ticket = requests.begin("x")
        requests.invalidate()

        assert not requests.is_current(ticket)
        assert requests.generation == ticket.generation + 1

    def test_same_context_new_request_supersedes(self) -> None:
        """Test that a repeated request for one context supersedes the older."""
        requests = RequestGeneration()
        first = requests.begin(("g", "h"))
        second = requests.begin(("g", "h"))

        assert not requests.is_current(first)
        assert requests.is_current(second)

    def test_ticket_elapsed_is_non_negative(self) -> None:
        """Test ticket elapsed time."""
        ticket = RequestGeneration().begin("x")
        assert ticket.elapsed_ms() >= 0


class TestBaseController:
    """Tests for BaseController abstract class."""

    def test_cannot_instantiate_abstract(self) -> None:
        """Test that BaseController requires reset."""
        with pytest.raises(TypeError):
            BaseController(MagicMock())  # type: ignore[abstract]

    def test_subclass_discard_builds_stale_result(self) -> None:
        """Test the stale result helper."""

        class Dummy(BaseController):
            def reset(self) -> None:
                self._requests.invalidate()

        api = MagicMock()
        controller = Dummy(api)
        ticket = controller._requests.begin("ctx")
        controller.reset()
        result = controller._discard(ticket, "dummy")

        assert controller.api is api
        assert result.success is False
        assert result.stale is True

    def test_policy_violation_is_exception(self) -> None:
        """Test PolicyViolationError hierarchy."""
        assert issubclass(PolicyViolationError, Exception)
