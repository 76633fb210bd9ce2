"""WorkerMixin - Worker lifecycle management for async backend calls.

This module provides a mixin class that implements consistent patterns for:
- Background worker management using Textual Workers
- Busy state reflected in a ``#loading-text`` status widget
- Error reporting through the reactive ``error`` attribute
- Cancelling every worker when the owning screen unmounts

Standard Reactive Pattern:
- Workers set is_loading and error reactive attributes
- on_worker_state_changed updates reactives
- watch_* methods handle UI updates based on reactive changes
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from contextlib import suppress
from typing import Any

from textual._context import NoActiveAppError
from textual.css.query import NoMatches, WrongType
from textual.reactive import reactive
from textual.worker import Worker, WorkerState

from nginxgate.widgets import CustomStatic

logger = logging.getLogger(__name__)


class WorkerMixin:
    """Mixin providing standardized Worker lifecycle management.

    - `start_worker()`: Worker creation with duration tracking
    - `cancel_workers()`: Cancel all running workers (uses `self.workers`)
    - `on_worker_state_changed()`: Default handler for worker state changes
    - Reactive state: is_loading, error

    Usage:
        ```python
        class MyScreen(WorkerMixin, Screen):
            def on_mount(self) -> None:
                self.start_worker(self._load, name="load-groups")
        ```
    """

    is_loading = reactive(False)
    error = reactive[str | None](None)
    loading_duration_ms = reactive(0.0, init=False)

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._load_start_time: float | None = None

    def watch_is_loading(self, loading: bool) -> None:
        if loading:
            self.update_loading_message("Loading...")
        else:
            self.update_loading_message("")

    def watch_error(self, error: str | None) -> None:
        if error:
            self.show_error_state(error)

    def start_worker(
        self,
        worker_func: Callable[..., Awaitable[Any]] | Awaitable[Any],
        *,
        exclusive: bool = False,
        name: str | None = None,
        group: str = "default",
    ) -> Worker[Any]:
        """Start an async worker.

        Args:
            worker_func: Async function (or coroutine) to run in the worker.
            exclusive: Cancel other workers of the same group first.
            name: Worker name for debugging.
            group: Worker group; exclusive cancellation is scoped to it.

        Returns:
            The Worker instance
        """
        self._load_start_time = time.monotonic()
        return self.run_worker(  # type: ignore[attr-defined]
            worker_func,
            name=name,
            group=group,
            exclusive=exclusive,
            exit_on_error=False,
        )

    def cancel_workers(self) -> None:
        """Cancel all running workers using Textual's built-in WorkerManager."""
        with suppress(NoActiveAppError):
            self.workers.cancel_all()  # type: ignore[attr-defined]

    def on_unmount(self) -> None:
        """Cancel all workers when the screen is unmounted."""
        self.cancel_workers()

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        """Log worker completion and clear the busy flag."""
        duration_ms = 0.0
        if self._load_start_time is not None and event.state in (
            WorkerState.SUCCESS,
            WorkerState.CANCELLED,
            WorkerState.ERROR,
        ):
            duration_ms = (time.monotonic() - self._load_start_time) * 1000
            self.loading_duration_ms = duration_ms
            self._load_start_time = None

        if event.state == WorkerState.CANCELLED:
            logger.debug("Worker '%s' was cancelled (%.2fms)", event.worker.name, duration_ms)
            self.is_loading = False
        elif event.state == WorkerState.ERROR:
            logger.error(
                "Worker '%s' error: %s (%.2fms)", event.worker.name, event.worker.error, duration_ms
            )
            self.is_loading = False
            self.error = str(event.worker.error)
        elif event.state == WorkerState.SUCCESS:
            logger.debug("Worker '%s' completed (%.2fms)", event.worker.name, duration_ms)
            self.is_loading = False

    # =========================================================================
    # Loading State Management - Default implementations
    # =========================================================================

    def update_loading_message(self, message: str) -> None:
        with suppress(NoMatches, WrongType):
            loading_text = self.query_one(  # type: ignore[attr-defined]
                "#loading-text", CustomStatic
            )
            loading_text.remove_class("error-text")
            loading_text.update(message)

    def show_error_state(self, message: str) -> None:
        with suppress(NoMatches, WrongType):
            loading_text = self.query_one(  # type: ignore[attr-defined]
                "#loading-text", CustomStatic
            )
            loading_text.update(message)
            loading_text.add_class("error-text")


__all__ = [
    "WorkerMixin",
]
