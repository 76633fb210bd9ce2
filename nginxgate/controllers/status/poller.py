"""Status poller - auto-refresh and drift-status timers.

Two independent periodic sources share one contract: ``start``/``stop`` are
idempotent and after ``stop`` returns no tick issued before it may write
anything. Ticks run as separate tasks so a hung request never blocks the
next tick; the controllers' request generations discard whichever response
is superseded.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from nginxgate.constants.limits import REFRESH_INTERVAL_MIN
from nginxgate.constants.timeouts import DRIFT_POLL_INTERVAL
from nginxgate.controllers.api.client import ApiError
from nginxgate.controllers.base import BaseController, WorkerResult
from nginxgate.models.api.payloads import DriftStatusReport

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


def clamp_refresh_interval(seconds: float) -> float:
    """Clamp an operator-supplied interval to the supported minimum."""
    return max(float(REFRESH_INTERVAL_MIN), float(seconds))


class PeriodicSource:
    """A start/stop-able timer that runs an async callback every ``interval``.

    Args:
        name: Label used in logs.
        interval: Seconds between ticks.
        callback: Coroutine function invoked on every tick.
        sleep: Sleep function, injectable for tests.
    """

    def __init__(
        self,
        name: str,
        interval: float,
        callback: Callable[[], Awaitable[object]],
        *,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self.name = name
        self._interval = interval
        self._callback = callback
        self._sleep = sleep
        self._loop_task: asyncio.Task[None] | None = None
        self._ticks: set[asyncio.Task[object]] = set()

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    def start(self) -> None:
        if self.running:
            return
        logger.debug("Starting %s timer every %.1fs", self.name, self._interval)
        self._loop_task = asyncio.get_running_loop().create_task(
            self._run(), name=f"{self.name}-timer"
        )

    def stop(self) -> None:
        """Cancel the timer and every tick still in flight."""
        if self._loop_task is not None:
            logger.debug("Stopping %s timer", self.name)
            self._loop_task.cancel()
            self._loop_task = None
        for task in list(self._ticks):
            task.cancel()
        self._ticks.clear()

    def set_interval(self, interval: float) -> None:
        """Change the interval, restarting the timer if it is running."""
        self._interval = interval
        if self.running:
            self.stop()
            self.start()

    def trigger(self) -> asyncio.Task[object]:
        """Run one tick now, outside the schedule."""
        task = asyncio.get_running_loop().create_task(
            self._callback(), name=f"{self.name}-tick"
        )
        self._ticks.add(task)
        task.add_done_callback(self._on_tick_done)
        return task

    async def _run(self) -> None:
        while True:
            await self._sleep(self._interval)
            self.trigger()

    def _on_tick_done(self, task: asyncio.Task[object]) -> None:
        self._ticks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("%s tick failed: %s", self.name, exc, exc_info=exc)


class StatusPoller(BaseController):
    """Owns the auto-refresh timer and the drift-status poll.

    Args:
        api: Backend client, used for drift status.
        on_refresh: Coroutine run on every auto-refresh tick (tree plus
            selected file refresh).
        on_drift: Called with the drift fetch outcome when it is still
            current.
        sleep: Sleep function shared by both timers.
    """

    def __init__(
        self,
        api,
        on_refresh: Callable[[], Awaitable[object]],
        on_drift: Callable[[WorkerResult], None] | None = None,
        *,
        refresh_interval: float = REFRESH_INTERVAL_MIN,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        super().__init__(api)
        self._on_drift = on_drift
        self._drift: DriftStatusReport | None = None
        self._drift_open = False
        self.auto_refresh = PeriodicSource(
            "auto-refresh",
            clamp_refresh_interval(refresh_interval),
            on_refresh,
            sleep=sleep,
        )
        self.drift_poll = PeriodicSource(
            "drift-poll",
            DRIFT_POLL_INTERVAL,
            self.fetch_drift,
            sleep=sleep,
        )

    @property
    def drift(self) -> DriftStatusReport | None:
        """Last drift report received, kept after the panel closes."""
        return self._drift

    @property
    def drift_panel_open(self) -> bool:
        return self._drift_open

    def set_drift_listener(self, listener: Callable[[WorkerResult], None] | None) -> None:
        self._on_drift = listener

    # =========================================================================
    # Auto-refresh
    # =========================================================================

    def enable_auto_refresh(self, interval: float | None = None) -> None:
        if interval is not None:
            self.auto_refresh.set_interval(clamp_refresh_interval(interval))
        self.auto_refresh.start()

    def disable_auto_refresh(self) -> None:
        self.auto_refresh.stop()

    def set_refresh_interval(self, interval: float) -> float:
        """Set the auto-refresh interval; returns the clamped value."""
        clamped = clamp_refresh_interval(interval)
        self.auto_refresh.set_interval(clamped)
        return clamped

    # =========================================================================
    # Drift poll
    # =========================================================================

    def open_drift_panel(self) -> asyncio.Task[object]:
        """Start polling drift status and fetch once immediately."""
        self._drift_open = True
        self.drift_poll.start()
        return self.drift_poll.trigger()

    def close_drift_panel(self) -> None:
        self._drift_open = False
        self.drift_poll.stop()
        self._requests.invalidate()

    def refresh_drift_now(self) -> asyncio.Task[object] | None:
        if not self._drift_open:
            return None
        return self.drift_poll.trigger()

    async def fetch_drift(self) -> WorkerResult:
        ticket = self._requests.begin("drift")
        try:
            report = await self._api.fetch_drift_status()
        except ApiError as exc:
            if not self._requests.is_current(ticket):
                return self._discard(ticket, "drift")
            outcome = WorkerResult(
                success=False,
                error=f"Failed to fetch git status: {exc}",
                duration_ms=ticket.elapsed_ms(),
            )
        else:
            if not self._requests.is_current(ticket):
                return self._discard(ticket, "drift")
            self._drift = report
            outcome = WorkerResult(success=True, data=report, duration_ms=ticket.elapsed_ms())
        if self._on_drift is not None:
            self._on_drift(outcome)
        return outcome

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def reset(self) -> None:
        self.stop_all()

    def stop_all(self) -> None:
        """Stop both timers; nothing issued earlier writes afterwards."""
        self.auto_refresh.stop()
        self.close_drift_panel()
        logger.debug("All status timers stopped")


__all__ = [
    "PeriodicSource",
    "StatusPoller",
    "clamp_refresh_interval",
]
