"""Configuration check controller - ``POST /check`` for the displayed mode."""

from __future__ import annotations

import logging

from nginxgate.controllers.api.client import ApiError, ApiResponseError
from nginxgate.controllers.base import BaseController, PolicyViolationError, WorkerResult
from nginxgate.models.api.payloads import CheckResult
from nginxgate.models.state.selection import SelectionContext

logger = logging.getLogger(__name__)


class ConfigCheckController(BaseController):
    """Runs configuration checks and holds the latest result for the context."""

    def __init__(self, api) -> None:
        super().__init__(api)
        self._result: CheckResult | None = None
        self._context: SelectionContext | None = None
        self._in_flight = False

    @property
    def result(self) -> CheckResult | None:
        return self._result

    @property
    def context(self) -> SelectionContext | None:
        """Context the held result was produced for."""
        return self._context

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def reset(self) -> None:
        self._requests.invalidate()
        self._result = None
        self._context = None
        self._in_flight = False

    async def run(self, context: SelectionContext | None) -> WorkerResult:
        """Run the check for ``context`` in its displayed mode.

        Raises:
            PolicyViolationError: No host is selected.
        """
        if context is None or not context.host:
            raise PolicyViolationError("Select a host first")

        ticket = self._requests.begin(context)
        self._in_flight = True
        try:
            result = await self._api.run_check(context.group, context.host, context.mode)
        except ApiResponseError as exc:
            if not self._requests.is_current(ticket):
                return self._discard(ticket, "check")
            diagnostic = exc.result if isinstance(exc.result, CheckResult) else None
            if diagnostic is not None:
                self._result, self._context = diagnostic, context
            return WorkerResult(
                success=False,
                data=diagnostic,
                error=f"Configuration check failed: {exc}",
                duration_ms=ticket.elapsed_ms(),
            )
        except ApiError as exc:
            if not self._requests.is_current(ticket):
                return self._discard(ticket, "check")
            return WorkerResult(
                success=False,
                error=f"Configuration check failed: {exc}",
                duration_ms=ticket.elapsed_ms(),
            )
        finally:
            if self._requests.is_current(ticket):
                self._in_flight = False

        if not self._requests.is_current(ticket):
            return self._discard(ticket, "check")
        self._result, self._context = result, context
        logger.info(
            "Check %s/%s mode=%s ok=%s", context.group, context.host, context.mode.value, result.ok
        )
        return WorkerResult(success=True, data=result, duration_ms=ticket.elapsed_ms())


__all__ = [
    "ConfigCheckController",
]
