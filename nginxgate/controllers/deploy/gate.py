"""Deployment gate - the two-phase prepare/apply update workflow.

States run ``IDLE -> PREPARING -> PREPARED -> APPLYING -> APPLIED``. A new
prepare restarts the cycle from any resting state. ``apply`` is permitted
only while the latest prepare passed its nginx check and no update request
is in flight; anything else is rejected locally before a request is made.

Both phases always act on production regardless of the mode the operator
is currently viewing.
"""

from __future__ import annotations

import logging

from nginxgate.constants.enums import DeployMode, GateState, UpdateStage
from nginxgate.controllers.api.client import ApiError, ApiResponseError
from nginxgate.controllers.base import (
    BaseController,
    PolicyViolationError,
    RequestTicket,
    WorkerResult,
)
from nginxgate.models.api.payloads import ApplyResult, PrepareResult, UpdateResult

logger = logging.getLogger(__name__)


class GatePolicyError(PolicyViolationError):
    """Prepare or apply attempted while the gate forbids it."""


class DeploymentGate(BaseController):
    """Guards the prepare -> apply rollout for one host at a time."""

    def __init__(self, api) -> None:
        super().__init__(api)
        self._state = GateState.IDLE
        self._in_flight = False
        self._prepared_ok = False
        self._prepared_for: tuple[str, str] | None = None
        self._last_prepare: PrepareResult | None = None
        self._last_apply: ApplyResult | None = None
        self._stage: UpdateStage | None = None

    # =========================================================================
    # State
    # =========================================================================

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def can_apply(self) -> bool:
        """True iff the latest prepare passed and no update request is running."""
        return (
            self._state is GateState.PREPARED
            and self._prepared_ok
            and not self._in_flight
        )

    @property
    def stage(self) -> UpdateStage | None:
        """Stage of ``last_result``."""
        return self._stage

    @property
    def last_prepare(self) -> PrepareResult | None:
        return self._last_prepare

    @property
    def last_apply(self) -> ApplyResult | None:
        return self._last_apply

    @property
    def last_result(self) -> UpdateResult | None:
        if self._stage is UpdateStage.APPLY:
            return self._last_apply
        if self._stage is UpdateStage.PREPARE:
            return self._last_prepare
        return None

    def reset(self) -> None:
        """Return to IDLE and drop results; in-flight responses are discarded."""
        self._requests.invalidate()
        self._state = GateState.IDLE
        self._in_flight = False
        self._prepared_ok = False
        self._prepared_for = None
        self._last_prepare = None
        self._last_apply = None
        self._stage = None

    # =========================================================================
    # Prepare
    # =========================================================================

    async def prepare(
        self,
        group: str,
        host: str,
        *,
        display_mode: DeployMode | None = None,
    ) -> WorkerResult:
        """Sync the staged configuration and run ``nginx -t`` on production.

        Args:
            group: Host group name.
            host: Host address.
            display_mode: Mode the operator is viewing; preview is rejected.

        Raises:
            GatePolicyError: No host selected, preview display mode, or an
                update request already in flight.
        """
        if not group or not host:
            raise GatePolicyError("Select a host first")
        if display_mode is DeployMode.PREVIEW:
            raise GatePolicyError("Updates are only allowed in production mode")
        if self._in_flight:
            raise GatePolicyError("An update request is already running")

        ticket = self._requests.begin((group, host))
        self._state = GateState.PREPARING
        self._in_flight = True
        self._prepared_ok = False
        self._prepared_for = None
        self._last_apply = None
        logger.info("Preparing update for %s/%s", group, host)

        try:
            return await self._send_prepare(ticket, group, host)
        finally:
            self._settle(ticket, "prepare")

    async def _send_prepare(
        self, ticket: RequestTicket, group: str, host: str
    ) -> WorkerResult:
        try:
            result = await self._api.prepare_update(group, host)
        except ApiError as exc:
            if not self._requests.is_current(ticket):
                return self._discard(ticket, "prepare")
            diagnostic = _diagnostic(exc, PrepareResult)
            self._finish(ticket)
            self._state = GateState.PREPARED if diagnostic is not None else GateState.IDLE
            if diagnostic is not None:
                self._record(UpdateStage.PREPARE, prepare=diagnostic)
            logger.warning("Prepare for %s/%s failed: %s", group, host, exc)
            return WorkerResult(
                success=False,
                data=diagnostic,
                error=f"Update prepare failed: {exc}",
                duration_ms=ticket.elapsed_ms(),
            )

        if not self._requests.is_current(ticket):
            return self._discard(ticket, "prepare")
        self._finish(ticket)
        self._state = GateState.PREPARED
        self._prepared_ok = result.ok
        self._prepared_for = (group, host)
        self._record(UpdateStage.PREPARE, prepare=result)
        logger.info("Prepared %s/%s: nginx check ok=%s", group, host, result.ok)
        return WorkerResult(success=True, data=result, duration_ms=ticket.elapsed_ms())

    # =========================================================================
    # Apply
    # =========================================================================

    async def apply(self, group: str, host: str) -> WorkerResult:
        """Reload nginx with the prepared configuration.

        Raises:
            GatePolicyError: The gate does not currently allow apply, or the
                host differs from the one that was prepared.
        """
        if not self.can_apply:
            logger.warning(
                "Apply rejected for %s/%s (state=%s, prepared_ok=%s, in_flight=%s)",
                group,
                host,
                self._state.value,
                self._prepared_ok,
                self._in_flight,
            )
            raise GatePolicyError("Apply requires a passing prepare")
        if self._prepared_for != (group, host):
            raise GatePolicyError("Apply target differs from the prepared host")

        ticket = self._requests.begin((group, host))
        self._state = GateState.APPLYING
        self._in_flight = True
        logger.info("Applying update for %s/%s", group, host)

        try:
            return await self._send_apply(ticket, group, host)
        finally:
            self._settle(ticket, "apply")

    async def _send_apply(
        self, ticket: RequestTicket, group: str, host: str
    ) -> WorkerResult:
        try:
            result = await self._api.apply_update(group, host)
        except ApiError as exc:
            if not self._requests.is_current(ticket):
                return self._discard(ticket, "apply")
            diagnostic = _diagnostic(exc, ApplyResult)
            self._finish(ticket)
            self._state = GateState.IDLE
            self._prepared_ok = False
            self._prepared_for = None
            if diagnostic is not None:
                self._record(UpdateStage.APPLY, apply=diagnostic)
            logger.warning("Apply for %s/%s failed: %s", group, host, exc)
            return WorkerResult(
                success=False,
                data=diagnostic,
                error=f"Update apply failed: {exc}",
                duration_ms=ticket.elapsed_ms(),
            )

        if not self._requests.is_current(ticket):
            return self._discard(ticket, "apply")
        self._finish(ticket)
        self._state = GateState.APPLIED
        self._prepared_ok = False
        self._prepared_for = None
        self._record(UpdateStage.APPLY, apply=result)
        logger.info("Applied %s/%s: success=%s", group, host, result.success)
        return WorkerResult(success=True, data=result, duration_ms=ticket.elapsed_ms())

    # =========================================================================
    # Helpers
    # =========================================================================

    def _finish(self, ticket: RequestTicket) -> None:
        if self._requests.is_current(ticket):
            self._in_flight = False

    def _settle(self, ticket: RequestTicket, operation: str) -> None:
        """Release a current request that ended without a response.

        Covers cancellation and unexpected errors; a request that never
        answered leaves nothing to apply.
        """
        if not (self._requests.is_current(ticket) and self._in_flight):
            return
        logger.warning("Update %s abandoned before a response arrived", operation)
        self._in_flight = False
        self._state = GateState.IDLE
        self._prepared_ok = False
        self._prepared_for = None

    def _record(
        self,
        stage: UpdateStage,
        *,
        prepare: PrepareResult | None = None,
        apply: ApplyResult | None = None,
    ) -> None:
        self._stage = stage
        if prepare is not None:
            self._last_prepare = prepare
        if apply is not None:
            self._last_apply = apply


def _diagnostic(exc: ApiError, model: type) -> PrepareResult | ApplyResult | None:
    """Return the parsed body carried by a non-2xx response, if any."""
    if isinstance(exc, ApiResponseError) and isinstance(exc.result, model):
        return exc.result
    return None


__all__ = [
    "DeploymentGate",
    "GatePolicyError",
]
