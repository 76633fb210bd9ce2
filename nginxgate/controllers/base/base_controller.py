"""Base controller with stale-response protection for nginxgate.

Completion order of backend calls is not request order. Every controller
stamps outgoing requests with a ticket from ``RequestGeneration`` and only
applies a response whose ticket is still current when it completes.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Hashable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from nginxgate.controllers.api.client import ConsoleApiClient

logger = logging.getLogger(__name__)


@dataclass
class WorkerResult:
    """Result wrapper for controller operations.

    Attributes:
        success: True when the operation completed and its result was applied.
        data: The payload, also populated on failure when a diagnostic body
            could be parsed.
        error: User-facing failure text, None on success.
        stale: True when the response was discarded because the selection it
            was issued for is no longer current.
        duration_ms: Wall time of the request.
    """

    success: bool
    data: Any | None = None
    error: str | None = None
    stale: bool = False
    duration_ms: float = 0.0


@dataclass(frozen=True)
class RequestTicket:
    """Identity of one issued request."""

    generation: int
    context: Hashable
    started_at: float

    def elapsed_ms(self) -> float:
        return (time.monotonic() - self.started_at) * 1000


class RequestGeneration:
    """Monotonic request counter bound to a selection context.

    ``begin()`` supersedes every earlier ticket; ``invalidate()`` supersedes
    all outstanding tickets without issuing a new one (context switch,
    panel close, timer stop).
    """

    def __init__(self) -> None:
        self._generation = 0
        self._context: Hashable | None = None

    @property
    def generation(self) -> int:
        return self._generation

    def begin(self, context: Hashable) -> RequestTicket:
        """Issue a ticket for ``context``, superseding all earlier ones."""
        self._generation += 1
        self._context = context
        return RequestTicket(self._generation, context, time.monotonic())

    def invalidate(self) -> None:
        """Discard every outstanding ticket."""
        self._generation += 1
        self._context = None

    def is_current(self, ticket: RequestTicket) -> bool:
        """Return True if ``ticket`` is the latest one and its context still holds."""
        return ticket.generation == self._generation and ticket.context == self._context


class BaseController(ABC):
    """Base controller class for backend-backed state.

    Subclasses hold one piece of derived state keyed by a selection context
    and must implement ``reset`` to drop it when that context changes.
    """

    def __init__(self, api: ConsoleApiClient) -> None:
        self._api = api
        self._requests = RequestGeneration()

    @property
    def api(self) -> ConsoleApiClient:
        return self._api

    @abstractmethod
    def reset(self) -> None:
        """Forget held state and invalidate in-flight requests."""
        ...

    def _discard(self, ticket: RequestTicket, what: str) -> WorkerResult:
        """Log and build the result for a superseded response."""
        logger.debug(
            "Discarding stale %s response (generation %s, current %s)",
            what,
            ticket.generation,
            self._requests.generation,
        )
        return WorkerResult(success=False, stale=True, duration_ms=ticket.elapsed_ms())


class PolicyViolationError(Exception):
    """An operation disallowed by the current state, rejected before any request."""
