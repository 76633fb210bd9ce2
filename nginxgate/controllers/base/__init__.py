"""Base controller classes."""

from nginxgate.controllers.base.base_controller import (
    BaseController,
    PolicyViolationError,
    RequestGeneration,
    RequestTicket,
    WorkerResult,
)

__all__ = [
    "BaseController",
    "PolicyViolationError",
    "RequestGeneration",
    "RequestTicket",
    "WorkerResult",
]
