"""Status polling domain."""

from nginxgate.controllers.status.poller import (
    PeriodicSource,
    StatusPoller,
    clamp_refresh_interval,
)

__all__ = [
    "PeriodicSource",
    "StatusPoller",
    "clamp_refresh_interval",
]
