"""Screen mixins."""

from nginxgate.screens.mixins.worker_mixin import WorkerMixin

__all__ = [
    "WorkerMixin",
]
