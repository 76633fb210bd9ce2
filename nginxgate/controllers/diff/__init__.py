"""Diff workflow domain."""

from nginxgate.controllers.diff.controller import DiffWorkflowController

__all__ = [
    "DiffWorkflowController",
]
