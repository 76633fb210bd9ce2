"""Controllers module for nginxgate.

This module provides domain-driven controllers for fetching backend state,
building the change tree and driving the prepare/apply rollout.
"""

from __future__ import annotations

# API client
from nginxgate.controllers.api import (
    ApiError,
    ApiResponseError,
    ApiTransportError,
    ConsoleApiClient,
)

# Base classes
from nginxgate.controllers.base import (
    BaseController,
    PolicyViolationError,
    RequestGeneration,
    WorkerResult,
)

# Orchestrator
from nginxgate.controllers.console import ConsoleController

# Deployment domain
from nginxgate.controllers.deploy import (
    ConfigCheckController,
    DeploymentGate,
    GatePolicyError,
)

# Diff domain
from nginxgate.controllers.diff import DiffWorkflowController

# Status domain
from nginxgate.controllers.status import PeriodicSource, StatusPoller

# Tree domain
from nginxgate.controllers.tree import (
    ChangeTreeBuilder,
    TreeController,
    build_change_tree,
)

__all__ = [
    "ApiError",
    "ApiResponseError",
    "ApiTransportError",
    "BaseController",
    "ChangeTreeBuilder",
    "ConfigCheckController",
    "ConsoleApiClient",
    "ConsoleController",
    "DeploymentGate",
    "DiffWorkflowController",
    "GatePolicyError",
    "PeriodicSource",
    "PolicyViolationError",
    "RequestGeneration",
    "StatusPoller",
    "TreeController",
    "WorkerResult",
    "build_change_tree",
]
