"""Deployment domain: configuration check and the prepare/apply gate."""

from nginxgate.controllers.deploy.check import ConfigCheckController
from nginxgate.controllers.deploy.gate import DeploymentGate, GatePolicyError

__all__ = [
    "ConfigCheckController",
    "DeploymentGate",
    "GatePolicyError",
]
