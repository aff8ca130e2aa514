"""Deployment engine for Ollama and Open WebUI.

This package drives Docker to provision the shared network and both
containers, probes the services over HTTP, and implements the reset path.
"""

from webui_deploy.deploy.health import HealthChecker, HealthTarget
from webui_deploy.deploy.orchestrator import (
    DeploymentOrchestrator,
    DeploymentResult,
    ResetResult,
)
from webui_deploy.deploy.runtime import DockerRuntime

__all__ = [
    "DeploymentOrchestrator",
    "DeploymentResult",
    "DockerRuntime",
    "HealthChecker",
    "HealthTarget",
    "ResetResult",
]
