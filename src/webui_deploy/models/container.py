"""Desired state of a managed container."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ContainerSpec:
    """Arguments for creating one managed container.

    Attributes:
        name: Container name, also used for existence checks
        image: Image reference
        ports: Container port mapped to host port
        volumes: Named volume mapped to its mount point in the container
        environment: Environment variables passed to the container
        gpu: Request passthrough of all host GPUs
    """

    name: str
    image: str
    ports: dict[int, int] = field(default_factory=dict)
    volumes: dict[str, str] = field(default_factory=dict)
    environment: dict[str, str] = field(default_factory=dict)
    gpu: bool = False

    def port_bindings(self) -> dict[str, int]:
        """Return ports in the Docker SDK ``ports=`` format."""
        return {f"{container}/tcp": host for container, host in self.ports.items()}

    def volume_bindings(self) -> dict[str, dict[str, Any]]:
        """Return volumes in the Docker SDK ``volumes=`` format."""
        return {
            volume: {"bind": path, "mode": "rw"}
            for volume, path in self.volumes.items()
        }
