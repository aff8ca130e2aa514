"""Docker runtime driver for the managed network, containers and volumes.

This module wraps the Docker SDK calls the deployment needs. It holds no
state of its own beyond the client: existence is always asked of the daemon
by name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

import docker
from docker.errors import APIError, DockerException, ImageNotFound, NotFound
from docker.types import DeviceRequest

from webui_deploy.lib.errors import (
    ContainerCreateError,
    ContainerStartError,
    DockerNotAvailableError,
    NetworkCreateError,
)
from webui_deploy.lib.logging_config import get_logger
from webui_deploy.models.container import ContainerSpec

if TYPE_CHECKING:
    from docker.models.containers import Container

logger = get_logger(__name__)


class ProvisionAction(str, Enum):
    """How a running container was reached."""

    STARTED = "started"
    CREATED = "created"
    RECREATED = "recreated"


class RemovalStatus(str, Enum):
    """Outcome of a single best-effort removal."""

    REMOVED = "removed"
    ABSENT = "absent"
    FAILED = "failed"


@dataclass
class ProvisionResult:
    """Result of ensuring a container is running.

    Attributes:
        name: Container name
        action: Whether the container was started, created or recreated
        container_id: ID of the running container
        drift: Differences between the existing container and the spec
    """

    name: str
    action: ProvisionAction
    container_id: str = ""
    drift: list[str] = field(default_factory=list)


@dataclass
class RemovalOutcome:
    """Result of removing a container or volume.

    Attributes:
        kind: "container" or "volume"
        name: Resource name
        status: Removed, already absent, or failed
        detail: Error text when the removal failed
    """

    kind: str
    name: str
    status: RemovalStatus
    detail: str | None = None


def gpu_device_requests() -> list[DeviceRequest]:
    """Device requests equivalent to ``docker run --gpus all``."""
    return [DeviceRequest(count=-1, capabilities=[["gpu"]])]


def _normalize_image(reference: str) -> str:
    """Append the implicit ``:latest`` tag to untagged references."""
    if "@" in reference:
        return reference
    last_segment = reference.rsplit("/", 1)[-1]
    if ":" not in last_segment:
        return f"{reference}:latest"
    return reference


def describe_drift(container: Container, spec: ContainerSpec) -> list[str]:
    """List differences between an existing container and the desired spec.

    Compares image reference, published ports and named volume mounts.

    Args:
        container: Existing Docker container
        spec: Desired container arguments

    Returns:
        Human-readable differences; empty when the container matches
    """
    attrs: dict[str, Any] = container.attrs or {}
    drift: list[str] = []

    actual_image = attrs.get("Config", {}).get("Image") or ""
    if _normalize_image(actual_image) != _normalize_image(spec.image):
        drift.append(f"image {actual_image!r} != {spec.image!r}")

    port_bindings = attrs.get("HostConfig", {}).get("PortBindings") or {}
    actual_ports: dict[str, int] = {}
    for container_port, bindings in port_bindings.items():
        for binding in bindings or []:
            host_port = binding.get("HostPort")
            if host_port:
                actual_ports[container_port] = int(host_port)
    if actual_ports != spec.port_bindings():
        drift.append(f"ports {actual_ports} != {spec.port_bindings()}")

    actual_volumes = {
        mount.get("Name"): mount.get("Destination")
        for mount in attrs.get("Mounts") or []
        if mount.get("Type") == "volume"
    }
    if actual_volumes != spec.volumes:
        drift.append(f"volumes {actual_volumes} != {spec.volumes}")

    return drift


class DockerRuntime:
    """Driver for the Docker daemon.

    Example:
        >>> runtime = DockerRuntime()
        >>> runtime.ensure_network("ollama-network")
        True
    """

    def __init__(self, client: docker.DockerClient | None = None) -> None:
        """Initialize the runtime driver.

        Connects to the Docker daemon using the environment configuration
        unless a client is supplied.

        Raises:
            DockerNotAvailableError: If Docker daemon is not available
        """
        if client is not None:
            self.client = client
            return
        try:
            self.client = docker.from_env()  # type: ignore[attr-defined]
        except DockerException as e:
            raise DockerNotAvailableError(operation="init", original_error=e) from e

    def ensure_network(self, name: str) -> bool:
        """Create the named network unless it already exists.

        Args:
            name: Network name

        Returns:
            True if the network was created, False if it already existed

        Raises:
            NetworkCreateError: If the network cannot be created
        """
        try:
            self.client.networks.get(name)
            logger.debug(f"Network {name} already exists")
            return False
        except NotFound:
            logger.debug(f"Network {name} not found")
        except APIError as e:
            logger.warning(f"Failed to inspect network {name}: {e}")

        try:
            self.client.networks.create(name, driver="bridge")
        except APIError as e:
            raise NetworkCreateError(name, str(e)) from e
        return True

    def find_container(self, name: str) -> Container | None:
        """Return the container with exactly this name, running or stopped."""
        try:
            container = self.client.containers.get(name)
        except NotFound:
            return None
        # get() also resolves ID prefixes
        if container.name != name:
            return None
        return container

    def create_container(self, spec: ContainerSpec, network: str) -> ProvisionResult:
        """Run a new container from the spec, attached to network.

        Raises:
            ContainerCreateError: If the container cannot be created
        """
        created = self._run(spec, network)
        return ProvisionResult(
            name=spec.name,
            action=ProvisionAction.CREATED,
            container_id=created.id or "",
        )

    def start_container(
        self, container: Container, drift: list[str] | None = None
    ) -> ProvisionResult:
        """Start an existing container with the arguments it was created with.

        Args:
            container: Container returned by find_container
            drift: Differences to carry into the result; nothing is applied

        Raises:
            ContainerStartError: If the container fails to start
        """
        try:
            container.start()
        except APIError as e:
            raise ContainerStartError(container.name, str(e)) from e
        return ProvisionResult(
            name=container.name,
            action=ProvisionAction.STARTED,
            container_id=container.id or "",
            drift=list(drift or []),
        )

    def recreate_container(
        self,
        container: Container,
        spec: ContainerSpec,
        network: str,
        drift: list[str] | None = None,
    ) -> ProvisionResult:
        """Remove an existing container and run a new one from the spec.

        Raises:
            ContainerCreateError: If removal or creation fails
        """
        logger.info(f"Recreating {spec.name} to apply changes: {drift}")
        try:
            container.remove(force=True)
        except APIError as e:
            raise ContainerCreateError(spec.name, str(e)) from e
        created = self._run(spec, network)
        return ProvisionResult(
            name=spec.name,
            action=ProvisionAction.RECREATED,
            container_id=created.id or "",
            drift=list(drift or []),
        )

    def container_drift(self, container: Container, spec: ContainerSpec) -> list[str]:
        """Differences between an existing container and the spec."""
        return describe_drift(container, spec)

    def _run(self, spec: ContainerSpec, network: str) -> Container:
        run_kwargs: dict[str, Any] = {
            "name": spec.name,
            "detach": True,
            "network": network,
            "ports": spec.port_bindings(),
            "volumes": spec.volume_bindings(),
        }
        if spec.environment:
            run_kwargs["environment"] = dict(spec.environment)
        if spec.gpu:
            run_kwargs["device_requests"] = gpu_device_requests()

        logger.debug(f"Running {spec.image} with {run_kwargs}")
        try:
            return self.client.containers.run(spec.image, **run_kwargs)
        except ImageNotFound as e:
            raise ContainerCreateError(
                spec.name, f"image {spec.image} not found: {e}"
            ) from e
        except APIError as e:
            raise ContainerCreateError(spec.name, str(e)) from e

    def remove_container(self, name: str) -> RemovalOutcome:
        """Stop and remove a container, reporting instead of raising.

        A missing container is expected absence. Any other daemon error is
        returned as a FAILED outcome for the caller to report.
        """
        try:
            container = self.client.containers.get(name)
            container.stop()
            container.remove()
        except NotFound:
            return RemovalOutcome("container", name, RemovalStatus.ABSENT)
        except APIError as e:
            return RemovalOutcome("container", name, RemovalStatus.FAILED, str(e))
        return RemovalOutcome("container", name, RemovalStatus.REMOVED)

    def remove_volume(self, name: str) -> RemovalOutcome:
        """Remove a named volume, reporting instead of raising."""
        try:
            self.client.volumes.get(name).remove()
        except NotFound:
            return RemovalOutcome("volume", name, RemovalStatus.ABSENT)
        except APIError as e:
            return RemovalOutcome("volume", name, RemovalStatus.FAILED, str(e))
        return RemovalOutcome("volume", name, RemovalStatus.REMOVED)
