"""Custom exception hierarchy for webui-deploy configuration and operations."""

from __future__ import annotations


class WebUIDeployError(Exception):
    """Base exception for all webui-deploy errors.

    Every failure that should abort a deployment inherits from this class,
    so the CLI can report it and exit from a single place.
    """

    pass


class ConfigError(WebUIDeployError):
    """Exception raised for configuration errors.

    Raised when the environment file or the deployment settings cannot be
    parsed into their typed models.

    Attributes:
        field: The configuration field that caused the error
        message: Human-readable error message describing the issue
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize ConfigError with field and message.

        Args:
            field: Configuration field name where error occurred
            message: Descriptive error message
        """
        self.field = field
        self.message = message
        super().__init__(f"Configuration error in '{field}': {message}")


class MissingDependencyError(WebUIDeployError):
    """Exception raised when a required executable is not on PATH.

    Attributes:
        dependency: Name of the first executable that could not be found
    """

    def __init__(self, dependency: str) -> None:
        """Create an error for a missing executable."""
        self.dependency = dependency
        self.message = f"Required dependency {dependency} not found"
        super().__init__(self.message)


class DeploymentError(WebUIDeployError):
    """Exception raised when a container runtime operation fails.

    Attributes:
        operation: The deployment step that failed (network, start, create, ...)
        message: Human-readable error message
    """

    def __init__(self, operation: str, message: str) -> None:
        """Initialize DeploymentError with the failing operation.

        Args:
            operation: Name of the step that failed
            message: Descriptive error message
        """
        self.operation = operation
        self.message = message
        super().__init__(f"{operation}: {message}")


class DockerNotAvailableError(DeploymentError):
    """Exception raised when the Docker daemon cannot be reached."""

    def __init__(self, operation: str, original_error: Exception | None = None) -> None:
        """Create an error for an unreachable Docker daemon.

        Args:
            operation: Step that needed the daemon
            original_error: The underlying Docker SDK exception
        """
        message = (
            "Docker daemon is not available.\n"
            "Ensure Docker is installed and running: docker info"
        )
        if original_error:
            message += f"\nOriginal error: {original_error}"
        super().__init__(operation, message)


class NetworkCreateError(DeploymentError):
    """Exception raised when the shared network cannot be created."""

    def __init__(self, network: str, detail: str | None = None) -> None:
        """Create an error for a failed network creation."""
        self.network = network
        message = "Failed to create network"
        if detail:
            message += f" {network}: {detail}"
        super().__init__("network", message)


class ContainerStartError(DeploymentError):
    """Exception raised when an existing container fails to start."""

    def __init__(self, container: str, detail: str | None = None) -> None:
        """Create an error for a container that would not start."""
        self.container = container
        message = f"Failed to start {container}"
        if detail:
            message += f": {detail}"
        super().__init__("start", message)


class ContainerCreateError(DeploymentError):
    """Exception raised when a new container cannot be created and run."""

    def __init__(self, container: str, detail: str | None = None) -> None:
        """Create an error for a container that could not be created."""
        self.container = container
        message = f"Failed to create {container}"
        if detail:
            message += f": {detail}"
        super().__init__("create", message)


class HealthCheckError(DeploymentError):
    """Exception raised when a service health probe does not return 200.

    Attributes:
        service: Display name of the failing service
        url: URL that was probed
        status_code: HTTP status received, or None on connection failure
    """

    def __init__(self, service: str, url: str, status_code: int | None) -> None:
        """Create an error naming the service that failed its probe."""
        self.service = service
        self.url = url
        self.status_code = status_code
        status = status_code if status_code is not None else "no response"
        super().__init__(
            "health_check",
            f"{service} service not responding at {url} (status: {status})",
        )
