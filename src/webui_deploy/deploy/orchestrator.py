"""Deployment orchestration for Ollama and Open WebUI.

Runs the deployment as one linear sequence:

    dependencies -> environment file -> (reset | network -> containers
    -> settle delay -> health checks -> browser)

Every step blocks until it completes. Any error other than those raised
during reset aborts the run.
"""

from __future__ import annotations

import shutil
import time
from collections.abc import Callable
from dataclasses import dataclass, field

import click

from webui_deploy.config.loader import (
    LoadedEnvironment,
    ensure_env_file,
    load_env_file,
)
from webui_deploy.deploy.dependencies import check_dependencies, gpu_available
from webui_deploy.deploy.health import HealthChecker, HealthTarget
from webui_deploy.deploy.runtime import (
    DockerRuntime,
    ProvisionResult,
    RemovalOutcome,
    RemovalStatus,
)
from webui_deploy.lib.errors import DockerNotAvailableError
from webui_deploy.lib.logging_config import get_logger
from webui_deploy.lib.ui.reporter import StatusReporter
from webui_deploy.models.container import ContainerSpec
from webui_deploy.models.settings import DeploymentSettings

logger = get_logger(__name__)


@dataclass
class DeploymentResult:
    """Outcome of a full deployment.

    Attributes:
        env_created: True if the environment file was created by this run
        network_created: True if the shared network was created by this run
        containers: Provisioning result per container, in creation order
        webui_url: URL of the running WebUI
        browser_opened: True if the browser launch succeeded
    """

    env_created: bool
    network_created: bool
    containers: list[ProvisionResult] = field(default_factory=list)
    webui_url: str = ""
    browser_opened: bool = False


@dataclass
class ResetResult:
    """Outcome of a reset. Reset never fails; problems are listed here."""

    outcomes: list[RemovalOutcome] = field(default_factory=list)

    @property
    def failures(self) -> list[RemovalOutcome]:
        """Removals that failed for a reason other than absence."""
        return [o for o in self.outcomes if o.status == RemovalStatus.FAILED]


def build_ollama_spec(
    settings: DeploymentSettings, loaded: LoadedEnvironment, gpu: bool
) -> ContainerSpec:
    """Container arguments for the Ollama model server."""
    return ContainerSpec(
        name=settings.ollama_container,
        image=settings.ollama_image,
        ports={settings.ollama_container_port: loaded.environment.ollama_port},
        volumes={settings.ollama_volume: settings.ollama_data_path},
        gpu=gpu,
    )


def build_webui_spec(
    settings: DeploymentSettings, loaded: LoadedEnvironment
) -> ContainerSpec:
    """Container arguments for Open WebUI, carrying the environment file."""
    return ContainerSpec(
        name=settings.webui_container,
        image=settings.webui_image,
        ports={settings.webui_container_port: loaded.environment.webui_port},
        volumes={settings.webui_volume: settings.webui_data_path},
        environment=dict(loaded.values),
    )


class DeploymentOrchestrator:
    """Sequences the deployment and reset lifecycles.

    Collaborators are injected so each step can be exercised without Docker,
    a network or a browser.

    Example:
        >>> orchestrator = DeploymentOrchestrator(DeploymentSettings())
        >>> orchestrator.run()
    """

    def __init__(
        self,
        settings: DeploymentSettings,
        reporter: StatusReporter | None = None,
        runtime_factory: Callable[[], DockerRuntime] = DockerRuntime,
        health_checker: HealthChecker | None = None,
        which: Callable[[str], str | None] | None = None,
        sleep: Callable[[float], None] | None = None,
        launch: Callable[[str], int] | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            settings: Deployment settings
            reporter: Status output (a default reporter if omitted)
            runtime_factory: Creates the Docker driver on first use
            health_checker: HTTP prober (built from settings if omitted)
            which: PATH lookup used for dependency and GPU checks
                (default: shutil.which)
            sleep: Used for the settle delay (default: time.sleep)
            launch: Opens a URL in the browser, returning an exit code
                (default: click.launch)
        """
        self.settings = settings
        self.reporter = reporter or StatusReporter()
        self._runtime_factory = runtime_factory
        self._runtime: DockerRuntime | None = None
        self.health_checker = health_checker or HealthChecker(
            timeout=settings.health_timeout
        )
        self._which = which or shutil.which
        self._sleep = sleep or time.sleep
        self._launch = launch or click.launch

    @property
    def runtime(self) -> DockerRuntime:
        """Docker driver, connected lazily."""
        if self._runtime is None:
            self._runtime = self._runtime_factory()
        return self._runtime

    def run(self, reset: bool = False) -> DeploymentResult | ResetResult:
        """Run the deployment, or the reset path when reset is True.

        Raises:
            WebUIDeployError: On the first fatal step (not raised by reset)
        """
        check_dependencies(self.settings.required_executables, which=self._which)

        if reset:
            # The file is created if absent but never validated here
            self.report_env_created(ensure_env_file(self.settings.env_file))
            return self.reset()

        return self.deploy(self.prepare_environment())

    def prepare_environment(self) -> LoadedEnvironment:
        """Create or load the environment file."""
        loaded = load_env_file(self.settings.env_file)
        self.report_env_created(loaded.created)
        logger.debug(f"Loaded environment file {loaded.path}")
        return loaded

    def report_env_created(self, created: bool) -> None:
        if created:
            self.reporter.info(
                f"Created default environment file: {self.settings.env_file}"
            )

    def deploy(self, loaded: LoadedEnvironment) -> DeploymentResult:
        """Provision network and containers, then verify both services."""
        settings = self.settings

        network_created = self.runtime.ensure_network(settings.network_name)
        if network_created:
            self.reporter.success(f"Created Docker network: {settings.network_name}")

        gpu = self.detect_gpu()
        containers = [
            self.provision(build_ollama_spec(settings, loaded, gpu)),
            self.provision(build_webui_spec(settings, loaded)),
        ]

        environment = loaded.environment
        self.check_health(
            [
                HealthTarget("Ollama", environment.ollama_url),
                HealthTarget("WebUI", environment.webui_url),
            ]
        )

        browser_opened = False
        if settings.auto_open_browser:
            browser_opened = self.open_browser(environment.webui_url)

        self.reporter.success(
            f"Deployment complete! Access WebUI at: {environment.webui_url}"
        )
        return DeploymentResult(
            env_created=loaded.created,
            network_created=network_created,
            containers=containers,
            webui_url=environment.webui_url,
            browser_opened=browser_opened,
        )

    def detect_gpu(self) -> bool:
        """Return True when GPU passthrough should be requested."""
        if not self.settings.gpu_support:
            return False
        if not gpu_available(which=self._which):
            return False
        self.reporter.info("NVIDIA GPU detected - enabling GPU support")
        return True

    def provision(self, spec: ContainerSpec) -> ProvisionResult:
        """Ensure one container is running and report what happened.

        A missing container is created. An existing one is started with the
        arguments it was created with, unless it no longer matches the
        requested configuration and recreate_on_drift is set.
        """
        runtime = self.runtime
        network = self.settings.network_name

        container = runtime.find_container(spec.name)
        if container is None:
            self.reporter.info(f"Creating new container: {spec.name}")
            return runtime.create_container(spec, network)

        drift = runtime.container_drift(container, spec)
        details = "; ".join(drift)
        if drift and self.settings.recreate_on_drift:
            self.reporter.info(f"Recreating container {spec.name}: {details}")
            return runtime.recreate_container(container, spec, network, drift)

        self.reporter.info(f"Restarting existing container: {spec.name}")
        logger.info(
            f"Container {spec.name} exists; its original arguments are kept "
            "and the requested ports, volumes and environment are not applied"
        )
        result = runtime.start_container(container, drift)
        if drift:
            self.reporter.warning(
                f"{spec.name} differs from the requested configuration "
                f"({details}); use --recreate-on-drift to apply it"
            )
        return result

    def check_health(self, targets: list[HealthTarget]) -> None:
        """Wait for the services to settle, then probe each once."""
        if self.settings.settle_delay:
            logger.debug(f"Waiting {self.settings.settle_delay}s for services")
            self._sleep(self.settings.settle_delay)

        self.reporter.info("Performing health checks...")
        self.health_checker.check_all(targets)
        self.reporter.success("All services operational")

    def open_browser(self, url: str) -> bool:
        """Open url in the default browser; failure is only reported."""
        self.reporter.info("Launching WebUI in default browser...")
        try:
            exit_code = self._launch(url)
        except OSError as e:
            logger.warning(f"Failed to launch browser: {e}")
            return False
        if exit_code:
            logger.warning(f"Browser launcher exited with {exit_code}")
            return False
        return True

    def reset(self) -> ResetResult:
        """Remove both containers and their volumes.

        Absent resources are expected and skipped quietly. Other failures
        are reported as warnings; reset itself always succeeds. The network
        and the environment file are left untouched.
        """
        settings = self.settings
        self.reporter.info("Resetting environment...")

        result = ResetResult()
        try:
            runtime = self.runtime
        except DockerNotAvailableError as e:
            self.reporter.warning(f"Nothing removed: {e.message}")
            self.reporter.success("Reset complete")
            return result

        for name in (settings.ollama_container, settings.webui_container):
            result.outcomes.append(runtime.remove_container(name))
        for name in (settings.ollama_volume, settings.webui_volume):
            result.outcomes.append(runtime.remove_volume(name))

        for outcome in result.outcomes:
            if outcome.status == RemovalStatus.FAILED:
                self.reporter.warning(
                    f"Could not remove {outcome.kind} {outcome.name}: {outcome.detail}"
                )
            else:
                logger.debug(f"{outcome.kind} {outcome.name}: {outcome.status.value}")

        self.reporter.success("Reset complete")
        return result
