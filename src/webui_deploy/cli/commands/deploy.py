"""CLI command for deploying Ollama and Open WebUI.

Implements the 'webui-deploy' command. Without options it runs the full
deployment; ``--reset`` removes the managed containers and volumes instead.
"""

from __future__ import annotations

import sys
from collections.abc import Generator
from contextlib import contextmanager

import click

from webui_deploy.config.loader import load_settings
from webui_deploy.deploy.orchestrator import DeploymentOrchestrator
from webui_deploy.lib.errors import ConfigError, WebUIDeployError
from webui_deploy.lib.logging_config import get_logger, setup_logging
from webui_deploy.lib.ui.reporter import StatusReporter

logger = get_logger(__name__)


@contextmanager
def handle_deployment_errors(reporter: StatusReporter) -> Generator[None, None, None]:
    """Report any fatal error and exit with status 1.

    Every failure is fatal: nothing is retried or downgraded to a warning.
    """
    try:
        yield
    except ConfigError as e:
        reporter.error(str(e))
        sys.exit(1)
    except WebUIDeployError as e:
        reporter.error(getattr(e, "message", None) or str(e))
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        reporter.error(f"Unexpected error: {e}")
        sys.exit(1)


@click.command(
    name="webui-deploy",
    context_settings={
        "ignore_unknown_options": True,
        "allow_extra_args": True,
    },
)
@click.option(
    "--reset",
    is_flag=True,
    help="Remove the Ollama and WebUI containers and their volumes, then exit",
)
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Environment file to create or load (default: .webui.env)",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="File that receives the deployment log (default: webui_deploy.log)",
)
@click.option(
    "--gpu/--no-gpu",
    default=None,
    help="Enable GPU passthrough when an NVIDIA GPU is detected",
)
@click.option(
    "--browser/--no-browser",
    default=None,
    help="Open the WebUI in the default browser after deployment",
)
@click.option(
    "--settle-delay",
    type=float,
    default=None,
    help="Seconds to wait before health checks (default: 10)",
)
@click.option(
    "--recreate-on-drift",
    is_flag=True,
    help="Recreate existing containers whose image, ports or volumes changed",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose debug logging",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Only print warnings and errors",
)
@click.pass_context
def deploy(
    ctx: click.Context,
    reset: bool,
    env_file: str | None,
    log_file: str | None,
    gpu: bool | None,
    browser: bool | None,
    settle_delay: float | None,
    recreate_on_drift: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Deploy Ollama and Open WebUI with Docker.

    Creates the environment file on first run, ensures the shared network
    and both containers exist, then checks that both services answer.

    Example:

        webui-deploy

        webui-deploy --reset

        webui-deploy --no-gpu --no-browser
    """
    reporter = StatusReporter(quiet=quiet)

    with handle_deployment_errors(reporter):
        settings = load_settings(
            env_file=env_file,
            log_file=log_file,
            gpu_support=gpu,
            auto_open_browser=browser,
            settle_delay=settle_delay,
            recreate_on_drift=recreate_on_drift or None,
        )
        setup_logging(verbose=verbose, log_file=settings.log_file)

        if ctx.args:
            logger.debug(f"Ignoring unrecognized arguments: {ctx.args}")

        orchestrator = DeploymentOrchestrator(settings, reporter=reporter)
        orchestrator.run(reset=reset)


def main() -> None:
    """Console script entry point."""
    deploy()
