"""User-facing status output.

Status lines are tagged ``[INFO]``, ``[SUCCESS]``, ``[WARNING]`` and
``[ERROR]``. Each line is echoed to the console and recorded through the
logging tree, so the log file mirrors what the user saw.
"""

from __future__ import annotations

import logging

import click

from webui_deploy.lib.logging_config import get_logger
from webui_deploy.lib.ui.colors import ANSIColors, colorize

logger = get_logger("webui_deploy.status")


class StatusReporter:
    """Print tagged status lines and mirror them into the log.

    Example:
        >>> reporter = StatusReporter(force_tty=False)
        >>> reporter.success("Reset complete")
        [SUCCESS] Reset complete
    """

    def __init__(self, quiet: bool = False, force_tty: bool | None = None) -> None:
        """Initialize the reporter.

        Args:
            quiet: Suppress info and success lines on the console
            force_tty: Override TTY detection for coloured tags
        """
        self.quiet = quiet
        self.force_tty = force_tty

    def info(self, message: str) -> None:
        """Report progress."""
        self._emit(logging.INFO, "[INFO]", ANSIColors.BLUE, message)

    def success(self, message: str) -> None:
        """Report a completed step."""
        self._emit(logging.INFO, "[SUCCESS]", ANSIColors.GREEN, message)

    def warning(self, message: str) -> None:
        """Report a non-fatal problem."""
        self._emit(logging.WARNING, "[WARNING]", ANSIColors.YELLOW, message)

    def error(self, message: str) -> None:
        """Report a fatal problem on stderr."""
        self._emit(logging.ERROR, "[ERROR]", ANSIColors.RED, message, err=True)

    def _emit(
        self,
        level: int,
        tag: str,
        color: str,
        message: str,
        err: bool = False,
    ) -> None:
        logger.log(level, "%s %s", tag, message)
        if self.quiet and level < logging.WARNING:
            return
        click.echo(f"{colorize(tag, color, self.force_tty)} {message}", err=err)
