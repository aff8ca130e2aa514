"""Logging configuration for webui-deploy.

All records from the ``webui_deploy`` logger tree are appended to a log file
so every run leaves a trace next to the environment file. Console logging is
only enabled in verbose mode; user-facing status lines are printed by
:class:`webui_deploy.lib.ui.reporter.StatusReporter`.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT_LOGGER_NAME = "webui_deploy"
DEFAULT_LOG_FILE = "webui_deploy.log"

FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"

_HANDLER_MARKER = "_webui_deploy_handler"


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the webui_deploy namespace.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def setup_logging(
    verbose: bool = False,
    log_file: str | Path | None = DEFAULT_LOG_FILE,
) -> None:
    """Configure handlers for the webui_deploy logger tree.

    Calling this more than once replaces the handlers installed by the
    previous call, so repeated CLI invocations in one process do not
    duplicate output.

    Args:
        verbose: Emit debug records on stderr
        log_file: File that receives every record; None disables it
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root.removeHandler(handler)
            handler.close()

    root.setLevel(logging.DEBUG)
    root.propagate = False

    if log_file is not None:
        # The file is only opened once the first record is emitted
        file_handler = logging.FileHandler(
            log_file, mode="a", encoding="utf-8", delay=True
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        setattr(file_handler, _HANDLER_MARKER, True)
        root.addHandler(file_handler)

    if verbose:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        setattr(console_handler, _HANDLER_MARKER, True)
        root.addHandler(console_handler)

    # Docker SDK and urllib3 are chatty at debug level
    for noisy in ("docker", "urllib3"):
        logging.getLogger(noisy).setLevel(
            logging.DEBUG if verbose else logging.WARNING
        )
