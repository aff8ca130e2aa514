"""UI utilities for terminal status output.

This module provides:
- TTY detection for adaptive output formatting
- ANSI color support with graceful degradation
- A status reporter that mirrors console lines into the log file
"""

from webui_deploy.lib.ui.colors import ANSIColors, colorize
from webui_deploy.lib.ui.reporter import StatusReporter
from webui_deploy.lib.ui.terminal import is_tty

__all__ = [
    "ANSIColors",
    "StatusReporter",
    "colorize",
    "is_tty",
]
