"""Terminal detection utilities.

Provides functions for detecting terminal capabilities and output modes.
"""

import sys


def is_tty() -> bool:
    """Check if stdout is connected to a terminal.

    Used to decide whether status tags are coloured or written as plain text
    suitable for CI logs and redirected output.

    Returns:
        True if stdout is a TTY (interactive terminal), False otherwise.
    """
    return sys.stdout.isatty()
