"""Checks for executables the deployment relies on."""

from __future__ import annotations

import shutil
import subprocess  # nosec B404
from collections.abc import Callable, Iterable

from webui_deploy.lib.errors import MissingDependencyError
from webui_deploy.lib.logging_config import get_logger

logger = get_logger(__name__)

GPU_PROBE_EXECUTABLE = "nvidia-smi"


def check_dependencies(
    executables: Iterable[str],
    which: Callable[[str], str | None] = shutil.which,
) -> None:
    """Verify every executable resolves on PATH.

    Args:
        executables: Executable names, checked in order
        which: PATH lookup function

    Raises:
        MissingDependencyError: For the first executable that is missing
    """
    for name in executables:
        path = which(name)
        if path is None:
            raise MissingDependencyError(name)
        logger.debug(f"Found dependency {name} at {path}")


def gpu_available(
    which: Callable[[str], str | None] = shutil.which,
) -> bool:
    """Return True if nvidia-smi is installed and reports a working GPU.

    A missing or failing nvidia-smi is not an error; it just means no GPU.
    """
    path = which(GPU_PROBE_EXECUTABLE)
    if path is None:
        logger.debug(f"{GPU_PROBE_EXECUTABLE} not found, skipping GPU support")
        return False

    try:
        result = subprocess.run(  # noqa: S603  # nosec B603
            [path],
            capture_output=True,
            text=True,
        )
    except OSError as exc:
        logger.debug(f"Failed to run {path}: {exc}")
        return False

    if result.returncode != 0:
        logger.debug(f"{GPU_PROBE_EXECUTABLE} exited with {result.returncode}")
        return False
    return True
