"""Pytest configuration and shared fixtures for webui-deploy tests."""

import logging
import os
from collections.abc import Generator
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from webui_deploy.lib.logging_config import ROOT_LOGGER_NAME


@pytest.fixture
def isolated_env() -> Generator[dict[str, str]]:
    """Provide isolated environment variables for testing.

    Saves current environment and restores after test.

    Yields:
        Dictionary of original environment variables
    """
    original_env = os.environ.copy()
    yield original_env
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def in_tmp_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty temporary working directory.

    The environment and log files default to relative paths, so tests that
    exercise defaults must not touch the real working directory.
    """
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def mock_docker_client() -> MagicMock:
    """Create a mock Docker client."""
    return MagicMock()


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None]:
    """Drop handlers installed by setup_logging so log files are closed."""
    yield
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.propagate = True
