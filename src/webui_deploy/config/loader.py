"""Configuration loading for webui-deploy.

Two sources feed a deployment:

- the environment file (``.webui.env``), created with defaults on first run
  and only ever read afterwards;
- deployment settings, built from model defaults, ``WEBUI_DEPLOY_*``
  environment variables and CLI overrides, in increasing precedence.
"""

from __future__ import annotations

import os
import secrets
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import dotenv_values
from pydantic import ValidationError as PydanticValidationError

from webui_deploy.config.defaults import (
    DEFAULT_ENV_TEMPLATE,
    SECRET_KEY_BYTES,
    SETTINGS_ENV_PREFIX,
)
from webui_deploy.config.validator import first_error_field, flatten_pydantic_errors
from webui_deploy.lib.errors import ConfigError
from webui_deploy.lib.logging_config import get_logger
from webui_deploy.models.environment import WebUIEnvironment
from webui_deploy.models.settings import DeploymentSettings

logger = get_logger(__name__)


@dataclass
class LoadedEnvironment:
    """Result of loading the environment file.

    Attributes:
        path: Location of the environment file
        environment: Typed view of the file
        values: Raw key/value pairs, forwarded to the WebUI container as-is
        created: True if the file was written by this run
    """

    path: Path
    environment: WebUIEnvironment
    values: dict[str, str] = field(default_factory=dict)
    created: bool = False


def generate_secret_key() -> str:
    """Return a 64 character hex secret."""
    return secrets.token_hex(SECRET_KEY_BYTES)


def write_default_env_file(path: Path) -> None:
    """Write the default environment template with a fresh secret.

    Raises:
        ConfigError: If the file cannot be written
    """
    content = DEFAULT_ENV_TEMPLATE.format(secret_key=generate_secret_key())
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(
            field="env_file",
            message=f"Failed to write environment file {path}: {exc}",
        ) from exc


def read_env_file(path: Path) -> dict[str, str]:
    """Parse a ``KEY=value`` file without modifying it.

    Comment and blank lines are skipped. Keys without a value are dropped.
    ``${VAR}`` references are kept literally.

    Raises:
        ConfigError: If the file cannot be read
    """
    try:
        raw = dotenv_values(path, interpolate=False, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(
            field="env_file",
            message=f"Failed to read environment file {path}: {exc}",
        ) from exc

    values: dict[str, str] = {}
    for key, value in raw.items():
        if value is None:
            logger.debug(f"Ignoring key without value in {path}: {key}")
            continue
        values[key] = value
    return values


def parse_environment(values: Mapping[str, str]) -> WebUIEnvironment:
    """Validate raw environment values into a typed model.

    Raises:
        ConfigError: Naming the first invalid key
    """
    try:
        return WebUIEnvironment.model_validate(dict(values))
    except PydanticValidationError as exc:
        raise ConfigError(
            field=first_error_field(exc),
            message="; ".join(flatten_pydantic_errors(exc)),
        ) from exc


def ensure_env_file(path: str | Path) -> bool:
    """Create the environment file with defaults unless it exists.

    The file is not read or validated.

    Returns:
        True if the file was written by this call

    Raises:
        ConfigError: If the file cannot be written
    """
    env_path = Path(path)
    if env_path.exists():
        return False
    write_default_env_file(env_path)
    logger.debug(f"Wrote default environment template to {env_path}")
    return True


def load_env_file(path: str | Path) -> LoadedEnvironment:
    """Load the environment file, creating it with defaults when absent.

    An existing file is never rewritten, and missing keys are not merged
    back into it; they only take their defaults in memory.

    Args:
        path: Location of the environment file

    Returns:
        LoadedEnvironment with raw and typed values

    Raises:
        ConfigError: If the file cannot be written, read or validated
    """
    env_path = Path(path)
    created = ensure_env_file(env_path)
    values = read_env_file(env_path)
    environment = parse_environment(values)
    return LoadedEnvironment(
        path=env_path,
        environment=environment,
        values=values,
        created=created,
    )


def _parse_env_value(field_name: str, value: str) -> Any:
    """Convert a settings environment variable to the field's input type."""
    if field_name == "required_executables":
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


def _settings_from_env(env_vars: Mapping[str, str]) -> dict[str, Any]:
    found: dict[str, Any] = {}
    for field_name in DeploymentSettings.model_fields:
        env_var_name = f"{SETTINGS_ENV_PREFIX}{field_name.upper()}"
        if env_var_name in env_vars:
            found[field_name] = _parse_env_value(field_name, env_vars[env_var_name])
    return found


def load_settings(
    env_vars: Mapping[str, str] | None = None,
    **overrides: Any,
) -> DeploymentSettings:
    """Build deployment settings.

    Precedence, lowest first: model defaults, ``WEBUI_DEPLOY_<FIELD>``
    environment variables, keyword overrides. Overrides set to None are
    ignored so unset CLI options fall through.

    Args:
        env_vars: Environment mapping (defaults to os.environ)
        **overrides: Explicit field values

    Returns:
        Validated DeploymentSettings

    Raises:
        ConfigError: If a value fails validation
    """
    data = _settings_from_env(os.environ if env_vars is None else env_vars)
    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return DeploymentSettings.model_validate(data)
    except PydanticValidationError as exc:
        raise ConfigError(
            field=first_error_field(exc),
            message="; ".join(flatten_pydantic_errors(exc)),
        ) from exc
