"""Configuration loading for webui-deploy."""

from webui_deploy.config.loader import (
    LoadedEnvironment,
    load_env_file,
    load_settings,
)

__all__ = [
    "LoadedEnvironment",
    "load_env_file",
    "load_settings",
]
