"""Unit tests for environment file and settings loading."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from webui_deploy.config.loader import (
    ensure_env_file,
    generate_secret_key,
    load_env_file,
    load_settings,
    read_env_file,
)
from webui_deploy.lib.errors import ConfigError
from webui_deploy.models.environment import ENV_FILE_KEYS

HEX_64 = re.compile(r"^[0-9a-f]{64}$")


@pytest.mark.unit
class TestGenerateSecretKey:
    """Tests for secret generation."""

    def test_secret_is_64_hex_characters(self) -> None:
        """Secret matches the 64 character hex format."""
        assert HEX_64.match(generate_secret_key())

    def test_secrets_differ_between_calls(self) -> None:
        """Each call produces a fresh secret."""
        assert generate_secret_key() != generate_secret_key()


@pytest.mark.unit
class TestLoadEnvFileCreation:
    """Tests for first-run creation of the environment file."""

    def test_creates_file_with_all_keys(self, tmp_path: Path) -> None:
        """A missing file is created with all nine documented keys."""
        env_path = tmp_path / ".webui.env"

        loaded = load_env_file(env_path)

        assert loaded.created is True
        assert env_path.exists()
        assert list(tmp_path.iterdir()) == [env_path]
        assert set(loaded.values) == set(ENV_FILE_KEYS)
        assert HEX_64.match(loaded.values["WEBUI_SECRET_KEY"])

    def test_created_file_has_default_values(self, tmp_path: Path) -> None:
        """Defaults from the template are parsed into the typed model."""
        loaded = load_env_file(tmp_path / ".webui.env")
        env = loaded.environment

        assert env.search_provider == "serper"
        assert env.search_api_key == "your_api_key_here"
        assert env.search_url == "https://google.serper.dev/search"
        assert env.enable_signup is True
        assert env.default_model == "deepseek-r1"
        assert env.ollama_host == "ollama"
        assert env.ollama_port == 11434
        assert env.webui_port == 3000
        assert env.webui_secret_key == loaded.values["WEBUI_SECRET_KEY"]

    def test_created_file_keeps_section_comments(self, tmp_path: Path) -> None:
        """The template's section comments are written in order."""
        env_path = tmp_path / ".webui.env"
        load_env_file(env_path)

        content = env_path.read_text(encoding="utf-8")
        headers = [line for line in content.splitlines() if line.startswith("#")]
        assert headers == [
            "# Web Search Configuration",
            "# WebUI Configuration",
            "# Network Configuration",
        ]

    def test_creates_missing_parent_directory(self, tmp_path: Path) -> None:
        """Parent directories of the env file are created."""
        env_path = tmp_path / "conf" / ".webui.env"

        load_env_file(env_path)

        assert env_path.exists()


@pytest.mark.unit
class TestLoadEnvFileExisting:
    """Tests for loading an existing environment file."""

    def test_second_load_does_not_modify_file(self, tmp_path: Path) -> None:
        """Loading twice leaves the file byte-for-byte unchanged."""
        env_path = tmp_path / ".webui.env"
        first = load_env_file(env_path)
        content = env_path.read_bytes()

        second = load_env_file(env_path)

        assert second.created is False
        assert env_path.read_bytes() == content
        assert second.values["WEBUI_SECRET_KEY"] == first.values["WEBUI_SECRET_KEY"]

    def test_partial_file_is_not_merged(self, tmp_path: Path) -> None:
        """Missing keys default in memory but are never written back."""
        env_path = tmp_path / ".webui.env"
        env_path.write_text("WEBUI_PORT=8081\n", encoding="utf-8")

        loaded = load_env_file(env_path)

        assert loaded.created is False
        assert loaded.environment.webui_port == 8081
        assert loaded.environment.ollama_port == 11434
        assert loaded.environment.webui_secret_key is None
        assert env_path.read_text(encoding="utf-8") == "WEBUI_PORT=8081\n"

    def test_extra_keys_are_kept_in_values(self, tmp_path: Path) -> None:
        """Unknown keys still reach the raw values for the container."""
        env_path = tmp_path / ".webui.env"
        env_path.write_text("OLLAMA_BASE_URL=http://ollama:11434\n", encoding="utf-8")

        loaded = load_env_file(env_path)

        assert loaded.values == {"OLLAMA_BASE_URL": "http://ollama:11434"}

    def test_invalid_port_raises_config_error(self, tmp_path: Path) -> None:
        """A non-integer port is reported with its key."""
        env_path = tmp_path / ".webui.env"
        env_path.write_text("OLLAMA_PORT=not-a-port\n", encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            load_env_file(env_path)

        assert exc_info.value.field == "OLLAMA_PORT"
        assert "not-a-port" in exc_info.value.message

    def test_out_of_range_port_raises_config_error(self, tmp_path: Path) -> None:
        """Ports outside 1-65535 are rejected."""
        env_path = tmp_path / ".webui.env"
        env_path.write_text("WEBUI_PORT=70000\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="WEBUI_PORT"):
            load_env_file(env_path)


@pytest.mark.unit
class TestEnsureEnvFile:
    """Tests for create-only materialization."""

    def test_creates_missing_file(self, tmp_path: Path) -> None:
        """A missing file is written with the default template."""
        env_path = tmp_path / ".webui.env"

        assert ensure_env_file(env_path) is True
        assert "WEBUI_SECRET_KEY=" in env_path.read_text(encoding="utf-8")

    def test_existing_invalid_file_is_left_alone(self, tmp_path: Path) -> None:
        """An existing file is neither rewritten nor validated."""
        env_path = tmp_path / ".webui.env"
        env_path.write_text("OLLAMA_PORT=abc\n", encoding="utf-8")

        assert ensure_env_file(env_path) is False
        assert env_path.read_text(encoding="utf-8") == "OLLAMA_PORT=abc\n"


@pytest.mark.unit
class TestReadEnvFile:
    """Tests for raw key/value parsing."""

    def test_skips_comments_and_blank_lines(self, tmp_path: Path) -> None:
        """Comments and blank lines produce no keys."""
        env_path = tmp_path / ".env"
        env_path.write_text("# comment\n\nA=1\n", encoding="utf-8")

        assert read_env_file(env_path) == {"A": "1"}

    def test_drops_keys_without_value(self, tmp_path: Path) -> None:
        """Bare keys without '=' are ignored."""
        env_path = tmp_path / ".env"
        env_path.write_text("BARE\nA=1\n", encoding="utf-8")

        assert read_env_file(env_path) == {"A": "1"}

    def test_does_not_interpolate_references(self, tmp_path: Path) -> None:
        """${VAR} references are passed through literally."""
        env_path = tmp_path / ".env"
        env_path.write_text("A=${HOME}/x\n", encoding="utf-8")

        assert read_env_file(env_path) == {"A": "${HOME}/x"}


@pytest.mark.unit
class TestLoadSettings:
    """Tests for deployment settings precedence."""

    def test_defaults(self) -> None:
        """Without overrides the documented defaults apply."""
        settings = load_settings(env_vars={})

        assert settings.env_file == ".webui.env"
        assert settings.log_file == "webui_deploy.log"
        assert settings.network_name == "ollama-network"
        assert settings.ollama_container == "ollama"
        assert settings.webui_container == "open-webui"
        assert settings.ollama_image == "ollama/ollama"
        assert settings.webui_image == "ghcr.io/open-webui/open-webui:main"
        assert settings.gpu_support is True
        assert settings.auto_open_browser is True
        assert settings.settle_delay == 10.0
        assert settings.required_executables == ["docker"]
        assert settings.recreate_on_drift is False

    def test_environment_variables_override_defaults(self) -> None:
        """WEBUI_DEPLOY_* variables are applied."""
        settings = load_settings(
            env_vars={
                "WEBUI_DEPLOY_NETWORK_NAME": "custom-net",
                "WEBUI_DEPLOY_GPU_SUPPORT": "false",
                "WEBUI_DEPLOY_SETTLE_DELAY": "2.5",
                "WEBUI_DEPLOY_REQUIRED_EXECUTABLES": "docker, podman",
            }
        )

        assert settings.network_name == "custom-net"
        assert settings.gpu_support is False
        assert settings.settle_delay == 2.5
        assert settings.required_executables == ["docker", "podman"]

    def test_overrides_beat_environment_variables(self) -> None:
        """Keyword overrides win over the environment."""
        settings = load_settings(
            env_vars={"WEBUI_DEPLOY_ENV_FILE": "from-env.env"},
            env_file="from-cli.env",
        )

        assert settings.env_file == "from-cli.env"

    def test_none_overrides_are_ignored(self) -> None:
        """Unset CLI options fall through to lower layers."""
        settings = load_settings(
            env_vars={"WEBUI_DEPLOY_AUTO_OPEN_BROWSER": "false"},
            auto_open_browser=None,
        )

        assert settings.auto_open_browser is False

    def test_invalid_value_raises_config_error(self) -> None:
        """Invalid settings surface as ConfigError naming the field."""
        with pytest.raises(ConfigError) as exc_info:
            load_settings(env_vars={"WEBUI_DEPLOY_SETTLE_DELAY": "soon"})

        assert exc_info.value.field == "settle_delay"

    def test_unknown_override_raises_config_error(self) -> None:
        """Unknown fields are rejected."""
        with pytest.raises(ConfigError):
            load_settings(env_vars={}, not_a_setting="x")
