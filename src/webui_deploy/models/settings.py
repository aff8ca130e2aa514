"""Pydantic model for deployment settings.

Everything the deployment needs to know besides the environment file lives
here: container and image names, volumes, and behaviour switches.
"""

from pydantic import BaseModel, ConfigDict, Field


class DeploymentSettings(BaseModel):
    """Settings for one deployment run.

    Attributes:
        env_file: Path of the environment file, relative to the working dir
        log_file: Path of the deployment log
        network_name: Shared Docker network for both containers
        ollama_container: Container name of the model server
        ollama_image: Image reference of the model server
        ollama_volume: Named volume holding downloaded models
        ollama_data_path: Mount point of ollama_volume in the container
        ollama_container_port: Port the model server listens on in the container
        webui_container: Container name of the WebUI
        webui_image: Image reference of the WebUI
        webui_volume: Named volume holding WebUI data
        webui_data_path: Mount point of webui_volume in the container
        webui_container_port: Port the WebUI listens on in the container
        gpu_support: Request GPU passthrough when a GPU is detected
        auto_open_browser: Open the WebUI once it is healthy
        settle_delay: Seconds to wait before health probes
        health_timeout: Per-probe HTTP timeout in seconds
        required_executables: Executables that must be on PATH
        recreate_on_drift: Recreate existing containers that no longer match
            the requested image, ports or volumes
    """

    model_config = ConfigDict(extra="forbid")

    env_file: str = Field(default=".webui.env")
    log_file: str = Field(default="webui_deploy.log")
    network_name: str = Field(default="ollama-network", min_length=1)

    ollama_container: str = Field(default="ollama", min_length=1)
    ollama_image: str = Field(default="ollama/ollama", min_length=1)
    ollama_volume: str = Field(default="ollama", min_length=1)
    ollama_data_path: str = Field(default="/root/.ollama")
    ollama_container_port: int = Field(default=11434, ge=1, le=65535)

    webui_container: str = Field(default="open-webui", min_length=1)
    webui_image: str = Field(
        default="ghcr.io/open-webui/open-webui:main", min_length=1
    )
    webui_volume: str = Field(default="open-webui", min_length=1)
    webui_data_path: str = Field(default="/app/backend/data")
    webui_container_port: int = Field(default=8080, ge=1, le=65535)

    gpu_support: bool = Field(default=True)
    auto_open_browser: bool = Field(default=True)
    settle_delay: float = Field(default=10.0, ge=0)
    health_timeout: float = Field(default=10.0, gt=0)
    required_executables: list[str] = Field(default_factory=lambda: ["docker"])
    recreate_on_drift: bool = Field(default=False)
