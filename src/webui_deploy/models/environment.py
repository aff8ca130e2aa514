"""Pydantic model for the Open WebUI environment file.

The environment file is a flat ``KEY=value`` file shared with the WebUI
container through its environment. Field aliases are the file's keys.
"""

from pydantic import BaseModel, ConfigDict, Field

ENV_FILE_KEYS: tuple[str, ...] = (
    "SEARCH_PROVIDER",
    "SEARCH_API_KEY",
    "SEARCH_URL",
    "WEBUI_SECRET_KEY",
    "ENABLE_SIGNUP",
    "DEFAULT_MODEL",
    "OLLAMA_HOST",
    "OLLAMA_PORT",
    "WEBUI_PORT",
)


class WebUIEnvironment(BaseModel):
    """Typed view of the environment file.

    Keys missing from the file fall back to the defaults below. Unknown keys
    are ignored here but still forwarded to the WebUI container.

    Attributes:
        search_provider: Web search backend identifier
        search_api_key: API key for the search backend
        search_url: Search endpoint URL
        webui_secret_key: Session signing secret for Open WebUI
        enable_signup: Whether new users may register
        default_model: Model selected by default in the UI
        ollama_host: Hostname of the model server on the shared network
        ollama_port: Host port published for the model server
        webui_port: Host port published for the WebUI
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    search_provider: str = Field(default="serper", alias="SEARCH_PROVIDER")
    search_api_key: str = Field(default="your_api_key_here", alias="SEARCH_API_KEY")
    search_url: str = Field(
        default="https://google.serper.dev/search", alias="SEARCH_URL"
    )
    webui_secret_key: str | None = Field(default=None, alias="WEBUI_SECRET_KEY")
    enable_signup: bool = Field(default=True, alias="ENABLE_SIGNUP")
    default_model: str = Field(default="deepseek-r1", alias="DEFAULT_MODEL")
    ollama_host: str = Field(default="ollama", alias="OLLAMA_HOST")
    ollama_port: int = Field(default=11434, ge=1, le=65535, alias="OLLAMA_PORT")
    webui_port: int = Field(default=3000, ge=1, le=65535, alias="WEBUI_PORT")

    @property
    def ollama_url(self) -> str:
        """Local URL of the published model server."""
        return f"http://localhost:{self.ollama_port}"

    @property
    def webui_url(self) -> str:
        """Local URL of the published WebUI."""
        return f"http://localhost:{self.webui_port}"
