"""Default configuration templates for webui-deploy."""

# Written verbatim on first run; {secret_key} is filled with 32 random bytes
# rendered as hex.
DEFAULT_ENV_TEMPLATE = """\
# Web Search Configuration
SEARCH_PROVIDER=serper
SEARCH_API_KEY=your_api_key_here
SEARCH_URL=https://google.serper.dev/search

# WebUI Configuration
WEBUI_SECRET_KEY={secret_key}
ENABLE_SIGNUP=true
DEFAULT_MODEL=deepseek-r1

# Network Configuration
OLLAMA_HOST=ollama
OLLAMA_PORT=11434
WEBUI_PORT=3000
"""

SECRET_KEY_BYTES = 32

# Settings overridable from the process environment
SETTINGS_ENV_PREFIX = "WEBUI_DEPLOY_"
