"""webui-deploy - Run Ollama and Open WebUI side by side in Docker.

Provisions a shared Docker network, the Ollama model server (with GPU
passthrough when available) and the Open WebUI frontend, seeds a default
environment file, and checks that both services answer over HTTP.
"""

from webui_deploy.lib.errors import ConfigError, DeploymentError, WebUIDeployError

__version__ = "2.1.0"

__all__ = [
    "__version__",
    "ConfigError",
    "DeploymentError",
    "WebUIDeployError",
]
