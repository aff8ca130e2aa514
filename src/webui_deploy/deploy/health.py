"""HTTP health probes for the deployed services."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import requests
from requests.exceptions import RequestException

from webui_deploy.lib.errors import HealthCheckError
from webui_deploy.lib.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class HealthTarget:
    """A service to probe.

    Attributes:
        service: Display name used in error messages
        url: URL expected to answer 200
    """

    service: str
    url: str


class HealthChecker:
    """Single-shot HTTP status probes.

    Each target gets exactly one GET; anything but 200 fails, including
    redirects, which are not followed. There is no retry.

    Example:
        >>> checker = HealthChecker()
        >>> checker.check(HealthTarget("Ollama", "http://localhost:11434"))
    """

    DEFAULT_TIMEOUT = 10.0  # seconds

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the checker.

        Args:
            timeout: Per-request timeout in seconds
            session: HTTP session to reuse (a new one by default)
        """
        self.timeout = timeout
        self._session = session or requests.Session()

    def probe(self, url: str) -> int | None:
        """Return the HTTP status of a GET on url, or None if unreachable."""
        try:
            response = self._session.get(
                url, timeout=self.timeout, allow_redirects=False
            )
        except RequestException as e:
            logger.debug(f"Probe of {url} failed: {e}")
            return None
        logger.debug(f"Probe of {url} returned {response.status_code}")
        return response.status_code

    def check(self, target: HealthTarget) -> None:
        """Require a 200 from the target.

        Raises:
            HealthCheckError: Naming the service when the status is not 200
        """
        status_code = self.probe(target.url)
        if status_code != 200:
            raise HealthCheckError(target.service, target.url, status_code)

    def check_all(self, targets: Iterable[HealthTarget]) -> None:
        """Check targets in order, stopping at the first failure."""
        for target in targets:
            self.check(target)
