"""Unit tests for HTTP health probes."""

from __future__ import annotations

import threading
from collections.abc import Generator
from http.server import BaseHTTPRequestHandler, HTTPServer
from unittest.mock import MagicMock

import pytest
import requests
from requests.exceptions import ConnectionError as RequestsConnectionError
from requests.exceptions import Timeout

from webui_deploy.deploy.health import HealthChecker, HealthTarget
from webui_deploy.lib.errors import HealthCheckError

OLLAMA = HealthTarget("Ollama", "http://localhost:11434")
WEBUI = HealthTarget("WebUI", "http://localhost:3000")


def _session(*status_codes: int) -> MagicMock:
    session = MagicMock()
    session.get.side_effect = [MagicMock(status_code=code) for code in status_codes]
    return session


@pytest.mark.unit
class TestProbe:
    """Tests for HealthChecker.probe()."""

    def test_returns_status_code(self) -> None:
        """The response status is returned as-is."""
        checker = HealthChecker(session=_session(404))

        assert checker.probe(OLLAMA.url) == 404

    def test_uses_configured_timeout(self) -> None:
        """Every probe carries the timeout and does not follow redirects."""
        session = _session(200)
        checker = HealthChecker(timeout=3.0, session=session)

        checker.probe(OLLAMA.url)

        session.get.assert_called_once_with(
            OLLAMA.url, timeout=3.0, allow_redirects=False
        )

    @pytest.mark.parametrize(
        "error",
        [RequestsConnectionError("refused"), Timeout("slow")],
    )
    def test_unreachable_returns_none(self, error: Exception) -> None:
        """Connection failures and timeouts yield no status."""
        session = MagicMock()
        session.get.side_effect = error
        checker = HealthChecker(session=session)

        assert checker.probe(OLLAMA.url) is None


@pytest.mark.unit
class TestCheckAll:
    """Tests for sequential health checks."""

    def test_both_healthy(self) -> None:
        """Two 200 responses pass, probed in order."""
        session = _session(200, 200)
        checker = HealthChecker(session=session)

        checker.check_all([OLLAMA, WEBUI])

        urls = [call.args[0] for call in session.get.call_args_list]
        assert urls == [OLLAMA.url, WEBUI.url]

    def test_first_failure_names_service_and_stops(self) -> None:
        """A failing first service aborts before the second probe."""
        session = _session(500, 200)
        checker = HealthChecker(session=session)

        with pytest.raises(HealthCheckError) as exc_info:
            checker.check_all([OLLAMA, WEBUI])

        assert exc_info.value.service == "Ollama"
        assert exc_info.value.status_code == 500
        assert session.get.call_count == 1

    def test_second_failure_names_webui(self) -> None:
        """A failing second service is named in the error."""
        checker = HealthChecker(session=_session(200, 302))

        with pytest.raises(HealthCheckError, match="WebUI service not responding"):
            checker.check_all([OLLAMA, WEBUI])

    def test_redirect_is_health_failure(self) -> None:
        """A redirect is reported with its own status, not followed to a 200."""
        checker = HealthChecker(session=_session(302))

        with pytest.raises(HealthCheckError, match="status: 302") as exc_info:
            checker.check(WEBUI)

        assert exc_info.value.service == "WebUI"
        assert exc_info.value.status_code == 302

    def test_connection_failure_is_health_failure(self) -> None:
        """No response at all is reported as a failed check."""
        session = MagicMock()
        session.get.side_effect = RequestsConnectionError("refused")
        checker = HealthChecker(session=session)

        with pytest.raises(HealthCheckError, match="no response") as exc_info:
            checker.check(OLLAMA)

        assert exc_info.value.status_code is None


class _RedirectingHandler(BaseHTTPRequestHandler):
    """Answers / with a redirect to /ok, which answers 200."""

    def do_GET(self) -> None:  # noqa: N802
        if self.path == "/":
            self.send_response(302)
            self.send_header("Location", "/ok")
        else:
            self.send_response(200)
        self.send_header("Content-Length", "0")
        self.end_headers()

    def log_message(self, format: str, *args: object) -> None:  # noqa: A002
        pass


@pytest.fixture
def redirecting_server() -> Generator[str, None, None]:
    """Local HTTP server whose root redirects; yields its base URL."""
    server = HTTPServer(("127.0.0.1", 0), _RedirectingHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}/"
    finally:
        server.shutdown()
        server.server_close()
        thread.join()


def _direct_checker() -> HealthChecker:
    session = requests.Session()
    # Ignore proxy settings from the environment
    session.trust_env = False
    return HealthChecker(timeout=5.0, session=session)


@pytest.mark.unit
class TestRedirectHandling:
    """Tests against a real HTTP server."""

    def test_redirect_status_is_returned(self, redirecting_server: str) -> None:
        """The 302 is reported instead of the 200 it points to."""
        assert _direct_checker().probe(redirecting_server) == 302

    def test_redirect_fails_check(self, redirecting_server: str) -> None:
        """A redirecting service does not pass the health check."""
        with pytest.raises(HealthCheckError, match="status: 302"):
            _direct_checker().check(HealthTarget("WebUI", redirecting_server))
