"""
HTTP benchmark driver against an already running server under test.
"""

import time
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

import requests

from ..benchmark.runner import BenchmarkConfig, BenchmarkRunner, SuiteResult
from .base import BaseSuite
from .json_processing import Complexity, generate_test_data

logger = logging.getLogger(__name__)

READY_POLL_INTERVAL = 0.5


@dataclass(frozen=True)
class Endpoint:
    """A route exercised by the driver."""
    name: str
    path: str
    method: str = "GET"
    payload: Optional[Callable[[], Any]] = None


ENDPOINTS: List[Endpoint] = [
    Endpoint("Health Check", "/health"),
    Endpoint("Hello World", "/hello"),
    Endpoint("JSON Response", "/json"),
    Endpoint("CPU Task (n=35)", "/cpu/35"),
    Endpoint("POST Data", "/data", method="POST",
             payload=lambda: generate_test_data(Complexity.MEDIUM)),
]


class UnknownTargetError(ValueError):
    """Raised when the runtime token is not one of the configured targets."""
    pass


def resolve_port(target: Optional[str], config: BenchmarkConfig) -> int:
    """
    Map a runtime token to the port of its HTTP server.

    Raises:
        UnknownTargetError: If the token is missing or unknown
    """
    if not target or target not in config.ports:
        available = "|".join(config.ports.keys())
        raise UnknownTargetError(f"Unknown target: {target!r}. Expected one of <{available}>")
    return config.ports[target]


def describe_response(response: requests.Response) -> str:
    return f"Status: {response.status_code} ({len(response.content)} bytes)"


class HttpSuite(BaseSuite):
    """
    Issues repeated requests to every route of the server under test.

    The server must already be running; the suite only probes ``/health``
    until it answers before measuring.

    Example:
        suite = HttpSuite("python")
        result = suite.run()
    """

    name = "http"
    display_name = "HTTP"

    def __init__(
        self,
        target: str,
        config: Optional[BenchmarkConfig] = None,
        runner: Optional[BenchmarkRunner] = None,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize HTTP suite.

        Args:
            target: Runtime token, e.g. 'python' or 'go'
            config: Benchmark configuration
            runner: Runner used for every measurement
            session: HTTP session (default: a new requests.Session, closed
                after the run)
            sleep: Sleep function used between readiness probes

        Raises:
            UnknownTargetError: If the target is not configured
        """
        super().__init__(config, runner)
        self.port = resolve_port(target, self.config)
        self.runtime = target
        self._owns_session = session is None
        self.session = session or requests.Session()
        self._sleep = sleep

    @property
    def base_url(self) -> str:
        return f"http://{self.config.http_host}:{self.port}"

    def title(self) -> str:
        return f"HTTP Performance Test for {self.runtime.upper()}"

    def wait_until_ready(self) -> bool:
        """
        Poll the health route until it answers 200 or the timeout expires.

        Returns:
            True if the server answered in time
        """
        url = f"{self.base_url}/health"
        deadline = time.monotonic() + self.config.ready_timeout

        while True:
            try:
                response = self.session.get(url, timeout=self.config.http_timeout)
                if response.status_code == 200:
                    logger.info(f"Server ready at {self.base_url}")
                    return True
                logger.debug(f"Health check returned {response.status_code}")
            except requests.RequestException as e:
                logger.debug(f"Health check failed: {e}")

            if time.monotonic() >= deadline:
                return False
            self._sleep(READY_POLL_INTERVAL)

    def request(self, endpoint: Endpoint, payload: Any = None) -> requests.Response:
        """Send one request for an endpoint."""
        url = f"{self.base_url}{endpoint.path}"
        if endpoint.method == "POST":
            return self.session.post(url, json=payload, timeout=self.config.http_timeout)
        return self.session.get(url, timeout=self.config.http_timeout)

    def close(self) -> None:
        """Close the session if this suite created it."""
        if self._owns_session:
            self.session.close()

    def _run(self, result: SuiteResult) -> None:
        try:
            self._measure_endpoints(result)
        finally:
            self.close()

    def _measure_endpoints(self, result: SuiteResult) -> None:
        self.reporter.console.print(f"\nWaiting for the {self.runtime} server at {self.base_url}...")
        if not self.wait_until_ready():
            logger.warning(
                f"Server at {self.base_url} did not become ready within "
                f"{self.config.ready_timeout}s; measuring anyway"
            )
            self.reporter.console.print(
                f"[yellow]Server not ready after {self.config.ready_timeout}s[/yellow]"
            )

        self.reporter.print_section(f"HTTP Benchmark - {self.runtime.upper()}")
        for endpoint in ENDPOINTS:
            self.reporter.console.print(f"\nTesting {endpoint.name}...")
            payload = endpoint.payload() if endpoint.payload else None
            result.add(self.runner.measure(
                endpoint.name,
                self.config.http_requests,
                lambda endpoint=endpoint, payload=payload: self.request(endpoint, payload),
                describe=describe_response,
            ))
