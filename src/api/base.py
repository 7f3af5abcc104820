"""
Shared HTTP plumbing for the swapfeed API clients.

Each client issues exactly one request per operation. There is no retry,
no rate limiting and no caching: a failed request surfaces immediately as
one of the exceptions in api.errors.
"""

from importlib.metadata import PackageNotFoundError, version
from typing import Any

import requests

from api.errors import TransportError, UpstreamError
from config import REQUEST_TIMEOUT_SECONDS
from utils.logging import get_logger

logger = get_logger(__name__)


def get_version() -> str:
    """Get package version for User-Agent."""
    try:
        return version("swapfeed")
    except PackageNotFoundError:
        return "dev"


class BaseClient:
    """
    Base class holding the HTTP session and the error normalization policy.

    Subclasses call ``_request`` (parsed JSON) or ``_send`` (raw response).
    """

    # When True, a non-2xx response is reported as UpstreamError even if
    # its body is empty
    surface_empty_error_body: bool = False

    def __init__(
        self,
        base_url: str,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        """
        Initialize the client.

        Args:
            base_url: API base URL
            timeout: Per-request deadline in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self.session = requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
            "User-Agent": f"swapfeed/{get_version()}",
        })

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @staticmethod
    def _error_body(response: requests.Response) -> Any:
        """Return the decoded error body, falling back to raw text."""
        try:
            return response.json()
        except ValueError:
            return response.text

    def _send(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> requests.Response:
        """
        Issue a single request and check its status.

        Args:
            method: HTTP method ("GET" or "POST")
            url: Absolute request URL
            params: Query parameters
            json: JSON request body

        Returns:
            The successful (2xx) response

        Raises:
            UpstreamError: Non-2xx response carrying a body
            TransportError: No response, or an error response without a body
        """
        logger.debug("%s %s params=%s", method, url, params)

        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise TransportError("Request failed", request=e.request) from e

        if not 200 <= response.status_code < 300:
            body = self._error_body(response)
            logger.warning(
                "%s %s returned %d: %s", method, url, response.status_code, body
            )
            has_body = body is not None and body != ""
            if has_body or self.surface_empty_error_body:
                raise UpstreamError(body, status_code=response.status_code)
            raise TransportError("Request failed", request=response.request)

        return response

    def _request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """
        Issue a single request and return the parsed JSON body.

        Raises:
            UpstreamError: Non-2xx response carrying a body
            TransportError: No usable response, or a body that is not JSON
        """
        response = self._send(method, url, params=params, json=json)

        try:
            return response.json()
        except ValueError as e:
            logger.warning("%s %s returned a non-JSON body", method, url)
            raise TransportError("Request failed", request=response.request) from e
