"""
Exception hierarchy shared by the swapfeed API clients.

Every failure raised by a client is a ClientError. The subclass tells the
caller where the failure came from:

- UpstreamError: the service answered with a non-2xx status; the body it
  sent is kept verbatim on ``.body``.
- TransportError: no usable answer (connection failure, timeout, empty
  error body).
- ApplicationError: the service answered 2xx but the payload itself
  reports an error.
"""

from typing import Any


class ClientError(Exception):
    """Base exception for all API client errors."""

    pass


class UpstreamError(ClientError):
    """Raised when the upstream service answers with an error status."""

    def __init__(self, body: Any, status_code: int | None = None):
        self.body = body
        self.status_code = status_code
        super().__init__(f"Upstream error {status_code}: {body}")


class TransportError(ClientError):
    """Raised when no usable response was received."""

    def __init__(self, message: str = "Request failed", request: Any = None):
        self.request = request
        super().__init__(message)


class ApplicationError(ClientError):
    """Raised when a successful response carries an application-level error."""

    def __init__(self, body: Any):
        self.body = body
        super().__init__(f"API error: {body}")


class PairNotFoundError(ClientError, KeyError):
    """Raised when a ticker pair is missing from the result mapping."""

    def __init__(self, pair: str):
        self.pair = pair
        super().__init__(f"Pair not found: {pair}")

    def __str__(self) -> str:
        return f"Pair not found: {self.pair}"
