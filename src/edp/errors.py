"""Error taxonomy for request dispatch.

Every failure a dispatch can produce is raised as one of these types so callers
can tell local problems (missing credentials, a bad URL, the network) apart from
what the exchange reported.
"""

from __future__ import annotations


class EdpError(Exception):
    """Base class for all edp errors."""


class NoCredentialSet(EdpError):
    """A signed endpoint was called on a client without credentials."""

    def __init__(self, message: str = "No API key set") -> None:
        super().__init__(message)


class UnsupportedEndpoint(EdpError):
    """The exchange does not offer this endpoint."""

    def __init__(self, exchange: str, operation: str) -> None:
        super().__init__(f"{exchange} does not support {operation}")
        self.exchange = exchange
        self.operation = operation


class UrlError(EdpError):
    """Base URL and endpoint do not form a valid http(s) URL."""

    def __init__(self, url: str, reason: str = "malformed URL") -> None:
        super().__init__(f"{reason}: {url!r}")
        self.url = url
        self.reason = reason


class TransportError(EdpError):
    """Connection, TLS or timeout failure before a response was received."""


class DeserializationError(EdpError):
    """A successful response did not match the expected shape."""

    def __init__(self, body: str, detail: str | None = None) -> None:
        message = "cannot deserialize response body"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.body = body
        self.detail = detail


class ExchangeError(EdpError):
    """The exchange answered with a non-success status."""


class RemoteError(ExchangeError):
    """Business error reported by the exchange as ``{"code", "msg"}``."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"Error message from exchange, code {code}, message {message}")
        self.code = code
        self.message = message


class BadRequest(ExchangeError):
    """HTTP 400 whose body is not a recognizable error payload."""

    def __init__(self, body: str) -> None:
        super().__init__(f"bad request: {body}")
        self.body = body


class RemoteServerError(ExchangeError):
    """HTTP 5xx from the exchange."""

    def __init__(self, status: int) -> None:
        super().__init__(f"remote server error (HTTP {status})")
        self.status = status


class UnknownStatus(ExchangeError):
    """An HTTP status the decoder has no rule for."""

    def __init__(self, status: int, body: str = "") -> None:
        super().__init__(f"unknown HTTP status {status}")
        self.status = status
        self.body = body
