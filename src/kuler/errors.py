"""Exception classes for Kuler feed interactions.

This module defines a hierarchy of exception classes for handling
configuration mistakes, bad call arguments, transport failures and
unexpected feed content.
"""

from __future__ import annotations

from typing import Optional

# Human-readable explanations for common HTTP errors
HTTP_ERROR_MAP = {
    400: "Bad request - check the query parameters",
    401: "Invalid or missing API key",
    403: "API key blocked or revoked",
    404: "Feed not found",
    429: "Rate limit exceeded",
    500: "Kuler internal error",
    502: "Bad gateway at Kuler",
    503: "Service unavailable (maintenance)",
    504: "Gateway timeout",
}


class KulerError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(KulerError):
    """Raised when the client is built without a usable API key or settings."""


class InvalidParameterError(KulerError, ValueError):
    """Raised when an operation argument is rejected before any request."""


class MalformedRecordError(KulerError):
    """Raised when a feed item lacks its identifying field."""


class UnknownFieldError(KulerError, KeyError):
    """Raised when a record is asked for a field it does not carry."""

    def __init__(self, name: str, record: str = "record") -> None:
        super().__init__(f"Field '{name}' not found on {record}")
        self.name = name

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class TransportError(KulerError):
    """Error while fetching or decoding a feed.

    Wraps network failures, non-success HTTP statuses and unparseable
    response bodies. Keeps the underlying exception when there is one.
    """

    def __init__(
        self,
        code: int,
        message: str,
        original_error: Optional[BaseException] = None,
    ) -> None:
        """Initialize the exception.

        Args:
            code: HTTP status code, or 0 when no response was received
            message: Human-readable error message
            original_error: The lower-level exception, if any
        """
        super().__init__(f"[{code}] {message}")
        self.code: int = code
        self.message: str = message
        self.original_error: Optional[BaseException] = original_error

    @property
    def is_client_error(self) -> bool:
        """True for 400-499 status codes."""
        return 400 <= self.code < 500

    @property
    def is_server_error(self) -> bool:
        """True for 500-599 status codes."""
        return self.code >= 500

    @classmethod
    def from_status(cls, status_code: int, body: str = "") -> TransportError:
        """Create an error for a non-success HTTP response.

        Args:
            status_code: HTTP status code
            body: Response text, used when the status has no known meaning

        Returns:
            Appropriate TransportError subclass
        """
        message = HTTP_ERROR_MAP.get(status_code, body.strip() or "Unexpected response")
        if status_code in (401, 403):
            return AuthenticationError(status_code, message)
        if status_code == 404:
            return NotFoundError(status_code, message)
        if status_code == 429:
            return RateLimitError(status_code, message)
        if status_code >= 500:
            return ServerError(status_code, message)
        return cls(status_code, message)


class NetworkError(TransportError):
    """Raised when a network issue prevents talking to the service."""

    def __init__(self, message: str, original_error: Optional[BaseException] = None) -> None:
        super().__init__(0, message, original_error)


class ParseError(TransportError):
    """Raised when a response body is not a well-formed feed."""

    def __init__(self, message: str, original_error: Optional[BaseException] = None) -> None:
        super().__init__(0, message, original_error)


class AuthenticationError(TransportError):
    """Raised when the service rejects the API key."""

    pass


class NotFoundError(TransportError):
    """Raised when the requested feed does not exist."""

    pass


class RateLimitError(TransportError):
    """Raised when rate limits are exceeded."""

    pass


class ServerError(TransportError):
    """Raised for 5xx server errors."""

    pass
