"""
Domain exceptions.

Every failure surfaced by payline derives from PaylineError. Request
failures carry the provider code, a readable message and the context
(URL + request arguments) needed to diagnose them.
"""
from typing import Any, Optional


class PaylineError(Exception):
    """Base class for all payline errors."""


class DataError(PaylineError):
    """Raised when order or product state cannot be mapped."""


class RequestError(PaylineError):
    """
    Raised when a call to the payment provider fails.

    Attributes:
        code: HTTP status code, or a string code for transport failures
        message: Provider error messages, concatenated
        context: "URL: ... - {request args}" diagnostic string
        response_body: Parsed response body, if any
    """

    retryable = False

    def __init__(
        self,
        code: Any,
        message: str,
        context: Optional[str] = None,
        *,
        response_body: Optional[Any] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.context = context
        self.response_body = response_body

    def __str__(self) -> str:
        text = f"[{self.code}] {self.message.strip() or 'request failed'}"
        if self.context:
            text += f" ({self.context})"
        return text


class TransportError(RequestError):
    """Network failure or timeout: no HTTP status was received."""

    retryable = True


class ServerError(RequestError):
    """HTTP 5xx from the provider."""

    retryable = True


class ClientError(RequestError):
    """HTTP 4xx (or any other non-2xx below 500) from the provider."""


class AuthenticationError(RequestError):
    """The client-credentials exchange did not yield an access token."""
