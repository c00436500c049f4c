"""
Custom exceptions for the OVH API client library.
"""

from typing import Optional


class OvhClientError(Exception):
    """Base exception for OVH client errors."""
    pass


class ConfigurationError(OvhClientError):
    """Raised when client configuration is invalid."""
    pass


class TransportError(OvhClientError):
    """Raised when the HTTP round trip itself fails (connection, DNS, TLS, timeout)."""
    pass


class RemoteUnavailableError(OvhClientError):
    """Raised when the time endpoint answers with a non-success status."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"API seems down, HTTP response: {status_code}")


class MalformedResponseError(OvhClientError):
    """Raised when a response body cannot be parsed into the expected shape."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class ApiError(OvhClientError):
    """
    Structured failure reported by the API.

    ``code`` is always the HTTP status of the response, whatever the
    body claims.
    """

    def __init__(self, code: int, message: str, tracer: Optional[str] = None):
        self.code = code
        self.message = message
        self.tracer = tracer
        super().__init__(f'Error {code} : "{message}"')
