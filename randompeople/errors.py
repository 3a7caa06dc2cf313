#!/usr/bin/env python3
"""
Transport error types shared by both HTTP clients, and the function that turns
any failure into the message shown in the error slot.
"""

NETWORK_ERROR_MESSAGE = "Network error. No response received from the server."


def _status_line(status: int, reason: str) -> str:
    return f"{status} - {reason}" if reason else str(status)


class TransportError(Exception):
    """Base class for failures raised by an HttpClient."""


class HttpStatusError(TransportError):
    # The server answered, but with a non-success status code.
    def __init__(self, status: int, reason: str = ""):
        self.status = status
        self.reason = reason or ""
        super().__init__(_status_line(status, self.reason))


class NetworkError(TransportError):
    # No response at all: DNS failure, connection refused, offline, timeout.
    pass


def describe_error(exc: BaseException) -> str:
    """
    Classify an exception into one of three human-readable messages:

      1) HTTP-level failure  -> status code + status text
      2) network failure     -> generic network-error message
      3) anything else       -> the exception's own message (JSON decoding, bad URL, ...)
    """
    if isinstance(exc, HttpStatusError):
        return f"HTTP error: {_status_line(exc.status, exc.reason)}"
    if isinstance(exc, NetworkError):
        return NETWORK_ERROR_MESSAGE
    message = str(exc) or type(exc).__name__
    return f"Unexpected error: {message}"
