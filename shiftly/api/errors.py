"""
Typed failures raised by ShiftlyClient.

Controllers catch APIError at their boundary and show str(error) in the
error banner, so each message is written for a manager to read.
"""

from __future__ import annotations


class APIError(Exception):
    """Base class for every API gateway failure."""


class InvalidRequestError(APIError):
    """The request URL could not be built. Indicates a programming error."""

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__("Invalid URL" + (f": {detail}" if detail else ""))


class TransportError(APIError):
    """Connection failure or timeout before any response arrived."""

    def __init__(self, cause: Exception | str):
        self.cause = cause
        super().__init__(f"Network error: {cause}")


class NoResponseError(APIError):
    """The server hung up without sending a response."""

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__("No data received")


class HttpStatusError(APIError):
    """Non-2xx response."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Server error (HTTP {status_code})")


class DecodeError(APIError):
    """Response body was not JSON or did not match the expected schema."""

    def __init__(self, cause: Exception | str):
        self.cause = cause
        super().__init__(f"Failed to parse response: {cause}")
