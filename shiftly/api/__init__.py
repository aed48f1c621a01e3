"""
API gateway for the Shiftly agent backend.
Authenticated REST+JSON calls with typed results and typed failures.
"""
from shiftly.api.client import ShiftlyClient
from shiftly.api.errors import (
    APIError,
    DecodeError,
    HttpStatusError,
    InvalidRequestError,
    NoResponseError,
    TransportError,
)

__all__ = [
    "ShiftlyClient",
    "APIError",
    "DecodeError",
    "HttpStatusError",
    "InvalidRequestError",
    "NoResponseError",
    "TransportError",
]
