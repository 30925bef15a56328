from __future__ import annotations

from typing import Any


class SpecRpcClientError(Exception):
    """Base client error."""


class NetworkError(SpecRpcClientError):
    """Transport/network layer error."""


class RequestTimeoutError(NetworkError, TimeoutError):
    """Attempt did not complete before its deadline."""


class RequestError(SpecRpcClientError):
    def __init__(self, message: str, code: Any = None):
        super().__init__(message)
        self.message = message
        self.code = code


class ResponseParseError(SpecRpcClientError):
    """Response body was not a JSON object."""
