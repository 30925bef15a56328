from .client import SpecRpcClient
from .config_types import ClientConfig, resolve_client_config
from .errors import (
    NetworkError,
    RequestError,
    RequestTimeoutError,
    ResponseParseError,
    SpecRpcClientError,
)

__all__ = [
    "SpecRpcClient",
    "ClientConfig",
    "resolve_client_config",
    "SpecRpcClientError",
    "NetworkError",
    "RequestTimeoutError",
    "RequestError",
    "ResponseParseError",
]
