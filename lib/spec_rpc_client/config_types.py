from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping
from urllib.parse import urlsplit

ORIGIN_DEFAULT = "https://rpc.spec.dev"
REQUEST_TIMEOUT_MS_DEFAULT = 5000
MAX_TIMEOUT_RETRIES_DEFAULT = 2
MAX_ERROR_RETRIES_DEFAULT = 10

ENV_ORIGIN = "SPEC_RPC_ORIGIN"
ENV_AUTH_TOKEN = "SPEC_RPC_AUTH_TOKEN"
ENV_REQUEST_TIMEOUT = "REQUEST_TIMEOUT"
ENV_MAX_TIMEOUT_RETRIES = "MAX_TIMEOUT_RETRIES"
ENV_MAX_ERROR_RETRIES = "MAX_ERROR_RETRIES"
ENV_RETRY_PARSE_ERRORS = "SPEC_RPC_RETRY_PARSE_ERRORS"

AUTH_HEADER_NAME = "Spec-Auth-Token"

_LOCAL_HOSTS = {"localhost", "127.0.0.1", "0.0.0.0"}


@dataclass(frozen=True)
class ClientConfig:
    origin: str = ORIGIN_DEFAULT
    auth_token: str | None = None
    request_timeout_ms: int = REQUEST_TIMEOUT_MS_DEFAULT
    max_timeout_retries: int = MAX_TIMEOUT_RETRIES_DEFAULT
    max_error_retries: int = MAX_ERROR_RETRIES_DEFAULT
    retry_parse_errors: bool = True

    def __post_init__(self) -> None:
        parts = urlsplit(self.origin or "")
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"origin must be an absolute http(s) URL, got {self.origin!r}")
        for name in ("request_timeout_ms", "max_timeout_retries", "max_error_retries"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")

    @property
    def request_timeout_s(self) -> float:
        return self.request_timeout_ms / 1000.0


def normalize_origin(raw: str | None) -> str:
    value = (raw or "").strip()
    if not value:
        return ""
    value = value.rstrip("/")
    lowered = value.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return value

    host = value.split("/", 1)[0]
    host = host.split(":", 1)[0].lower()
    scheme = "http://" if host in _LOCAL_HOSTS else "https://"
    return f"{scheme}{value}"


def _env_int(environ: Mapping[str, str], name: str) -> int | None:
    raw = (environ.get(name) or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_bool(environ: Mapping[str, str], name: str) -> bool | None:
    raw = (environ.get(name) or "").strip().lower()
    if not raw:
        return None
    if raw in {"1", "true", "yes", "on"}:
        return True
    if raw in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _first(*values):
    for value in values:
        if value is not None:
            return value
    return None


def resolve_client_config(
        *,
        origin: str | None = None,
        auth_token: str | None = None,
        request_timeout_ms: int | None = None,
        max_timeout_retries: int | None = None,
        max_error_retries: int | None = None,
        retry_parse_errors: bool | None = None,
        environ: Mapping[str, str] | None = None,
) -> ClientConfig:
    """Build a ClientConfig: explicit argument > environment > built-in default."""
    env = os.environ if environ is None else environ
    return ClientConfig(
        origin=normalize_origin(_first(origin, env.get(ENV_ORIGIN) or None, ORIGIN_DEFAULT)),
        # an explicit empty token disables one set in the environment
        auth_token=_first(auth_token, env.get(ENV_AUTH_TOKEN) or None) or None,
        request_timeout_ms=_first(
            request_timeout_ms, _env_int(env, ENV_REQUEST_TIMEOUT), REQUEST_TIMEOUT_MS_DEFAULT
        ),
        max_timeout_retries=_first(
            max_timeout_retries, _env_int(env, ENV_MAX_TIMEOUT_RETRIES), MAX_TIMEOUT_RETRIES_DEFAULT
        ),
        max_error_retries=_first(
            max_error_retries, _env_int(env, ENV_MAX_ERROR_RETRIES), MAX_ERROR_RETRIES_DEFAULT
        ),
        retry_parse_errors=_first(retry_parse_errors, _env_bool(env, ENV_RETRY_PARSE_ERRORS), True),
    )
