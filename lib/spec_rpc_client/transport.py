from __future__ import annotations

from typing import Any

import httpx

from .config_types import AUTH_HEADER_NAME, ClientConfig
from .errors import NetworkError, RequestTimeoutError

BASE_HEADERS = {"Content-Type": "application/json"}


def build_headers(cfg: ClientConfig, auth_token: str | None = None) -> dict[str, str]:
    """Base headers plus the auth header when a token is available."""
    headers = dict(BASE_HEADERS)
    token = auth_token or cfg.auth_token
    if token:
        headers[AUTH_HEADER_NAME] = token
    return headers


class Transport:
    """Sends a single POST attempt.

    Every attempt opens its own client and closes it on exit, including when
    the attempt is cancelled by the engine's deadline.
    """

    def __init__(self, cfg: ClientConfig, transport: httpx.AsyncBaseTransport | None = None):
        self._cfg = cfg
        self._transport = transport

    def url_for(self, path: str) -> str:
        return self._cfg.origin.rstrip("/") + path

    async def post(self, path: str, payload: Any, headers: dict[str, str]) -> httpx.Response:
        try:
            async with httpx.AsyncClient(
                    base_url=self._cfg.origin.rstrip("/"),
                    timeout=self._cfg.request_timeout_s,
                    transport=self._transport,
                    follow_redirects=True,
            ) as client:
                return await client.post(path, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(f"POST {path} timed out: {e}") from e
        except httpx.RequestError as e:
            raise NetworkError(f"POST {path} failed: {e}") from e
