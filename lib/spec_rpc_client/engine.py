from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from .config_types import ClientConfig
from .errors import RequestTimeoutError, SpecRpcClientError
from .responses import FatalFailure, Outcome, RetryableFailure, Success, classify_response
from .transport import Transport, build_headers

logger = logging.getLogger(__name__)


@dataclass
class Attempt:
    number: int
    deadline: float
    outcome: Outcome | None = None


class RequestEngine:
    """Runs one request with a per-attempt deadline and bounded, immediate retries.

    Timeouts are retried while ``attempt <= max_timeout_retries``; every other
    retryable failure while ``attempt <= max_error_retries``. When retrying
    stops, the last attempt's error is raised unchanged.
    """

    def __init__(self, cfg: ClientConfig, transport: httpx.AsyncBaseTransport | None = None):
        self._cfg = cfg
        self._t = Transport(cfg, transport)

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    def url_for(self, path: str) -> str:
        return self._t.url_for(path)

    async def execute(self, path: str, payload: Any, *, auth_token: str | None = None) -> Any:
        number = 1
        while True:
            attempt = await self._attempt(number, path, payload, auth_token)
            outcome = attempt.outcome
            if isinstance(outcome, Success):
                if number > 1:
                    logger.debug("POST %s succeeded on attempt %d", path, number)
                return outcome.payload

            err = outcome.error
            if isinstance(outcome, FatalFailure) or not self._should_retry(err, number):
                if number > 1:
                    logger.warning("POST %s failed after %d attempts: %s", path, number, err)
                raise err

            logger.info("POST %s attempt %d failed (%s), retrying", path, number, err)
            number += 1

    def _should_retry(self, err: SpecRpcClientError, number: int) -> bool:
        if isinstance(err, RequestTimeoutError):
            return number <= self._cfg.max_timeout_retries
        return number <= self._cfg.max_error_retries

    async def _attempt(self, number: int, path: str, payload: Any, auth_token: str | None) -> Attempt:
        timeout_s = self._cfg.request_timeout_s
        # loop clock, as timeout_at expects
        attempt = Attempt(number=number, deadline=asyncio.get_running_loop().time() + timeout_s)
        headers = build_headers(self._cfg, auth_token)
        logger.debug("POST %s attempt %d (timeout %.3fs)", path, number, timeout_s)

        try:
            async with asyncio.timeout_at(attempt.deadline):
                resp = await self._t.post(path, payload, headers)
        except SpecRpcClientError as e:
            attempt.outcome = RetryableFailure(e)
        except asyncio.TimeoutError:
            err = RequestTimeoutError(f"POST {path} timed out after {self._cfg.request_timeout_ms}ms")
            attempt.outcome = RetryableFailure(err)
        else:
            attempt.outcome = classify_response(
                resp.status_code,
                resp.content,
                retry_parse_errors=self._cfg.retry_parse_errors,
            )
        return attempt
