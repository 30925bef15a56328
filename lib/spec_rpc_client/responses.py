from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Union

from .errors import RequestError, ResponseParseError, SpecRpcClientError

SUCCESS_STATUS = 200
UNKNOWN_ERROR = "unknown error"


@dataclass(frozen=True)
class Success:
    payload: Any


@dataclass(frozen=True)
class RetryableFailure:
    error: SpecRpcClientError


@dataclass(frozen=True)
class FatalFailure:
    error: SpecRpcClientError


Outcome = Union[Success, RetryableFailure, FatalFailure]


def classify_response(status_code: int, body: str | bytes, *, retry_parse_errors: bool = True) -> Outcome:
    """Turn one raw HTTP response into a classified outcome.

    A body that is not a JSON object is a parse failure on a 200, and a plain
    request error (coded with the HTTP status) on anything else, since error
    pages from proxies are rarely JSON. The envelope's ``data`` field is
    unwrapped on success.
    """
    try:
        envelope = json.loads(body) if body else None
    except ValueError as e:
        envelope = None
        parse_err = f"Failed to parse JSON response data: {e}"
    else:
        parse_err = None if isinstance(envelope, dict) else "Response body is not a JSON object"

    if parse_err is not None:
        if status_code != SUCCESS_STATUS:
            return RetryableFailure(RequestError(UNKNOWN_ERROR, status_code))
        err = ResponseParseError(parse_err)
        return RetryableFailure(err) if retry_parse_errors else FatalFailure(err)

    error = envelope.get("error")
    if status_code != SUCCESS_STATUS or error:
        return RetryableFailure(_request_error(error, status_code))

    return Success(envelope.get("data"))


def _request_error(error: Any, status_code: int) -> RequestError:
    if isinstance(error, dict):
        message = error.get("message")
        if message is None:
            message = UNKNOWN_ERROR
        code = error.get("code")
    else:
        message = str(error) if error else UNKNOWN_ERROR
        code = None
    return RequestError(str(message), code if code is not None else status_code)
