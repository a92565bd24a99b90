r"""Callback types and data structures for observability.

This module provides the hooks a client can use to observe dispatches
for logging, metrics or debugging. Callbacks are purely diagnostic: an
exception raised by a callback is logged and never changes the outcome
of the dispatch.

The callback system provides three lifecycle hooks:
- on_request: Called after the request transformers ran, before sending
- on_response: Called when the transport returned a response
- on_failure: Called when the transport failed without a response

Example:
    ```pycon
    >>> from typedrest import AsyncRestClient
    >>> from typedrest.callbacks import ResponseInfo
    >>> from typedrest.core import ClientConfig
    >>> def log_response(info: ResponseInfo) -> None:
    ...     print(f"{info.method} {info.url} -> {info.status_code}")
    ...
    >>> client = AsyncRestClient(config=ClientConfig(on_response=log_response))  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "FailureInfo",
    "RequestInfo",
    "ResponseInfo",
    "invoke_on_failure",
    "invoke_on_request",
    "invoke_on_response",
]

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RequestInfo:
    """Information passed to on_request callback.

    Attributes:
        method: The HTTP method (e.g., "GET", "POST").
        url: The URL being requested.
        original: The request as given by the caller.
        request: The request after the transformers ran, as sent.
    """

    method: str
    url: str
    original: httpx.Request
    request: httpx.Request


@dataclass
class ResponseInfo:
    """Information passed to on_response callback.

    Attributes:
        method: The HTTP method (e.g., "GET", "POST").
        url: The URL that was requested.
        status_code: The HTTP status code of the response.
        response: The HTTP response object.
        elapsed: Time spent waiting for the transport (seconds).
    """

    method: str
    url: str
    status_code: int
    response: httpx.Response
    elapsed: float


@dataclass
class FailureInfo:
    """Information passed to on_failure callback.

    Attributes:
        method: The HTTP method (e.g., "GET", "POST").
        url: The URL that was requested.
        error: The transport exception.
        elapsed: Time spent waiting for the transport (seconds).
    """

    method: str
    url: str
    error: Exception
    elapsed: float


def _invoke(callback: Callable[[T], None] | None, info: T) -> None:
    if callback is None:
        return
    try:
        callback(info)
    except Exception:
        logger.exception(f"{type(info).__name__} callback {callback!r} raised an exception")


def invoke_on_request(
    on_request: Callable[[RequestInfo], None] | None,
    *,
    original: httpx.Request,
    request: httpx.Request,
) -> None:
    """Invoke on_request callback if provided.

    Args:
        on_request: Optional callback to invoke before sending.
        original: The request as given by the caller.
        request: The transformed request that is sent.
    """
    _invoke(
        on_request,
        RequestInfo(
            method=request.method,
            url=str(request.url),
            original=original,
            request=request,
        ),
    )


def invoke_on_response(
    on_response: Callable[[ResponseInfo], None] | None,
    *,
    request: httpx.Request,
    response: httpx.Response,
    start_time: float,
) -> None:
    """Invoke on_response callback if provided.

    Args:
        on_response: Optional callback to invoke when a response arrives.
        request: The request that was sent.
        response: The HTTP response object.
        start_time: The timestamp when the request was sent.
    """
    _invoke(
        on_response,
        ResponseInfo(
            method=request.method,
            url=str(request.url),
            status_code=response.status_code,
            response=response,
            elapsed=time.time() - start_time,
        ),
    )


def invoke_on_failure(
    on_failure: Callable[[FailureInfo], None] | None,
    *,
    request: httpx.Request,
    error: Exception,
    start_time: float,
) -> None:
    """Invoke on_failure callback if provided.

    Args:
        on_failure: Optional callback to invoke when the transport fails.
        request: The request that was sent.
        error: The transport exception.
        start_time: The timestamp when the request was sent.
    """
    _invoke(
        on_failure,
        FailureInfo(
            method=request.method,
            url=str(request.url),
            error=error,
            elapsed=time.time() - start_time,
        ),
    )
