r"""Request and response dumps for traffic logging.

The dumps are emitted only when a client is configured with
``log_traffic=True``. They read the request and the response without
consuming or mutating them.
"""

from __future__ import annotations

__all__ = ["describe_body", "dump_request", "dump_response", "log_request", "log_response"]

import logging
from typing import Any

import httpx

from typedrest.utils.structured_logging import log_structured

logger: logging.Logger = logging.getLogger(__name__)

# Bodies longer than this are truncated in the dumps
MAX_BODY_LENGTH = 2048


def describe_body(content: bytes | None) -> str | None:
    r"""Render a body for a log record.

    Args:
        content: The raw body, or ``None`` if there is none.

    Returns:
        The body decoded as UTF-8 and truncated, a size summary if it is
        not valid UTF-8, or ``None`` for an empty body.

    Example:
        ```pycon
        >>> from typedrest.utils.diagnostics import describe_body
        >>> describe_body(b'{"id": 1}')
        '{"id": 1}'
        >>> describe_body(b"\xff\xfe")
        '<2 bytes, not valid UTF-8>'
        >>> describe_body(b"") is None
        True

        ```
    """
    if not content:
        return None
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError:
        return f"<{len(content)} bytes, not valid UTF-8>"
    if len(text) > MAX_BODY_LENGTH:
        return f"{text[:MAX_BODY_LENGTH]}... <{len(text) - MAX_BODY_LENGTH} more characters>"
    return text


def _request_content(request: httpx.Request) -> bytes | None:
    # streaming bodies have not been read yet; do not consume them here
    try:
        return request.content
    except httpx.RequestNotRead:
        return None


def dump_request(request: httpx.Request) -> dict[str, Any]:
    """Return a JSON-friendly description of a request."""
    return {
        "method": request.method,
        "url": str(request.url),
        "headers": dict(request.headers),
        "body": describe_body(_request_content(request)),
    }


def dump_response(response: httpx.Response) -> dict[str, Any]:
    """Return a JSON-friendly description of a response."""
    return {
        "status_code": response.status_code,
        "headers": dict(response.headers),
        "body": describe_body(response.content),
    }


def log_request(original: httpx.Request, request: httpx.Request) -> None:
    """Log the original request and the request after the transformers
    ran."""
    log_structured(
        logger,
        logging.DEBUG,
        f"{request.method} request to {request.url}",
        original_request=dump_request(original),
        request=dump_request(request),
    )


def log_response(request: httpx.Request, response: httpx.Response) -> None:
    """Log a response together with the request that produced it."""
    log_structured(
        logger,
        logging.DEBUG,
        f"{request.method} request to {request.url} returned {response.status_code}",
        request=dump_request(request),
        response=dump_response(response),
    )
