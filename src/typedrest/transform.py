r"""Request transformers applied before a request is sent.

A transformer is a callable that receives the outgoing ``httpx.Request``
and mutates it in place, typically to inject authentication or tracing
headers. Transformers run in registration order on a copy of the
caller's request, so the caller's object is left untouched.

Example:
    ```pycon
    >>> import httpx
    >>> from typedrest.transform import apply_transformers
    >>> def authorize(request: httpx.Request) -> None:
    ...     request.headers["Authorization"] = "Bearer token"
    ...
    >>> original = httpx.Request("GET", "https://api.example.com/widgets/1")
    >>> request = apply_transformers(original, [authorize])
    >>> request.headers["Authorization"]
    'Bearer token'
    >>> "Authorization" in original.headers
    False

    ```
"""

from __future__ import annotations

__all__ = ["RequestTransformer", "apply_transformers", "copy_request"]

import logging
from collections.abc import Callable, Iterable

import httpx

logger: logging.Logger = logging.getLogger(__name__)

RequestTransformer = Callable[[httpx.Request], None]


def copy_request(request: httpx.Request) -> httpx.Request:
    """Return a copy of a request with its own headers and extensions.

    The body is shared: an in-memory body is copied by value, a body that
    has not been read yet keeps pointing at the same stream.

    Args:
        request: The request to copy.

    Returns:
        The copy.
    """
    try:
        content = request.content
    except httpx.RequestNotRead:
        return httpx.Request(
            method=request.method,
            url=request.url,
            headers=request.headers.copy(),
            stream=request.stream,
            extensions=dict(request.extensions),
        )
    return httpx.Request(
        method=request.method,
        url=request.url,
        headers=request.headers.copy(),
        content=content or None,
        extensions=dict(request.extensions),
    )


def apply_transformers(
    request: httpx.Request, transformers: Iterable[RequestTransformer]
) -> httpx.Request:
    """Copy a request and apply the transformers to the copy, in order.

    Args:
        request: The caller's request. It is not modified.
        transformers: The transformers to apply.

    Returns:
        The transformed copy.
    """
    transformed = copy_request(request)
    for transformer in transformers:
        logger.debug(f"applying request transformer {transformer!r}")
        transformer(transformed)
    return transformed
