r"""Dispatch a request and resolve its typed outcome.

This module contains the pipeline shared by the sync and async clients:
the request is transformed and sent through the transport, the response
decoder is selected from the declared content type, the status code is
validated, and the outcome is resolved as a ``Success``, an
``ApplicationFailure`` or a ``SystemFailure``.

The only suspension point is the ``transport.send`` call. Everything
after it runs synchronously in the task that awaited the dispatch.
"""

from __future__ import annotations

__all__ = ["Transport", "decode_response", "dispatch", "dispatch_non_optional"]

import logging
import time
from typing import TYPE_CHECKING, Any, Optional, Protocol

import httpx

from typedrest.callbacks import invoke_on_failure, invoke_on_request, invoke_on_response
from typedrest.decoders.registry import parse_media_type
from typedrest.exceptions import (
    ContractViolationError,
    DecodeError,
    MissingDecoderError,
    TransportError,
    UnacceptableStatusError,
)
from typedrest.result import ApplicationFailure, Result, Success, SystemFailure
from typedrest.transform import apply_transformers
from typedrest.utils.diagnostics import log_request, log_response

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from typedrest.callbacks import FailureInfo, RequestInfo, ResponseInfo
    from typedrest.core.validator import StatusValidator
    from typedrest.decoders.registry import DecoderRegistry
    from typedrest.transform import RequestTransformer

logger: logging.Logger = logging.getLogger(__name__)


class Transport(Protocol):
    """The transport collaborator.

    ``httpx.AsyncClient`` satisfies this protocol. ``send`` must either
    return a response or raise ``httpx.RequestError`` when no response
    could be obtained.
    """

    async def send(self, request: httpx.Request) -> httpx.Response: ...


def decode_response(
    response: httpx.Response,
    target: Any,
    *,
    registry: DecoderRegistry,
    validator: StatusValidator,
    error_type: Any = Any,
) -> Result[Any]:
    """Resolve the outcome of a response.

    The resolution order is:

    1. No ``Content-Type`` header: ``Success(None)``, whatever the status.
    2. No decoder for the content type: ``MissingDecoderError`` is raised.
    3. Empty body: ``Success(None)``.
    4. Acceptable status: the body is decoded as ``target``.
    5. Unacceptable status: the body is decoded as ``error_type`` with
       the same decoder, giving an ``ApplicationFailure``.

    A body that cannot be decoded, in step 4 or 5, gives a
    ``SystemFailure`` carrying the ``DecodeError``.

    Args:
        response: The response, with its body already read.
        target: The type of the decoded body.
        registry: The decoders, by content type.
        validator: The status validator.
        error_type: The type of the decoded error body.

    Returns:
        The outcome.

    Raises:
        MissingDecoderError: If no decoder is registered for the content
            type of the response.

    Example:
        ```pycon
        >>> import httpx
        >>> from typedrest.core import StatusValidator
        >>> from typedrest.decoders import DecoderRegistry
        >>> from typedrest.dispatch import decode_response
        >>> response = httpx.Response(404, json={"code": "not_found"})
        >>> decode_response(
        ...     response,
        ...     dict,
        ...     registry=DecoderRegistry.default(),
        ...     validator=StatusValidator(),
        ... )
        ApplicationFailure(status_code=404, error={'code': 'not_found'})

        ```
    """
    content_type = response.headers.get("content-type")
    media_type = parse_media_type(content_type) if content_type else ""
    if not media_type:
        logger.debug(f"response with status {response.status_code} has no content type")
        return Success(None)

    decoder = registry.lookup(media_type)
    if decoder is None:
        raise MissingDecoderError(media_type)

    data = response.content
    if not data:
        logger.debug(f"response with status {response.status_code} has no body")
        return Success(None)

    try:
        validator.validate(response)
    except UnacceptableStatusError as exc:
        try:
            error = decoder.decode(error_type, data)
        except DecodeError as decode_exc:
            logger.debug(
                f"error body of {media_type} response with status {exc.status_code} "
                f"could not be decoded"
            )
            return SystemFailure(decode_exc)
        return ApplicationFailure(exc.status_code, error)

    try:
        value = decoder.decode(target, data)
    except DecodeError as exc:
        return SystemFailure(exc)
    return Success(value)


async def dispatch(
    request: httpx.Request,
    target: Any,
    *,
    transport: Transport,
    registry: DecoderRegistry,
    validator: StatusValidator,
    error_type: Any = Any,
    transformers: Iterable[RequestTransformer] = (),
    log_traffic: bool = False,
    on_request: Callable[[RequestInfo], None] | None = None,
    on_response: Callable[[ResponseInfo], None] | None = None,
    on_failure: Callable[[FailureInfo], None] | None = None,
) -> Result[Any]:
    """Send a request and resolve its typed outcome.

    The body may be absent from a successful response, in which case the
    outcome is ``Success(None)`` whatever ``target`` is. Use
    ``dispatch_non_optional`` to report that case as a failure instead.

    Args:
        request: The request. It is copied before the transformers run
            and is never modified.
        target: The type of the decoded body.
        transport: The transport used to send the request.
        registry: The decoders, by content type.
        validator: The status validator.
        error_type: The type of the decoded error body.
        transformers: Transformers applied, in order, to the copy of the
            request before it is sent.
        log_traffic: If ``True``, the requests and the response are
            dumped at DEBUG level.
        on_request: Optional callback called before the request is sent.
        on_response: Optional callback called when a response is received.
        on_failure: Optional callback called when the transport fails.

    Returns:
        The outcome. A transport failure gives a ``SystemFailure``
        carrying a ``TransportError``.

    Raises:
        MissingDecoderError: If no decoder is registered for the content
            type of the response.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from typedrest.core import StatusValidator
        >>> from typedrest.decoders import DecoderRegistry
        >>> from typedrest.dispatch import dispatch
        >>> async def main():
        ...     transport = httpx.MockTransport(lambda request: httpx.Response(200, json=[1, 2]))
        ...     async with httpx.AsyncClient(transport=transport) as client:
        ...         return await dispatch(
        ...             httpx.Request("GET", "https://api.example.com/ids"),
        ...             list[int],
        ...             transport=client,
        ...             registry=DecoderRegistry.default(),
        ...             validator=StatusValidator(),
        ...         )
        ...
        >>> asyncio.run(main())
        Success(value=[1, 2])

        ```
    """
    sent = apply_transformers(request, transformers)
    if log_traffic:
        log_request(request, sent)
    invoke_on_request(on_request, original=request, request=sent)

    start_time = time.time()
    try:
        response = await transport.send(sent)
    except httpx.RequestError as exc:
        logger.debug(f"{sent.method} request to {sent.url} encountered {type(exc).__name__}: {exc}")
        invoke_on_failure(on_failure, request=sent, error=exc, start_time=start_time)
        return SystemFailure(
            TransportError(
                method=sent.method,
                url=str(sent.url),
                message=f"{sent.method} request to {sent.url} failed: {exc}",
                cause=exc,
            )
        )

    logger.debug(f"{sent.method} request to {sent.url} returned status {response.status_code}")
    if log_traffic:
        log_response(sent, response)
    invoke_on_response(on_response, request=sent, response=response, start_time=start_time)
    return decode_response(
        response, target, registry=registry, validator=validator, error_type=error_type
    )


async def dispatch_non_optional(
    request: httpx.Request, target: Any, **kwargs: Any
) -> Result[Any]:
    """Send a request whose successful response must carry a body.

    The request is dispatched for ``Optional[target]``. A successful
    outcome without a value (no content type, no body, or a JSON
    ``null``) is reported as a ``SystemFailure`` carrying a
    ``ContractViolationError``. Failures pass through unchanged.

    Args:
        request: The request.
        target: The non-optional type of the decoded body.
        **kwargs: The keyword arguments of ``dispatch``.

    Returns:
        The outcome.

    Raises:
        MissingDecoderError: If no decoder is registered for the content
            type of the response.
    """
    result = await dispatch(request, Optional[target], **kwargs)  # noqa: UP007
    if isinstance(result, Success) and result.value is None:
        logger.warning(
            f"{request.method} request to {request.url} succeeded without a value "
            f"for the non-optional type {target!r}"
        )
        return SystemFailure(ContractViolationError(target))
    return result
