r"""Asynchronous context manager client for typed HTTP requests.

This module provides the ``AsyncRestClient`` that binds a transport, a
decoder registry, a status validator and request transformers together,
and dispatches requests into typed ``Result`` outcomes.
"""

from __future__ import annotations

__all__ = ["AsyncRestClient"]

import logging
from typing import TYPE_CHECKING, Any, Optional

import httpx

from typedrest.core.config import DEFAULT_TIMEOUT, ClientConfig
from typedrest.core.validation import validate_timeout
from typedrest.core.validator import StatusValidator
from typedrest.decoders.registry import DecoderRegistry
from typedrest.dispatch import dispatch, dispatch_non_optional

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import TracebackType
    from typing import Self

    from typedrest.result import Result
    from typedrest.transform import RequestTransformer

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRestClient:
    r"""Asynchronous context manager for typed HTTP requests.

    Two usage patterns are supported:

    **External lifecycle management**: an ``httpx.AsyncClient`` is created
    and closed by the caller and passed to ``AsyncRestClient``, which
    uses it as its transport and never closes it. Use this pattern to
    share a connection pool or to configure proxies, auth or TLS.

    **Managed lifecycle**: no client is passed. ``AsyncRestClient``
    creates an ``httpx.AsyncClient`` when entering the context and closes
    it on exit.

    Dispatches started from the same client may run concurrently; they
    share only the decoder registry, which is read-only while
    dispatching.

    Args:
        config: Optional ClientConfig instance. If ``None``, a default
            ClientConfig is used.
        registry: Optional decoder registry. If ``None``, the registry
            returned by ``DecoderRegistry.default()`` is used.
        client: Optional httpx.AsyncClient used as the transport.
        transport: Optional httpx transport for the ``httpx.AsyncClient``
            created when no client is given, e.g. ``httpx.MockTransport``.
        timeout: Timeout of the ``httpx.AsyncClient`` created when no
            client is given.
        transformers: Request transformers applied, in order, to every
            outgoing request.

    Example:
        ```pycon
        >>> import asyncio
        >>> from dataclasses import dataclass
        >>> from typedrest import AsyncRestClient
        >>> @dataclass
        ... class Widget:
        ...     id: int
        ...     name: str
        ...
        >>> async def main():  # doctest: +SKIP
        ...     async with AsyncRestClient() as client:
        ...         result = await client.get("https://api.example.com/widgets/1", Widget)
        ...         return result.unwrap()
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        *,
        config: ClientConfig | None = None,
        registry: DecoderRegistry | None = None,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | httpx.Timeout = DEFAULT_TIMEOUT,
        transformers: Iterable[RequestTransformer] = (),
    ) -> None:
        if client is not None and transport is not None:
            msg = "client and transport are mutually exclusive"
            raise ValueError(msg)
        if isinstance(timeout, (int, float)):
            validate_timeout(timeout)
        self._config = config if config is not None else ClientConfig()
        self._registry = registry if registry is not None else DecoderRegistry.default()
        self._validator = StatusValidator(self._config.min_status, self._config.max_status)
        self._transformers: list[RequestTransformer] = list(transformers)
        self._transport = transport
        self._timeout = timeout
        self._client = client
        self._close_client = False

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(config={self._config}, "
            f"registry={self._registry}, validator={self._validator})"
        )

    async def __aenter__(self) -> Self:
        """Enter the async context manager.

        If no ``httpx.AsyncClient`` was given, one is created and its
        lifecycle is managed by this context manager.

        Returns:
            The AsyncRestClient instance for making requests.
        """
        if self._client is None:
            self._client = httpx.AsyncClient(transport=self._transport, timeout=self._timeout)
            self._close_client = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the async context manager and close the underlying httpx
        client if this context manager created it.

        Args:
            exc_type: Exception type if an exception occurred.
            exc_val: Exception value if an exception occurred.
            exc_tb: Exception traceback if an exception occurred.
        """
        if self._close_client and self._client is not None:
            await self._client.aclose()
            self._client = None
            self._close_client = False

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def registry(self) -> DecoderRegistry:
        return self._registry

    @property
    def validator(self) -> StatusValidator:
        return self._validator

    def add_transformer(self, transformer: RequestTransformer) -> None:
        """Append a request transformer.

        Transformers run in the order they were added.

        Args:
            transformer: A callable mutating the outgoing request.
        """
        self._transformers.append(transformer)

    def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure the transport is available for use.

        Returns:
            The httpx.AsyncClient instance.

        Raises:
            RuntimeError: If the client is used outside of a context manager.
        """
        if self._client is None:
            msg = "AsyncRestClient must be used within an async context manager (async with statement)"
            raise RuntimeError(msg)
        return self._client

    def _dispatch_kwargs(self) -> dict[str, Any]:
        return {
            "transport": self._ensure_client(),
            "registry": self._registry,
            "validator": self._validator,
            "transformers": tuple(self._transformers),
            **self._config.to_dict(),
        }

    async def dispatch(self, request: httpx.Request, target: Any) -> Result[Any]:
        r"""Dispatch a request whose successful response must carry a body.

        Args:
            request: The request to send. It is never modified.
            target: The type of the decoded body.

        Returns:
            The outcome. A successful response without a body gives a
            ``SystemFailure`` carrying a ``ContractViolationError``.

        Raises:
            MissingDecoderError: If no decoder is registered for the
                content type of the response.
            RuntimeError: If the client is used outside of a context
                manager.
        """
        return await dispatch_non_optional(request, target, **self._dispatch_kwargs())

    async def dispatch_optional(self, request: httpx.Request, target: Any) -> Result[Any]:
        r"""Dispatch a request whose successful response may have no body.

        Args:
            request: The request to send. It is never modified.
            target: The type of the decoded body.

        Returns:
            The outcome. A successful response without a body gives
            ``Success(None)``.

        Raises:
            MissingDecoderError: If no decoder is registered for the
                content type of the response.
            RuntimeError: If the client is used outside of a context
                manager.
        """
        return await dispatch(request, Optional[target], **self._dispatch_kwargs())  # noqa: UP007

    def build_request(self, method: str, url: str, **kwargs: Any) -> httpx.Request:
        r"""Build a request with the underlying httpx client.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE, PATCH, HEAD, OPTIONS, etc.).
            url: The URL of the request.
            **kwargs: Additional keyword arguments passed to
                ``httpx.AsyncClient.build_request()`` (``json``,
                ``params``, ``headers``, ...).

        Returns:
            The request.
        """
        return self._ensure_client().build_request(method, url, **kwargs)

    async def request(
        self, method: str, url: str, target: Any, *, optional: bool = False, **kwargs: Any
    ) -> Result[Any]:
        r"""Build and dispatch a request.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE, PATCH, HEAD, OPTIONS, etc.).
            url: The URL of the request.
            target: The type of the decoded body.
            optional: If ``True``, a successful response without a body
                gives ``Success(None)`` instead of a failure.
            **kwargs: Additional keyword arguments passed to
                ``httpx.AsyncClient.build_request()``.

        Returns:
            The outcome.

        Example:
            ```pycon
            >>> from typedrest import AsyncRestClient
            >>> async with AsyncRestClient() as client:  # doctest: +SKIP
            ...     result = await client.request("GET", "https://api.example.com/ids", list[int])
            ...

            ```
        """
        request = self.build_request(method, url, **kwargs)
        if optional:
            return await self.dispatch_optional(request, target)
        return await self.dispatch(request, target)

    async def get(self, url: str, target: Any, **kwargs: Any) -> Result[Any]:
        r"""Dispatch a GET request (see request() method)."""
        return await self.request("GET", url, target, **kwargs)

    async def post(self, url: str, target: Any, **kwargs: Any) -> Result[Any]:
        r"""Dispatch a POST request (see request() method)."""
        return await self.request("POST", url, target, **kwargs)

    async def put(self, url: str, target: Any, **kwargs: Any) -> Result[Any]:
        r"""Dispatch a PUT request (see request() method)."""
        return await self.request("PUT", url, target, **kwargs)

    async def patch(self, url: str, target: Any, **kwargs: Any) -> Result[Any]:
        r"""Dispatch a PATCH request (see request() method)."""
        return await self.request("PATCH", url, target, **kwargs)

    async def delete(
        self, url: str, target: Any, *, optional: bool = True, **kwargs: Any
    ) -> Result[Any]:
        r"""Dispatch a DELETE request (see request() method).

        Unlike the other methods, the response body is optional by
        default since most DELETE endpoints answer ``204 No Content``.
        """
        return await self.request("DELETE", url, target, optional=optional, **kwargs)
