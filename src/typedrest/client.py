r"""Synchronous context manager client for typed HTTP requests.

``RestClient`` adapts the asynchronous dispatch pipeline to blocking
calls. It owns a private event loop running in a daemon thread; every
dispatch, and every completion handler, runs on that thread. A blocking
call submits the dispatch to the loop and parks the calling thread on a
``concurrent.futures.Future`` until the outcome is available.
"""

from __future__ import annotations

__all__ = ["RestClient", "resolve_result"]

import asyncio
import concurrent.futures
import logging
import threading
from typing import TYPE_CHECKING, Any

from typedrest.client_async import AsyncRestClient
from typedrest.core.config import DEFAULT_TIMEOUT
from typedrest.core.validation import validate_timeout
from typedrest.exceptions import DispatchTimeoutError
from typedrest.result import ApplicationFailure
from typedrest.utils.structured_logging import get_correlation_id, set_correlation_id

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine, Iterable
    from types import TracebackType
    from typing import Self

    import httpx

    from typedrest.core.config import ClientConfig
    from typedrest.decoders.registry import DecoderRegistry
    from typedrest.result import Result
    from typedrest.transform import RequestTransformer

logger: logging.Logger = logging.getLogger(__name__)


def resolve_result(request: httpx.Request, result: Result[Any]) -> Any:
    """Collapse an outcome into a return value or a raised exception.

    Args:
        request: The request that produced the outcome, for logging.
        result: The outcome.

    Returns:
        The value of a ``Success``.

    Raises:
        ApplicationError: For an ``ApplicationFailure``. The status code
            is logged at WARNING level and carried by the exception.
        RestClientError: The error of a ``SystemFailure``.

    Example:
        ```pycon
        >>> import httpx
        >>> from typedrest.client import resolve_result
        >>> from typedrest.result import Success
        >>> request = httpx.Request("GET", "https://api.example.com/widgets/1")
        >>> resolve_result(request, Success({"id": 1}))
        {'id': 1}

        ```
    """
    if isinstance(result, ApplicationFailure):
        logger.warning(
            f"{request.method} request to {request.url} failed with status {result.status_code}"
        )
    return result.unwrap()


class RestClient:
    r"""Synchronous context manager for typed HTTP requests.

    Entering the context starts the event-loop thread and the underlying
    ``httpx.AsyncClient``; exiting closes the client, cancels any dispatch
    still in flight and stops the thread.

    Args:
        config: Optional ClientConfig instance. If ``None``, a default
            ClientConfig is used.
        registry: Optional decoder registry. If ``None``, the registry
            returned by ``DecoderRegistry.default()`` is used.
        client: Optional httpx.AsyncClient used as the transport. It is
            never closed by ``RestClient``.
        transport: Optional httpx transport for the ``httpx.AsyncClient``
            created when no client is given, e.g. ``httpx.MockTransport``.
        timeout: Timeout of the ``httpx.AsyncClient`` created when no
            client is given.
        transformers: Request transformers applied, in order, to every
            outgoing request.

    Example:
        ```pycon
        >>> from dataclasses import dataclass
        >>> import httpx
        >>> from typedrest import RestClient
        >>> @dataclass
        ... class Widget:
        ...     id: int
        ...     name: str
        ...
        >>> transport = httpx.MockTransport(
        ...     lambda request: httpx.Response(200, json={"id": 1, "name": "a"})
        ... )
        >>> with RestClient(transport=transport) as client:
        ...     client.get("https://api.example.com/widgets/1", Widget)
        ...
        Widget(id=1, name='a')

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
        self._async_client = AsyncRestClient(
            config=config,
            registry=registry,
            client=client,
            transport=transport,
            timeout=timeout,
            transformers=transformers,
        )
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}({self._async_client})"

    def __enter__(self) -> Self:
        """Enter the context manager and start the event-loop thread.

        Returns:
            The RestClient instance for making requests.
        """
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context manager, close the underlying httpx client if
        this client created it, and stop the event-loop thread.

        Args:
            exc_type: Exception type if an exception occurred.
            exc_val: Exception value if an exception occurred.
            exc_tb: Exception traceback if an exception occurred.
        """
        self.close()

    @property
    def async_client(self) -> AsyncRestClient:
        return self._async_client

    @property
    def is_open(self) -> bool:
        return self._loop is not None

    def open(self) -> None:
        """Start the event-loop thread and the underlying httpx client.

        Calling ``open`` on an open client does nothing.
        """
        with self._lock:
            if self._loop is not None:
                return
            loop = asyncio.new_event_loop()
            thread = threading.Thread(
                target=_run_loop, args=(loop,), name="typedrest-loop", daemon=True
            )
            thread.start()
            self._loop, self._thread = loop, thread
        logger.debug(f"started event loop thread {thread.name}")
        self._run(self._enter_async_client())

    def close(self) -> None:
        """Cancel in-flight dispatches, close the underlying httpx client
        if this client created it, and stop the event-loop thread.

        Blocking calls waiting on a cancelled dispatch return ``None``.
        Calling ``close`` on a closed client does nothing.
        """
        with self._lock:
            loop, thread = self._loop, self._thread
            self._loop, self._thread = None, None
        if loop is None or thread is None:
            return
        try:
            asyncio.run_coroutine_threadsafe(self._shutdown(), loop).result()
        finally:
            loop.call_soon_threadsafe(loop.stop)
            thread.join()
            loop.close()
            logger.debug(f"stopped event loop thread {thread.name}")

    async def _enter_async_client(self) -> None:
        # the httpx client is created on the loop thread, where it is used
        await self._async_client.__aenter__()

    async def _shutdown(self) -> None:
        current = asyncio.current_task()
        tasks = [task for task in asyncio.all_tasks() if task is not current]
        for task in tasks:
            task.cancel()
        if tasks:
            logger.debug(f"cancelled {len(tasks)} in-flight dispatches")
            await asyncio.gather(*tasks, return_exceptions=True)
        await self._async_client.__aexit__(None, None, None)

    def _ensure_loop(self) -> asyncio.AbstractEventLoop:
        """Ensure the event loop is running.

        Returns:
            The event loop of the client.

        Raises:
            RuntimeError: If the client is used outside of a context manager.
        """
        loop = self._loop
        if loop is None:
            msg = "RestClient must be used within a context manager (with statement)"
            raise RuntimeError(msg)
        return loop

    def _run(self, coro: Coroutine[Any, Any, Any]) -> Any:
        return asyncio.run_coroutine_threadsafe(coro, self._ensure_loop()).result()

    def submit(
        self,
        request: httpx.Request,
        target: Any,
        completion_handler: Callable[[Result[Any]], None] | None = None,
        *,
        optional: bool = False,
    ) -> concurrent.futures.Future[Result[Any]]:
        r"""Start a dispatch on the event-loop thread without blocking.

        The completion handler, if any, is called exactly once with the
        outcome, on the event-loop thread, before the returned future is
        resolved. It is not called if the dispatch is cancelled.

        Args:
            request: The request to send. It is never modified.
            target: The type of the decoded body.
            completion_handler: Optional callback receiving the outcome.
            optional: If ``True``, a successful response without a body
                gives ``Success(None)`` instead of a failure.

        Returns:
            A future resolved with the outcome. It raises
            ``MissingDecoderError`` if no decoder is registered for the
            content type of the response.

        Raises:
            RuntimeError: If the client is used outside of a context
                manager.
        """
        loop = self._ensure_loop()
        correlation_id = get_correlation_id()

        async def run() -> Result[Any]:
            if correlation_id is not None:
                set_correlation_id(correlation_id)
            if optional:
                result = await self._async_client.dispatch_optional(request, target)
            else:
                result = await self._async_client.dispatch(request, target)
            if completion_handler is not None:
                completion_handler(result)
            return result

        return asyncio.run_coroutine_threadsafe(run(), loop)

    def perform(
        self,
        request: httpx.Request,
        target: Any,
        *,
        optional: bool = False,
        timeout: float | None = None,
    ) -> Any:
        r"""Dispatch a request and block until its outcome is available.

        Args:
            request: The request to send. It is never modified.
            target: The type of the decoded body.
            optional: If ``True``, a successful response without a body
                returns ``None`` instead of raising.
            timeout: Optional maximum number of seconds to wait. The
                dispatch is cancelled when it expires. Must be > 0.

        Returns:
            The decoded value. ``None`` if the response had no body and
            ``optional`` is ``True``, or if the dispatch was cancelled
            before completing (e.g. because the client was closed).

        Raises:
            ApplicationError: If the status code is not acceptable and the
                body was decoded into the error type.
            TransportError: If no response was received.
            DecodeError: If the body could not be decoded.
            ContractViolationError: If ``optional`` is ``False`` and the
                successful response had no body.
            DispatchTimeoutError: If ``timeout`` expired.
            MissingDecoderError: If no decoder is registered for the
                content type of the response.
        """
        validate_timeout(timeout)
        future = self.submit(request, target, optional=optional)
        try:
            result = future.result(timeout=timeout)
        except concurrent.futures.CancelledError:
            logger.warning(
                f"{request.method} request to {request.url} was cancelled before completing"
            )
            return None
        except concurrent.futures.TimeoutError:
            future.cancel()
            raise DispatchTimeoutError(timeout) from None
        return resolve_result(request, result)

    def request(
        self,
        method: str,
        url: str,
        target: Any,
        *,
        optional: bool = False,
        timeout: float | None = None,
        **kwargs: Any,
    ) -> Any:
        r"""Build a request and dispatch it, blocking until completion.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE, PATCH, HEAD, OPTIONS, etc.).
            url: The URL of the request.
            target: The type of the decoded body.
            optional: See ``perform``.
            timeout: See ``perform``.
            **kwargs: Additional keyword arguments passed to
                ``httpx.AsyncClient.build_request()``.

        Returns:
            The decoded value (see ``perform``).
        """
        self._ensure_loop()
        request = self._async_client.build_request(method, url, **kwargs)
        return self.perform(request, target, optional=optional, timeout=timeout)

    def get(self, url: str, target: Any, **kwargs: Any) -> Any:
        r"""Send a GET request (see request() method)."""
        return self.request("GET", url, target, **kwargs)

    def post(self, url: str, target: Any, **kwargs: Any) -> Any:
        r"""Send a POST request (see request() method)."""
        return self.request("POST", url, target, **kwargs)

    def put(self, url: str, target: Any, **kwargs: Any) -> Any:
        r"""Send a PUT request (see request() method)."""
        return self.request("PUT", url, target, **kwargs)

    def patch(self, url: str, target: Any, **kwargs: Any) -> Any:
        r"""Send a PATCH request (see request() method)."""
        return self.request("PATCH", url, target, **kwargs)

    def delete(self, url: str, target: Any, *, optional: bool = True, **kwargs: Any) -> Any:
        r"""Send a DELETE request (see request() method).

        The response body is optional by default.
        """
        return self.request("DELETE", url, target, optional=optional, **kwargs)


def _run_loop(loop: asyncio.AbstractEventLoop) -> None:
    asyncio.set_event_loop(loop)
    loop.run_forever()
