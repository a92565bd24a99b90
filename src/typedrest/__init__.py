r"""typedrest - Typed HTTP responses on top of httpx.

This package dispatches HTTP requests and resolves each of them into one
typed outcome: the body decoded into the requested type, an application
error decoded from the body of a failed response, or a transport/decode
failure. The decoder is selected from the response's ``Content-Type``
and the status code is validated against a configurable range.

Key Features:
    - Three-way ``Result`` outcome: ``Success``, ``ApplicationFailure``,
      ``SystemFailure``
    - Pluggable decoders per content type (JSON, text and binary
      included), validated with pydantic into dataclasses, models or
      builtins
    - Request transformers to inject headers before sending
    - Asynchronous client and blocking client with optional timeout
    - Callbacks and opt-in structured traffic logging

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
    >>> with RestClient() as client:  # doctest: +SKIP
    ...     widget = client.get("https://api.example.com/widgets/1", Widget)
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "ApplicationError",
    "ApplicationFailure",
    "AsyncRestClient",
    "ClientConfig",
    "ContractViolationError",
    "DecodeError",
    "Decoder",
    "DecoderRegistry",
    "DispatchTimeoutError",
    "MissingDecoderError",
    "RestClient",
    "RestClientError",
    "Result",
    "StatusValidator",
    "Success",
    "SystemFailure",
    "TransportError",
    "__version__",
    "dispatch",
    "dispatch_non_optional",
]

from importlib.metadata import PackageNotFoundError, version

from typedrest.client import RestClient
from typedrest.client_async import AsyncRestClient
from typedrest.core import ClientConfig, StatusValidator
from typedrest.decoders import Decoder, DecoderRegistry
from typedrest.dispatch import dispatch, dispatch_non_optional
from typedrest.exceptions import (
    ApplicationError,
    ContractViolationError,
    DecodeError,
    DispatchTimeoutError,
    MissingDecoderError,
    RestClientError,
    TransportError,
)
from typedrest.result import ApplicationFailure, Result, Success, SystemFailure

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
