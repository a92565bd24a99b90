r"""Define the exceptions raised by the typedrest package.

Recoverable conditions (transport and decode errors, contract
violations) are carried by the ``SystemFailure`` result variant and are
only raised by the blocking client. ``MissingDecoderError`` is the one
exception that always escapes the result channel because it signals an
incomplete decoder configuration.
"""

from __future__ import annotations

__all__ = [
    "ApplicationError",
    "ContractViolationError",
    "DecodeError",
    "DispatchTimeoutError",
    "MissingDecoderError",
    "RestClientError",
    "TransportError",
    "UnacceptableStatusError",
]

from typing import Any


class RestClientError(Exception):
    r"""Base class for the errors raised or reported by typedrest.

    Args:
        message: A descriptive error message.

    Example:
        ```pycon
        >>> from typedrest.exceptions import RestClientError
        >>> exc = RestClientError("something went wrong")
        >>> exc.message
        'something went wrong'

        ```
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TransportError(RestClientError):
    r"""Raised when the transport fails before producing a response.

    Args:
        method: The HTTP method of the request.
        url: The URL of the request.
        message: A descriptive error message.
        cause: The underlying ``httpx`` exception.

    Example:
        ```pycon
        >>> import httpx
        >>> from typedrest.exceptions import TransportError
        >>> exc = TransportError(
        ...     method="GET",
        ...     url="https://api.example.com/widgets/1",
        ...     message="GET request to https://api.example.com/widgets/1 failed",
        ...     cause=httpx.ConnectError("Connection refused"),
        ... )
        >>> exc.method
        'GET'

        ```
    """

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.__cause__ = cause


class DecodeError(RestClientError):
    r"""Raised when a response body cannot be decoded into the requested
    type.

    Args:
        content_type: The media type of the body.
        target: The type the body was decoded into.
        message: A descriptive error message.
        cause: The underlying parsing or validation error.
    """

    def __init__(
        self,
        content_type: str,
        target: Any,
        message: str,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.content_type = content_type
        self.target = target
        self.__cause__ = cause


class UnacceptableStatusError(RestClientError):
    r"""Raised by a response validator when the status code is outside
    the acceptable range.

    Args:
        status_code: The HTTP status code of the response.
    """

    def __init__(self, status_code: int) -> None:
        super().__init__(f"unacceptable status code {status_code}")
        self.status_code = status_code


class ApplicationError(RestClientError):
    r"""Raised by the blocking client when the server answered with an
    unacceptable status and a well-formed error body.

    Args:
        status_code: The HTTP status code of the response.
        error: The error value decoded from the response body.

    Example:
        ```pycon
        >>> from typedrest.exceptions import ApplicationError
        >>> exc = ApplicationError(status_code=404, error={"code": "not_found"})
        >>> exc.status_code
        404
        >>> exc.error
        {'code': 'not_found'}

        ```
    """

    def __init__(self, status_code: int, error: Any) -> None:
        super().__init__(f"request failed with status {status_code}: {error!r}")
        self.status_code = status_code
        self.error = error


class ContractViolationError(RestClientError):
    r"""Reported when a dispatch that expects a non-optional value
    receives a successful response without a body.

    Args:
        target: The non-optional type that was requested.
    """

    def __init__(self, target: Any) -> None:
        super().__init__(
            f"successful response decoded to None for the non-optional type {target!r}"
        )
        self.target = target


class DispatchTimeoutError(RestClientError):
    r"""Raised by the blocking client when a dispatch does not complete
    within the caller supplied timeout.

    Args:
        timeout: The timeout in seconds.
    """

    def __init__(self, timeout: float) -> None:
        super().__init__(f"dispatch did not complete within {timeout} seconds")
        self.timeout = timeout


class MissingDecoderError(RuntimeError):
    r"""Raised when no decoder is registered for the content type of a
    response.

    This is a configuration error: the client was built with an
    incomplete decoder registry and the call site cannot recover from it.

    Args:
        content_type: The media type without a registered decoder.

    Example:
        ```pycon
        >>> from typedrest.exceptions import MissingDecoderError
        >>> raise MissingDecoderError("application/xml")
        Traceback (most recent call last):
            ...
        typedrest.exceptions.MissingDecoderError: no decoder registered for content type 'application/xml'

        ```
    """

    def __init__(self, content_type: str) -> None:
        super().__init__(f"no decoder registered for content type {content_type!r}")
        self.content_type = content_type
