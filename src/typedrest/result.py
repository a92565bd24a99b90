r"""Define the three-way outcome of a dispatched request.

A dispatch resolves to exactly one of:

- ``Success``: the body was decoded into the requested type, or the
  response carried no body at all (``value`` is ``None``).
- ``ApplicationFailure``: the status code was not acceptable and the body
  was decoded into the client's error type.
- ``SystemFailure``: the transport failed, the body could not be decoded,
  or a non-optional dispatch received no body.

Example:
    ```pycon
    >>> from typedrest.result import ApplicationFailure, Success
    >>> result = Success({"id": 1})
    >>> result.is_success
    True
    >>> result.unwrap()
    {'id': 1}
    >>> ApplicationFailure(404, {"code": "not_found"}).is_success
    False

    ```
"""

from __future__ import annotations

__all__ = ["ApplicationFailure", "Result", "Success", "SystemFailure"]

from dataclasses import dataclass
from typing import Any, Generic, NoReturn, TypeVar, Union

from typedrest.exceptions import ApplicationError

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful dispatch.

    Attributes:
        value: The decoded body, or ``None`` when the response had no
            content type or no body.
    """

    value: T

    @property
    def is_success(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Return the decoded value."""
        return self.value


@dataclass(frozen=True)
class ApplicationFailure(Generic[E]):
    """Dispatch that received an unacceptable status with a well-formed
    error body.

    Attributes:
        status_code: The HTTP status code of the response.
        error: The error value decoded from the body.
    """

    status_code: int
    error: E

    @property
    def is_success(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        """Raise the decoded error.

        Raises:
            ApplicationError: Always, carrying the status code and the
                decoded error.
        """
        raise ApplicationError(status_code=self.status_code, error=self.error)


@dataclass(frozen=True)
class SystemFailure:
    """Dispatch that failed below the application level.

    Attributes:
        error: A ``TransportError``, ``DecodeError`` or
            ``ContractViolationError``.
    """

    error: Exception

    @property
    def is_success(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        """Raise the underlying error."""
        raise self.error


Result = Union[Success[T], ApplicationFailure[Any], SystemFailure]
