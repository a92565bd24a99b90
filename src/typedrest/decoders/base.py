r"""Abstract base class for body decoders."""

from __future__ import annotations

__all__ = ["Decoder", "get_type_adapter"]

from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter


class Decoder(ABC):
    """Abstract base class for body decoders.

    A decoder turns the raw bytes of a response body into a value of a
    requested type. Decoders are stateless with respect to a dispatch
    and may be shared by concurrent dispatches.

    Attributes:
        media_type: The media type the decoder is registered under by
            default.
    """

    media_type: str

    @abstractmethod
    def decode(self, target: Any, data: bytes) -> Any:
        """Decode a response body.

        Args:
            target: The requested type, e.g. a dataclass, a pydantic
                model, ``dict[str, Any]`` or ``Widget | None``.
            data: The raw response body.

        Returns:
            The decoded value, an instance of ``target``.

        Raises:
            DecodeError: If the body cannot be decoded into ``target``.
        """


@lru_cache(maxsize=256)
def _cached_type_adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


def get_type_adapter(target: Any) -> TypeAdapter[Any]:
    """Return a pydantic ``TypeAdapter`` for a target type.

    Adapters are cached because building the validation schema is much
    more expensive than validating a body.

    Args:
        target: The requested type.

    Returns:
        The type adapter.

    Example:
        ```pycon
        >>> from typedrest.decoders.base import get_type_adapter
        >>> get_type_adapter(list[int]).validate_json(b"[1, 2]")
        [1, 2]

        ```
    """
    try:
        return _cached_type_adapter(target)
    except TypeError:
        # unhashable target, e.g. Annotated with a dict metadata
        return TypeAdapter(target)
