r"""Plain text and raw bytes body decoders."""

from __future__ import annotations

__all__ = ["BytesDecoder", "TextDecoder"]

from typing import Any

from pydantic import ValidationError

from typedrest.core.config import BYTES_CONTENT_TYPE, TEXT_CONTENT_TYPE
from typedrest.decoders.base import Decoder, get_type_adapter
from typedrest.exceptions import DecodeError


class TextDecoder(Decoder):
    r"""Decode text bodies.

    The body is decoded with the configured encoding and the resulting
    string is validated against the requested type, so a ``text/plain``
    body of ``42`` can be requested as ``int``.

    Args:
        encoding: The text encoding of the body.

    Example:
        ```pycon
        >>> from typedrest.decoders import TextDecoder
        >>> TextDecoder().decode(str, b"hello")
        'hello'
        >>> TextDecoder().decode(int, b"42")
        42

        ```
    """

    media_type = TEXT_CONTENT_TYPE

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(encoding={self._encoding!r})"

    def decode(self, target: Any, data: bytes) -> Any:
        try:
            text = data.decode(self._encoding)
        except UnicodeDecodeError as exc:
            raise DecodeError(
                content_type=self.media_type,
                target=target,
                message=f"body is not valid {self._encoding} text",
                cause=exc,
            ) from exc
        try:
            return get_type_adapter(target).validate_python(text)
        except ValidationError as exc:
            raise DecodeError(
                content_type=self.media_type,
                target=target,
                message=f"could not decode text body as {target!r}: {exc}",
                cause=exc,
            ) from exc


class BytesDecoder(Decoder):
    r"""Return the raw body.

    The requested type must accept ``bytes`` (e.g. ``bytes`` or ``Any``).

    Example:
        ```pycon
        >>> from typedrest.decoders import BytesDecoder
        >>> BytesDecoder().decode(bytes, b"\x00\x01")
        b'\x00\x01'

        ```
    """

    media_type = BYTES_CONTENT_TYPE

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"

    def decode(self, target: Any, data: bytes) -> Any:
        try:
            return get_type_adapter(target).validate_python(data, strict=True)
        except ValidationError as exc:
            raise DecodeError(
                content_type=self.media_type,
                target=target,
                message=f"could not decode binary body as {target!r}",
                cause=exc,
            ) from exc
