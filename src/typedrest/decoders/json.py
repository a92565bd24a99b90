r"""JSON body decoder."""

from __future__ import annotations

__all__ = ["JsonDecoder"]

import logging
from typing import Any

from pydantic import ValidationError

from typedrest.core.config import JSON_CONTENT_TYPE
from typedrest.decoders.base import Decoder, get_type_adapter
from typedrest.exceptions import DecodeError

logger: logging.Logger = logging.getLogger(__name__)


class JsonDecoder(Decoder):
    r"""Decode JSON bodies with pydantic.

    The body is parsed and validated in a single pass, so both malformed
    JSON and well-formed JSON that does not match the requested type are
    reported as ``DecodeError``.

    Args:
        strict: If ``True``, pydantic strict mode is used and no type
            coercion happens (e.g. ``"1"`` is not accepted for ``int``).

    Example:
        ```pycon
        >>> from dataclasses import dataclass
        >>> from typedrest.decoders import JsonDecoder
        >>> @dataclass
        ... class Widget:
        ...     id: int
        ...     name: str
        ...
        >>> JsonDecoder().decode(Widget, b'{"id": 1, "name": "a"}')
        Widget(id=1, name='a')

        ```
    """

    media_type = JSON_CONTENT_TYPE

    def __init__(self, strict: bool = False) -> None:
        self._strict = strict

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(strict={self._strict})"

    def decode(self, target: Any, data: bytes) -> Any:
        try:
            return get_type_adapter(target).validate_json(data, strict=self._strict)
        except ValidationError as exc:
            logger.debug(f"could not decode JSON body as {target!r}: {exc.error_count()} errors")
            raise DecodeError(
                content_type=self.media_type,
                target=target,
                message=f"could not decode JSON body as {target!r}: {exc}",
                cause=exc,
            ) from exc
