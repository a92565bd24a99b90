r"""Registry mapping content types to body decoders."""

from __future__ import annotations

__all__ = ["DecoderRegistry", "parse_media_type"]

import logging
import threading
from typing import TYPE_CHECKING

from typedrest.decoders.json import JsonDecoder
from typedrest.decoders.text import BytesDecoder, TextDecoder

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from typedrest.decoders.base import Decoder

logger: logging.Logger = logging.getLogger(__name__)


def parse_media_type(content_type: str) -> str:
    """Extract the media type from a ``Content-Type`` header value.

    Parameters such as ``charset`` are dropped and the result is
    lower-cased, as media types are case-insensitive.

    Args:
        content_type: The header value.

    Returns:
        The media type, e.g. ``"application/json"``.

    Example:
        ```pycon
        >>> from typedrest.decoders import parse_media_type
        >>> parse_media_type("Application/JSON; charset=utf-8")
        'application/json'

        ```
    """
    return content_type.split(";", 1)[0].strip().lower()


class DecoderRegistry:
    r"""Map content types to decoders.

    Registering a content type twice is rejected unless ``exist_ok`` is
    set, in which case the last registration wins. Lookups never lock:
    registration swaps in a new mapping under a lock so concurrent
    dispatches always read a consistent snapshot.

    Args:
        decoders: Optional initial mapping of content type to decoder.

    Example:
        ```pycon
        >>> from typedrest.decoders import DecoderRegistry, JsonDecoder
        >>> registry = DecoderRegistry()
        >>> registry.register("application/json", JsonDecoder())
        >>> registry.lookup("application/json; charset=utf-8")
        JsonDecoder(strict=False)
        >>> registry.lookup("application/xml") is None
        True

        ```
    """

    def __init__(self, decoders: Mapping[str, Decoder] | None = None) -> None:
        self._decoders: dict[str, Decoder] = {}
        self._lock = threading.Lock()
        for content_type, decoder in (decoders or {}).items():
            self.register(content_type, decoder)

    @classmethod
    def default(cls) -> DecoderRegistry:
        """Create a registry with the JSON, text and binary decoders.

        Returns:
            A registry for ``application/json``, ``text/plain`` and
            ``application/octet-stream``.

        Example:
            ```pycon
            >>> from typedrest.decoders import DecoderRegistry
            >>> DecoderRegistry.default().content_types()
            ('application/json', 'application/octet-stream', 'text/plain')

            ```
        """
        decoders: Iterable[Decoder] = (JsonDecoder(), TextDecoder(), BytesDecoder())
        return cls({decoder.media_type: decoder for decoder in decoders})

    def __contains__(self, content_type: str) -> bool:
        return parse_media_type(content_type) in self._decoders

    def __len__(self) -> int:
        return len(self._decoders)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}({self._decoders})"

    def content_types(self) -> tuple[str, ...]:
        """Return the registered media types, sorted."""
        return tuple(sorted(self._decoders))

    def register(self, content_type: str, decoder: Decoder, *, exist_ok: bool = False) -> None:
        """Register a decoder for a content type.

        Args:
            content_type: The content type, normalized with
                ``parse_media_type``.
            decoder: The decoder to use for bodies of that type.
            exist_ok: If ``True``, an existing registration is replaced.

        Raises:
            ValueError: If a decoder is already registered for the
                content type and ``exist_ok`` is ``False``.
        """
        media_type = parse_media_type(content_type)
        if not media_type:
            msg = f"content type must not be empty, got {content_type!r}"
            raise ValueError(msg)
        with self._lock:
            if media_type in self._decoders and not exist_ok:
                msg = (
                    f"a decoder is already registered for {media_type!r}: "
                    f"{self._decoders[media_type]!r}. Use exist_ok=True to replace it"
                )
                raise ValueError(msg)
            logger.debug(f"registering {decoder!r} for {media_type!r}")
            self._decoders = {**self._decoders, media_type: decoder}

    def unregister(self, content_type: str) -> Decoder:
        """Remove the decoder registered for a content type.

        Args:
            content_type: The content type.

        Returns:
            The removed decoder.

        Raises:
            KeyError: If no decoder is registered for the content type.
        """
        media_type = parse_media_type(content_type)
        with self._lock:
            decoders = dict(self._decoders)
            decoder = decoders.pop(media_type)
            self._decoders = decoders
        return decoder

    def lookup(self, content_type: str) -> Decoder | None:
        """Return the decoder for a content type.

        Args:
            content_type: A media type or a full ``Content-Type`` header
                value.

        Returns:
            The decoder, or ``None`` if none is registered.
        """
        return self._decoders.get(parse_media_type(content_type))
