r"""Body decoders and the content-type registry."""

from __future__ import annotations

__all__ = [
    "BytesDecoder",
    "Decoder",
    "DecoderRegistry",
    "JsonDecoder",
    "TextDecoder",
    "parse_media_type",
]

from typedrest.decoders.base import Decoder
from typedrest.decoders.json import JsonDecoder
from typedrest.decoders.registry import DecoderRegistry, parse_media_type
from typedrest.decoders.text import BytesDecoder, TextDecoder
