r"""Unit tests for TextDecoder and BytesDecoder."""

from __future__ import annotations

from typing import Any

import pytest

from typedrest.decoders import BytesDecoder, TextDecoder
from typedrest.exceptions import DecodeError

#################################
#     Tests for TextDecoder     #
#################################


def test_text_decoder_media_type() -> None:
    assert TextDecoder.media_type == "text/plain"


def test_text_decoder_repr() -> None:
    assert repr(TextDecoder()) == "TextDecoder(encoding='utf-8')"


def test_text_decoder_str() -> None:
    assert TextDecoder().decode(str, b"hello") == "hello"


def test_text_decoder_int() -> None:
    assert TextDecoder().decode(int, b"42") == 42


def test_text_decoder_encoding() -> None:
    assert TextDecoder(encoding="latin-1").decode(str, "café".encode("latin-1")) == "café"


def test_text_decoder_invalid_encoding() -> None:
    with pytest.raises(DecodeError, match=r"body is not valid utf-8 text") as exc_info:
        TextDecoder().decode(str, b"\xff\xfe")

    assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)


def test_text_decoder_wrong_type() -> None:
    with pytest.raises(DecodeError, match=r"could not decode text body"):
        TextDecoder().decode(int, b"not a number")


##################################
#     Tests for BytesDecoder     #
##################################


def test_bytes_decoder_media_type() -> None:
    assert BytesDecoder.media_type == "application/octet-stream"


def test_bytes_decoder_repr() -> None:
    assert repr(BytesDecoder()) == "BytesDecoder()"


@pytest.mark.parametrize("target", [bytes, Any])
def test_bytes_decoder_raw(target: Any) -> None:
    assert BytesDecoder().decode(target, b"\x00\x01") == b"\x00\x01"


def test_bytes_decoder_wrong_type() -> None:
    with pytest.raises(DecodeError, match=r"could not decode binary body") as exc_info:
        BytesDecoder().decode(int, b"\x00\x01")

    assert exc_info.value.content_type == "application/octet-stream"
