r"""Unit tests for the request transformers."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, call

import httpx

from tests.helpers import TEST_URL, make_request
from typedrest.transform import apply_transformers, copy_request

if TYPE_CHECKING:
    from typedrest.transform import RequestTransformer


def add_header(name: str, value: str) -> RequestTransformer:
    def transformer(request: httpx.Request) -> None:
        request.headers[name] = value

    return transformer


##################################
#     Tests for copy_request     #
##################################


def test_copy_request() -> None:
    original = make_request("POST", content=b"payload", headers={"X-Trace": "1"})
    copy = copy_request(original)

    assert copy is not original
    assert copy.method == "POST"
    assert copy.url == httpx.URL(TEST_URL)
    assert copy.content == b"payload"
    assert copy.headers["X-Trace"] == "1"


def test_copy_request_headers_are_independent() -> None:
    original = make_request()
    copy = copy_request(original)
    copy.headers["Authorization"] = "Bearer token"

    assert "Authorization" not in original.headers


def test_copy_request_without_body() -> None:
    copy = copy_request(make_request())
    assert copy.content == b""


def test_copy_request_extensions_are_independent() -> None:
    original = make_request(extensions={"trace": "a"})
    copy = copy_request(original)
    copy.extensions["trace"] = "b"

    assert original.extensions["trace"] == "a"


########################################
#     Tests for apply_transformers     #
########################################


def test_apply_transformers_no_transformers() -> None:
    original = make_request()
    request = apply_transformers(original, [])

    assert request is not original
    assert request.url == original.url


def test_apply_transformers_in_order() -> None:
    original = make_request()
    request = apply_transformers(
        original, [add_header("X-Step", "first"), add_header("X-Step", "second")]
    )

    assert request.headers["X-Step"] == "second"
    assert "X-Step" not in original.headers


def test_apply_transformers_called_with_copy() -> None:
    transformer = Mock()
    original = make_request()
    request = apply_transformers(original, [transformer])

    transformer.assert_called_once_with(request)


def test_apply_transformers_each_called_once() -> None:
    manager = Mock()
    original = make_request()
    request = apply_transformers(original, [manager.first, manager.second])

    assert manager.mock_calls == [call.first(request), call.second(request)]


def test_apply_transformers_can_rewrite_url() -> None:
    def rewrite(request: httpx.Request) -> None:
        request.url = request.url.copy_with(params={"version": "2"})

    request = apply_transformers(make_request(), [rewrite])
    assert request.url == httpx.URL(f"{TEST_URL}?version=2")
