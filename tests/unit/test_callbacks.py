r"""Unit tests for the callback dataclasses and invocation helpers."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING
from unittest.mock import Mock

import httpx

from tests.helpers import TEST_URL, make_request
from typedrest.callbacks import (
    FailureInfo,
    RequestInfo,
    ResponseInfo,
    invoke_on_failure,
    invoke_on_request,
    invoke_on_response,
)

if TYPE_CHECKING:
    import pytest

#######################################
#     Tests for invoke_on_request     #
#######################################


def test_invoke_on_request(mock_callback: Mock) -> None:
    original = make_request()
    request = make_request(headers={"Authorization": "Bearer token"})
    invoke_on_request(mock_callback, original=original, request=request)

    mock_callback.assert_called_once_with(
        RequestInfo(method="GET", url=TEST_URL, original=original, request=request)
    )


def test_invoke_on_request_none() -> None:
    invoke_on_request(None, original=make_request(), request=make_request())


########################################
#     Tests for invoke_on_response     #
########################################


def test_invoke_on_response(mock_callback: Mock, mock_response: httpx.Response) -> None:
    request = make_request()
    invoke_on_response(
        mock_callback, request=request, response=mock_response, start_time=time.time()
    )

    mock_callback.assert_called_once()
    info = mock_callback.call_args.args[0]
    assert isinstance(info, ResponseInfo)
    assert info.method == "GET"
    assert info.url == TEST_URL
    assert info.status_code == 200
    assert info.response is mock_response
    assert info.elapsed >= 0


def test_invoke_on_response_elapsed(mock_callback: Mock, mock_response: httpx.Response) -> None:
    invoke_on_response(
        mock_callback,
        request=make_request(),
        response=mock_response,
        start_time=time.time() - 2.0,
    )
    assert mock_callback.call_args.args[0].elapsed >= 2.0


def test_invoke_on_response_none(mock_response: httpx.Response) -> None:
    invoke_on_response(
        None, request=make_request(), response=mock_response, start_time=time.time()
    )


#######################################
#     Tests for invoke_on_failure     #
#######################################


def test_invoke_on_failure(mock_callback: Mock) -> None:
    error = httpx.ConnectError("Connection refused")
    invoke_on_failure(
        mock_callback, request=make_request("DELETE"), error=error, start_time=time.time()
    )

    mock_callback.assert_called_once()
    info = mock_callback.call_args.args[0]
    assert isinstance(info, FailureInfo)
    assert info.method == "DELETE"
    assert info.url == TEST_URL
    assert info.error is error


def test_invoke_on_failure_none() -> None:
    invoke_on_failure(
        None,
        request=make_request(),
        error=httpx.ConnectError("Connection refused"),
        start_time=time.time(),
    )


#########################################
#     Tests for callback exceptions     #
#########################################


def test_callback_exception_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    callback = Mock(side_effect=RuntimeError("callback failed"))
    with caplog.at_level(logging.ERROR, logger="typedrest.callbacks"):
        invoke_on_request(callback, original=make_request(), request=make_request())

    callback.assert_called_once()
    assert "RequestInfo callback" in caplog.text
    assert "callback failed" in caplog.text
