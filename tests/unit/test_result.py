r"""Unit tests for the dispatch outcome types."""

from __future__ import annotations

import httpx
import pytest

from tests.helpers import ApiError, Widget
from typedrest.exceptions import ApplicationError, DecodeError, TransportError
from typedrest.result import ApplicationFailure, Success, SystemFailure

#############################
#     Tests for Success     #
#############################


def test_success_is_success() -> None:
    assert Success(Widget(id=1, name="a")).is_success


def test_success_unwrap() -> None:
    assert Success(Widget(id=1, name="a")).unwrap() == Widget(id=1, name="a")


def test_success_unwrap_none() -> None:
    assert Success(None).unwrap() is None


def test_success_is_frozen() -> None:
    result = Success(1)
    with pytest.raises(AttributeError):
        result.value = 2  # type: ignore[misc]


########################################
#     Tests for ApplicationFailure     #
########################################


def test_application_failure_is_not_success() -> None:
    assert not ApplicationFailure(404, ApiError(code="not_found")).is_success


def test_application_failure_unwrap_raises() -> None:
    with pytest.raises(ApplicationError, match=r"request failed with status 404") as exc_info:
        ApplicationFailure(404, ApiError(code="not_found")).unwrap()

    assert exc_info.value.status_code == 404
    assert exc_info.value.error == ApiError(code="not_found")


def test_application_failure_equality() -> None:
    assert ApplicationFailure(404, {"code": "a"}) == ApplicationFailure(404, {"code": "a"})
    assert ApplicationFailure(404, {"code": "a"}) != ApplicationFailure(410, {"code": "a"})


###################################
#     Tests for SystemFailure     #
###################################


def test_system_failure_is_not_success() -> None:
    assert not SystemFailure(RuntimeError("boom")).is_success


def test_system_failure_unwrap_raises_error() -> None:
    error = TransportError(
        method="GET",
        url="https://api.example.com",
        message="GET request to https://api.example.com failed",
        cause=httpx.ConnectError("Connection refused"),
    )
    with pytest.raises(TransportError) as exc_info:
        SystemFailure(error).unwrap()

    assert exc_info.value is error


def test_system_failure_unwrap_decode_error() -> None:
    error = DecodeError(content_type="application/json", target=Widget, message="bad body")
    with pytest.raises(DecodeError, match=r"bad body"):
        SystemFailure(error).unwrap()


def test_result_variants_are_distinct() -> None:
    assert Success(None) != SystemFailure(RuntimeError("boom"))
    assert Success(404) != ApplicationFailure(404, None)
