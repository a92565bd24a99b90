r"""Unit tests for the exception hierarchy."""

from __future__ import annotations

import httpx
import pytest

from tests.helpers import Widget
from typedrest.exceptions import (
    ApplicationError,
    ContractViolationError,
    DecodeError,
    DispatchTimeoutError,
    MissingDecoderError,
    RestClientError,
    TransportError,
    UnacceptableStatusError,
)


@pytest.mark.parametrize(
    "exc",
    [
        ApplicationError(status_code=404, error={"code": "not_found"}),
        ContractViolationError(Widget),
        DecodeError(content_type="application/json", target=Widget, message="bad body"),
        DispatchTimeoutError(1.5),
        TransportError(method="GET", url="https://api.example.com", message="failed"),
        UnacceptableStatusError(500),
    ],
)
def test_recoverable_errors_share_base_class(exc: Exception) -> None:
    assert isinstance(exc, RestClientError)


def test_missing_decoder_error_is_not_recoverable() -> None:
    exc = MissingDecoderError("application/xml")
    assert isinstance(exc, RuntimeError)
    assert not isinstance(exc, RestClientError)
    assert exc.content_type == "application/xml"


def test_transport_error_chains_cause() -> None:
    cause = httpx.ConnectError("Connection refused")
    exc = TransportError(
        method="POST", url="https://api.example.com/widgets", message="failed", cause=cause
    )
    assert exc.method == "POST"
    assert exc.url == "https://api.example.com/widgets"
    assert exc.message == "failed"
    assert exc.__cause__ is cause


def test_decode_error_attributes() -> None:
    cause = ValueError("invalid")
    exc = DecodeError(
        content_type="text/plain", target=int, message="could not decode", cause=cause
    )
    assert exc.content_type == "text/plain"
    assert exc.target is int
    assert exc.__cause__ is cause
    assert str(exc) == "could not decode"


def test_unacceptable_status_error_message() -> None:
    exc = UnacceptableStatusError(503)
    assert exc.status_code == 503
    assert str(exc) == "unacceptable status code 503"


def test_contract_violation_error_message() -> None:
    exc = ContractViolationError(Widget)
    assert exc.target is Widget
    assert "non-optional" in str(exc)


def test_dispatch_timeout_error_message() -> None:
    assert str(DispatchTimeoutError(0.5)) == "dispatch did not complete within 0.5 seconds"
