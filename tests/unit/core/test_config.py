r"""Unit tests for ClientConfig dataclass.

This file contains tests for the ClientConfig dataclass in
core/config.py.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import Mock

import pytest
from coola.equality import objects_are_equal

from tests.helpers import ApiError
from typedrest.core import DEFAULT_MAX_STATUS, DEFAULT_MIN_STATUS, ClientConfig

##################################
#     Tests for ClientConfig     #
##################################


def test_client_config_defaults() -> None:
    """Test that ClientConfig uses correct default values."""
    config = ClientConfig()

    assert config.min_status == DEFAULT_MIN_STATUS
    assert config.max_status == DEFAULT_MAX_STATUS
    assert config.error_type is Any
    assert not config.log_traffic
    assert config.on_request is None
    assert config.on_response is None
    assert config.on_failure is None


@pytest.mark.parametrize(("min_status", "max_status"), [(200, 299), (200, 399), (100, 599)])
def test_client_config_status_range(min_status: int, max_status: int) -> None:
    config = ClientConfig(min_status=min_status, max_status=max_status)
    assert config.min_status == min_status
    assert config.max_status == max_status


def test_client_config_error_type() -> None:
    assert ClientConfig(error_type=ApiError).error_type is ApiError


def test_client_config_callbacks() -> None:
    on_request, on_response, on_failure = Mock(), Mock(), Mock()
    config = ClientConfig(on_request=on_request, on_response=on_response, on_failure=on_failure)
    assert config.on_request is on_request
    assert config.on_response is on_response
    assert config.on_failure is on_failure


def test_client_config_min_status_invalid() -> None:
    with pytest.raises(ValueError, match=r"min_status must be in \[100, 599\], got 99"):
        ClientConfig(min_status=99)


def test_client_config_max_status_invalid() -> None:
    with pytest.raises(ValueError, match=r"max_status must be in \[100, 599\], got 600"):
        ClientConfig(max_status=600)


def test_client_config_inverted_range() -> None:
    with pytest.raises(ValueError, match=r"min_status must be <= max_status, got 300 > 299"):
        ClientConfig(min_status=300)


def test_client_config_merge() -> None:
    """Test that merge overrides only the given parameters."""
    config = ClientConfig(max_status=399)
    merged = config.merge(log_traffic=True, error_type=ApiError)

    assert merged.log_traffic
    assert merged.error_type is ApiError
    assert merged.max_status == 399
    # Original unchanged
    assert not config.log_traffic
    assert config.error_type is Any


def test_client_config_merge_ignores_none() -> None:
    callback = Mock()
    config = ClientConfig(on_request=callback, max_status=399)
    merged = config.merge(on_request=None, max_status=None)

    assert merged.on_request is callback
    assert merged.max_status == 399


def test_client_config_merge_empty() -> None:
    config = ClientConfig(log_traffic=True)
    merged = config.merge()
    assert merged == config
    assert merged is not config


def test_client_config_merge_validates() -> None:
    with pytest.raises(ValueError, match=r"min_status must be <= max_status"):
        ClientConfig().merge(min_status=400)


def test_client_config_to_dict() -> None:
    on_failure = Mock()
    config = ClientConfig(error_type=ApiError, log_traffic=True, on_failure=on_failure)

    assert objects_are_equal(
        config.to_dict(),
        {
            "error_type": ApiError,
            "log_traffic": True,
            "on_request": None,
            "on_response": None,
            "on_failure": on_failure,
        },
    )


def test_client_config_to_dict_defaults() -> None:
    assert objects_are_equal(
        ClientConfig().to_dict(),
        {
            "error_type": Any,
            "log_traffic": False,
            "on_request": None,
            "on_response": None,
            "on_failure": None,
        },
    )
