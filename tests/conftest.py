from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock

import httpx
import pytest

from typedrest.core import StatusValidator
from typedrest.decoders import Decoder, DecoderRegistry
from typedrest.utils.structured_logging import clear_correlation_id

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def _reset_correlation_id() -> Generator[None, None, None]:
    """Make sure a correlation ID set by a test does not leak."""
    yield
    clear_correlation_id()


@pytest.fixture
def registry() -> DecoderRegistry:
    """Create a registry with the default decoders."""
    return DecoderRegistry.default()


@pytest.fixture
def validator() -> StatusValidator:
    """Create a validator accepting 2xx status codes."""
    return StatusValidator()


@pytest.fixture
def mock_decoder() -> Mock:
    """Create a mock decoder for testing decoder selection."""
    return Mock(spec=Decoder, media_type="application/json")


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing callbacks."""
    return Mock()


@pytest.fixture
def mock_response() -> httpx.Response:
    """Create a successful JSON widget response."""
    return httpx.Response(200, json={"id": 1, "name": "a"})
