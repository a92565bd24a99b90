r"""Core configuration and validation shared by the sync and async
clients."""

from __future__ import annotations

__all__ = [
    "DEFAULT_MAX_STATUS",
    "DEFAULT_MIN_STATUS",
    "DEFAULT_TIMEOUT",
    "ClientConfig",
    "StatusValidator",
    "validate_status_range",
    "validate_timeout",
]

from typedrest.core.config import (
    DEFAULT_MAX_STATUS,
    DEFAULT_MIN_STATUS,
    DEFAULT_TIMEOUT,
    ClientConfig,
)
from typedrest.core.validation import validate_status_range, validate_timeout
from typedrest.core.validator import StatusValidator
