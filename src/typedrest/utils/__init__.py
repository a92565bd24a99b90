r"""Utilities for traffic diagnostics and structured logging."""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "dump_request",
    "dump_response",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
]

from typedrest.utils.diagnostics import dump_request, dump_response
from typedrest.utils.structured_logging import (
    StructuredFormatter,
    clear_correlation_id,
    get_correlation_id,
    log_structured,
    set_correlation_id,
)
