r"""Structured logging utilities for machine-readable log output.

The dispatch logic attaches its request and response dumps to log
records as extra fields. ``StructuredFormatter`` renders those records
as JSON objects, one per line, so traffic dumps can be shipped to a log
aggregation system. A correlation id stored in a context variable ties
the records of one logical operation together; the id follows a
dispatch across ``await`` points and into the event-loop thread of the
blocking client.

Example:
    ```python
    import logging

    from typedrest.utils.structured_logging import StructuredFormatter, set_correlation_id

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logger = logging.getLogger("typedrest")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    set_correlation_id("checkout-42")
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
]

import contextvars
import json
import logging
import time
from typing import Any

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "typedrest_correlation_id", default=None
)

# Attributes of every LogRecord; anything else was passed through ``extra``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}


def get_correlation_id() -> str | None:
    """Get the correlation ID of the current context.

    Example:
        ```pycon
        >>> from typedrest.utils.structured_logging import (
        ...     clear_correlation_id,
        ...     get_correlation_id,
        ...     set_correlation_id,
        ... )
        >>> set_correlation_id("req-123")
        >>> get_correlation_id()
        'req-123'
        >>> clear_correlation_id()
        >>> get_correlation_id()

        ```
    """
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID for the current context."""
    _correlation_id.set(correlation_id)


def clear_correlation_id() -> None:
    """Clear the correlation ID for the current context."""
    _correlation_id.set(None)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Each record becomes a JSON object with the fields ``timestamp``,
    ``level``, ``logger``, ``message``, ``module``, ``function``,
    ``line`` and ``thread``, the ``correlation_id`` when one is set,
    ``exception`` when the record carries exception info, and every field
    passed through ``extra``. Values that are not JSON serializable are
    rendered with ``repr``.

    Example:
        ```pycon
        >>> import json
        >>> import logging
        >>> from typedrest.utils.structured_logging import StructuredFormatter
        >>> record = logging.LogRecord(
        ...     "typedrest", logging.DEBUG, __file__, 1, "sent", None, None
        ... )
        >>> record.status_code = 200
        >>> data = json.loads(StructuredFormatter().format(record))
        >>> data["message"], data["status_code"]
        ('sent', 200)

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "thread": record.threadName,
        }
        correlation_id = get_correlation_id()
        if correlation_id is not None:
            log_data["correlation_id"] = correlation_id
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value
        return json.dumps(log_data, default=repr)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Format the record time as ISO 8601 UTC with milliseconds."""
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    **extra: Any,
) -> None:
    """Log a message with structured data.

    Args:
        logger: Logger to use.
        level: Log level (e.g., logging.DEBUG).
        message: Log message.
        **extra: Additional structured fields to include in the record.
    """
    if logger.isEnabledFor(level):
        logger.log(level, message, extra=extra)
