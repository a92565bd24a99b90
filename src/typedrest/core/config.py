r"""Configuration dataclass and defaults for the typedrest clients.

This module provides configuration constants and a dataclass-based
configuration object for the ``RestClient`` and ``AsyncRestClient``
context manager classes.
"""

from __future__ import annotations

__all__ = [
    "BYTES_CONTENT_TYPE",
    "ClientConfig",
    "DEFAULT_MAX_STATUS",
    "DEFAULT_MIN_STATUS",
    "DEFAULT_TIMEOUT",
    "JSON_CONTENT_TYPE",
    "TEXT_CONTENT_TYPE",
]

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from typedrest.core.validation import validate_status_range

if TYPE_CHECKING:
    from collections.abc import Callable

    from typedrest.callbacks import FailureInfo, RequestInfo, ResponseInfo


# Default timeout in seconds for the underlying httpx client
DEFAULT_TIMEOUT = 10.0

# Acceptable status codes are the inclusive range [200, 299]
DEFAULT_MIN_STATUS = 200
DEFAULT_MAX_STATUS = 299

JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain"
BYTES_CONTENT_TYPE = "application/octet-stream"


@dataclass
class ClientConfig:
    """Configuration for ``RestClient`` and ``AsyncRestClient``.

    Note:
        The timeout parameter is NOT included in this config as it is used
        directly by httpx.AsyncClient, not by the dispatch logic.

    Args:
        min_status: The lowest acceptable HTTP status code.
        max_status: The highest acceptable HTTP status code.
        error_type: The type into which the body of a response with an
            unacceptable status is decoded. ``Any`` accepts any
            well-formed body.
        log_traffic: If ``True``, the original request, the transformed
            request and the response are dumped to the ``typedrest``
            logger at DEBUG level.
        on_request: Optional callback called before the request is sent.
        on_response: Optional callback called when a response is received.
        on_failure: Optional callback called when the transport fails.

    Example:
        ```pycon
        >>> from typedrest.core.config import ClientConfig
        >>> config = ClientConfig()  # Use defaults
        >>> config.min_status, config.max_status
        (200, 299)
        >>> config = ClientConfig(max_status=399)
        >>> merged = config.merge(log_traffic=True)
        >>> merged.log_traffic
        True
        >>> config.log_traffic  # Original unchanged
        False

        ```
    """

    min_status: int = DEFAULT_MIN_STATUS
    max_status: int = DEFAULT_MAX_STATUS
    error_type: Any = Any
    log_traffic: bool = False
    on_request: Callable[[RequestInfo], None] | None = None
    on_response: Callable[[ResponseInfo], None] | None = None
    on_failure: Callable[[FailureInfo], None] | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_status_range(self.min_status, self.max_status)

    def merge(self, **overrides: Any) -> ClientConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new ClientConfig instance with overrides applied.

        Example:
            ```pycon
            >>> from typedrest.core.config import ClientConfig
            >>> config = ClientConfig(min_status=200)
            >>> config.merge(min_status=100, max_status=None).min_status
            100

            ```
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to the keyword arguments of ``dispatch``.

        The status range is not part of the result: it is turned into a
        ``StatusValidator`` by the clients.

        Returns:
            Dictionary with the dispatch configuration parameters.

        Example:
            ```pycon
            >>> from typedrest.core.config import ClientConfig
            >>> params = ClientConfig(log_traffic=True).to_dict()
            >>> params["log_traffic"]
            True

            ```
        """
        return {
            "error_type": self.error_type,
            "log_traffic": self.log_traffic,
            "on_request": self.on_request,
            "on_response": self.on_response,
            "on_failure": self.on_failure,
        }
