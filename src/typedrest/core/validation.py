r"""Parameter validation utilities for typedrest clients.

This module provides validation functions for client parameters to
ensure they meet the required constraints before being used.
"""

from __future__ import annotations

__all__ = ["validate_status_range", "validate_timeout"]


def validate_timeout(timeout: float | None) -> None:
    """Validate a blocking dispatch timeout.

    Args:
        timeout: Maximum seconds to wait for a dispatch to complete,
            or ``None`` to wait forever. Must be > 0 if provided.

    Raises:
        ValueError: If timeout is a numeric value <= 0.

    Example:
        ```pycon
        >>> from typedrest.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(None)
        >>> validate_timeout(0)
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if timeout is not None and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_status_range(min_status: int, max_status: int) -> None:
    """Validate an inclusive range of acceptable status codes.

    Args:
        min_status: The lowest acceptable status code. Must be in
            ``[100, 599]``.
        max_status: The highest acceptable status code. Must be in
            ``[100, 599]`` and >= ``min_status``.

    Raises:
        ValueError: If a bound is not a valid HTTP status code, or if
            ``min_status > max_status``.

    Example:
        ```pycon
        >>> from typedrest.core.validation import validate_status_range
        >>> validate_status_range(200, 299)
        >>> validate_status_range(300, 200)
        Traceback (most recent call last):
        ...
        ValueError: min_status must be <= max_status, got 300 > 200

        ```
    """
    if not 100 <= min_status <= 599:
        msg = f"min_status must be in [100, 599], got {min_status}"
        raise ValueError(msg)
    if not 100 <= max_status <= 599:
        msg = f"max_status must be in [100, 599], got {max_status}"
        raise ValueError(msg)
    if min_status > max_status:
        msg = f"min_status must be <= max_status, got {min_status} > {max_status}"
        raise ValueError(msg)
