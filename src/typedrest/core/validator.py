r"""Response validation based on the HTTP status code."""

from __future__ import annotations

__all__ = ["StatusValidator"]

import logging
from typing import TYPE_CHECKING

from typedrest.core.config import DEFAULT_MAX_STATUS, DEFAULT_MIN_STATUS
from typedrest.core.validation import validate_status_range
from typedrest.exceptions import UnacceptableStatusError

if TYPE_CHECKING:
    import httpx

logger: logging.Logger = logging.getLogger(__name__)


class StatusValidator:
    r"""Classify responses by status code.

    A status code is acceptable when it falls within the inclusive range
    ``[min_status, max_status]``. The default range is the ``2xx``
    success class.

    Args:
        min_status: The lowest acceptable status code.
        max_status: The highest acceptable status code.

    Raises:
        ValueError: If the range is invalid.

    Example:
        ```pycon
        >>> from typedrest.core.validator import StatusValidator
        >>> validator = StatusValidator()
        >>> validator.is_acceptable(204)
        True
        >>> validator.is_acceptable(404)
        False
        >>> StatusValidator(min_status=200, max_status=399).is_acceptable(304)
        True

        ```
    """

    def __init__(
        self, min_status: int = DEFAULT_MIN_STATUS, max_status: int = DEFAULT_MAX_STATUS
    ) -> None:
        validate_status_range(min_status, max_status)
        self.min_status = min_status
        self.max_status = max_status

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(min_status={self.min_status}, "
            f"max_status={self.max_status})"
        )

    def is_acceptable(self, status_code: int) -> bool:
        return self.min_status <= status_code <= self.max_status

    def validate(self, response: httpx.Response) -> None:
        """Validate the status code of a response.

        Args:
            response: The HTTP response to validate.

        Raises:
            UnacceptableStatusError: If the status code is outside the
                acceptable range. The error carries the status code.
        """
        if not self.is_acceptable(response.status_code):
            logger.debug(
                f"status {response.status_code} is outside "
                f"[{self.min_status}, {self.max_status}]"
            )
            raise UnacceptableStatusError(response.status_code)
