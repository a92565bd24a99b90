r"""Shared test helpers.

This module contains the domain types and transport doubles used across
the unit and integration tests.
"""

from __future__ import annotations

__all__ = [
    "TEST_URL",
    "ApiError",
    "Widget",
    "make_request",
    "make_transport",
    "respond_with",
]

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from collections.abc import Callable

TEST_URL = "https://api.example.com/widgets/1"


@dataclass
class Widget:
    id: int
    name: str


@dataclass
class ApiError:
    code: str


def make_request(method: str = "GET", url: str = TEST_URL, **kwargs: Any) -> httpx.Request:
    """Create a request to the test API."""
    return httpx.Request(method, url, **kwargs)


def respond_with(
    status_code: int, *, delay: float = 0.0, **kwargs: Any
) -> Callable[[httpx.Request], Any]:
    """Create a ``MockTransport`` handler returning a fresh response
    for every request.

    Args:
        status_code: The status code of the response.
        delay: Seconds to wait before answering.
        **kwargs: Keyword arguments of ``httpx.Response`` (``json``,
            ``content``, ``headers``, ...).
    """

    async def handler(request: httpx.Request) -> httpx.Response:
        if delay:
            await asyncio.sleep(delay)
        return httpx.Response(status_code, **kwargs)

    return handler


def make_transport(status_code: int, **kwargs: Any) -> httpx.MockTransport:
    """Create a ``MockTransport`` always answering with the same
    response (see ``respond_with``)."""
    return httpx.MockTransport(respond_with(status_code, **kwargs))
