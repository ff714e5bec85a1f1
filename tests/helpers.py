r"""Shared test helpers for client tests."""

from __future__ import annotations

__all__ = [
    "BASE_PATH",
    "HOST",
    "create_response",
]

from typing import Any

import httpx

HOST = "https://api.example.com"
BASE_PATH = "v1"


def create_response(
    status_code: int = 200,
    *,
    json: Any = None,
    text: str | None = None,
    headers: dict[str, str] | None = None,
    method: str = "GET",
    url: str = f"{HOST}/{BASE_PATH}/users/42",
) -> httpx.Response:
    """Create a real httpx.Response bound to a request.

    Args:
        status_code: The response status.
        json: Optional JSON payload.
        text: Optional text payload.
        headers: Optional response headers.
        method: Method of the bound request.
        url: URL of the bound request.

    Returns:
        The response.
    """
    kwargs: dict[str, Any] = {}
    if json is not None:
        kwargs["json"] = json
    elif text is not None:
        kwargs["text"] = text
    return httpx.Response(
        status_code,
        headers=headers,
        request=httpx.Request(method, url),
        **kwargs,
    )
