r"""Parameter validation utilities for client and retry configuration.

This module provides validation functions to ensure configuration values
meet the required constraints before being used by the request
dispatcher.
"""

from __future__ import annotations

__all__ = ["RESPONSE_TYPES", "validate_resource", "validate_response_type", "validate_retry_params"]

from typing import Any

RESPONSE_TYPES = ("json", "text")


def validate_retry_params(retries: int | None = None, retry_delay: int | None = None) -> None:
    """Validate retry parameters.

    ``None`` values are accepted and mean the parameter is not set.

    Args:
        retries: Maximum number of retry attempts. Must be >= 0 if provided.
        retry_delay: Delay between attempts in milliseconds. Must be >= 0
            if provided.

    Raises:
        ValueError: If retries or retry_delay are negative.

    Example:
        ```pycon
        >>> from httpcourier.core.validation import validate_retry_params
        >>> validate_retry_params(retries=3)
        >>> validate_retry_params(retries=3, retry_delay=100)
        >>> validate_retry_params(retries=-1)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: retries must be >= 0, got -1

        ```
    """
    if retries is not None and retries < 0:
        msg = f"retries must be >= 0, got {retries}"
        raise ValueError(msg)
    if retry_delay is not None and retry_delay < 0:
        msg = f"retry_delay must be >= 0, got {retry_delay}"
        raise ValueError(msg)


def validate_response_type(response_type: str) -> None:
    """Validate the response type.

    Args:
        response_type: How response bodies are decoded.

    Raises:
        ValueError: If response_type is not ``"json"`` or ``"text"``.
    """
    if response_type not in RESPONSE_TYPES:
        msg = f"response_type must be one of {RESPONSE_TYPES}, got {response_type!r}"
        raise ValueError(msg)


def validate_resource(resource: Any) -> None:
    """Validate the target resource path of a request.

    Args:
        resource: The resource path appended to the host and base path.

    Raises:
        TypeError: If resource is not a string.
    """
    if not isinstance(resource, str):
        msg = f"resource must be a str, got {type(resource).__name__}"
        raise TypeError(msg)
