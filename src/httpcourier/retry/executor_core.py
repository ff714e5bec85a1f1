r"""Shared core logic for retry executors.

This module provides helper functions used by both the synchronous and
asynchronous retry executors: the status validator and the check that
turns a rejected status into an ``HttpStatusError``.
"""

from __future__ import annotations

__all__ = ["accept_status", "check_status", "should_retry"]

import logging
from typing import TYPE_CHECKING

from httpcourier.exceptions import HttpStatusError

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from httpcourier.retry.policy import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)


def accept_status(status_code: int) -> bool:
    """Return whether a response status is accepted as a result.

    Statuses in ``[200, 500)`` are accepted. Anything else is surfaced to
    the retry loop as an error.

    Args:
        status_code: The HTTP status code of the response.

    Returns:
        ``True`` if the status is accepted.

    Example:
        ```pycon
        >>> from httpcourier.retry.executor_core import accept_status
        >>> accept_status(404)
        True
        >>> accept_status(503)
        False

        ```
    """
    return 200 <= status_code < 500


def check_status(
    response: httpx.Response,
    *,
    url: str,
    method: str,
    request_id: str,
    validate_status: Callable[[int], bool],
) -> None:
    """Raise ``HttpStatusError`` if the response status is rejected.

    Args:
        response: The response of the attempt.
        url: The requested URL.
        method: The HTTP method.
        request_id: The id of the request.
        validate_status: Predicate accepting or rejecting the status code.

    Raises:
        HttpStatusError: If ``validate_status`` rejects the status code.
    """
    if validate_status(response.status_code):
        return
    msg = f"{method} request to {url} failed with status {response.status_code}"
    raise HttpStatusError(msg, request_id=request_id, response=response)


def should_retry(
    policy: RetryPolicy, error: Exception, attempt: int, *, url: str, method: str
) -> bool:
    """Decide whether the attempt that raised ``error`` is retried.

    Args:
        policy: The retry policy of the request.
        error: The error raised by the attempt.
        attempt: The current attempt number (0-indexed).
        url: The requested URL.
        method: The HTTP method.

    Returns:
        ``True`` if retries remain and the policy's predicate accepts the
        error.
    """
    if attempt >= policy.count:
        if policy.count:
            logger.debug(
                f"{method} request to {url} failed after {attempt + 1} attempts: "
                f"{type(error).__name__}"
            )
        return False
    if not policy.is_retryable(error):
        logger.debug(
            f"{method} request to {url} raised non-retryable {type(error).__name__} "
            f"on attempt {attempt + 1}/{policy.count + 1}"
        )
        return False
    return True
