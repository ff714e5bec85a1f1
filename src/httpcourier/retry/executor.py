r"""Synchronous retry executor for HTTP requests.

This module provides the RetryExecutor class that runs the attempt loop
of a synchronous request under a resolved retry policy.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import logging
import time
from typing import TYPE_CHECKING, Any

import httpx

from httpcourier.retry.executor_core import accept_status, check_status, should_retry

if TYPE_CHECKING:
    from collections.abc import Callable

    from httpcourier.retry.policy import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)


class RetryExecutor:
    """Executes synchronous HTTP requests under a retry policy.

    Each attempt calls ``request_func`` and validates the response status.
    Any ``httpx.HTTPError`` raised by the attempt (transport failures and
    rejected statuses alike) is passed to the policy's predicate. The
    request is retried after a constant delay while retries remain and the
    predicate returns ``True``; otherwise the error propagates unchanged.

    Attributes:
        policy: The resolved retry policy.
        request_id: Id of the request, attached to rejected-status errors.
        validate_status: Predicate accepting or rejecting a status code.

    Example:
        ```pycon
        >>> import httpx
        >>> from httpcourier.retry import RetryExecutor, resolve_retry_policy
        >>> executor = RetryExecutor(resolve_retry_policy(), request_id="abc")
        >>> with httpx.Client() as client:  # doctest: +SKIP
        ...     response = executor.execute(
        ...         url="https://api.example.com/data",
        ...         method="GET",
        ...         request_func=client.get,
        ...     )
        ...

        ```
    """

    def __init__(
        self,
        policy: RetryPolicy,
        *,
        request_id: str = "",
        validate_status: Callable[[int], bool] = accept_status,
    ) -> None:
        self.policy = policy
        self.request_id = request_id
        self.validate_status = validate_status

    def execute(
        self,
        url: str,
        method: str,
        request_func: Callable[..., httpx.Response],
        **kwargs: Any,
    ) -> httpx.Response:
        """Execute the request with automatic retry logic.

        Args:
            url: The URL to request.
            method: The HTTP method name, used for logging and errors.
            request_func: Function performing one attempt. Called as
                ``request_func(url=url, **kwargs)``.
            **kwargs: Additional keyword arguments passed to request_func.

        Returns:
            The first response whose status is accepted.

        Raises:
            httpx.HTTPError: The error of the last attempt, unwrapped, when
                it is not retried or retries are exhausted.
        """
        attempt = 0
        while True:
            try:
                response = request_func(url=url, **kwargs)
                check_status(
                    response,
                    url=url,
                    method=method,
                    request_id=self.request_id,
                    validate_status=self.validate_status,
                )
            except httpx.HTTPError as exc:
                if not should_retry(self.policy, exc, attempt, url=url, method=method):
                    raise
                sleep_time = self.policy.delay(attempt)
                logger.debug(
                    f"{method} request to {url} raised {type(exc).__name__} on attempt "
                    f"{attempt + 1}/{self.policy.count + 1}, retrying in {sleep_time:.3f}s"
                )
                time.sleep(sleep_time)
                attempt += 1
            else:
                return response
