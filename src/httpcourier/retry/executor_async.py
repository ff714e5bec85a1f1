r"""Asynchronous retry executor for HTTP requests.

This module provides the AsyncRetryExecutor class that runs the attempt
loop of an asynchronous request under a resolved retry policy.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import httpx

from httpcourier.retry.executor_core import accept_status, check_status, should_retry

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from httpcourier.retry.policy import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRetryExecutor:
    """Executes async HTTP requests under a retry policy.

    The async counterpart of ``RetryExecutor``. Suspension happens only
    while awaiting ``request_func`` and in ``asyncio.sleep`` between
    attempts.

    Attributes:
        policy: The resolved retry policy.
        request_id: Id of the request, attached to rejected-status errors.
        validate_status: Predicate accepting or rejecting a status code.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from httpcourier.retry import AsyncRetryExecutor, resolve_retry_policy
        >>> async def main():
        ...     executor = AsyncRetryExecutor(resolve_retry_policy(), request_id="abc")
        ...     async with httpx.AsyncClient() as client:
        ...         return await executor.execute(
        ...             url="https://api.example.com/data",
        ...             method="GET",
        ...             request_func=client.get,
        ...         )
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

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

    async def execute(
        self,
        url: str,
        method: str,
        request_func: Callable[..., Awaitable[httpx.Response]],
        **kwargs: Any,
    ) -> httpx.Response:
        """Execute the async request with automatic retry logic.

        Args:
            url: The URL to request.
            method: The HTTP method name, used for logging and errors.
            request_func: Async function performing one attempt. Called as
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
                response = await request_func(url=url, **kwargs)
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
                await asyncio.sleep(sleep_time)
                attempt += 1
            else:
                return response
