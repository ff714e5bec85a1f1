r"""Asynchronous HTTP client returning uniform response envelopes.

This module provides the AsyncHttpClient class: one method per HTTP verb,
each composing the target URL from the client's host and base path,
merging headers, tagging the call with a request id and running it under
the resolved retry policy.
"""

from __future__ import annotations

__all__ = ["AsyncHttpClient"]

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import httpx

from httpcourier.application_errors import get_exception_instance
from httpcourier.config import ClientConfig
from httpcourier.core.dispatch import encode_body, log_request, prepare_request
from httpcourier.core.normalize import normalize_response
from httpcourier.retry import AsyncRetryExecutor
from httpcourier.utils.structured_logging import reset_correlation_id, set_correlation_id

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from types import TracebackType
    from typing import Self

    from httpcourier.application_errors import ExceptionResolver
    from httpcourier.config import RequestOptions
    from httpcourier.models import HttpResponse


class AsyncHttpClient:
    r"""Asynchronous HTTP client with request ids and retries.

    The transport is an ``httpx.AsyncClient`` obtained in one of three ways:

    - passed as ``client``: used for every call and never closed by
      ``AsyncHttpClient``;
    - created when entering the ``async with`` block and closed on exit;
    - otherwise, created and closed around each call.

    Args:
        config: The client configuration. If ``None``, a default
            ClientConfig is used.
        client: Optional externally managed ``httpx.AsyncClient``.
        exception_resolver: Resolves an application error code found in a
            response body to an exception instance.

    Example:
        ```pycon
        >>> import asyncio
        >>> from httpcourier import AsyncHttpClient, ClientConfig
        >>> config = ClientConfig(host="https://api.example.com", base_path="v1")
        >>> async def main():
        ...     async with AsyncHttpClient(config) as client:
        ...         response = await client.get("/users/42")
        ...     return response.status.code
        ...
        >>> asyncio.run(main())  # doctest: +SKIP
        200

        ```
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        exception_resolver: ExceptionResolver = get_exception_instance,
    ) -> None:
        self._config = config if config is not None else ClientConfig()
        self._external_client = client
        self._exception_resolver = exception_resolver
        self._client: httpx.AsyncClient | None = None

    @property
    def config(self) -> ClientConfig:
        """The client configuration."""
        return self._config

    async def __aenter__(self) -> Self:
        """Enter the async context manager and create the owned transport
        client, unless an external client was provided."""
        if self._external_client is None:
            self._client = httpx.AsyncClient()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the async context manager and close the owned transport
        client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @asynccontextmanager
    async def _transport(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._external_client is not None:
            yield self._external_client
        elif self._client is not None:
            try:
                yield self._client
            finally:
                if not self._config.with_credentials:
                    self._client.cookies.clear()
        else:
            async with httpx.AsyncClient() as client:
                yield client

    async def request(
        self,
        method: str,
        resource: str,
        body: Any = None,
        options: RequestOptions | None = None,
    ) -> HttpResponse:
        r"""Send an HTTP request.

        Args:
            method: The HTTP method (DELETE, GET, HEAD, PATCH, POST, PUT).
            resource: The resource path appended to the host and base path.
            body: Optional body, sent for PATCH, POST and PUT only.
            options: Optional per-call headers and retry overrides.

        Returns:
            The response envelope.

        Raises:
            httpx.HTTPError: If the call fails and is not retried, or all
                retries are exhausted. ``HttpStatusError`` for statuses
                outside ``[200, 500)``.
            TypeError: If resource is not a string.
        """
        request, policy = prepare_request(method, resource, self._config, options, body)
        executor = AsyncRetryExecutor(policy, request_id=request.id)
        token = set_correlation_id(request.id)
        try:
            log_request(request, self._config)
            async with self._transport() as client:
                response = await executor.execute(
                    url=request.url,
                    method=request.method,
                    request_func=getattr(client, request.method.lower()),
                    headers=request.headers,
                    **encode_body(request.body),
                )
            return normalize_response(
                request, response, config=self._config, resolver=self._exception_resolver
            )
        finally:
            reset_correlation_id(token)

    async def get(self, resource: str, options: RequestOptions | None = None) -> HttpResponse:
        """Send an HTTP GET request.

        Args:
            resource: The resource path.
            options: Optional per-call overrides.

        Returns:
            The response envelope.
        """
        return await self.request("GET", resource, options=options)

    async def head(self, resource: str, options: RequestOptions | None = None) -> HttpResponse:
        """Send an HTTP HEAD request.

        Args:
            resource: The resource path.
            options: Optional per-call overrides.

        Returns:
            The response envelope, whose body is always ``None``.
        """
        return await self.request("HEAD", resource, options=options)

    async def delete(self, resource: str, options: RequestOptions | None = None) -> HttpResponse:
        """Send an HTTP DELETE request.

        Args:
            resource: The resource path.
            options: Optional per-call overrides.

        Returns:
            The response envelope.
        """
        return await self.request("DELETE", resource, options=options)

    async def post(
        self, resource: str, body: Any = None, options: RequestOptions | None = None
    ) -> HttpResponse:
        """Send an HTTP POST request.

        Unlike the other verbs, a ``X-Request-Id`` header from the client
        defaults or the per-call options replaces the generated one.

        Args:
            resource: The resource path.
            body: Optional request body.
            options: Optional per-call overrides.

        Returns:
            The response envelope.
        """
        return await self.request("POST", resource, body=body, options=options)

    async def put(
        self, resource: str, body: Any = None, options: RequestOptions | None = None
    ) -> HttpResponse:
        """Send an HTTP PUT request.

        Args:
            resource: The resource path.
            body: Optional request body.
            options: Optional per-call overrides.

        Returns:
            The response envelope.
        """
        return await self.request("PUT", resource, body=body, options=options)

    async def patch(
        self, resource: str, body: Any = None, options: RequestOptions | None = None
    ) -> HttpResponse:
        """Send an HTTP PATCH request.

        Args:
            resource: The resource path.
            body: Optional request body.
            options: Optional per-call overrides.

        Returns:
            The response envelope.
        """
        return await self.request("PATCH", resource, body=body, options=options)
