r"""Synchronous HTTP client returning uniform response envelopes.

This module provides the HttpClient class: one method per HTTP verb,
each composing the target URL from the client's host and base path,
merging headers, tagging the call with a request id and running it under
the resolved retry policy.
"""

from __future__ import annotations

__all__ = ["HttpClient"]

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import httpx

from httpcourier.application_errors import get_exception_instance
from httpcourier.config import ClientConfig
from httpcourier.core.dispatch import encode_body, log_request, prepare_request
from httpcourier.core.normalize import normalize_response
from httpcourier.retry import RetryExecutor
from httpcourier.utils.structured_logging import reset_correlation_id, set_correlation_id

if TYPE_CHECKING:
    from collections.abc import Iterator
    from types import TracebackType
    from typing import Self

    from httpcourier.application_errors import ExceptionResolver
    from httpcourier.config import RequestOptions
    from httpcourier.models import HttpResponse


class HttpClient:
    r"""Synchronous HTTP client with request ids and retries.

    The transport is an ``httpx.Client`` obtained in one of three ways:

    - passed as ``client``: used for every call and never closed by
      ``HttpClient``;
    - created when entering the ``with`` block and closed on exit;
    - otherwise, created and closed around each call.

    Args:
        config: The client configuration. If ``None``, a default
            ClientConfig is used.
        client: Optional externally managed ``httpx.Client``.
        exception_resolver: Resolves an application error code found in a
            response body to an exception instance.

    Example:
        ```pycon
        >>> from httpcourier import ClientConfig, HttpClient
        >>> config = ClientConfig(host="https://api.example.com", base_path="v1")
        >>> with HttpClient(config) as client:  # doctest: +SKIP
        ...     response = client.get("/users/42")
        ...     response.status.code
        ...
        200

        ```
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        client: httpx.Client | None = None,
        exception_resolver: ExceptionResolver = get_exception_instance,
    ) -> None:
        self._config = config if config is not None else ClientConfig()
        self._external_client = client
        self._exception_resolver = exception_resolver
        self._client: httpx.Client | None = None

    @property
    def config(self) -> ClientConfig:
        """The client configuration."""
        return self._config

    def __enter__(self) -> Self:
        """Enter the context manager and create the owned transport
        client, unless an external client was provided."""
        if self._external_client is None:
            self._client = httpx.Client()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context manager and close the owned transport
        client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    @contextmanager
    def _transport(self) -> Iterator[httpx.Client]:
        if self._external_client is not None:
            yield self._external_client
        elif self._client is not None:
            try:
                yield self._client
            finally:
                if not self._config.with_credentials:
                    self._client.cookies.clear()
        else:
            with httpx.Client() as client:
                yield client

    def request(
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
        executor = RetryExecutor(policy, request_id=request.id)
        token = set_correlation_id(request.id)
        try:
            log_request(request, self._config)
            with self._transport() as client:
                response = executor.execute(
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

    def get(self, resource: str, options: RequestOptions | None = None) -> HttpResponse:
        """Send an HTTP GET request.

        Args:
            resource: The resource path.
            options: Optional per-call overrides.

        Returns:
            The response envelope.
        """
        return self.request("GET", resource, options=options)

    def head(self, resource: str, options: RequestOptions | None = None) -> HttpResponse:
        """Send an HTTP HEAD request.

        Args:
            resource: The resource path.
            options: Optional per-call overrides.

        Returns:
            The response envelope, whose body is always ``None``.
        """
        return self.request("HEAD", resource, options=options)

    def delete(self, resource: str, options: RequestOptions | None = None) -> HttpResponse:
        """Send an HTTP DELETE request.

        Args:
            resource: The resource path.
            options: Optional per-call overrides.

        Returns:
            The response envelope.
        """
        return self.request("DELETE", resource, options=options)

    def post(
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
        return self.request("POST", resource, body=body, options=options)

    def put(
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
        return self.request("PUT", resource, body=body, options=options)

    def patch(
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
        return self.request("PATCH", resource, body=body, options=options)
