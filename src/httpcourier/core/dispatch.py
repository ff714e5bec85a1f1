r"""Shared request dispatch logic for sync and async clients.

This module builds the outbound call of a request: the request id, the
target URL, the merged headers and the encoded body, together with the
retry policy resolved for the call. It is shared by ``HttpClient`` and
``AsyncHttpClient``.
"""

from __future__ import annotations

__all__ = [
    "BODY_METHODS",
    "HTTP_METHODS",
    "build_request",
    "compose_url",
    "encode_body",
    "log_request",
    "merge_headers",
    "prepare_request",
]

import logging
from typing import TYPE_CHECKING, Any

import httpx

from httpcourier.config import REQUEST_ID_HEADER
from httpcourier.core.validation import validate_resource
from httpcourier.models import RequestEnvelope
from httpcourier.request_id import generate_request_id
from httpcourier.retry.policy import resolve_retry_policy
from httpcourier.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from collections.abc import Mapping

    from httpcourier.config import ClientConfig, RequestOptions
    from httpcourier.retry.policy import RetryPolicy

logger: logging.Logger = logging.getLogger("httpcourier")

HTTP_METHODS = ("DELETE", "GET", "HEAD", "PATCH", "POST", "PUT")

# Methods whose calls carry a request body
BODY_METHODS = ("PATCH", "POST", "PUT")


def compose_url(host: str, base_path: str | None, resource: str) -> str:
    """Compose the target URL of a request.

    The parts are concatenated as ``host + "/" + base_path + resource``
    (the base path segment is omitted when empty). No slash
    normalization is performed.

    Args:
        host: The scheme and host prefix.
        base_path: The optional base path.
        resource: The resource path.

    Returns:
        The composed URL.

    Example:
        ```pycon
        >>> from httpcourier.core.dispatch import compose_url
        >>> compose_url("https://api.example.com", "v1", "/users/42")
        'https://api.example.com/v1/users/42'
        >>> compose_url("https://api.example.com", None, "/users/42")
        'https://api.example.com/users/42'

        ```
    """
    return host + (f"/{base_path}" if base_path else "") + resource


def merge_headers(
    method: str,
    request_id: str,
    defaults: Mapping[str, str],
    overrides: Mapping[str, str] | None = None,
) -> httpx.Headers:
    """Merge the headers of a request.

    For POST the generated ``X-Request-Id`` is set first, so the client
    defaults and then the per-call headers can replace it. For every other
    method the client defaults and per-call headers are merged first and
    the generated id is set last, so it always wins. Names are compared
    case-insensitively.

    Args:
        method: The HTTP method (upper case).
        request_id: The generated request id.
        defaults: The client's default headers.
        overrides: The per-call headers.

    Returns:
        The merged headers.

    Example:
        ```pycon
        >>> from httpcourier.core.dispatch import merge_headers
        >>> merge_headers("POST", "generated", {"X-Request-Id": "client"})["X-Request-Id"]
        'client'
        >>> merge_headers("GET", "generated", {"X-Request-Id": "client"})["X-Request-Id"]
        'generated'

        ```
    """
    # TODO: drop the POST special case once callers no longer rely on
    # overriding X-Request-Id for POST requests only.
    if method == "POST":
        headers = httpx.Headers({REQUEST_ID_HEADER: request_id})
        headers.update(defaults)
        headers.update(overrides or {})
        return headers

    headers = httpx.Headers(defaults)
    headers.update(overrides or {})
    headers[REQUEST_ID_HEADER] = request_id
    return headers


def encode_body(body: Any) -> dict[str, Any]:
    """Return the transport keyword arguments sending ``body``.

    ``str`` and ``bytes`` bodies are sent as raw content; any other
    non-``None`` value is serialized as JSON.

    Args:
        body: The request body.

    Returns:
        A dictionary with a single ``content`` or ``json`` entry, or an
        empty dictionary if body is ``None``.
    """
    if body is None:
        return {}
    if isinstance(body, (str, bytes)):
        return {"content": body}
    return {"json": body}


def build_request(
    method: str,
    resource: str,
    config: ClientConfig,
    options: RequestOptions | None = None,
    body: Any = None,
) -> RequestEnvelope:
    """Build the envelope of an outbound call.

    Args:
        method: The HTTP method (case-insensitive).
        resource: The resource path.
        config: The client configuration.
        options: The per-call options.
        body: The request body. Ignored for methods without a body.

    Returns:
        The request envelope with a freshly generated id.

    Raises:
        TypeError: If resource is not a string.
        ValueError: If method is not a supported HTTP method.
    """
    validate_resource(resource)
    method = method.upper()
    if method not in HTTP_METHODS:
        msg = f"method must be one of {HTTP_METHODS}, got {method!r}"
        raise ValueError(msg)

    request_id = generate_request_id()
    return RequestEnvelope(
        id=request_id,
        method=method,
        resource=resource,
        url=compose_url(config.host, config.base_path, resource),
        headers=merge_headers(
            method, request_id, config.headers, options.headers if options else None
        ),
        body=body if method in BODY_METHODS else None,
    )


def prepare_request(
    method: str,
    resource: str,
    config: ClientConfig,
    options: RequestOptions | None = None,
    body: Any = None,
) -> tuple[RequestEnvelope, RetryPolicy]:
    """Build the envelope and resolve the retry policy of a call.

    The call is not logged here: clients emit the record with
    ``log_request`` once the correlation id of the call is set.

    Args:
        method: The HTTP method (case-insensitive).
        resource: The resource path.
        config: The client configuration.
        options: The per-call options.
        body: The request body.

    Returns:
        The request envelope and the effective retry policy.
    """
    request = build_request(method, resource, config, options, body)
    policy = resolve_retry_policy(options, config.retry)
    return request, policy


def log_request(request: RequestEnvelope, config: ClientConfig) -> None:
    """Emit the structured record of an outbound call.

    Args:
        request: The request envelope.
        config: The client configuration providing the logger and host.
    """
    log_structured(
        config.logger or logger,
        logging.INFO,
        f"{request.method} {request.resource}",
        host=config.host,
        request_id=request.id,
        method=request.method,
        resource=request.resource,
    )
