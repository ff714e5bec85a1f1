r"""httpcourier - Thin httpx wrapper returning uniform response envelopes.

This package layers request bookkeeping on top of httpx: every call gets
a unique request id, headers are merged from client defaults and
per-call overrides, the target URL is composed from a host, an optional
base path and a resource, and a constant-delay retry policy is applied.
Responses are returned as ``HttpResponse`` envelopes carrying the body,
headers, status and request id.

Key Features:
    - Sync (``HttpClient``) and async (``AsyncHttpClient``) clients
    - One method per verb: GET, HEAD, DELETE, POST, PUT, PATCH
    - ``X-Request-Id`` header and structured log record per call
    - Retry count, delay and condition resolved per call, per client,
      then from global defaults
    - Static classification table of HTTP status codes
    - Detection of structured application errors in response bodies

Example:
    ```pycon
    >>> from httpcourier import AsyncHttpClient, ClientConfig, RetryOptions
    >>> config = ClientConfig(
    ...     host="https://api.example.com",
    ...     base_path="v1",
    ...     retry=RetryOptions(retries=3, retry_delay=200),
    ... )
    >>> async def main():  # doctest: +SKIP
    ...     async with AsyncHttpClient(config) as client:
    ...         response = await client.get("/users/42")
    ...     return response.body
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "ApplicationError",
    "AsyncHttpClient",
    "ClientConfig",
    "HttpClient",
    "HttpCourierError",
    "HttpResponse",
    "HttpStatusError",
    "RequestOptions",
    "RetryOptions",
    "UnknownStatusCodeError",
    "__version__",
    "classify",
    "generate_request_id",
    "get_exception_instance",
    "register_exception",
]

from importlib.metadata import PackageNotFoundError, version

from httpcourier.application_errors import (
    ApplicationError,
    get_exception_instance,
    register_exception,
)
from httpcourier.client import HttpClient
from httpcourier.client_async import AsyncHttpClient
from httpcourier.config import ClientConfig, RequestOptions, RetryOptions
from httpcourier.exceptions import HttpCourierError, HttpStatusError, UnknownStatusCodeError
from httpcourier.models import HttpResponse
from httpcourier.request_id import generate_request_id
from httpcourier.status import classify

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
