r"""Request and response envelopes.

``RequestEnvelope`` describes one outbound call once its id, URL and
headers are resolved. ``HttpResponse`` is the uniform envelope returned
to callers for every verb.
"""

from __future__ import annotations

__all__ = ["HttpResponse", "RequestEnvelope", "RequestMetadata", "ResponseStatus"]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx

    from httpcourier.application_errors import ApplicationError


@dataclass(frozen=True)
class RequestEnvelope:
    """One outbound call, built once per call.

    Attributes:
        id: The generated request id.
        method: The HTTP method (upper case).
        resource: The resource path as given by the caller.
        url: The composed target URL.
        headers: The merged request headers.
        body: The optional request body.
    """

    id: str
    method: str
    resource: str
    url: str
    headers: httpx.Headers
    body: Any = None


@dataclass(frozen=True)
class ResponseStatus:
    """Status of a response.

    Attributes:
        code: The numeric HTTP status code.
        is_failure: Whether the status is classified as a failure.
            Unknown status codes are not failures.
    """

    code: int
    is_failure: bool = False


@dataclass(frozen=True)
class RequestMetadata:
    """Metadata of the request that produced a response.

    Attributes:
        id: The request id, identical to the id sent in ``X-Request-Id``
            for non-POST calls.
    """

    id: str


@dataclass(frozen=True)
class HttpResponse:
    """Uniform response envelope.

    Attributes:
        body: The decoded response body. Always ``None`` for HEAD.
        headers: The response headers.
        status: The response status.
        request: Metadata of the originating request.
        exception: Structured application error found in the body, if
            any. The body is returned unchanged either way.
    """

    body: Any
    headers: httpx.Headers
    status: ResponseStatus
    request: RequestMetadata
    exception: ApplicationError | None = None
