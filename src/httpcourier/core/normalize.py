r"""Normalization of transport responses into ``HttpResponse`` envelopes."""

from __future__ import annotations

__all__ = ["decode_body", "normalize_response"]

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from httpcourier.models import HttpResponse, RequestMetadata, ResponseStatus
from httpcourier.status import is_failure_status
from httpcourier.utils.structured_logging import log_structured

if TYPE_CHECKING:
    import httpx

    from httpcourier.application_errors import ApplicationError, ExceptionResolver
    from httpcourier.config import ClientConfig
    from httpcourier.models import RequestEnvelope

logger: logging.Logger = logging.getLogger("httpcourier")


def decode_body(method: str, response: httpx.Response, response_type: str) -> Any:
    """Decode the body of a response.

    Args:
        method: The HTTP method of the request.
        response: The transport response.
        response_type: ``"json"`` or ``"text"``.

    Returns:
        ``None`` for HEAD requests and empty bodies. Otherwise the decoded
        JSON value when response_type is ``"json"`` and the payload is
        valid JSON, or the text of the body.
    """
    if method == "HEAD" or not response.content:
        return None
    if response_type == "json":
        try:
            return response.json()
        except ValueError:
            return response.text
    return response.text


def _resolve_application_error(
    body: Any,
    request: RequestEnvelope,
    response: httpx.Response,
    config: ClientConfig,
    resolver: ExceptionResolver,
) -> ApplicationError | None:
    if not isinstance(body, Mapping) or not body.get("code"):
        return None
    exception = resolver(str(body["code"]))
    if exception is None:
        return None

    exception.details = {
        "request": {
            "host": config.host,
            "id": request.id,
            "method": request.method,
            "resource": request.url.removeprefix(config.host),
        },
        "response": {"status": {"code": response.status_code}},
    }
    log_structured(
        config.logger or logger,
        logging.WARNING,
        f"{request.method} {request.resource} returned application error {exception.code}",
        request_id=request.id,
        error=exception.to_dict(),
    )
    return exception


def normalize_response(
    request: RequestEnvelope,
    response: httpx.Response,
    *,
    config: ClientConfig,
    resolver: ExceptionResolver,
) -> HttpResponse:
    """Wrap a transport response into the uniform envelope.

    A structured application error in the body is resolved and attached
    to the envelope, but the body, headers and status are returned as
    received: detecting an application error never changes the outcome
    of the call.

    Args:
        request: The envelope of the originating request.
        response: The accepted transport response.
        config: The client configuration.
        resolver: Resolves an application error code to an exception
            instance, or ``None`` if the code is unknown.

    Returns:
        The response envelope, whose ``request.id`` is the id of
        ``request``.
    """
    body = decode_body(request.method, response, config.response_type)
    return HttpResponse(
        body=body,
        headers=response.headers,
        status=ResponseStatus(
            code=response.status_code, is_failure=is_failure_status(response.status_code)
        ),
        request=RequestMetadata(id=request.id),
        exception=_resolve_application_error(body, request, response, config, resolver),
    )
