r"""Exceptions raised by httpcourier."""

from __future__ import annotations

__all__ = [
    "BAD_REQUEST_CODE",
    "BAD_RESPONSE_CODE",
    "HttpCourierError",
    "HttpStatusError",
    "UnknownStatusCodeError",
]

import httpx

# Error codes carried by HttpStatusError. Having a code is what keeps the
# default retry condition from retrying a rejected status.
BAD_REQUEST_CODE = "ERR_BAD_REQUEST"
BAD_RESPONSE_CODE = "ERR_BAD_RESPONSE"


class HttpCourierError(Exception):
    """Base class for all httpcourier errors."""


class UnknownStatusCodeError(HttpCourierError, LookupError):
    """Raised when a status code is not in the classification table.

    Args:
        status_code: The status code that could not be classified.

    Example:
        ```pycon
        >>> from httpcourier.exceptions import UnknownStatusCodeError
        >>> error = UnknownStatusCodeError(299)
        >>> error.status_code
        299

        ```
    """

    def __init__(self, status_code: int) -> None:
        super().__init__(f"unknown HTTP status code: {status_code}")
        self.status_code = status_code


class HttpStatusError(httpx.HTTPStatusError, HttpCourierError):
    """Raised when a response status is rejected by the status validator.

    This error is raised inside the retry loop, so it is visible to the
    retry condition. It carries a ``code`` so the default retry condition
    does not retry it.

    Args:
        message: The error message.
        request_id: The id of the request that produced the response.
        response: The rejected response.

    Example:
        ```pycon
        >>> import httpx
        >>> from httpcourier.exceptions import HttpStatusError
        >>> request = httpx.Request("GET", "https://api.example.com/data")
        >>> response = httpx.Response(503, request=request)
        >>> error = HttpStatusError("boom", request_id="abc", response=response)
        >>> error.code
        'ERR_BAD_RESPONSE'
        >>> error.status_code
        503

        ```
    """

    def __init__(self, message: str, *, request_id: str, response: httpx.Response) -> None:
        super().__init__(message, request=response.request, response=response)
        self.request_id = request_id
        self.status_code = response.status_code
        self.code = BAD_RESPONSE_CODE if response.status_code >= 500 else BAD_REQUEST_CODE
