r"""Classification table for HTTP response status codes.

This module provides a static, read-only table mapping every enumerated
HTTP status code to a ``StatusClassification``. The table is built once at
import time and is never mutated afterwards.

Every 2xx code is a pass-through (not a failure). Every other enumerated
code, including the informational 1xx and redirection 3xx families, is
flagged as a failure status. The ``is_retryable_status`` flag is carried
for every entry but is currently ``False`` everywhere: retry decisions are
made by the retry policy, not by this table.

Example:
    ```pycon
    >>> from httpcourier.status import classify
    >>> classify(201).is_failure_status
    False
    >>> classify(503).is_failure_status
    True

    ```
"""

from __future__ import annotations

__all__ = [
    "STATUS_CLASSIFICATIONS",
    "StatusClassification",
    "classify",
    "is_failure_status",
]

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from httpcourier.exceptions import UnknownStatusCodeError

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class StatusClassification:
    """Classification of a single HTTP status code.

    Attributes:
        is_failure_status: Whether a response with this status should be
            considered a failure.
        is_retryable_status: Whether a response with this status may be
            retried.
    """

    is_failure_status: bool
    is_retryable_status: bool


_PASS = StatusClassification(is_failure_status=False, is_retryable_status=False)
_FAIL = StatusClassification(is_failure_status=True, is_retryable_status=False)

STATUS_CLASSIFICATIONS: Mapping[int, StatusClassification] = MappingProxyType(
    {
        # 1xx Informational
        100: _FAIL,  # Continue
        101: _FAIL,  # Switching Protocols
        102: _FAIL,  # Processing
        # 2xx Success
        200: _PASS,  # OK
        201: _PASS,  # Created
        202: _PASS,  # Accepted
        203: _PASS,  # Non-Authoritative Information
        204: _PASS,  # No Content
        205: _PASS,  # Reset Content
        206: _PASS,  # Partial Content
        207: _PASS,  # Multi-Status
        208: _PASS,  # Already Reported
        226: _PASS,  # IM Used
        # 3xx Redirection
        300: _FAIL,  # Multiple Choices
        301: _FAIL,  # Moved Permanently
        302: _FAIL,  # Found
        303: _FAIL,  # See Other
        304: _FAIL,  # Not Modified
        305: _FAIL,  # Use Proxy
        306: _FAIL,  # Switch Proxy
        307: _FAIL,  # Temporary Redirect
        308: _FAIL,  # Permanent Redirect
        # 4xx Client errors
        400: _FAIL,  # Bad Request
        401: _FAIL,  # Unauthorized
        402: _FAIL,  # Payment Required
        403: _FAIL,  # Forbidden
        404: _FAIL,  # Not Found
        405: _FAIL,  # Method Not Allowed
        406: _FAIL,  # Not Acceptable
        407: _FAIL,  # Proxy Authentication Required
        408: _FAIL,  # Request Timeout
        409: _FAIL,  # Conflict
        410: _FAIL,  # Gone
        411: _FAIL,  # Length Required
        412: _FAIL,  # Precondition Failed
        413: _FAIL,  # Payload Too Large
        414: _FAIL,  # URI Too Long
        415: _FAIL,  # Unsupported Media Type
        416: _FAIL,  # Range Not Satisfiable
        417: _FAIL,  # Expectation Failed
        418: _FAIL,  # I'm a teapot
        421: _FAIL,  # Misdirected Request
        422: _FAIL,  # Unprocessable Entity
        423: _FAIL,  # Locked
        424: _FAIL,  # Failed Dependency
        425: _FAIL,  # Too Early
        426: _FAIL,  # Upgrade Required
        428: _FAIL,  # Precondition Required
        429: _FAIL,  # Too Many Requests
        431: _FAIL,  # Request Header Fields Too Large
        451: _FAIL,  # Unavailable For Legal Reasons
        # 5xx Server errors
        500: _FAIL,  # Internal Server Error
        501: _FAIL,  # Not Implemented
        502: _FAIL,  # Bad Gateway
        503: _FAIL,  # Service Unavailable
        504: _FAIL,  # Gateway Timeout
        505: _FAIL,  # HTTP Version Not Supported
        506: _FAIL,  # Variant Also Negotiates
        507: _FAIL,  # Insufficient Storage
        508: _FAIL,  # Loop Detected
        509: _FAIL,  # Bandwidth Limit Exceeded
        510: _FAIL,  # Not Extended
        511: _FAIL,  # Network Authentication Required
    }
)


def classify(code: int) -> StatusClassification:
    """Look up the classification of an HTTP status code.

    Args:
        code: The HTTP status code.

    Returns:
        The classification for the status code.

    Raises:
        UnknownStatusCodeError: If the code is not an enumerated status.

    Example:
        ```pycon
        >>> from httpcourier.status import classify
        >>> classify(404)
        StatusClassification(is_failure_status=True, is_retryable_status=False)

        ```
    """
    try:
        return STATUS_CLASSIFICATIONS[code]
    except KeyError:
        raise UnknownStatusCodeError(code) from None


def is_failure_status(code: int) -> bool:
    """Return whether ``code`` is a failure status.

    Unknown codes are treated as successful pass-through.

    Args:
        code: The HTTP status code.

    Returns:
        ``True`` if the code is classified as a failure, otherwise ``False``.
    """
    try:
        return classify(code).is_failure_status
    except UnknownStatusCodeError:
        return False
