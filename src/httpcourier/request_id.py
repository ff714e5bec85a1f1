r"""Generation of request identifiers used to correlate calls in logs and
responses."""

from __future__ import annotations

__all__ = ["generate_request_id"]

from uuid import uuid4


def generate_request_id() -> str:
    """Generate an opaque, collision-resistant request identifier.

    Returns:
        A 32-character lowercase hexadecimal string.

    Example:
        ```pycon
        >>> from httpcourier.request_id import generate_request_id
        >>> len(generate_request_id())
        32

        ```
    """
    return uuid4().hex
