r"""Configuration dataclasses and defaults for httpcourier clients.

This module provides the default constants and the immutable
configuration objects shared by ``HttpClient`` and ``AsyncHttpClient``:
``ClientConfig`` for per-client settings, ``RetryOptions`` for client-level
retry defaults, and ``RequestOptions`` for per-call overrides.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_RESPONSE_TYPE",
    "DEFAULT_RETRY_COUNT",
    "DEFAULT_RETRY_DELAY",
    "REQUEST_ID_HEADER",
    "ClientConfig",
    "RequestOptions",
    "RetryOptions",
]

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Literal

from httpcourier.core.validation import validate_response_type, validate_retry_params

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable, Mapping


# Default number of retries. 0 means only the initial attempt is made.
DEFAULT_RETRY_COUNT = 0

# Default delay between attempts, in milliseconds.
# The same delay is used for every attempt (no exponential growth).
DEFAULT_RETRY_DELAY = 5000

# Default decoding of response bodies
DEFAULT_RESPONSE_TYPE = "json"

# Header carrying the generated request id
REQUEST_ID_HEADER = "X-Request-Id"


def _freeze(headers: Mapping[str, str] | None) -> Mapping[str, str]:
    return MappingProxyType(dict(headers or {}))


@dataclass(frozen=True)
class RetryOptions:
    """Retry settings that may be left unset.

    A ``None`` field means "not set here": the retry policy resolver then
    falls through to the next source (client defaults, then the global
    defaults).

    Args:
        retries: Maximum number of retry attempts. Must be >= 0.
        retry_delay: Delay between attempts in milliseconds. Must be >= 0.
        retry_condition: Predicate called with the error raised by an
            attempt. Returns ``True`` if the attempt should be retried.

    Example:
        ```pycon
        >>> from httpcourier.config import RetryOptions
        >>> options = RetryOptions(retries=3)
        >>> options.retries
        3
        >>> options.retry_delay is None
        True

        ```
    """

    retries: int | None = None
    retry_delay: int | None = None
    retry_condition: Callable[[Exception], bool] | None = None

    def __post_init__(self) -> None:
        validate_retry_params(retries=self.retries, retry_delay=self.retry_delay)


@dataclass(frozen=True)
class RequestOptions(RetryOptions):
    """Per-call overrides for a single request.

    Args:
        retries: Overrides the client's retry count for this call.
        retry_delay: Overrides the client's retry delay (milliseconds).
        retry_condition: Overrides the client's retry condition.
        headers: Headers merged over the client's default headers.

    Example:
        ```pycon
        >>> from httpcourier.config import RequestOptions
        >>> options = RequestOptions(retries=2, headers={"Accept": "text/plain"})
        >>> dict(options.headers)
        {'Accept': 'text/plain'}

        ```
    """

    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "headers", _freeze(self.headers))


@dataclass(frozen=True)
class ClientConfig:
    """Immutable configuration of one client instance.

    Args:
        host: Scheme and host prefix of every URL, e.g.
            ``"https://api.example.com"``.
        base_path: Optional path inserted between the host and the
            resource. Joined with a single ``/``; no other normalization
            is applied.
        headers: Default headers sent with every request.
        retry: Client-level retry defaults.
        response_type: ``"json"`` to decode bodies as JSON (falling back
            to text), or ``"text"`` to keep them as text.
        with_credentials: Whether cookies received on a client-owned
            transport persist across calls.
        logger: Logger receiving one record per outbound call. Defaults
            to the ``httpcourier`` logger.

    Example:
        ```pycon
        >>> from httpcourier.config import ClientConfig, RetryOptions
        >>> config = ClientConfig(
        ...     host="https://api.example.com",
        ...     base_path="v1",
        ...     retry=RetryOptions(retries=3),
        ... )
        >>> config.base_path
        'v1'

        ```
    """

    host: str = ""
    base_path: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    retry: RetryOptions | None = None
    response_type: Literal["json", "text"] = DEFAULT_RESPONSE_TYPE
    with_credentials: bool = False
    logger: logging.Logger | logging.LoggerAdapter | None = None

    def __post_init__(self) -> None:
        """Validate configuration and freeze the default headers.

        Raises:
            ValueError: If the response type is not supported.
        """
        validate_response_type(self.response_type)
        object.__setattr__(self, "headers", _freeze(self.headers))
