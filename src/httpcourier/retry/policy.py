r"""Resolution of the effective retry policy of a request.

The policy of one call is resolved field by field from three sources in
priority order: the per-call options, the client defaults, then the
global defaults. For each field the first value that is not ``None``
wins.
"""

from __future__ import annotations

__all__ = ["RetryPolicy", "default_retry_condition", "resolve_retry_policy"]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from httpcourier.config import DEFAULT_RETRY_COUNT, DEFAULT_RETRY_DELAY
from httpcourier.core.validation import validate_retry_params

if TYPE_CHECKING:
    from collections.abc import Callable

    from httpcourier.config import RetryOptions


def default_retry_condition(error: Exception) -> bool:
    """Decide whether an attempt that raised ``error`` should be retried.

    Only errors without a classified code are retried: plain transport
    failures such as ``httpx.ConnectError`` carry no ``code`` and are
    retried, while ``HttpStatusError`` (rejected status) carries one and is
    not.

    Args:
        error: The error raised by the attempt.

    Returns:
        ``True`` if the error has no truthy ``code`` attribute.

    Example:
        ```pycon
        >>> import httpx
        >>> from httpcourier.retry.policy import default_retry_condition
        >>> default_retry_condition(httpx.ConnectError("connection refused"))
        True

        ```
    """
    return not getattr(error, "code", None)


@dataclass(frozen=True)
class RetryPolicy:
    """Fully resolved retry policy of one request.

    Attributes:
        count: Maximum number of retries after the initial attempt.
        delay_ms: Delay between attempts in milliseconds.
        is_retryable: Predicate deciding whether an error is retried.
    """

    count: int
    delay_ms: int
    is_retryable: Callable[[Exception], bool]

    def __post_init__(self) -> None:
        validate_retry_params(retries=self.count, retry_delay=self.delay_ms)

    def delay(self, attempt: int) -> float:  # noqa: ARG002
        """Return the delay in seconds before the retry following
        ``attempt``.

        The delay is constant: it does not depend on the attempt number.

        Args:
            attempt: The attempt that just failed (0-indexed, unused).

        Returns:
            The delay in seconds.
        """
        return self.delay_ms / 1000


def _pick(name: str, options: RetryOptions | None, defaults: RetryOptions | None, fallback: Any) -> Any:
    for source in (options, defaults):
        value = getattr(source, name, None)
        if value is not None:
            return value
    return fallback


def resolve_retry_policy(
    options: RetryOptions | None = None,
    defaults: RetryOptions | None = None,
    *,
    default_retries: int = DEFAULT_RETRY_COUNT,
    default_retry_delay: int = DEFAULT_RETRY_DELAY,
    default_condition: Callable[[Exception], bool] = default_retry_condition,
) -> RetryPolicy:
    """Resolve the effective retry policy of a request.

    Args:
        options: Per-call options (highest priority).
        defaults: Client-level retry defaults.
        default_retries: Global default retry count.
        default_retry_delay: Global default delay in milliseconds.
        default_condition: Global default retry condition.

    Returns:
        A fully populated ``RetryPolicy``.

    Example:
        ```pycon
        >>> from httpcourier.config import RetryOptions
        >>> from httpcourier.retry.policy import resolve_retry_policy
        >>> policy = resolve_retry_policy(RetryOptions(retries=3), RetryOptions(retries=1))
        >>> policy.count, policy.delay_ms
        (3, 5000)
        >>> resolve_retry_policy().count
        0

        ```
    """
    return RetryPolicy(
        count=_pick("retries", options, defaults, default_retries),
        delay_ms=_pick("retry_delay", options, defaults, default_retry_delay),
        is_retryable=_pick("retry_condition", options, defaults, default_condition),
    )
