r"""Retry package resolving retry policies and running the attempt loop.

Public API:
    - RetryPolicy: Fully resolved retry policy of one request
    - resolve_retry_policy: Per-call / per-client / default resolution
    - default_retry_condition: Retry only errors without a code
    - RetryExecutor: Synchronous retry executor
    - AsyncRetryExecutor: Asynchronous retry executor
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "RetryExecutor",
    "RetryPolicy",
    "accept_status",
    "default_retry_condition",
    "resolve_retry_policy",
]

from httpcourier.retry.executor import RetryExecutor
from httpcourier.retry.executor_async import AsyncRetryExecutor
from httpcourier.retry.executor_core import accept_status
from httpcourier.retry.policy import RetryPolicy, default_retry_condition, resolve_retry_policy
