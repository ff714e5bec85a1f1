r"""Structured logging utilities for machine-readable log output.

This module provides utilities for structured logging with JSON
formatting and a context-local correlation id. The clients set the
correlation id to the request id for the duration of each call, so every
record emitted while the call is in flight (including retry diagnostics)
can be tied back to it.

The structured logging system is opt-in and can be enabled by
configuring Python's logging system to use the provided formatter.

Example:
    Enable structured logging for httpcourier:

    ```python
    import logging
    from httpcourier.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger("httpcourier")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "get_correlation_id",
    "log_structured",
    "reset_correlation_id",
    "set_correlation_id",
]

import contextvars
import json
import logging
import time
from typing import Any

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)

# Attributes every LogRecord carries; anything else was passed via ``extra``.
_RECORD_ATTRIBUTES = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "msecs",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "sinfo",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "taskName",
    }
)


def get_correlation_id() -> str | None:
    """Get the correlation id of the current context.

    Returns:
        The current correlation id, or ``None`` if not set.
    """
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None) -> contextvars.Token[str | None]:
    """Set the correlation id for the current context.

    The id is stored in a context variable, so concurrent asyncio tasks
    and threads each see their own value.

    Args:
        correlation_id: The correlation id to set, e.g. a request id.

    Returns:
        A token that restores the previous value when passed to
        ``reset_correlation_id``.

    Example:
        ```pycon
        >>> from httpcourier.utils.structured_logging import (
        ...     get_correlation_id,
        ...     reset_correlation_id,
        ...     set_correlation_id,
        ... )
        >>> token = set_correlation_id("request-456")
        >>> get_correlation_id()
        'request-456'
        >>> reset_correlation_id(token)
        >>> get_correlation_id() is None
        True

        ```
    """
    return _correlation_id.set(correlation_id)


def reset_correlation_id(token: contextvars.Token[str | None]) -> None:
    """Restore the correlation id that was active before
    ``set_correlation_id`` returned ``token``."""
    _correlation_id.reset(token)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Standard fields in the JSON output:
        - timestamp: ISO 8601 timestamp
        - level: Log level name
        - logger: Logger name
        - message: Log message
        - correlation_id: Correlation id, if set
        - module, function, line: Origin of the record

    Any additional fields passed via ``extra`` are included as-is.

    Example:
        ```pycon
        >>> import logging
        >>> from io import StringIO
        >>> from httpcourier.utils.structured_logging import StructuredFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("doctest_structured")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.INFO)
        >>> logger.info("Test message", extra={"request_id": "123"})
        >>> '"request_id": "123"' in stream.getvalue()
        True

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        correlation_id = get_correlation_id()
        if correlation_id is not None:
            log_data["correlation_id"] = correlation_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_data[key] = value

        return json.dumps(log_data, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: ARG002
        """Format the record timestamp as ISO 8601 with milliseconds."""
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(
    logger: logging.Logger | logging.LoggerAdapter,
    level: int,
    message: str,
    **extra: Any,
) -> None:
    """Log a message with structured fields.

    The fields are attached to the record through ``extra`` and are
    rendered by ``StructuredFormatter``. For a ``logging.LoggerAdapter``
    the adapter's own ``extra`` is merged under the given fields, since
    ``LoggerAdapter.process`` would otherwise replace them.

    Args:
        logger: Logger to use.
        level: Log level (e.g., ``logging.INFO``).
        message: Log message.
        **extra: Structured fields to include in the record.

    Example:
        ```pycon
        >>> import logging
        >>> from httpcourier.utils.structured_logging import log_structured
        >>> adapter = logging.LoggerAdapter(logging.getLogger("doctest"), {"service": "billing"})
        >>> log_structured(adapter, logging.INFO, "GET /users/42", request_id="abc")

        ```
    """
    if isinstance(logger, logging.LoggerAdapter):
        extra = {**(logger.extra or {}), **extra}
        logger = logger.logger
    logger.log(level, message, extra=extra)
