r"""Structured application errors embedded in response bodies.

Remote services may report domain-level failures as a JSON payload with a
``code`` field, independently of the HTTP status. This module provides a
registry mapping such codes to ``ApplicationError`` subclasses, and the
default exception-instance resolver used by the clients to recognise them.

Example:
    ```pycon
    >>> from httpcourier.application_errors import (
    ...     ApplicationError,
    ...     get_exception_instance,
    ...     register_exception,
    ... )
    >>> @register_exception("UserNotFound")
    ... class UserNotFoundError(ApplicationError):
    ...     description = "The user does not exist"
    ...
    >>> error = get_exception_instance("UserNotFound")
    >>> type(error).__name__, error.code
    ('UserNotFoundError', 'UserNotFound')
    >>> get_exception_instance("Unregistered") is None
    True

    ```
"""

from __future__ import annotations

__all__ = [
    "ApplicationError",
    "ExceptionResolver",
    "get_exception_instance",
    "register_exception",
    "unregister_exception",
]

import threading
from collections.abc import Callable
from typing import Any, TypeVar

from httpcourier.exceptions import HttpCourierError

T = TypeVar("T", bound=type["ApplicationError"])

ExceptionResolver = Callable[[str], "ApplicationError | None"]

_registry: dict[str, type[ApplicationError]] = {}
_lock = threading.Lock()


class ApplicationError(HttpCourierError):
    """Structured application error reported in a response body.

    Instances are attached to response envelopes; they are never raised
    by the clients.

    Attributes:
        code: The error code reported by the remote service.
        description: Human-readable description of the error class.
        details: Contextual metadata (request and response) attached when
            the error is detected.
    """

    code: str = ""
    description: str = ""

    def __init__(self, code: str | None = None, details: dict[str, Any] | None = None) -> None:
        if code is not None:
            self.code = code
        self.details: dict[str, Any] = details or {}
        super().__init__(self.description or self.code)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation of the error."""
        return {
            "name": type(self).__name__,
            "code": self.code,
            "description": self.description,
            "details": self.details,
        }


def register_exception(code: str) -> Callable[[T], T]:
    """Class decorator registering an ``ApplicationError`` subclass for
    ``code``.

    Registering a code a second time replaces the previous class.

    Args:
        code: The error code reported by the remote service.

    Returns:
        The decorator.
    """

    def decorator(cls: T) -> T:
        if not (isinstance(cls, type) and issubclass(cls, ApplicationError)):
            msg = f"{cls!r} is not an ApplicationError subclass"
            raise TypeError(msg)
        cls.code = code
        with _lock:
            _registry[code] = cls
        return cls

    return decorator


def unregister_exception(code: str) -> None:
    """Remove the class registered for ``code``, if any."""
    with _lock:
        _registry.pop(code, None)


def get_exception_instance(code: str) -> ApplicationError | None:
    """Resolve an error code to an ``ApplicationError`` instance.

    Args:
        code: The error code found in a response body.

    Returns:
        A new instance of the class registered for ``code``, or ``None``
        if the code is unknown.
    """
    cls = _registry.get(code)
    if cls is None:
        return None
    return cls(code)
