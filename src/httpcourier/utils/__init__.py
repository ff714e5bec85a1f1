r"""Utility helpers for httpcourier."""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "get_correlation_id",
    "log_structured",
    "reset_correlation_id",
    "set_correlation_id",
]

from httpcourier.utils.structured_logging import (
    StructuredFormatter,
    get_correlation_id,
    log_structured,
    reset_correlation_id,
    set_correlation_id,
)
