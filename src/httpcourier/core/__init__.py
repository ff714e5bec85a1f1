r"""Core logic shared by the sync and async clients.

This package contains the request dispatch logic (URL composition,
header merging, body encoding), response normalization and parameter
validation.

Note:
    Submodules are imported directly (``httpcourier.core.dispatch``,
    ``httpcourier.core.normalize``) because ``httpcourier.config`` depends on
    ``httpcourier.core.validation``.
"""

from __future__ import annotations

__all__ = ["validate_resource", "validate_response_type", "validate_retry_params"]

from httpcourier.core.validation import (
    validate_resource,
    validate_response_type,
    validate_retry_params,
)
