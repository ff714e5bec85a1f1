r"""Unit tests for structured logging utilities."""

from __future__ import annotations

import json
import logging
from io import StringIO

import pytest

from httpcourier.utils.structured_logging import (
    StructuredFormatter,
    get_correlation_id,
    log_structured,
    reset_correlation_id,
    set_correlation_id,
)


@pytest.fixture
def logger() -> logging.Logger:
    logger = logging.getLogger("test_structured_logging")
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()
    logger.propagate = False
    return logger


@pytest.fixture
def stream(logger: logging.Logger) -> StringIO:
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    logger.addHandler(handler)
    return stream


####################################
#     Tests for correlation id     #
####################################


def test_get_correlation_id_default() -> None:
    assert get_correlation_id() is None


def test_set_and_reset_correlation_id() -> None:
    token = set_correlation_id("request-123")
    try:
        assert get_correlation_id() == "request-123"
    finally:
        reset_correlation_id(token)
    assert get_correlation_id() is None


def test_reset_correlation_id_restores_previous() -> None:
    outer = set_correlation_id("outer")
    inner = set_correlation_id("inner")
    reset_correlation_id(inner)
    assert get_correlation_id() == "outer"
    reset_correlation_id(outer)


#########################################
#     Tests for StructuredFormatter     #
#########################################


def test_structured_formatter_basic_fields(logger: logging.Logger, stream: StringIO) -> None:
    """Test that the standard fields are emitted as JSON."""
    logger.info("Test message")

    data = json.loads(stream.getvalue())
    assert data["level"] == "INFO"
    assert data["logger"] == "test_structured_logging"
    assert data["message"] == "Test message"
    assert data["function"] == "test_structured_formatter_basic_fields"
    assert data["timestamp"].endswith("Z")
    assert "correlation_id" not in data
    assert "exception" not in data


def test_structured_formatter_extra_fields(logger: logging.Logger, stream: StringIO) -> None:
    logger.info("GET /users/42", extra={"request_id": "abc", "method": "GET"})

    data = json.loads(stream.getvalue())
    assert data["request_id"] == "abc"
    assert data["method"] == "GET"


def test_structured_formatter_correlation_id(logger: logging.Logger, stream: StringIO) -> None:
    token = set_correlation_id("request-456")
    try:
        logger.info("Test message")
    finally:
        reset_correlation_id(token)

    assert json.loads(stream.getvalue())["correlation_id"] == "request-456"


def test_structured_formatter_exception(logger: logging.Logger, stream: StringIO) -> None:
    try:
        msg = "boom"
        raise ValueError(msg)
    except ValueError:
        logger.exception("Failed")

    data = json.loads(stream.getvalue())
    assert "ValueError: boom" in data["exception"]


def test_structured_formatter_non_serializable_extra(
    logger: logging.Logger, stream: StringIO
) -> None:
    logger.info("Test message", extra={"payload": object()})

    assert json.loads(stream.getvalue())["payload"].startswith("<object object")


####################################
#     Tests for log_structured     #
####################################


def test_log_structured(logger: logging.Logger, stream: StringIO) -> None:
    log_structured(logger, logging.WARNING, "Retrying", request_id="abc", attempt=2)

    data = json.loads(stream.getvalue())
    assert data["level"] == "WARNING"
    assert data["message"] == "Retrying"
    assert data["request_id"] == "abc"
    assert data["attempt"] == 2


def test_log_structured_respects_level(logger: logging.Logger, stream: StringIO) -> None:
    logger.setLevel(logging.ERROR)
    log_structured(logger, logging.INFO, "ignored", request_id="abc")
    assert stream.getvalue() == ""


def test_log_structured_logger_adapter(logger: logging.Logger, stream: StringIO) -> None:
    """Test that the adapter's extra is merged with the call's fields."""
    adapter = logging.LoggerAdapter(logger, {"service": "billing", "request_id": "adapter"})

    log_structured(adapter, logging.INFO, "GET /users/42", request_id="abc", method="GET")

    data = json.loads(stream.getvalue())
    assert data["service"] == "billing"
    assert data["request_id"] == "abc"
    assert data["method"] == "GET"
    assert data["logger"] == "test_structured_logging"


def test_log_structured_logger_adapter_without_extra(
    logger: logging.Logger, stream: StringIO
) -> None:
    log_structured(logging.LoggerAdapter(logger), logging.INFO, "Test message", request_id="abc")

    assert json.loads(stream.getvalue())["request_id"] == "abc"
