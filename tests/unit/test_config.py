r"""Unit tests for configuration defaults and dataclasses."""

from __future__ import annotations

import dataclasses
import logging

import pytest

from httpcourier.config import (
    DEFAULT_RESPONSE_TYPE,
    DEFAULT_RETRY_COUNT,
    DEFAULT_RETRY_DELAY,
    REQUEST_ID_HEADER,
    ClientConfig,
    RequestOptions,
    RetryOptions,
)

###############################
#     Tests for constants     #
###############################


def test_default_retry_count_value() -> None:
    assert DEFAULT_RETRY_COUNT == 0


def test_default_retry_delay_value() -> None:
    assert DEFAULT_RETRY_DELAY == 5000


def test_default_response_type_value() -> None:
    assert DEFAULT_RESPONSE_TYPE == "json"


def test_request_id_header_value() -> None:
    assert REQUEST_ID_HEADER == "X-Request-Id"


##################################
#     Tests for RetryOptions     #
##################################


def test_retry_options_defaults() -> None:
    options = RetryOptions()
    assert options.retries is None
    assert options.retry_delay is None
    assert options.retry_condition is None


def test_retry_options_negative_retries() -> None:
    with pytest.raises(ValueError, match=r"retries must be >= 0, got -1"):
        RetryOptions(retries=-1)


def test_retry_options_negative_retry_delay() -> None:
    with pytest.raises(ValueError, match=r"retry_delay must be >= 0, got -5"):
        RetryOptions(retry_delay=-5)


def test_retry_options_is_frozen() -> None:
    options = RetryOptions(retries=1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        options.retries = 2  # type: ignore[misc]


####################################
#     Tests for RequestOptions     #
####################################


def test_request_options_defaults() -> None:
    options = RequestOptions()
    assert dict(options.headers) == {}
    assert options.retries is None


def test_request_options_headers_are_copied() -> None:
    headers = {"Accept": "text/plain"}
    options = RequestOptions(headers=headers)
    headers["Accept"] = "application/json"
    assert options.headers["Accept"] == "text/plain"


def test_request_options_headers_are_read_only() -> None:
    options = RequestOptions(headers={"Accept": "text/plain"})
    with pytest.raises(TypeError):
        options.headers["Accept"] = "application/json"  # type: ignore[index]


def test_request_options_validates_retry_params() -> None:
    with pytest.raises(ValueError, match=r"retries must be >= 0"):
        RequestOptions(retries=-2)


##################################
#     Tests for ClientConfig     #
##################################


def test_client_config_defaults() -> None:
    config = ClientConfig()
    assert config.host == ""
    assert config.base_path is None
    assert dict(config.headers) == {}
    assert config.retry is None
    assert config.response_type == "json"
    assert config.with_credentials is False
    assert config.logger is None


def test_client_config_custom_values() -> None:
    logger = logging.getLogger("test_client_config")
    config = ClientConfig(
        host="https://api.example.com",
        base_path="v1",
        headers={"Authorization": "Bearer token"},
        retry=RetryOptions(retries=3),
        response_type="text",
        with_credentials=True,
        logger=logger,
    )
    assert config.host == "https://api.example.com"
    assert config.base_path == "v1"
    assert config.headers["Authorization"] == "Bearer token"
    assert config.retry == RetryOptions(retries=3)
    assert config.response_type == "text"
    assert config.with_credentials is True
    assert config.logger is logger


def test_client_config_invalid_response_type() -> None:
    with pytest.raises(ValueError, match=r"response_type must be one of"):
        ClientConfig(response_type="xml")  # type: ignore[arg-type]


def test_client_config_is_frozen() -> None:
    config = ClientConfig(host="https://api.example.com")
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.host = "https://other.example.com"  # type: ignore[misc]


def test_client_config_headers_are_read_only() -> None:
    config = ClientConfig(headers={"Accept": "application/json"})
    with pytest.raises(TypeError):
        config.headers["Accept"] = "text/plain"  # type: ignore[index]
