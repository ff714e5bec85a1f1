r"""Unit tests for the logic shared by the retry executors."""

from __future__ import annotations

import httpx
import pytest

from httpcourier.exceptions import HttpStatusError
from httpcourier.retry.executor_core import accept_status, check_status, should_retry
from httpcourier.retry.policy import RetryPolicy, default_retry_condition
from tests.helpers import create_response

TEST_URL = "https://api.example.com/v1/users/42"

###################################
#     Tests for accept_status     #
###################################


@pytest.mark.parametrize("status_code", [200, 201, 204, 301, 304, 400, 404, 422, 499])
def test_accept_status_true(status_code: int) -> None:
    assert accept_status(status_code)


@pytest.mark.parametrize("status_code", [100, 101, 199, 500, 502, 503, 599])
def test_accept_status_false(status_code: int) -> None:
    assert not accept_status(status_code)


##################################
#     Tests for check_status     #
##################################


def test_check_status_accepted() -> None:
    check_status(
        create_response(404),
        url=TEST_URL,
        method="GET",
        request_id="abc",
        validate_status=accept_status,
    )


def test_check_status_rejected() -> None:
    """Test that a rejected status raises an HttpStatusError carrying the
    request id and response."""
    response = create_response(503)
    with pytest.raises(HttpStatusError, match=r"GET request to .* failed with status 503") as exc_info:
        check_status(
            response, url=TEST_URL, method="GET", request_id="abc", validate_status=accept_status
        )

    error = exc_info.value
    assert error.request_id == "abc"
    assert error.response is response
    assert error.status_code == 503
    assert error.code == "ERR_BAD_RESPONSE"


def test_check_status_custom_validator() -> None:
    with pytest.raises(HttpStatusError) as exc_info:
        check_status(
            create_response(404),
            url=TEST_URL,
            method="GET",
            request_id="abc",
            validate_status=lambda code: code < 400,
        )
    assert exc_info.value.code == "ERR_BAD_REQUEST"


##################################
#     Tests for should_retry     #
##################################


def test_should_retry_retries_remaining() -> None:
    policy = RetryPolicy(count=2, delay_ms=0, is_retryable=default_retry_condition)
    assert should_retry(policy, httpx.ConnectError("refused"), 1, url=TEST_URL, method="GET")


def test_should_retry_retries_exhausted() -> None:
    policy = RetryPolicy(count=2, delay_ms=0, is_retryable=default_retry_condition)
    assert not should_retry(policy, httpx.ConnectError("refused"), 2, url=TEST_URL, method="GET")


def test_should_retry_no_retries() -> None:
    policy = RetryPolicy(count=0, delay_ms=0, is_retryable=default_retry_condition)
    assert not should_retry(policy, httpx.ConnectError("refused"), 0, url=TEST_URL, method="GET")


def test_should_retry_predicate_rejects() -> None:
    """Test that the policy's predicate can veto a retry."""
    policy = RetryPolicy(count=5, delay_ms=0, is_retryable=lambda _error: False)
    assert not should_retry(policy, httpx.ConnectError("refused"), 0, url=TEST_URL, method="GET")
