r"""Unit tests for the application error registry."""

from __future__ import annotations

import pytest

from httpcourier.application_errors import (
    ApplicationError,
    get_exception_instance,
    register_exception,
    unregister_exception,
)
from httpcourier.exceptions import HttpCourierError

######################################
#     Tests for ApplicationError     #
######################################


def test_application_error_is_httpcourier_error() -> None:
    assert issubclass(ApplicationError, HttpCourierError)


def test_application_error_defaults() -> None:
    error = ApplicationError()
    assert error.code == ""
    assert error.details == {}


def test_application_error_code_and_details() -> None:
    error = ApplicationError("Throttled", details={"retry_after": 3})
    assert error.code == "Throttled"
    assert error.details == {"retry_after": 3}
    assert str(error) == "Throttled"


def test_application_error_to_dict(user_not_found_error: type[ApplicationError]) -> None:
    error = user_not_found_error(details={"request": {"id": "abc"}})
    assert error.to_dict() == {
        "name": "UserNotFoundError",
        "code": "UserNotFound",
        "description": "The user does not exist",
        "details": {"request": {"id": "abc"}},
    }


def test_application_error_message_is_description(
    user_not_found_error: type[ApplicationError],
) -> None:
    assert str(user_not_found_error()) == "The user does not exist"


########################################
#     Tests for register_exception     #
########################################


def test_register_exception_sets_code(user_not_found_error: type[ApplicationError]) -> None:
    assert user_not_found_error.code == "UserNotFound"


def test_register_exception_not_a_subclass() -> None:
    with pytest.raises(TypeError, match=r"is not an ApplicationError subclass"):

        @register_exception("Broken")
        class Broken(ValueError):
            pass


def test_register_exception_replaces_previous() -> None:
    @register_exception("Replaced")
    class First(ApplicationError):
        pass

    @register_exception("Replaced")
    class Second(ApplicationError):
        pass

    try:
        assert isinstance(get_exception_instance("Replaced"), Second)
    finally:
        unregister_exception("Replaced")


def test_unregister_exception_unknown_code() -> None:
    unregister_exception("NeverRegistered")


############################################
#     Tests for get_exception_instance     #
############################################


def test_get_exception_instance_known_code(user_not_found_error: type[ApplicationError]) -> None:
    first = get_exception_instance("UserNotFound")
    second = get_exception_instance("UserNotFound")
    assert isinstance(first, user_not_found_error)
    assert first is not second


def test_get_exception_instance_unknown_code() -> None:
    assert get_exception_instance("Unregistered") is None


def test_get_exception_instance_after_unregister() -> None:
    @register_exception("Temporary")
    class TemporaryError(ApplicationError):
        pass

    unregister_exception("Temporary")
    assert get_exception_instance("Temporary") is None
