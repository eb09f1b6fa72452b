import pytest

from binder.exceptions import (
    BinderException,
    ControllerActionNotFoundError,
    ControllerNotFoundError,
    InvalidMethodError,
    InvalidMiddlewareError,
    InvalidPathTemplateError,
    MiddlewareNotFoundError,
    MissingPathParameterError,
    NameAlreadyBoundError,
    NoNameError,
    RouteNotFoundError,
    UnknownControllerError,
)


@pytest.mark.parametrize(
    "error, code, rendered",
    [
        (NoNameError("no name"), 0, "0 - no name"),
        (NameAlreadyBoundError("Users is already bound to a controller"), 1, "1 - Users is already bound to a controller"),
        (UnknownControllerError("Users"), 2, "2 - Cannot find the controller with the name Users"),
        (InvalidMethodError("options"), 1, "1 - options method doesn't exist on router"),
        (
            ControllerNotFoundError("Users", ["Posts", "posts"]),
            2,
            "2 - Controller with the name Users was not found. Available Names: Posts,posts",
        ),
        (
            ControllerActionNotFoundError("show", "Users"),
            3,
            "3 - Action with the name show was not found on the controller Users",
        ),
        (
            MiddlewareNotFoundError("auth", ["audit"]),
            4,
            "4 - Middleware with the name auth was not found. Available Names: audit",
        ),
        (RouteNotFoundError("Users.show"), 5, "5 - No route is bound to the action Users.show"),
        (MissingPathParameterError("id"), 6, "6 - Missing required path parameter: id"),
        (InvalidMiddlewareError("not callable"), 7, "7 - not callable"),
        (InvalidPathTemplateError("/users/:id?", "id"), 8, "8 - Unsupported modifier after :id in /users/:id?"),
    ],
)
def test_error_codes_and_rendering(error, code, rendered):
    assert error.error_code == code
    assert str(error) == rendered


def test_base_exception_defaults_to_class_name():
    error = BinderException()
    assert error.message == "BinderException"
    assert str(error) == "-1 - BinderException"
