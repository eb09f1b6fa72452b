import pytest

from binder.exceptions import InvalidPathTemplateError, MissingPathParameterError
from binder.routing.generation import (
    build_url_from_template,
    compile_path_template,
    normalize_base_path,
    to_starlette_path,
)


def test_compile_basic():
    build = compile_path_template("/user/:id")
    assert build({"id": 123}) == "/user/123"


def test_compile_multiple_params():
    build = compile_path_template("/posts/:post_id/comments/:comment_id")
    assert build({"post_id": 456, "comment_id": "abc"}) == "/posts/456/comments/abc"


def test_compiled_template_is_reusable():
    build = compile_path_template("/user/:id")
    assert [build({"id": i}) for i in (1, 2)] == ["/user/1", "/user/2"]


def test_static_template():
    assert build_url_from_template("/about") == "/about"


def test_embedded_param():
    assert build_url_from_template("/api/v:version/users", {"version": 2}) == "/api/v2/users"


def test_extra_params_are_ignored():
    assert build_url_from_template("/user/:id", {"id": 1, "tab": "posts"}) == "/user/1"


def test_values_are_encoded():
    assert build_url_from_template("/files/:name", {"name": "my file/v2?.txt"}) == "/files/my%20file%2Fv2%3F.txt"


def test_unreserved_characters_are_kept():
    assert build_url_from_template("/t/:tag", {"tag": "a-b_c.d~e!f*(g)'"}) == "/t/a-b_c.d~e!f*(g)'"


def test_custom_encoder():
    build = compile_path_template("/files/:path", encode=str)
    assert build({"path": "docs/readme.txt"}) == "/files/docs/readme.txt"


def test_missing_param():
    with pytest.raises(MissingPathParameterError, match="Missing required path parameter: id"):
        build_url_from_template("/user/:id", {})


def test_missing_param_is_value_error():
    with pytest.raises(ValueError):
        build_url_from_template("/user/:id/:tab", {"id": 1})


def test_none_counts_as_missing():
    with pytest.raises(MissingPathParameterError):
        build_url_from_template("/user/:id", {"id": None})


def test_to_starlette_path():
    assert to_starlette_path("/users/:user_id/posts/:post_id") == "/users/{user_id}/posts/{post_id}"


@pytest.mark.parametrize("template", ["/users/:id?", "/files/:path*", "/tags/:tags+", "/n/:id(\\d+)"])
def test_parameter_modifiers_are_rejected(template):
    with pytest.raises(InvalidPathTemplateError, match="Unsupported modifier after :"):
        compile_path_template(template)


def test_empty_value_counts_as_missing():
    with pytest.raises(MissingPathParameterError, match="Missing required path parameter: id"):
        build_url_from_template("/user/:id", {"id": ""})


def test_zero_is_a_value():
    assert build_url_from_template("/page/:n", {"n": 0}) == "/page/0"


@pytest.mark.parametrize(
    "base, expected",
    [
        ("users", "/users"),
        ("/users", "/users"),
        ("/users/", "/users"),
        ("users/", "/users"),
        ("/api/users/", "/api/users"),
    ],
)
def test_normalize_base_path(base, expected):
    assert normalize_base_path(base) == expected
