"""URL generation utilities for bound routes.

This module compiles ``:name`` style URL templates into functions that substitute
path parameters, enabling reverse URL generation for actions bound to the router.
"""

import re
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import quote

from starlette.routing import compile_path

from binder.exceptions import InvalidPathTemplateError, MissingPathParameterError

PARAM_PATTERN = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")
MODIFIED_PARAM_PATTERN = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)[?*+(]")

type Encoder = Callable[[str], str]
type PathBuilder = Callable[[Mapping[str, Any] | None], str]


def quote_component(value: str) -> str:
    """Percent-encode a single path segment the way ``encodeURIComponent`` does."""
    return quote(value, safe="!*'()")


def validate_template(template: str) -> None:
    """Reject parameters followed by a modifier or an inline pattern.

    Only plain ``:name`` segments are supported, so ``:id?``, ``:path*``, ``:ids+``
    and ``:id(\\d+)`` raise instead of being routed or built literally.

    Raises:
        InvalidPathTemplateError: If a parameter carries a modifier.
    """
    if match := MODIFIED_PARAM_PATTERN.search(template):
        raise InvalidPathTemplateError(template, match.group(1))


def to_starlette_path(template: str) -> str:
    """Translate ``:name`` placeholders into starlette's ``{name}`` syntax.

    Raises:
        InvalidPathTemplateError: If a parameter carries a modifier.

    Examples:
        >>> to_starlette_path("/users/:user_id/posts/:post_id")
        "/users/{user_id}/posts/{post_id}"
    """
    validate_template(template)
    return PARAM_PATTERN.sub(r"{\1}", template)


def compile_path_template(template: str, encode: Encoder = quote_component) -> PathBuilder:
    """Compile a URL template into a function that builds concrete paths.

    Args:
        template: The path pattern with ``:name`` placeholders (e.g. "/users/:id")
        encode: Applied to every stringified parameter value before substitution

    Returns:
        A function taking a mapping of parameter values and returning the path.
        Parameters the template does not use are ignored. ``None`` and empty
        values count as missing.

    Raises:
        InvalidPathTemplateError: If a parameter carries a modifier.
        ValueError: From starlette when the template repeats a parameter name.

    Examples:
        >>> build = compile_path_template("/users/:user_id")
        >>> build({"user_id": 123})
        "/users/123"

        >>> compile_path_template("/search/:term")({"term": "a b/c"})
        "/search/a%20b%2Fc"
    """
    _, path_format, convertors = compile_path(to_starlette_path(template))
    param_names = list(convertors)

    def build(params: Mapping[str, Any] | None = None) -> str:
        params = params or {}
        path = path_format
        for name in param_names:
            value = params.get(name)
            if value is None or value == "":
                raise MissingPathParameterError(name)
            path = path.replace("{" + name + "}", encode(str(value)))
        return path

    return build


def build_url_from_template(template: str, params: Mapping[str, Any] | None = None) -> str:
    """Build a URL by substituting path parameters into ``template``.

    Examples:
        >>> build_url_from_template("/api/v:version/users/:user_id", {"version": 1, "user_id": 123})
        "/api/v1/users/123"
    """
    return compile_path_template(template)(params)


def normalize_base_path(base: str) -> str:
    """Ensure a base path starts with a '/' and does not end with one."""
    if not base.startswith("/"):
        base = "/" + base
    if base.endswith("/"):
        base = base[:-1]
    return base
