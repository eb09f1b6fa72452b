"""Routing layer for the binder - route bindings, middleware chains, URL generation."""

from binder.routing.bindings import (
    ActionLink,
    MiddlewareHandle,
    RouteBinding,
    RouteInfo,
    RouteRegistry,
)
from binder.routing.chain import MiddlewareChain, run_middleware_chain
from binder.routing.generation import (
    build_url_from_template,
    compile_path_template,
    normalize_base_path,
    quote_component,
)

__all__ = [
    "ActionLink",
    "MiddlewareChain",
    "MiddlewareHandle",
    "RouteBinding",
    "RouteInfo",
    "RouteRegistry",
    "build_url_from_template",
    "compile_path_template",
    "normalize_base_path",
    "quote_component",
    "run_middleware_chain",
]
