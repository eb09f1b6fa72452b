"""Route bindings: the record of which action and middleware serve a URL."""

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypedDict

from binder.protocols import Advance, Middleware

if TYPE_CHECKING:
    from binder.middleware import MiddlewareRegistry

logger = logging.getLogger(__name__)


class RouteInfo(TypedDict):
    url: str
    method: str
    action: str
    controller_name: str
    action_name: str
    middleware: list[Middleware]


@dataclass(frozen=True)
class ActionLink:
    """Terminal link of a chain, calling a controller action as a route handler.

    Actions take ``(request, response)``; the link drops the ``advance`` callback
    because nothing runs after the action.
    """

    action: Callable[..., Any]

    def __call__(self, request: Any, response: Any, advance: Advance) -> Any:
        return self.action(request, response)


@dataclass
class RouteBinding:
    method: str
    url: str
    action: str
    controller_name: str
    action_name: str
    middleware: list[Middleware] = field(default_factory=list)

    def prepend_middleware(self, middleware: Iterable[Middleware]) -> None:
        # The list is replaced, not mutated, so chains already running keep their links
        self.middleware = [*middleware, *self.middleware]

    def to_dict(self) -> RouteInfo:
        return RouteInfo(
            url=self.url,
            method=self.method,
            action=self.action,
            controller_name=self.controller_name,
            action_name=self.action_name,
            middleware=list(self.middleware),
        )


class RouteRegistry:
    """Route bindings keyed by URL template, kept in registration order.

    Binding a URL that is already bound replaces the old binding in place, so its
    position in the listing does not change.
    """

    def __init__(self):
        self._routes: dict[str, RouteBinding] = {}

    def bind(self, binding: RouteBinding) -> RouteBinding:
        previous = self._routes.get(binding.url)
        if previous is not None:
            logger.warning(
                f"Rebinding {binding.url}: {previous.method.upper()} {previous.action} "
                f"replaced by {binding.method.upper()} {binding.action}"
            )

        self._routes[binding.url] = binding
        logger.debug(f"Bound {binding.method.upper()} {binding.url} to {binding.action}")
        return binding

    def get(self, url: str) -> RouteBinding | None:
        return self._routes.get(url)

    def find(self, controller_names: Iterable[str], action_name: str) -> RouteBinding | None:
        """First binding, in registration order, for the action on any of the controller names."""
        names = set(controller_names)
        for binding in self._routes.values():
            if binding.controller_name in names and binding.action_name == action_name:
                return binding

        return None

    def __iter__(self) -> Iterator[RouteBinding]:
        return iter(list(self._routes.values()))

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, url: object) -> bool:
        return url in self._routes


class MiddlewareHandle:
    """Attaches named middleware to the route bound at ``url``.

    Returned by the binder whenever a string action is bound, so middleware can be
    declared next to the route:

        binder.get("/admin", "Admin.index").middleware(["auth", "audit"])

    Middleware attached later runs before whatever the route already has.
    """

    def __init__(self, url: str, routes: RouteRegistry, registry: "MiddlewareRegistry"):
        self.url = url
        self._routes = routes
        self._registry = registry

    def middleware(self, names: str | Iterable[str]) -> "MiddlewareHandle":
        if self.url not in self._routes:
            return self

        binding = self._routes.get(self.url)
        resolved = self._registry.resolve(names)
        binding.prepend_middleware(resolved)
        logger.debug(
            f"Attached middleware {names!r} to {self.url}, chain length {len(binding.middleware)}"
        )
        return self

    def __repr__(self):
        return f"<MiddlewareHandle {self.url}>"
