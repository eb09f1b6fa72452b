import logging
from collections.abc import Callable, Mapping
from typing import Any

from bevy import Inject, get_registry, injectable
from bevy.containers import Container

from binder.controllers import ControllerBinding, ControllerRegistry
from binder.exceptions import (
    ControllerNotFoundError,
    InvalidMethodError,
    RouteNotFoundError,
)
from binder.middleware import MiddlewareRegistry
from binder.protocols import Handler, Middleware, RouterProtocol
from binder.routing.bindings import (
    ActionLink,
    MiddlewareHandle,
    RouteBinding,
    RouteInfo,
    RouteRegistry,
)
from binder.routing.chain import run_middleware_chain
from binder.routing.generation import (
    compile_path_template,
    normalize_base_path,
    validate_template,
)

logger = logging.getLogger(__name__)

# (action, method, suffix) in registration order
RESOURCE_ROUTES = (
    ("index", "get", ""),
    ("create", "get", "/new"),
    ("store", "post", ""),
    ("show", "get", "/:id"),
    ("edit", "get", "/:id/edit"),
    ("update", "put", "/:id"),
    ("update", "patch", "/:id"),
    ("destroy", "delete", "/:id"),
)


def split_action(action: str) -> tuple[str, str]:
    """Split ``"Controller.action"`` on its first dot."""
    controller_name, _, action_name = action.partition(".")
    return controller_name, action_name


class ControllerBinder:
    """Binds controller actions to the routes of an external router.

    The binder owns the controller, middleware and route registries. Route
    declarations register a handler on the router that, on every request, looks up
    the current binding for its URL and runs that binding's middleware chain, so
    middleware attached after the route was declared still applies.

    All registration is expected to happen once at startup from a single thread;
    the registries are not locked.

    Examples:
        Binding a controller:

        ```python
        class UsersController:
            def show(self, request, response):
                return {"id": request.path_params["id"]}

        binder = ControllerBinder(router)
        binder.register(UsersController, alias="users")
        binder.register_middleware("auth", require_login)
        binder.get("/users/:id", "UsersController.show").middleware("auth")

        binder.route_for_action("users.show", {"id": 42})  # "/users/42"
        ```

    Args:
        router: Any object with ``get/post/put/patch/delete(url, handler)`` methods.
        container: Bevy container that registered controllers are added to. A new
            container is created from the global registry when omitted.
    """

    def __init__(self, router: RouterProtocol, container: Container | None = None):
        self._router = router
        self._controllers = ControllerRegistry()
        self._middleware = MiddlewareRegistry()
        self._routes = RouteRegistry()
        self.container = container if container is not None else get_registry().create_container()
        self.container.add(ControllerBinder, self)

    def get_router(self) -> RouterProtocol:
        return self._router

    @property
    def controllers(self) -> ControllerRegistry:
        return self._controllers

    @property
    def middleware_registry(self) -> MiddlewareRegistry:
        return self._middleware

    def register(
        self,
        controller_type: type,
        *,
        name: str | None = None,
        alias: str | None = None,
    ) -> ControllerBinding:
        """Instantiate and register a controller.

        The instance is also added to the binder's container under its class so it
        can be injected elsewhere.

        Raises:
            NoNameError: If no name was given and the class has an empty name.
            NameAlreadyBoundError: If the name or alias is already registered.
        """
        binding = self._controllers.register(controller_type, name=name, alias=alias)
        self.container.add(controller_type, binding.controller)
        return binding

    def register_middleware(self, name: str, middleware: Middleware) -> None:
        self._middleware.register(name, middleware)

    def get_controller(self, name: str) -> Any:
        """Return the controller registered under ``name`` or its alias.

        Raises:
            UnknownControllerError: If no controller is registered under ``name``.
        """
        return self._controllers.get_controller(name)

    def add_route(
        self, method: str, url: str, action: str | Handler
    ) -> MiddlewareHandle | None:
        """Bind an action to ``url`` on the router using its ``method`` function.

        Args:
            method: Name of the router's registration function, e.g. "get".
            url: The URL template, with ``:name`` path parameters.
            action: Either ``"Controller.action"`` or a handler callable. Callables
                are passed to the router as-is and are not tracked by the binder.

        Returns:
            A handle for attaching middleware when ``action`` is a string, else None.

        Raises:
            InvalidMethodError: If the router has no ``method`` function.
            InvalidPathTemplateError: If ``url`` uses parameter modifiers.
            ControllerNotFoundError: If the controller in ``action`` isn't registered.
            ControllerActionNotFoundError: If the controller has no such action.
        """
        register_route = self._get_router_method(method)
        validate_template(url)

        if callable(action):
            register_route(url, action)
            logger.debug(f"Registered {method.upper()} {url} with a direct handler")
            return None

        if not isinstance(action, str):
            raise TypeError(
                f"Route actions must be 'Controller.action' strings or callables, got {type(action).__name__}"
            )

        controller_name, action_name = split_action(action)
        if controller_name not in self._controllers:
            raise ControllerNotFoundError(controller_name, self._controllers.names())

        resolved_action = self._controllers.get_binding(controller_name).get_action(action_name)

        register_route(url, self._create_route_handler(url))
        self._routes.bind(
            RouteBinding(
                method=method,
                url=url,
                action=action,
                controller_name=controller_name,
                action_name=action_name,
                middleware=[ActionLink(resolved_action)],
            )
        )
        return MiddlewareHandle(url, self._routes, self._middleware)

    def get(self, url: str, action: str | Handler) -> MiddlewareHandle | None:
        return self.add_route("get", url, action)

    def post(self, url: str, action: str | Handler) -> MiddlewareHandle | None:
        return self.add_route("post", url, action)

    def put(self, url: str, action: str | Handler) -> MiddlewareHandle | None:
        return self.add_route("put", url, action)

    def patch(self, url: str, action: str | Handler) -> MiddlewareHandle | None:
        return self.add_route("patch", url, action)

    def delete(self, url: str, action: str | Handler) -> MiddlewareHandle | None:
        return self.add_route("delete", url, action)

    def resource(self, base: str, controller_name: str) -> list[tuple[str, str]]:
        """Register the conventional RESTful routes for a controller.

        Only the actions the controller actually has are registered:

        | action  | method       | url               |
        |---------|--------------|-------------------|
        | index   | GET          | ``base``          |
        | create  | GET          | ``base/new``      |
        | store   | POST         | ``base``          |
        | show    | GET          | ``base/:id``      |
        | edit    | GET          | ``base/:id/edit`` |
        | update  | PUT, PATCH   | ``base/:id``      |
        | destroy | DELETE       | ``base/:id``      |

        The actions are handed to the router directly, so resource routes are not
        part of ``list_routes()`` and cannot be reverse-resolved.

        Returns:
            The ``(method, url)`` pairs that were registered.

        Raises:
            UnknownControllerError: If ``controller_name`` isn't registered.
        """
        binding = self._controllers.get_binding(controller_name)
        base = normalize_base_path(base)

        registered = []
        for action_name, method, suffix in RESOURCE_ROUTES:
            if action_name not in binding.actions:
                continue

            url = f"{base}{suffix}" or "/"
            self.add_route(method, url, binding.actions[action_name])
            registered.append((method, url))

        logger.debug(f"Registered resource {base} for {binding.name}: {len(registered)} routes")
        return registered

    def route_for_action(self, action: str, params: Mapping[str, Any] | None = None) -> str:
        """Build the URL of the first route bound to ``action``.

        The controller part of ``action`` may be the canonical name or the alias,
        whichever one the route was declared with.

        Raises:
            UnknownControllerError: If the controller isn't registered.
            RouteNotFoundError: If no route is bound to the action.
            MissingPathParameterError: If ``params`` lacks a path parameter.
        """
        controller_name, action_name = split_action(action)
        binding = self._controllers.get_binding(controller_name)

        route = self._routes.find(binding.keys, action_name)
        if route is None:
            raise RouteNotFoundError(action)

        return compile_path_template(route.url)(params or {})

    def list_routes(self) -> list[RouteInfo]:
        return [binding.to_dict() for binding in self._routes]

    def _get_router_method(self, method: str) -> Callable[[str, Handler], Any]:
        if not isinstance(method, str) or method.startswith("_"):
            raise InvalidMethodError(str(method))

        register_route = getattr(self._router, method, None)
        if not callable(register_route):
            raise InvalidMethodError(method)

        return register_route

    def _create_route_handler(self, url: str) -> Handler:
        routes = self._routes

        def handle_route(request: Any, response: Any) -> Any:
            binding = routes.get(url)
            if binding is None or not binding.middleware:
                return None

            return run_middleware_chain(binding.middleware, request, response)

        handle_route.__name__ = f"handle_route[{url}]"
        return handle_route


def create_controller_binder(
    router: RouterProtocol, container: Container | None = None
) -> ControllerBinder:
    """Create a binder for ``router``."""
    return ControllerBinder(router, container)


@injectable
def get_current_binder(container: Inject[Container]) -> ControllerBinder:
    """Retrieves the ControllerBinder registered in the Bevy container."""
    try:
        return container.get(ControllerBinder)
    except Exception as e:
        raise RuntimeError(
            "ControllerBinder not found in the container. Ensure it was created with this container."
        ) from e
