"""Controller registry.

Controllers are plain classes whose public methods are actions. They are
instantiated once when registered and looked up by their canonical name or an
optional alias. The action table is collected eagerly at registration, so routes
are validated against it rather than probing the instance on every call.

A controller may list its actions explicitly::

    class UsersController:
        __actions__ = ("index", "show")

        def index(self, request, response): ...
        def show(self, request, response): ...
        def helper(self): ...  # not an action

Without ``__actions__`` every public method defined on the class is an action.
Properties and nested classes are never actions.
"""

import inspect
import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from binder.exceptions import (
    ControllerActionNotFoundError,
    NameAlreadyBoundError,
    NoNameError,
    UnknownControllerError,
)

logger = logging.getLogger(__name__)

type ActionTable = Mapping[str, Callable[..., Any]]


@dataclass(frozen=True)
class ControllerBinding:
    """A registered controller instance and the keys it can be found under."""

    name: str
    alias: str | None
    controller: Any
    actions: ActionTable = field(default_factory=dict, repr=False)

    @property
    def keys(self) -> tuple[str, ...]:
        return (self.name, self.alias) if self.alias else (self.name,)

    def get_action(self, action_name: str) -> Callable[..., Any]:
        try:
            return self.actions[action_name]
        except KeyError:
            raise ControllerActionNotFoundError(action_name, self.name) from None


def collect_actions(controller: Any) -> ActionTable:
    """Build the action table for a controller instance.

    Honors an explicit ``__actions__`` declaration on the controller's class,
    otherwise collects every public method. Members are inspected statically so
    properties are never evaluated.

    Raises:
        ControllerActionNotFoundError: If a declared action is missing or not callable.
    """
    declared = getattr(type(controller), "__actions__", None)
    controller_name = type(controller).__name__ or repr(controller)
    actions = {}
    if declared is not None:
        for name in declared:
            action = getattr(controller, name, None)
            if not callable(action):
                raise ControllerActionNotFoundError(name, controller_name)
            actions[name] = action

    else:
        for name in dir(controller):
            if name.startswith("_"):
                continue

            member = inspect.getattr_static(type(controller), name, None)
            if isinstance(member, staticmethod | classmethod):
                member = member.__func__

            if inspect.isfunction(member):
                actions[name] = getattr(controller, name)

    return MappingProxyType(actions)


class ControllerRegistry:
    """Maps controller names and aliases to their bindings."""

    def __init__(self):
        self._bindings: dict[str, ControllerBinding] = {}

    def register(
        self,
        controller_type: type,
        *,
        name: str | None = None,
        alias: str | None = None,
    ) -> ControllerBinding:
        """Instantiate ``controller_type`` and register it.

        Args:
            controller_type: The controller class, instantiated with no arguments.
            name: Overrides the class name as the canonical name.
            alias: A second name the controller can be referenced by.

        Returns:
            The new binding, stored under both ``name`` and ``alias``.

        Raises:
            NoNameError: If no name was given and the class has an empty name.
            NameAlreadyBoundError: If the name or alias is already registered.
        """
        resolved_name = name or getattr(controller_type, "__name__", "")
        if not resolved_name:
            raise NoNameError(
                "A name for the controller wasn't provided, please provide a named class "
                "or provide a name with the `name` argument to `register`"
            )

        if alias == resolved_name:
            alias = None

        for key in (resolved_name, alias):
            if key and key in self._bindings:
                raise NameAlreadyBoundError(f"{key} is already bound to a controller")

        controller = controller_type()
        binding = ControllerBinding(
            name=resolved_name,
            alias=alias or None,
            controller=controller,
            actions=collect_actions(controller),
        )
        for key in binding.keys:
            self._bindings[key] = binding

        logger.debug(
            f"Registered controller {resolved_name}"
            + (f" (alias {alias})" if alias else "")
            + f" with actions: {', '.join(binding.actions) or 'none'}"
        )
        return binding

    def get_binding(self, name: str) -> ControllerBinding:
        """Look up a binding by name or alias.

        Raises:
            UnknownControllerError: If nothing is registered under ``name``.
        """
        try:
            return self._bindings[name]
        except KeyError:
            raise UnknownControllerError(name) from None

    def get_controller(self, name: str) -> Any:
        return self.get_binding(name).controller

    def names(self) -> list[str]:
        """Every registered key, names and aliases, in registration order."""
        return list(self._bindings)

    def bindings(self) -> list[ControllerBinding]:
        """Each binding once, in registration order."""
        return list({id(binding): binding for binding in self._bindings.values()}.values())

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def __iter__(self) -> Iterator[ControllerBinding]:
        return iter(self.bindings())

    def __len__(self) -> int:
        return len(self.bindings())
