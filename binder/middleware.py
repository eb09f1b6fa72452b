import logging
from collections.abc import Iterable

from binder.exceptions import InvalidMiddlewareError, MiddlewareNotFoundError
from binder.protocols import Middleware

logger = logging.getLogger(__name__)


class MiddlewareRegistry:
    """Named middleware that routes can reference when attaching chains.

    Middleware must be registered before a route references it by name. Lookups
    of unknown names fail immediately rather than leaving a hole in the chain.
    """

    def __init__(self):
        self._middleware: dict[str, Middleware] = {}

    def register(self, name: str, middleware: Middleware) -> None:
        if not callable(middleware):
            raise InvalidMiddlewareError(
                f"Middleware {name} must be callable, got {type(middleware).__name__}"
            )

        if name in self:
            logger.warning(f"Replacing middleware registered as {name}")

        self._middleware[name] = middleware
        logger.debug(f"Registered middleware {name}")

    def get(self, name: str) -> Middleware:
        try:
            return self._middleware[name]
        except KeyError:
            raise MiddlewareNotFoundError(name, self.names()) from None

    def resolve(self, names: str | Iterable[str]) -> list[Middleware]:
        """Resolve one name or a sequence of names, preserving their order."""
        if isinstance(names, str):
            names = [names]

        return [self.get(name) for name in names]

    def names(self) -> list[str]:
        return list(self._middleware)

    def __contains__(self, name: object) -> bool:
        return name in self._middleware
