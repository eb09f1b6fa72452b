"""
Protocol definitions for the controller binder.

The binder never imports a concrete router. It only relies on the method-name
surface described here, validated per call.
"""

from abc import abstractmethod
from collections.abc import Callable
from typing import Any, Protocol

type Handler = Callable[[Any, Any], Any]
type Advance = Callable[[], Any]
type Middleware = Callable[[Any, Any, Advance], Any]


class RouterProtocol(Protocol):
    """Protocol for the router the binder registers handlers on."""

    @abstractmethod
    def get(self, url: str, handler: Handler) -> Any:
        """Register a GET handler."""
        ...

    @abstractmethod
    def post(self, url: str, handler: Handler) -> Any:
        """Register a POST handler."""
        ...

    @abstractmethod
    def put(self, url: str, handler: Handler) -> Any:
        """Register a PUT handler."""
        ...

    @abstractmethod
    def patch(self, url: str, handler: Handler) -> Any:
        """Register a PATCH handler."""
        ...

    @abstractmethod
    def delete(self, url: str, handler: Handler) -> Any:
        """Register a DELETE handler."""
        ...
