"""Cooperative middleware chain execution.

A chain is an ordered sequence of callables shaped ``(request, response, advance)``.
Each link decides whether the rest of the chain runs by calling ``advance``; a link
that returns without calling it short-circuits everything after it. Bound routes
always carry their controller action as the final link.
"""

import logging
from collections.abc import Sequence
from typing import Any

from binder.exceptions import InvalidMiddlewareError, StopChain
from binder.protocols import Advance, Middleware

logger = logging.getLogger(__name__)


def _describe(link: Any) -> str:
    return getattr(link, "__qualname__", None) or getattr(link, "__name__", None) or repr(link)


class MiddlewareChain:
    """Runs one pass over a middleware chain for a single request.

    The runner keeps an explicit cursor into the chain. Every link receives its own
    ``advance`` callback that invokes the next link (with a fresh ``advance``) and
    returns that link's result. Each ``advance`` fires at most once; repeat calls are
    ignored. Once the cursor passes the last link ``advance`` is a no-op returning
    ``None``.

    Args:
        chain: The links to run, first to last.
        request: The live request object handed to every link.
        response: The live response object handed to every link.

    Examples:
        ```python
        def auth(request, response, advance):
            if request.user is None:
                response.status = 401
                return  # never advances, the action does not run
            return advance()

        MiddlewareChain([auth, controller.show], request, response).run()
        ```
    """

    def __init__(self, chain: Sequence[Middleware], request: Any, response: Any):
        self._chain = tuple(chain)
        self._request = request
        self._response = response
        self._cursor = 0

    @property
    def cursor(self) -> int:
        """Index of the next link to run."""
        return self._cursor

    @property
    def exhausted(self) -> bool:
        return self._cursor >= len(self._chain)

    def run(self) -> Any:
        """Run the chain from its first link and return that link's result.

        ``StopChain`` raised by any link ends the chain and its ``result`` is returned.
        Every other exception propagates to the caller unchanged.

        Raises:
            InvalidMiddlewareError: When the chain reaches a link that is not callable.
        """
        try:
            return self._call_next()
        except StopChain as signal:
            logger.debug(f"Middleware chain of {len(self._chain)} links stopped by StopChain")
            return signal.result

    def _call_next(self) -> Any:
        if self.exhausted:
            return None

        index = self._cursor
        link = self._chain[index]
        if not callable(link):
            raise InvalidMiddlewareError(
                f"Middleware chain link {index} is not callable: {link!r}"
            )

        self._cursor += 1
        return link(self._request, self._response, self._make_advance(index))

    def _make_advance(self, index: int) -> Advance:
        called = False

        def advance() -> Any:
            nonlocal called
            if called:
                logger.warning(
                    f"advance() called more than once by {_describe(self._chain[index])}; ignoring"
                )
                return None

            called = True
            return self._call_next()

        return advance


def run_middleware_chain(chain: Sequence[Middleware], request: Any, response: Any) -> Any:
    """Run ``chain`` for one request and return the first link's result."""
    return MiddlewareChain(chain, request, response).run()
