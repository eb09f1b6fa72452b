"""
Helper utilities for tests.
"""

from types import SimpleNamespace


class MockRouter:
    """Router stand-in that records every registration."""

    def __init__(self):
        self.registered: list[tuple[str, str, object]] = []

    def _record(self, method, url, handler):
        self.registered.append((method, url, handler))

    def get(self, url, handler):
        self._record("get", url, handler)

    def post(self, url, handler):
        self._record("post", url, handler)

    def put(self, url, handler):
        self._record("put", url, handler)

    def patch(self, url, handler):
        self._record("patch", url, handler)

    def delete(self, url, handler):
        self._record("delete", url, handler)

    def handler_for(self, method: str, url: str):
        """The most recently registered handler for ``method`` and ``url``."""
        for registered_method, registered_url, handler in reversed(self.registered):
            if (registered_method, registered_url) == (method, url):
                return handler

        raise AssertionError(f"No handler registered for {method.upper()} {url}")

    def dispatch(self, method: str, url: str, request=None, response=None):
        request = request if request is not None else make_request()
        response = response if response is not None else SimpleNamespace(status=200)
        return self.handler_for(method, url)(request, response)


class LimitedRouter:
    """A router that only supports a few methods."""

    def __init__(self):
        self.registered = []

    def get(self, url, handler):
        self.registered.append(("get", url, handler))

    def post(self, url, handler):
        self.registered.append(("post", url, handler))

    def put(self, url, handler):
        self.registered.append(("put", url, handler))


def make_request(**params):
    return SimpleNamespace(params=params)


def recording_middleware(calls: list, name: str, advance: bool = True):
    """Middleware that appends ``name`` to ``calls`` and optionally advances."""

    def middleware(request, response, next_):
        calls.append(name)
        if advance:
            return next_()

    middleware.__name__ = name
    return middleware
