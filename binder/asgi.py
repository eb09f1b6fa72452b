"""A router for the binder backed by starlette.

``StarletteRouter`` exposes the ``get/post/put/patch/delete(url, handler)`` surface
the binder registers on, and is itself an ASGI application. Handlers are called as
``handler(request, response)`` with a starlette ``Request`` and a
``ResponseBuilder``; whatever they set on the builder, or return, becomes the HTTP
response.
"""

import inspect
import logging
from typing import Any

from starlette.requests import Request
from starlette.responses import (
    HTMLResponse,
    JSONResponse,
    PlainTextResponse,
    RedirectResponse,
    Response,
)
from starlette.routing import Router
from starlette.types import Receive, Scope, Send

from binder.exceptions import StopChain
from binder.protocols import Handler
from binder.routing.generation import to_starlette_path

logger = logging.getLogger(__name__)

_UNSET = object()


class ResponseBuilder:
    """Collects the status, headers and body a handler wants to send."""

    def __init__(self):
        self.status_code = 200
        self.headers: dict[str, str] = {}
        self.media_type: str | None = None
        self._body: Any = _UNSET
        self._redirect: str | None = None

    @property
    def has_body(self) -> bool:
        return self._body is not _UNSET

    def set_status(self, status_code: int) -> "ResponseBuilder":
        self.status_code = status_code
        return self

    def add_header(self, name: str, value: str) -> "ResponseBuilder":
        self.headers[name] = value
        return self

    def content_type(self, media_type: str) -> "ResponseBuilder":
        self.media_type = media_type
        return self

    def body(self, content: Any) -> "ResponseBuilder":
        self._body = content
        return self

    def redirect(self, url: str, status_code: int = 302) -> "ResponseBuilder":
        self._redirect = url
        self.status_code = status_code
        return self

    def render(self, result: Any = None) -> Response:
        """Build the starlette response, preferring an explicit body over ``result``."""
        if self._redirect is not None:
            return RedirectResponse(self._redirect, self.status_code, headers=self.headers)

        content = self._body if self.has_body else result
        match content:
            case Response():
                return content

            case dict() | list():
                return JSONResponse(content, self.status_code, headers=self.headers)

            case None:
                return Response(
                    None, self.status_code, headers=self.headers, media_type=self.media_type
                )

            case str() if self.media_type == "text/html":
                return HTMLResponse(content, self.status_code, headers=self.headers)

            case bytes() | str() if self.media_type:
                return Response(
                    content, self.status_code, headers=self.headers, media_type=self.media_type
                )

            case bytes():
                return Response(content, self.status_code, headers=self.headers)

            case _:
                return PlainTextResponse(str(content), self.status_code, headers=self.headers)


class StarletteRouter:
    """Router implementation for the binder on top of ``starlette.routing.Router``.

    Examples:
        ```python
        router = StarletteRouter()
        binder = ControllerBinder(router)
        binder.register(UsersController)
        binder.get("/users/:id", "UsersController.show")

        # router is an ASGI app
        uvicorn.run(router)
        ```
    """

    def __init__(self):
        self.router = Router()

    @property
    def routes(self):
        return self.router.routes

    def add(self, method: str, url: str, handler: Handler) -> None:
        path = to_starlette_path(url) or "/"
        self.router.add_route(path, self._create_endpoint(handler), methods=[method.upper()])
        logger.debug(f"Added starlette route {method.upper()} {path}")

    def get(self, url: str, handler: Handler) -> None:
        self.add("get", url, handler)

    def post(self, url: str, handler: Handler) -> None:
        self.add("post", url, handler)

    def put(self, url: str, handler: Handler) -> None:
        self.add("put", url, handler)

    def patch(self, url: str, handler: Handler) -> None:
        self.add("patch", url, handler)

    def delete(self, url: str, handler: Handler) -> None:
        self.add("delete", url, handler)

    @staticmethod
    def _create_endpoint(handler: Handler):
        async def endpoint(request: Request) -> Response:
            response = ResponseBuilder()
            result = handler(request, response)
            if inspect.isawaitable(result):
                try:
                    result = await result
                except StopChain as signal:
                    # raised inside an async action, after the chain runner returned
                    result = signal.result

            return response.render(result)

        return endpoint

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.router(scope, receive, send)
