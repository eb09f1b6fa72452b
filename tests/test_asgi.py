import pytest
from starlette.responses import PlainTextResponse

from binder import ControllerBinder
from binder.asgi import ResponseBuilder, StarletteRouter
from binder.exceptions import StopChain
from binder.test_client import create_test_client
from tests import sample_app


class ItemsController:
    def show(self, request, response):
        return {"id": request.path_params["id"]}

    def create(self, request, response):
        response.set_status(201).add_header("location", "/items/1")
        return "created"

    def page(self, request, response):
        response.content_type("text/html").body("<h1>Items</h1>")

    async def slow(self, request, response):
        return "awaited"

    async def halted(self, request, response):
        raise StopChain("stopped")

    def moved(self, request, response):
        response.redirect("/items/1")


@pytest.fixture
def app():
    router = StarletteRouter()
    binder = ControllerBinder(router)
    binder.register(ItemsController, alias="items")
    return router, binder


@pytest.mark.asyncio
async def test_bound_route_returns_json(app):
    router, binder = app
    binder.get("/items/:id", "items.show")

    async with create_test_client(router) as client:
        response = await client.get(binder.route_for_action("items.show", {"id": 42}))

    assert response.status_code == 200
    assert response.json() == {"id": "42"}


@pytest.mark.asyncio
async def test_status_and_headers(app):
    router, binder = app
    binder.post("/items", "ItemsController.create")

    async with create_test_client(router) as client:
        response = await client.post("/items")

    assert response.status_code == 201
    assert response.headers["location"] == "/items/1"
    assert response.text == "created"


@pytest.mark.asyncio
async def test_explicit_html_body(app):
    router, binder = app
    binder.get("/page", "ItemsController.page")

    async with create_test_client(router) as client:
        response = await client.get("/page")

    assert response.headers["content-type"].startswith("text/html")
    assert response.text == "<h1>Items</h1>"


@pytest.mark.asyncio
async def test_async_action_is_awaited(app):
    router, binder = app
    binder.get("/slow", "ItemsController.slow")

    async with create_test_client(router) as client:
        response = await client.get("/slow")

    assert response.text == "awaited"


@pytest.mark.asyncio
async def test_stop_chain_from_async_action(app):
    router, binder = app
    binder.get("/halted", "ItemsController.halted")

    async with create_test_client(router) as client:
        response = await client.get("/halted")

    assert response.status_code == 200
    assert response.text == "stopped"


@pytest.mark.asyncio
async def test_redirect(app):
    router, binder = app
    binder.get("/old", "ItemsController.moved")

    async with create_test_client(router) as client:
        response = await client.get("/old")

    assert response.status_code == 302
    assert response.headers["location"] == "/items/1"


@pytest.mark.asyncio
async def test_middleware_short_circuits_request(app):
    router, binder = app
    binder.register_middleware("token", sample_app.require_token)
    binder.get("/items/:id", "items.show").middleware("token")

    async with create_test_client(router) as client:
        denied = await client.get("/items/1")
        allowed = await client.get("/items/1", headers={"x-token": "secret"})

    assert denied.status_code == 401
    assert denied.text == "unauthorized"
    assert allowed.json() == {"id": "1"}


@pytest.mark.asyncio
async def test_stop_chain_result_becomes_response(app):
    router, binder = app

    def maintenance(request, response, next_):
        raise StopChain(PlainTextResponse("down for maintenance", status_code=503))

    binder.register_middleware("maintenance", maintenance)
    binder.get("/items/:id", "items.show").middleware("maintenance")

    async with create_test_client(router) as client:
        response = await client.get("/items/1")

    assert response.status_code == 503
    assert response.text == "down for maintenance"


@pytest.mark.asyncio
async def test_direct_handler_and_resource(app):
    router, binder = app
    binder.register(sample_app.PostsController)
    binder.get("/health", sample_app.health)
    binder.resource("/posts", "PostsController")

    async with create_test_client(router) as client:
        health = await client.get("/health")
        post = await client.get("/posts/3")
        posts = await client.get("/posts")

    assert health.text == "ok"
    assert post.text == "post 3"
    assert posts.text == "posts"


@pytest.mark.asyncio
async def test_unbound_path_is_not_found(app):
    router, _ = app

    async with create_test_client(router) as client:
        response = await client.get("/nothing")

    assert response.status_code == 404


def test_response_builder_defaults():
    response = ResponseBuilder().render()
    assert response.status_code == 200
    assert response.body == b""


def test_response_builder_prefers_explicit_body():
    response = ResponseBuilder().body({"explicit": True}).render("ignored")
    assert response.body == b'{"explicit":true}'


def test_starlette_router_translates_params():
    router = StarletteRouter()
    router.get("/users/:id", sample_app.health)
    assert router.routes[0].path == "/users/{id}"
