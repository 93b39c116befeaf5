"""Tests for willow.routing.sanic_registrar: handing the table to Sanic."""

import asyncio
import json

import pytest
from sanic.exceptions import NotFound
from sanic.response import text

from willow.controller import Controller
from willow.routing import RouteCollection, Router
from willow.routing.sanic_registrar import (
    SanicRouteRegistrar,
    select_route,
    to_response,
    to_sanic_uri,
)

AJAX = {"X-Requested-With": "XMLHttpRequest"}


class Blog(Controller):
    calls = []

    @classmethod
    def routes(cls) -> RouteCollection:
        return RouteCollection.create(cls) \
            .GET("blog.show", "/blog/@id").handler("show") \
            .GET("blog.feed", "/blog/feed").static_handler("feed").ttl(60) \
            .POST("blog.store", "/blog").handler("store").ajax() \
            .GET("blog.page", "/blog/page").handler("page").sync() \
            .GET("blog.purge", "/blog/purge").handler("purge").cli() \
            .GET("public", "/public/@controller/@action/@id").dynamic_handler("@controller->@action") \
            .GET("public.static", "/static/@controller/@action").dynamic_handler("@controller::@action") \
            .build()

    def before_route(self, request):
        Blog.calls.append("before")

    async def after_route(self, request):
        Blog.calls.append("after")

    async def show(self, request, id):
        Blog.calls.append(f"show:{id}")
        return f"post {id}"

    @staticmethod
    def feed(request):
        return {"posts": [1, 2]}

    def store(self, request):
        return text("stored", status=201)

    def page(self, request):
        return "page"

    def purge(self, request):
        return None

    def _secret(self, request, **params):
        return "secret"


class RecordingApp:
    def __init__(self):
        self.added = []

    def add_route(self, handler, uri, methods=None, name=None):
        self.added.append((handler, uri, methods, name))


@pytest.fixture(autouse=True)
def reset_calls():
    Blog.calls = []


@pytest.fixture
def router() -> Router:
    return Router.of([Blog.routes()])


@pytest.fixture
def registrar() -> SanicRouteRegistrar:
    return SanicRouteRegistrar(RecordingApp(), controllers=[Blog])


def _dispatch(registrar, router, route_name, request, **params):
    handler = registrar.make_handler(router.get_route(route_name))
    return asyncio.run(handler(request, **params))


class TestToSanicUri:
    @pytest.mark.parametrize("pattern,expected", [
        ("/", "/"),
        ("/blog/@id", "/blog/<id>"),
        ("/blog/{id}", "/blog/<id>"),
        ("/blog/{id?}", "/blog/<id>"),
        ("/@controller/@action", "/<controller>/<action>"),
        ("/files/*", "/files/<path:path>"),
        ("blog", "/blog"),
    ])
    def test_patterns(self, pattern, expected) -> None:
        assert to_sanic_uri(pattern) == expected


class TestToResponse:
    def test_string_becomes_html(self) -> None:
        response = to_response("hi")
        assert response.body == b"hi"
        assert response.content_type.startswith("text/html")

    def test_dict_becomes_json(self) -> None:
        assert json.loads(to_response({"a": 1}).body) == {"a": 1}

    def test_none_becomes_empty(self) -> None:
        assert to_response(None).status == 204

    def test_response_passes_through(self) -> None:
        response = text("x")
        assert to_response(response) is response


class TestRegister:
    def test_cli_routes_are_skipped(self, router, registrar) -> None:
        count = registrar.register(router)
        names = [name for _, _, _, name in registrar.sanic_app.added]

        assert count == len(router) - 1
        assert "blog.purge" not in names
        assert names == [r.get_name() for r in router if r.get_name() != "blog.purge"]

    def test_uri_and_methods(self, router, registrar) -> None:
        registrar.register(router)
        _, uri, methods, name = registrar.sanic_app.added[0]
        assert (uri, methods, name) == ("/blog/<id>", ["GET"], "blog.show")

    def test_route_without_handler_is_skipped(self) -> None:
        routes = RouteCollection.create(Blog).GET("bare", "/bare").build()
        registrar = SanicRouteRegistrar(RecordingApp())
        assert registrar.register(Router.of([routes])) == 0

    def test_owners_become_resolvable(self, router) -> None:
        registrar = SanicRouteRegistrar(RecordingApp())
        registrar.register(router)
        assert registrar.resolve_controller("Blog") is Blog
        assert registrar.resolve_controller("blog") is Blog
        assert registrar.resolve_controller(f"{Blog.__module__}.Blog") is Blog
        assert registrar.resolve_controller("Nope") is None

    def test_flag_variants_share_one_sanic_route(self) -> None:
        routes = RouteCollection.create(Blog) \
            .GET("items.partial", "/items").handler("page").ajax() \
            .GET("items.page", "/items").handler("page").sync() \
            .GET("items.json", "/items").handler("page") \
            .POST("items.store", "/items").handler("store") \
            .build()
        registrar = SanicRouteRegistrar(RecordingApp())

        assert registrar.register(Router.of([routes])) == 4
        added = [(uri, methods, name) for _, uri, methods, name in registrar.sanic_app.added]
        assert added == [
            ("/items", ["GET"], "items.partial"),
            ("/items", ["POST"], "items.store"),
        ]


class TestDispatch:
    def test_instance_method_runs_hooks_around_action(self, router, registrar, fake_request) -> None:
        response = _dispatch(registrar, router, "blog.show", fake_request(), id="7")
        assert response.body == b"post 7"
        assert Blog.calls == ["before", "show:7", "after"]

    def test_static_method_skips_instance(self, router, registrar, fake_request) -> None:
        response = _dispatch(registrar, router, "blog.feed", fake_request())
        assert json.loads(response.body) == {"posts": [1, 2]}
        assert Blog.calls == []

    def test_ttl_sets_cache_control(self, router, registrar, fake_request) -> None:
        response = _dispatch(registrar, router, "blog.feed", fake_request())
        assert response.headers["Cache-Control"] == "public, max-age=60"

    def test_no_cache_header_without_ttl(self, router, registrar, fake_request) -> None:
        response = _dispatch(registrar, router, "blog.show", fake_request(), id="1")
        assert "Cache-Control" not in response.headers

    def test_route_exposed_on_request(self, router, registrar, fake_request) -> None:
        request = fake_request()
        _dispatch(registrar, router, "blog.feed", request)
        assert request.ctx.route is router.get_route("blog.feed")

    def test_callback(self, registrar, fake_request) -> None:
        async def ping(request, name):
            return f"pong {name}"

        routes = RouteCollection.create(None).GET("ping", "/ping/@name").callback(ping).build()
        response = _dispatch(registrar, Router.of([routes]), "ping", fake_request(), name="bob")
        assert response.body == b"pong bob"


class TestFlags:
    def test_ajax_route_refuses_plain_requests(self, router, registrar, fake_request) -> None:
        with pytest.raises(NotFound):
            _dispatch(registrar, router, "blog.store", fake_request(method="POST"))

    def test_ajax_route_answers_ajax(self, router, registrar, fake_request) -> None:
        response = _dispatch(registrar, router, "blog.store", fake_request(headers=AJAX, method="POST"))
        assert response.status == 201

    def test_sync_route_refuses_ajax(self, router, registrar, fake_request) -> None:
        with pytest.raises(NotFound):
            _dispatch(registrar, router, "blog.page", fake_request(headers=AJAX))
        assert _dispatch(registrar, router, "blog.page", fake_request()).body == b"page"


class TestSelectRoute:
    @pytest.fixture
    def variants(self):
        return RouteCollection.create(Blog) \
            .GET("plain", "/x").handler("page") \
            .GET("partial", "/x").handler("page").ajax() \
            .GET("page", "/x").handler("page").sync() \
            .build().get_routes()

    def test_flagged_route_wins(self, variants) -> None:
        plain, partial, page = variants
        assert select_route(variants, ajax=True) is partial
        assert select_route(variants, ajax=False) is page

    def test_unflagged_route_answers_both(self, variants) -> None:
        plain, partial, page = variants
        assert select_route([plain, partial], ajax=False) is plain
        assert select_route([page, plain], ajax=True) is plain

    def test_no_route_answers(self, variants) -> None:
        plain, partial, page = variants
        assert select_route([page], ajax=True) is None
        assert select_route([partial], ajax=False) is None

    def test_grouped_handler_dispatches_variant(self, registrar, fake_request) -> None:
        routes = RouteCollection.create(Blog) \
            .GET("items.partial", "/items").static_handler("feed").ajax() \
            .GET("items.page", "/items").handler("page").sync() \
            .build().get_routes()
        handler = registrar.make_handler(*routes)

        request = fake_request(headers=AJAX)
        response = asyncio.run(handler(request))
        assert json.loads(response.body) == {"posts": [1, 2]}
        assert request.ctx.route is routes[0]

        request = fake_request()
        assert asyncio.run(handler(request)).body == b"page"
        assert request.ctx.route is routes[1]


class TestDynamicHandler:
    def test_resolve_expression(self) -> None:
        resolved, remaining = SanicRouteRegistrar.resolve_expression(
            "@controller->@action", {"controller": "blog", "action": "show", "id": "3"}
        )
        assert resolved == "blog->show"
        assert remaining == {"id": "3"}

    def test_unknown_tokens_are_kept(self) -> None:
        resolved, remaining = SanicRouteRegistrar.resolve_expression("@controller->index", {})
        assert resolved == "@controller->index"
        assert remaining == {}

    def test_instance_dispatch(self, router, registrar, fake_request) -> None:
        response = _dispatch(
            registrar, router, "public", fake_request(), controller="blog", action="show", id="9"
        )
        assert response.body == b"post 9"
        assert Blog.calls == ["before", "show:9", "after"]

    def test_static_dispatch(self, router, registrar, fake_request) -> None:
        response = _dispatch(
            registrar, router, "public.static", fake_request(), controller="Blog", action="feed"
        )
        assert json.loads(response.body) == {"posts": [1, 2]}

    def test_unknown_controller(self, router, registrar, fake_request) -> None:
        with pytest.raises(NotFound):
            _dispatch(registrar, router, "public", fake_request(), controller="nope", action="show", id="1")

    @pytest.mark.parametrize("action", ["_secret", "__init__", "missing"])
    def test_unreachable_actions(self, router, registrar, fake_request, action) -> None:
        with pytest.raises(NotFound):
            _dispatch(registrar, router, "public", fake_request(), controller="blog", action=action, id="1")

    @pytest.mark.parametrize("action", ["routes", "param", "log_name", "info", "before_route", "after_route"])
    def test_framework_members_are_not_actions(self, router, registrar, fake_request, action) -> None:
        with pytest.raises(NotFound):
            _dispatch(registrar, router, "public", fake_request(), controller="blog", action=action, id="1")
